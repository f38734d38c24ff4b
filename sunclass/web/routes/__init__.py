"""Routers for the web adapter."""
