"""Caller identity, session checks and per-class roles."""
