"""FastAPI adapter exposing the classroom workflows as pages and form actions."""
