"""
Backend package for the board API.

This package provides a FastAPI application over a Firebase Realtime
Database, with a local SQL-backed mirror that answers reads whenever the
remote store cannot be reached.
"""
