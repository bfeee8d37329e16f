"""
Application package initializer.

The project is split into a few small pieces: ``core`` holds
configuration, logging, errors, sessions and the SQLite connection;
``services`` holds the storage and business logic; ``schemas`` the
Pydantic models; ``api`` the HTTP routers.
"""

from .main import app  # noqa: F401
