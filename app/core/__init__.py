"""Core app configuration, database context, errors and security."""

from app.core.config import Settings, get_settings
from app.core.database import AppContext, build_context, get_context, get_db

__all__ = ["AppContext", "Settings", "build_context", "get_context", "get_db", "get_settings"]
