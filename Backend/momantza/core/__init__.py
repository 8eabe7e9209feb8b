"""
Core module - configuration, database and response formatting.
"""
from .config import Settings, get_settings
from .db import get_session, Base, build_engine, engine, AsyncSessionLocal
from .responses import ErrorCodes, error_response

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Database
    "get_session",
    "Base",
    "build_engine",
    "engine",
    "AsyncSessionLocal",
    # Responses
    "ErrorCodes",
    "error_response",
]
