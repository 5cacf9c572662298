"""Core app configuration, security primitives, errors and database."""

from micropost.core.config import Settings, get_settings
from micropost.core.database import get_db

__all__ = ["Settings", "get_settings", "get_db"]
