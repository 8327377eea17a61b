"""Core app configuration, database and security."""

from youth_cms.core.config import get_settings, settings
from youth_cms.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
