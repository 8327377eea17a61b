"""SQLAlchemy ORM models."""

from youth_cms.models.base import Base
from youth_cms.models.branch import Branch
from youth_cms.models.event import Event
from youth_cms.models.site_content import SiteContent
from youth_cms.models.user import User, UserRole

__all__ = ["Base", "Branch", "Event", "SiteContent", "User", "UserRole"]
