"""ORM model for the public site's editable copy (single row)."""

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String, Text, func

from youth_cms.models.base import Base

SITE_CONTENT_ID = 1


class SiteContent(Base):
    __tablename__ = "site_content"
    __table_args__ = (CheckConstraint("id = 1", name="ck_site_content_singleton"),)

    id = Column(Integer, primary_key=True, default=SITE_CONTENT_ID)
    organization_name = Column(String(255), nullable=False)
    slogan = Column(String(512), nullable=False)
    definition_text = Column(Text, nullable=False)
    vision_text = Column(Text, nullable=False)
    mission_text = Column(Text, nullable=False)
    goals_text = Column(Text, nullable=False)
    volunteer_form_url = Column(String(2048), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
