"""ORM model for branch-published events."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from youth_cms.models.base import Base, created_at_column, updated_at_column


class Event(Base):
    """
    Event owned by exactly one branch.

    created_by records the account that published it (audit only; not used
    for authorization) and is cleared if that account is deleted.
    """

    __tablename__ = "events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    branch_id = Column(Integer, ForeignKey("branches.id"), nullable=False, index=True)
    title = Column(String(512), nullable=False)
    image_url = Column(String(2048), nullable=False)
    announcement = Column(Text, nullable=False)
    event_date = Column(DateTime, nullable=False, index=True)
    location = Column(String(512), nullable=False)
    created_by = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at = created_at_column()
    updated_at = updated_at_column()
