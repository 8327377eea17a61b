"""ORM model for branch offices."""

from sqlalchemy import Column, Integer, String, Text

from youth_cms.models.base import Base, created_at_column, updated_at_column


class Branch(Base):
    """A branch office; owns its admins and its published events."""

    __tablename__ = "branches"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    governorate = Column(String(255), nullable=False, index=True)
    address = Column(Text, nullable=False)
    phone = Column(String(64), nullable=False)
    whatsapp = Column(String(64), nullable=False)
    facebook = Column(String(2048), nullable=True)
    telegram = Column(String(2048), nullable=True)
    instagram = Column(String(2048), nullable=True)
    created_at = created_at_column()
    updated_at = updated_at_column()
