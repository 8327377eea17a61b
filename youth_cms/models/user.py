"""ORM model for administrator accounts (auth and branch-scoped RBAC)."""

from enum import StrEnum

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, String

from youth_cms.models.base import Base, created_at_column, updated_at_column


class UserRole(StrEnum):
    """Account roles. Superadmins are global; admins own exactly one branch."""

    ADMIN = "admin"
    SUPERADMIN = "superadmin"


class User(Base):
    """
    Credential for JWT authentication.

    role: 'admin' (branch_id set) or 'superadmin' (branch_id NULL). The
    pairing is enforced by the application, not the schema.
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('superadmin', 'admin')", name="ck_users_role"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    display_name = Column(String(255), nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=UserRole.ADMIN.value)
    branch_id = Column(Integer, ForeignKey("branches.id"), nullable=True, index=True)
    created_at = created_at_column()
    updated_at = updated_at_column()
