"""Account authentication and superadmin management of branch admins."""

import logging

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from youth_cms.core.security import hash_password, needs_rehash, verify_password
from youth_cms.models import Branch, User, UserRole
from youth_cms.schemas.admins import AdminCreate, AdminRead
from youth_cms.services.access import ensure_branch_exists

logger = logging.getLogger(__name__)


class UsernameTakenError(Exception):
    """Raised when creating an account whose username already exists."""

    status_code = 409

    def __init__(self, username: str) -> None:
        self.username = username
        self.message = "Username already exists"
        super().__init__(self.message)


def get_by_username(db: Session, username: str) -> User | None:
    return db.scalars(select(User).where(User.username == username).limit(1)).first()


def authenticate(db: Session, username: str, password: str) -> User | None:
    """
    Return the account for username if password matches, else None.

    Accounts still on the legacy digest are upgraded to bcrypt on success.
    """
    user = get_by_username(db, username.strip())
    if user is None:
        return None
    if not verify_password(password, user.password_hash):
        return None
    if needs_rehash(user.password_hash):
        user.password_hash = hash_password(password)
        db.commit()
        logger.info("Upgraded password hash for user id=%s", user.id)
    return user


def list_accounts(db: Session) -> list[AdminRead]:
    """All accounts with their branch name; superadmins first, newest first."""
    stmt = (
        select(User, Branch.name)
        .outerjoin(Branch, Branch.id == User.branch_id)
        .order_by(User.role.desc(), User.created_at.desc(), User.id.desc())
    )
    return [
        AdminRead(
            id=user.id,
            username=user.username,
            display_name=user.display_name,
            role=user.role,
            branch_id=user.branch_id,
            branch_name=branch_name,
        )
        for user, branch_name in db.execute(stmt).all()
    ]


def create_admin(db: Session, data: AdminCreate) -> User:
    """Create a branch admin. Raises UsernameTakenError or BranchNotFoundError."""
    if get_by_username(db, data.username) is not None:
        raise UsernameTakenError(data.username)
    ensure_branch_exists(db, data.branch_id)
    user = User(
        username=data.username,
        display_name=data.display_name,
        password_hash=hash_password(data.password),
        role=UserRole.ADMIN.value,
        branch_id=data.branch_id,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent request won the unique username (or removed the branch).
        db.rollback()
        if get_by_username(db, data.username) is not None:
            raise UsernameTakenError(data.username) from None
        ensure_branch_exists(db, data.branch_id)
        raise
    db.refresh(user)
    logger.info("Created admin id=%s for branch_id=%s", user.id, user.branch_id)
    return user


def set_admin_branch(db: Session, user_id: int, branch_id: int) -> int:
    """Move an admin to another branch; superadmin rows are never touched."""
    ensure_branch_exists(db, branch_id)
    result = db.execute(
        update(User)
        .where(User.id == user_id, User.role == UserRole.ADMIN.value)
        .values(branch_id=branch_id)
        .execution_options(synchronize_session=False)
    )
    db.commit()
    return result.rowcount


def delete_admin(db: Session, user_id: int) -> int:
    """Delete an admin account; superadmin rows are never touched."""
    result = db.execute(
        delete(User)
        .where(User.id == user_id, User.role == UserRole.ADMIN.value)
        .execution_options(synchronize_session=False)
    )
    db.commit()
    if result.rowcount:
        logger.info("Deleted admin id=%s", user_id)
    return result.rowcount
