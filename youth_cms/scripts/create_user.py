"""
Create an account (e.g. a replacement superadmin). Run from project root:
  python -m youth_cms.scripts.create_user USERNAME PASSWORD DISPLAY_NAME [--role admin --branch-id ID]
Example:
  python -m youth_cms.scripts.create_user damascus-admin 'a-secure-password' 'Damascus admin' --branch-id 1
"""
import argparse
import sys

from youth_cms.core.database import SessionLocal
from youth_cms.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    hash_password,
)
from youth_cms.models import Branch, User, UserRole


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a CMS account (no registration UI).")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument("display_name", help="Name shown in the dashboards")
    parser.add_argument(
        "--role",
        default=UserRole.ADMIN.value,
        choices=[r.value for r in UserRole],
    )
    parser.add_argument("--branch-id", type=int, default=None, help="Required for admins")
    args = parser.parse_args()

    username = args.username.strip()
    if not username or len(username) > USERNAME_MAX_LEN:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1
    if args.role == UserRole.ADMIN.value and args.branch_id is None:
        print("Admins need --branch-id.", file=sys.stderr)
        return 1
    if args.role == UserRole.SUPERADMIN.value and args.branch_id is not None:
        print("Superadmins are not tied to a branch; drop --branch-id.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        existing = db.query(User).filter(User.username == username).first()
        if existing:
            print(f"User '{username}' already exists.", file=sys.stderr)
            return 1
        if args.branch_id is not None and db.get(Branch, args.branch_id) is None:
            print(f"Branch {args.branch_id} does not exist.", file=sys.stderr)
            return 1
        user = User(
            username=username,
            display_name=args.display_name.strip() or username,
            password_hash=hash_password(args.password),
            role=args.role,
            branch_id=args.branch_id,
        )
        db.add(user)
        db.commit()
        print(f"Created user '{username}' with role '{args.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
