#!/usr/bin/env python3
"""
Create an administrator or reset a user's password.

Usage:
    python scripts/create_admin.py create --email admin@example.com --name "Admin"
    python scripts/create_admin.py reset-password --email user@example.com

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import getpass
import os
import sys

# Add parent dir to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from helpdesk.application.services.auth_service import create_user, hash_password
from helpdesk.core.exceptions import AppError
from helpdesk.domain.models.enums import UserRole
from helpdesk.domain.models.user import User
from helpdesk.infrastructure.database import SessionLocal, init_db
from helpdesk.infrastructure.repositories.user_repository import SQLAlchemyUserRepository

MIN_PASSWORD_LENGTH = 6


def _read_password(given):
    password = given or getpass.getpass("Enter password: ")
    if len(password) < MIN_PASSWORD_LENGTH:
        print(f"[!] Password must be at least {MIN_PASSWORD_LENGTH} characters.", file=sys.stderr)
        sys.exit(1)
    return password


def create_admin(users, args) -> int:
    password = _read_password(args.password)
    user = create_user(
        users,
        name=args.name,
        email=args.email.strip().lower(),
        password=password,
        role=UserRole.ADMIN,
    )
    print(f"[+] Admin created: id={user.id} email={user.email}")
    return 0


def reset_password(users, args) -> int:
    user = users.get_by_email(args.email)
    if user is None:
        print(f"[!] No user found with email: {args.email}", file=sys.stderr)
        return 2
    user.password_hash = hash_password(_read_password(args.password))
    users.save(user, "reset_password")
    print(f"[+] Password updated for {user.email}")
    return 0


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Helpdesk user administration.")
    sub = ap.add_subparsers(dest="command", required=True)

    create = sub.add_parser("create", help="Create an administrator account")
    create.add_argument("--email", required=True)
    create.add_argument("--name", default="Administrator")
    create.add_argument("--password", help="If omitted, you'll be prompted securely.")

    reset = sub.add_parser("reset-password", help="Set a new password for an existing user")
    reset.add_argument("--email", required=True)
    reset.add_argument("--password", help="If omitted, you'll be prompted securely.")

    args = ap.parse_args(argv)

    init_db()
    db = SessionLocal()
    try:
        users = SQLAlchemyUserRepository(db, User)
        if args.command == "create":
            return create_admin(users, args)
        return reset_password(users, args)
    except AppError as e:
        print(f"[!] {e.message}", file=sys.stderr)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
