"""Utility script to create a student, warden or admin account."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from hostelia.application.use_cases.users import create_user
from hostelia.domain.entities import ROLE_ADMIN, USER_ROLES
from hostelia.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create a user for the Hostelia notification service.",
    )
    parser.add_argument("--name", default="Administrator", help="Full name (default: Administrator)")
    parser.add_argument(
        "--email",
        default="admin@example.com",
        help="Login email (default: admin@example.com)",
    )
    parser.add_argument("--role", choices=USER_ROLES, default=ROLE_ADMIN, help="Account role")
    parser.add_argument(
        "--hostel",
        default=None,
        help="Hostel code; required for students and wardens (e.g. BH-3)",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Password. Prompted interactively when omitted.",
    )
    return parser.parse_args()


def main() -> None:
    """Create a user using the provided command line arguments."""

    args = parse_args()

    password = args.password or getpass("Password: ")
    if not password:
        raise SystemExit("No password provided.")

    initialize_database()

    session = SessionLocal()
    try:
        user = create_user(
            session,
            name=args.name,
            email=args.email,
            password=password,
            role=args.role,
            hostel=args.hostel,
        )
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"Could not create user: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Database error while saving user: {exc}") from exc
    else:
        print(
            "User created:\n"
            f"  ID: {user.id}\n"
            f"  Name: {user.name}\n"
            f"  Email: {user.email}\n"
            f"  Role: {user.role}\n"
            f"  Hostel: {user.hostel or '-'}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
