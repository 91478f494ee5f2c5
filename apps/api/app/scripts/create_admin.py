"""Utility script for inserting an administrator account."""

from __future__ import annotations

import argparse
import getpass

from pymongo.database import Database

from app.core.config import Settings, get_settings
from app.core.errors import AppError
from app.db import create_database, ensure_indexes
from app.models.user import User
from app.services.accounts import AccountService


def create_admin_user(
    db: Database, settings: Settings, *, name: str, email: str, password: str
) -> User:
    """Persist an administrator, subject to the same cap and email rules as the API."""

    ensure_indexes(db)
    return AccountService(db, settings).create_admin(name=name, email=email, password=password)


def _resolve_cli_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create an administrator account")
    parser.add_argument("--name", help="Display name for the admin user")
    parser.add_argument("--email", help="Email address for the admin user")
    parser.add_argument(
        "--password",
        help="Password for the admin user (omit to securely prompt)",
    )
    parser.add_argument(
        "--prompt",
        action="store_true",
        help="Force interactive prompts for name, email and password",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _resolve_cli_args(argv)

    name = args.name
    email = args.email
    password = args.password

    if args.prompt or not name:
        name = input("Admin name: ").strip()
    if not name:
        raise SystemExit("Name must be provided")

    if args.prompt or not email:
        email = input("Admin email: ").strip()
    if not email:
        raise SystemExit("Email must be provided")

    if args.prompt or password is None:
        password = getpass.getpass("Admin password: ")
    if not password:
        raise SystemExit("Password must be provided")

    settings = get_settings()
    db = create_database(settings)
    try:
        user = create_admin_user(db, settings, name=name, email=email, password=password)
    except AppError as exc:
        raise SystemExit(exc.message) from exc
    finally:
        db.client.close()

    print(f"Admin user created with id={user.id}")
    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation only
    raise SystemExit(main())
