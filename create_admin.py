"""
Script to create the first admin user, or promote an existing user to admin.

Admins can only be created by other admins through the API, so the first
one has to be bootstrapped directly in the database.

Run this script from the project root:
    python create_admin.py USERNAME --email admin@example.com
"""

import argparse
import getpass
import sys

from app.core.database import SessionLocal
from app.crud import user as user_crud


def create_admin(username: str, email: str, first_name: str, last_name: str) -> int:
    """Create ``username`` as an admin, or promote it if it already exists."""
    db = SessionLocal()

    try:
        existing = user_crud.get_credentials(db, username)
        if existing is not None:
            if existing.is_admin:
                print(f"User '{username}' is already an admin.")
                return 0
            user_crud.update(db, username, {"isAdmin": True})
            print(f"✓ Promoted '{username}' to admin")
            return 0

        password = getpass.getpass("Password: ")
        if not 5 <= len(password) <= 20:
            print("Password must be 5-20 characters.", file=sys.stderr)
            return 1
        if password != getpass.getpass("Confirm password: "):
            print("Passwords do not match.", file=sys.stderr)
            return 1

        user_crud.register(
            db,
            username=username,
            password=password,
            first_name=first_name,
            last_name=last_name,
            email=email,
            is_admin=True,
        )
        print(f"✓ Created admin '{username}'")
        return 0

    except Exception as e:
        db.rollback()
        print(f"\n✗ Error creating admin: {e}", file=sys.stderr)
        raise
    finally:
        db.close()


def main() -> int:
    parser = argparse.ArgumentParser(description="Create or promote a Jobly admin user.")
    parser.add_argument("username", help="Username (1-25 chars)")
    parser.add_argument("--email", required=True, help="Email address for a new user")
    parser.add_argument("--first-name", default="Admin")
    parser.add_argument("--last-name", default="User")
    args = parser.parse_args()

    username = args.username.strip()
    if not 1 <= len(username) <= 25:
        print("Invalid username length.", file=sys.stderr)
        return 1

    return create_admin(username, args.email, args.first_name, args.last_name)


if __name__ == "__main__":
    sys.exit(main())
