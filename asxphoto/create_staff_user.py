"""
Create a staff account for moderating the contest.

Usage:
    python asxphoto/create_staff_user.py EMAIL CALLSIGN FIRST_NAME LAST_NAME

The password is read from the STAFF_USER_PASSWORD environment variable
(or the .env file), or prompted for when unset. An existing account with
the same email is promoted to staff instead.
"""

import argparse
import asyncio
import getpass
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy import select

# Add package directory to Python path
package_dir = Path(__file__).parent
sys.path.insert(0, str(package_dir.parent))

# Load environment variables from .env file
env_path = package_dir.parent / ".env"
load_dotenv(env_path)

from asxphoto.app.core.exceptions import ContestException
from asxphoto.app.db.base import AsyncSessionLocal, Base, engine
from asxphoto.app.models.user import User
from asxphoto.app.services.accounts import AccountService, normalize_email


async def create_staff_user(email: str, callsign: str, first_name: str, last_name: str, password: str | None):
    """Create the staff account, or promote the existing one."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as db:
        result = await db.execute(select(User).where(User.email == normalize_email(email)))
        existing_user = result.scalar_one_or_none()

        if existing_user:
            existing_user.is_staff = True
            await db.commit()
            print(f"User {existing_user.callsign} ({existing_user.email}) is now staff")
            return existing_user.id

        if password is None:
            password = getpass.getpass("Password: ")

        try:
            user = await AccountService(db).create_user(
                email=email,
                callsign=callsign,
                first_name=first_name,
                last_name=last_name,
                password=password,
                is_staff=True,
            )
        except ContestException as e:
            print(f"Could not create staff user: {e.message}")
            sys.exit(1)

        print("Staff user created successfully!")
        print(f"User ID: {user.id}")
        print(f"Callsign: {user.callsign}")
        print(f"Email: {user.email}")
        return user.id


def main():
    parser = argparse.ArgumentParser(description="Create a staff account")
    parser.add_argument("email")
    parser.add_argument("callsign")
    parser.add_argument("first_name")
    parser.add_argument("last_name")
    args = parser.parse_args()

    asyncio.run(
        create_staff_user(
            args.email,
            args.callsign,
            args.first_name,
            args.last_name,
            os.environ.get("STAFF_USER_PASSWORD"),
        )
    )


if __name__ == "__main__":
    main()
