"""
Reset database - Delete existing database and create fresh schema.

WARNING: This will delete all existing data, including users!
To start a new contest month while keeping accounts, use the staff
reset endpoint instead.
"""

import asyncio
import sys
from pathlib import Path

# Force UTF-8 encoding for Windows console
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding='utf-8')

# Add package directory to Python path
package_dir = Path(__file__).parent
sys.path.insert(0, str(package_dir.parent))

from sqlalchemy.engine import make_url


async def reset_database():
    """Delete existing database and create fresh schema."""
    from asxphoto.app.core.config import settings

    url = make_url(settings.database_url)
    if not url.drivername.startswith("sqlite") or not url.database or url.database == ":memory:":
        print(f"Only file-based SQLite databases can be reset, got: {settings.database_url}")
        sys.exit(1)

    db_path = Path(url.database)

    # Delete existing database
    if db_path.exists():
        print(f"Deleting existing database: {db_path}")
        db_path.unlink()
        print("✓ Database deleted")
    else:
        print("No existing database found")

    # Import Base and models to ensure all tables are registered
    from asxphoto.app.db.base import Base, engine
    from asxphoto.app.models import Photo, RevokedToken, User, Vote  # noqa: F401

    # Create all tables
    print("Creating new database schema...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()

    print("✓ Database schema created successfully!")
    print(f"\nNew database location: {db_path.resolve()}")
    print("\nYou can now:")
    print("  1. Run create_staff_user.py to create the first staff account")
    print("  2. Start the API with: uvicorn asxphoto.app.main:app --reload")


if __name__ == "__main__":
    asyncio.run(reset_database())
