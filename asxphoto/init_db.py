"""Initialize database tables."""

import asyncio
import sys
from pathlib import Path

# Add package directory to Python path
package_dir = Path(__file__).parent
sys.path.insert(0, str(package_dir.parent))

from asxphoto.app.db.base import Base, engine
# Import all models to register them
from asxphoto.app.models import Photo, RevokedToken, User, Vote  # noqa: F401


async def init_db(drop: bool = False):
    """Create all database tables, dropping existing ones first if asked."""
    async with engine.begin() as conn:
        if drop:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    await engine.dispose()
    print("Database tables created successfully!")


if __name__ == "__main__":
    asyncio.run(init_db(drop="--drop" in sys.argv[1:]))
