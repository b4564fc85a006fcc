"""
Seed Admin User

Creates the first portal admin account. Credentials come from the
command line, falling back to DEFAULT_ADMIN_EMAIL / DEFAULT_ADMIN_PASSWORD.
Nothing is created when an admin already exists.

Usage:
    python scripts/seed_admin.py [email] [password]
"""

import asyncio
import sys
from pathlib import Path

# Add the src directory to the path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from app.core.database import async_session_maker, close_db
from app.modules.admins.service import AdminAlreadyExistsError, seed_admin


async def main(email: str | None, password: str | None) -> int:
    """Create the admin account if none exists."""
    try:
        async with async_session_maker() as db:
            admin = await seed_admin(db, email=email, password=password)
    except AdminAlreadyExistsError as e:
        print(e.message)
        return 1
    finally:
        await close_db()

    print("Admin created successfully!")
    print(f"  Email: {admin.email}")
    print(f"  ID: {admin.id}")
    return 0


if __name__ == "__main__":
    args = sys.argv[1:]
    sys.exit(
        asyncio.run(
            main(
                email=args[0] if len(args) > 0 else None,
                password=args[1] if len(args) > 1 else None,
            )
        )
    )
