"""Grant admin privileges to a user.

Usage: python -m scripts.promote_admin <email>
"""
from __future__ import annotations

import asyncio
import sys

from sqlalchemy import select
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker

from betsmoke.core.config import settings
from betsmoke.models.models import User


async def _run(email: str) -> int:
    engine = create_async_engine(settings.DATABASE_URL, echo=False)
    Session = async_sessionmaker(engine, expire_on_commit=False)
    try:
        async with Session() as session:
            res = await session.execute(select(User).where(User.email == email))
            user = res.scalar_one_or_none()
            if not user:
                print(f"User not found: {email}", file=sys.stderr)
                return 1
            if user.is_admin:
                print(f"User {email} is already an admin.")
                return 0
            user.is_admin = True
            await session.commit()
    finally:
        await engine.dispose()
    print(f"Successfully promoted {email} to admin.")
    return 0


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python -m scripts.promote_admin <email>", file=sys.stderr)
        sys.exit(1)
    sys.exit(asyncio.run(_run(sys.argv[1])))
