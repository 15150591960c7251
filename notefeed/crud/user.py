from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Iterable, List
from notefeed import models
from .utils import execute

async def get_user(db: AsyncSession, id: str):
    result = await execute(db, select(models.User).where(models.User.id == id))
    return result.scalars().first()

async def get_users_by_ids(db: AsyncSession, ids: Iterable[str]) -> List[models.User]:
    """Bulk lookup. Row order is whatever the database returns."""
    ids = list(ids)
    if not ids:
        return []
    result = await execute(db, select(models.User).where(models.User.id.in_(ids)))
    return list(result.scalars().all())
