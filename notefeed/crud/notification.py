from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from notefeed import models
from typing import Optional, List
from .utils import execute

async def get_notifications(
    db: AsyncSession,
    user_id: str,
    limit: int = 50,
    skip: int = 0,
    include_types: Optional[List[str]] = None,
    exclude_types: Optional[List[str]] = None
):
    stmt = select(models.Notification).where(
        models.Notification.notifiee_id == user_id
    )
    if include_types:
        stmt = stmt.where(models.Notification.type.in_(include_types))
    if exclude_types:
        stmt = stmt.where(models.Notification.type.notin_(exclude_types))

    stmt = stmt.order_by(models.Notification.created_at.desc()).offset(skip).limit(limit)
    result = await execute(db, stmt)
    return list(result.scalars().all())

async def get_notification(db: AsyncSession, notification_id: str, user_id: str):
    result = await execute(db, select(models.Notification).where(
        models.Notification.id == notification_id,
        models.Notification.notifiee_id == user_id
    ))
    return result.scalars().first()
