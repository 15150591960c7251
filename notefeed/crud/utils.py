import asyncio
import datetime
from typing import Iterable, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

async def execute(db: AsyncSession, statement):
    """
    Runs a statement on the session. An AsyncSession allows one operation at
    a time, while packers resolve notes and users concurrently, so statements
    on the same session are queued behind a per-session lock.
    """
    lock = db.info.setdefault("statement_lock", asyncio.Lock())
    async with lock:
        return await db.execute(statement)

def unique_ids(ids: Iterable[Optional[str]]) -> List[str]:
    """Distinct, non-null ids in first-seen order."""
    seen = set()
    result = []
    for id_ in ids:
        if id_ is None or id_ in seen:
            continue
        seen.add(id_)
        result.append(id_)
    return result

def to_iso_timestamp(value: datetime.datetime) -> str:
    """
    Formats a timestamp as ISO-8601 UTC with millisecond precision,
    e.g. 2024-01-31T12:00:00.000Z. Naive datetimes are stored as UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=datetime.timezone.utc)
    value = value.astimezone(datetime.timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
