from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload
from typing import Dict, Iterable, List, Optional
from notefeed import models
from .utils import execute

def _select_with_relations():
    # Author plus one level of reply/renote, each with its own author.
    # Lazy loads are not available on an AsyncSession.
    return select(models.Note).options(
        joinedload(models.Note.user),
        joinedload(models.Note.reply).joinedload(models.Note.user),
        joinedload(models.Note.renote).joinedload(models.Note.user),
    )

async def get_note(db: AsyncSession, note_id: str) -> Optional[models.Note]:
    result = await execute(db, _select_with_relations().where(models.Note.id == note_id))
    return result.scalars().unique().first()

async def get_notes_by_ids(db: AsyncSession, ids: Iterable[str]) -> List[models.Note]:
    ids = list(ids)
    if not ids:
        return []
    result = await execute(db, _select_with_relations().where(models.Note.id.in_(ids)))
    return list(result.scalars().unique().all())

async def get_user_reactions(db: AsyncSession, user_id: str, note_ids: Iterable[str]) -> Dict[str, str]:
    """Returns {note_id: reaction} for the notes in `note_ids` the user reacted to."""
    note_ids = list(note_ids)
    if not note_ids:
        return {}
    result = await execute(db, select(models.NoteReaction).where(
        models.NoteReaction.user_id == user_id,
        models.NoteReaction.note_id.in_(note_ids)
    ))
    return {r.note_id: r.reaction for r in result.scalars().all()}
