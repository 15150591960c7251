from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, List, Optional, Set, Union
from notefeed import models
from notefeed.crud import note as crud_note
from notefeed.crud import social as crud_social
from notefeed.crud.utils import to_iso_timestamp
from notefeed.schemas.note import PackedNote
from notefeed.schemas.user import PackedUserLite
from .user_entity import UserEntityService

class NoteNotFoundError(LookupError):
    """Raised when packing a note id that does not exist."""
    pass

class NoteEntityService:
    def __init__(self, db: AsyncSession, user_entity_service: UserEntityService):
        self.db = db
        self.user_entity_service = user_entity_service

    async def pack(
        self,
        src: Union[str, models.Note],
        me_id: Optional[str],
        detail: bool = True
    ) -> PackedNote:
        note = src
        if isinstance(src, str):
            note = await crud_note.get_note(self.db, src)
            if note is None:
                raise NoteNotFoundError(f"Note {src} not found")

        packed = await self.pack_many([note], me_id, detail=detail)
        return packed[0]

    async def pack_many(
        self,
        notes: List[models.Note],
        me_id: Optional[str],
        detail: bool = True
    ) -> List[PackedNote]:
        """
        Packs notes in bulk. Authors (and, for the detailed rendering, the
        authors of the embedded reply/renote) are packed in a single call.
        """
        if not notes:
            return []

        related = list(notes)
        if detail:
            for n in notes:
                reply = await n.awaitable_attrs.reply
                renote = await n.awaitable_attrs.renote
                if reply is not None:
                    related.append(reply)
                if renote is not None:
                    related.append(renote)

        authors = {}
        for n in related:
            if n.user_id not in authors:
                authors[n.user_id] = await n.awaitable_attrs.user
        packed_users = await self.user_entity_service.pack_many(list(authors.values()), me_id, detail=False)
        users = {u.id: u for u in packed_users}

        following = set()
        if me_id is not None:
            followers_only_authors = {n.user_id for n in related if n.visibility == "followers"}
            following = await crud_social.get_followee_ids(self.db, me_id, followers_only_authors)

        my_reactions = {}
        if detail and me_id is not None:
            my_reactions = await crud_note.get_user_reactions(self.db, me_id, [n.id for n in notes])

        return [
            self._pack_note(n, me_id, users, following, my_reactions, detail)
            for n in notes
        ]

    def _pack_note(
        self,
        note: models.Note,
        me_id: Optional[str],
        users: Dict[str, PackedUserLite],
        following: Set[str],
        my_reactions: Dict[str, str],
        detail: bool
    ) -> PackedNote:
        hidden = not is_visible(note, me_id, following)

        extra = {}
        if detail:
            if note.reply is not None:
                extra["reply"] = self._pack_note(note.reply, me_id, users, following, my_reactions, False)
            if note.renote is not None:
                extra["renote"] = self._pack_note(note.renote, me_id, users, following, my_reactions, False)
            extra["my_reaction"] = my_reactions.get(note.id)

        return PackedNote(
            id=note.id,
            created_at=to_iso_timestamp(note.created_at),
            user_id=note.user_id,
            user=users[note.user_id],
            text=None if hidden else note.text,
            cw=None if hidden else note.cw,
            visibility=note.visibility,
            reply_id=note.reply_id,
            renote_id=note.renote_id,
            reactions=dict(note.reactions or {}),
            is_hidden=hidden,
            **extra
        )

def is_visible(note: models.Note, me_id: Optional[str], following: Set[str]) -> bool:
    if note.visibility in ("public", "home"):
        return True
    if me_id is None:
        return False
    if note.user_id == me_id:
        return True
    if note.visibility == "followers":
        return note.user_id in following
    if note.visibility == "specified":
        return me_id in (note.visible_user_ids or [])
    return False
