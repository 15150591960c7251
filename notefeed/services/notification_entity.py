import asyncio
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from notefeed import models
from notefeed.crud import note as crud_note
from notefeed.crud import user as crud_user
from notefeed.crud import social as crud_social
from notefeed.crud.utils import unique_ids, to_iso_timestamp
from notefeed.schemas.note import PackedNote
from notefeed.schemas.user import PackedUserLite
from notefeed.schemas.notification import (
    NOTE_REQUIRED_NOTIFICATION_TYPES,
    PackedNotification,
    packed_notification_adapter,
)
from .note_entity import NoteEntityService
from .user_entity import UserEntityService

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class PackHint:
    """
    Precomputed lookups supplied by the batch path. A mapping that is present
    is trusted completely: a miss means "leave the entity out", never "fetch it".
    """
    packed_notes: Optional[Mapping[str, PackedNote]] = None
    packed_users: Optional[Mapping[str, PackedUserLite]] = None

class NotificationEntityService:
    def __init__(
        self,
        db: AsyncSession,
        note_entity_service: NoteEntityService,
        user_entity_service: UserEntityService
    ):
        self.db = db
        self.note_entity_service = note_entity_service
        self.user_entity_service = user_entity_service

    async def pack(
        self,
        src: models.Notification,
        me_id: str,
        options: Optional[dict] = None,
        hint: Optional[PackHint] = None
    ) -> PackedNotification:
        """
        Packs a single notification as seen by `me_id`. `options` is reserved
        and currently ignored. Failures from the note/user packers propagate.
        """
        notification = src

        async def resolve_note():
            if notification.type not in NOTE_REQUIRED_NOTIFICATION_TYPES or notification.note_id is None:
                return None
            if hint is not None and hint.packed_notes is not None:
                return hint.packed_notes.get(notification.note_id)
            return await self.note_entity_service.pack(notification.note_id, me_id, detail=True)

        async def resolve_user():
            if notification.notifier_id is None:
                return None
            if hint is not None and hint.packed_users is not None:
                return hint.packed_users.get(notification.notifier_id)
            return await self.user_entity_service.pack(notification.notifier_id, me_id, detail=False)

        note, user = await asyncio.gather(resolve_note(), resolve_user())

        fields = {
            "id": notification.id,
            "created_at": to_iso_timestamp(notification.created_at),
            "type": notification.type,
            "user_id": notification.notifier_id,
        }
        if user is not None:
            fields["user"] = user
        if note is not None:
            fields["note"] = note
        if notification.type == "reaction":
            fields["reaction"] = notification.reaction
        if notification.type == "achievementEarned":
            fields["achievement"] = notification.achievement
        if notification.type == "app":
            fields["body"] = notification.custom_body
            fields["header"] = notification.custom_header
            fields["icon"] = notification.custom_icon

        return packed_notification_adapter.validate_python(fields)

    async def pack_many(
        self,
        notifications: List[models.Notification],
        me_id: str
    ) -> List[PackedNotification]:
        if not notifications:
            return []

        valid_notifications = notifications

        # 1. Notes, in bulk
        note_ids = unique_ids(n.note_id for n in valid_notifications)
        packed_notes = {}
        if note_ids:
            notes = await crud_note.get_notes_by_ids(self.db, note_ids)
            packed_notes_list = await self.note_entity_service.pack_many(notes, me_id, detail=True)
            packed_notes = {p.id: p for p in packed_notes_list}

        # 2. Drop notifications whose note is gone or not packable
        valid_notifications, dropped = filter_resolvable_notes(valid_notifications, packed_notes)
        if dropped:
            logger.debug(f"Dropped {dropped} notification(s) with unresolved notes for user {me_id}")

        # 3. Users, in bulk
        user_ids = unique_ids(n.notifier_id for n in valid_notifications)
        packed_users = {}
        if user_ids:
            users = await crud_user.get_users_by_ids(self.db, user_ids)
            packed_users_list = await self.user_entity_service.pack_many(users, me_id, detail=False)
            packed_users = {p.id: p for p in packed_users_list}

        # 4. Drop follow request notifications for requests that are no longer pending
        follow_request_notifications = [n for n in valid_notifications if n.type == "receiveFollowRequest"]
        if follow_request_notifications:
            requests = await crud_social.get_follow_requests_by_followers(
                self.db,
                unique_ids(n.notifier_id for n in follow_request_notifications)
            )
            valid_notifications, dropped = filter_stale_follow_requests(valid_notifications, requests)
            if dropped:
                logger.debug(f"Dropped {dropped} resolved follow request notification(s) for user {me_id}")

        hint = PackHint(
            packed_notes=MappingProxyType(packed_notes),
            packed_users=MappingProxyType(packed_users),
        )
        return list(await asyncio.gather(*[
            self.pack(n, me_id, {}, hint) for n in valid_notifications
        ]))

def filter_resolvable_notes(
    notifications: List[models.Notification],
    packed_notes: Mapping[str, PackedNote]
) -> Tuple[List[models.Notification], int]:
    """Keeps notifications without a note, or whose note was packed."""
    kept = [n for n in notifications if n.note_id is None or n.note_id in packed_notes]
    return kept, len(notifications) - len(kept)

def filter_stale_follow_requests(
    notifications: List[models.Notification],
    pending_requests: List[models.FollowRequest]
) -> Tuple[List[models.Notification], int]:
    """
    Keeps a receiveFollowRequest notification only while a pending request
    from its notifier exists. Other kinds, followRequestAccepted included,
    always pass.
    """
    pending_followers = {r.follower_id for r in pending_requests}
    kept = [
        n for n in notifications
        if n.type != "receiveFollowRequest" or n.notifier_id in pending_followers
    ]
    return kept, len(notifications) - len(kept)
