from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional, Union
from notefeed import models
from notefeed.crud import user as crud_user
from notefeed.crud import social as crud_social
from notefeed.crud.utils import to_iso_timestamp
from notefeed.schemas.user import PackedUserLite, PackedUserDetailed

PackedUser = Union[PackedUserLite, PackedUserDetailed]

class UserNotFoundError(LookupError):
    """Raised when packing a user id that does not exist."""
    pass

class UserEntityService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def pack(
        self,
        src: Union[str, models.User],
        me_id: Optional[str],
        detail: bool = False
    ) -> PackedUser:
        user = src
        if isinstance(src, str):
            user = await crud_user.get_user(self.db, id=src)
            if user is None:
                raise UserNotFoundError(f"User {src} not found")

        packed = await self.pack_many([user], me_id, detail=detail)
        return packed[0]

    async def pack_many(
        self,
        users: List[models.User],
        me_id: Optional[str],
        detail: bool = False
    ) -> List[PackedUser]:
        if not users:
            return []

        if not detail:
            return [self._pack_lite(u) for u in users]

        # Relationship flags: one query per flag for the whole list
        others = [u.id for u in users if u.id != me_id]
        following, followed, requested, requesting = set(), set(), set(), set()
        if me_id is not None and others:
            following = await crud_social.get_followee_ids(self.db, me_id, others)
            followed = await crud_social.get_follower_ids(self.db, me_id, others)
            requested = await crud_social.get_requested_followee_ids(self.db, me_id, others)
            requesting = await crud_social.get_requesting_follower_ids(self.db, me_id, others)

        packed = []
        for u in users:
            relation = {}
            if me_id is not None and u.id != me_id:
                relation = dict(
                    is_following=u.id in following,
                    is_followed=u.id in followed,
                    has_pending_follow_request_from_you=u.id in requested,
                    has_pending_follow_request_to_you=u.id in requesting,
                )
            packed.append(PackedUserDetailed(
                **self._pack_lite(u).model_dump(),
                bio=u.bio,
                created_at=to_iso_timestamp(u.created_at),
                followers_count=u.followers_count or 0,
                following_count=u.following_count or 0,
                **relation
            ))
        return packed

    def _pack_lite(self, user: models.User) -> PackedUserLite:
        return PackedUserLite(
            id=user.id,
            username=user.username,
            name=user.name,
            avatar_url=user.avatar_url,
            is_bot=bool(user.is_bot),
        )
