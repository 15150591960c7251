from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional

class Me(BaseModel):
    id: str
    username: str
    name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

class PackedUserLite(BaseModel):
    id: str
    username: str
    name: Optional[str] = None
    avatar_url: Optional[str] = None
    is_bot: bool = False

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class PackedUserDetailed(PackedUserLite):
    bio: Optional[str] = None
    created_at: str
    followers_count: int = 0
    following_count: int = 0

    # Relationship to the viewer; left unset when there is no viewer or
    # the viewer is the packed user
    is_following: Optional[bool] = None
    is_followed: Optional[bool] = None
    has_pending_follow_request_from_you: Optional[bool] = None
    has_pending_follow_request_to_you: Optional[bool] = None
