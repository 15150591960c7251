from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel
from typing import Annotated, Literal, Optional, Union
from .note import PackedNote
from .user import PackedUserLite

NOTIFICATION_TYPES = (
    'note',
    'follow',
    'mention',
    'reply',
    'renote',
    'quote',
    'reaction',
    'pollEnded',
    'receiveFollowRequest',
    'followRequestAccepted',
    'roleAssigned',
    'achievementEarned',
    'app',
    'test',
)

# Kinds that embed the referenced note when the notification carries one
NOTE_REQUIRED_NOTIFICATION_TYPES = frozenset([
    'note', 'mention', 'reply', 'renote', 'quote', 'reaction', 'pollEnded',
])

class NotificationBase(BaseModel):
    id: str
    created_at: str
    user_id: Optional[str] = None
    user: Optional[PackedUserLite] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class NoteNotification(NotificationBase):
    type: Literal['note', 'mention', 'reply', 'renote', 'quote', 'pollEnded']
    note: Optional[PackedNote] = None

class ReactionNotification(NotificationBase):
    type: Literal['reaction']
    note: Optional[PackedNote] = None
    reaction: str

class FollowNotification(NotificationBase):
    type: Literal['follow', 'receiveFollowRequest', 'followRequestAccepted']

class AchievementNotification(NotificationBase):
    type: Literal['achievementEarned']
    achievement: str

class AppNotification(NotificationBase):
    type: Literal['app']
    body: str
    header: Optional[str] = None
    icon: Optional[str] = None

class SystemNotification(NotificationBase):
    type: Literal['roleAssigned', 'test']

PackedNotification = Annotated[
    Union[
        NoteNotification,
        ReactionNotification,
        FollowNotification,
        AchievementNotification,
        AppNotification,
        SystemNotification,
    ],
    Field(discriminator='type'),
]

packed_notification_adapter = TypeAdapter(PackedNotification)
