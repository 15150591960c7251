from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Dict, Optional
from .user import PackedUserLite

class PackedNote(BaseModel):
    id: str
    created_at: str
    user_id: str
    user: PackedUserLite
    text: Optional[str] = None
    cw: Optional[str] = None
    visibility: str = "public"
    reply_id: Optional[str] = None
    renote_id: Optional[str] = None
    reactions: Dict[str, int] = Field(default_factory=dict)
    is_hidden: bool = False

    # Detailed rendering only
    reply: Optional[PackedNote] = None
    renote: Optional[PackedNote] = None
    my_reaction: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
