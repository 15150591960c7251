from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from notefeed.database import get_db
from notefeed.services.user_entity import UserEntityService
from notefeed.services.note_entity import NoteEntityService
from notefeed.services.notification_entity import NotificationEntityService

# Packers are built per request around the request's session. The graph is
# acyclic (notification -> note -> user), so plain constructor injection works.

def get_user_entity_service(db: AsyncSession = Depends(get_db)) -> UserEntityService:
    return UserEntityService(db)

def get_note_entity_service(
    db: AsyncSession = Depends(get_db),
    user_entity_service: UserEntityService = Depends(get_user_entity_service)
) -> NoteEntityService:
    return NoteEntityService(db, user_entity_service)

def get_notification_entity_service(
    db: AsyncSession = Depends(get_db),
    note_entity_service: NoteEntityService = Depends(get_note_entity_service),
    user_entity_service: UserEntityService = Depends(get_user_entity_service)
) -> NotificationEntityService:
    return NotificationEntityService(db, note_entity_service, user_entity_service)
