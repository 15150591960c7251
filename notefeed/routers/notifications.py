from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Annotated, Optional
from notefeed.database import get_db
from notefeed.auth.auth_service import get_current_user
from notefeed.dependencies import get_notification_entity_service

from notefeed.schemas import notification as notification_schemas
from notefeed.schemas import user as user_schemas
from notefeed.crud import notification as notification_crud
from notefeed.services.notification_entity import NotificationEntityService
from notefeed.services.note_entity import NoteNotFoundError
from notefeed.services.user_entity import UserNotFoundError

router = APIRouter(
    prefix="/notifications",
    tags=["notifications"],
)

@router.get(
    "/",
    response_model=List[notification_schemas.PackedNotification],
    response_model_exclude_none=True
)
async def get_my_notifications(
    current_user: Annotated[user_schemas.Me, Depends(get_current_user)],
    notification_service: Annotated[NotificationEntityService, Depends(get_notification_entity_service)],
    db: AsyncSession = Depends(get_db),
    limit: int = Query(50, ge=1, le=100),
    skip: int = Query(0, ge=0),
    include_types: Optional[List[str]] = Query(None),
    exclude_types: Optional[List[str]] = Query(None)
):
    for t in (include_types or []) + (exclude_types or []):
        if t not in notification_schemas.NOTIFICATION_TYPES:
            raise HTTPException(status_code=400, detail=f"Unknown notification type: {t}")

    notifications = await notification_crud.get_notifications(
        db,
        current_user.id,
        limit=limit,
        skip=skip,
        include_types=include_types,
        exclude_types=exclude_types
    )
    return await notification_service.pack_many(notifications, current_user.id)

@router.get(
    "/{notification_id}",
    response_model=notification_schemas.PackedNotification,
    response_model_exclude_none=True
)
async def get_notification(
    notification_id: str,
    current_user: Annotated[user_schemas.Me, Depends(get_current_user)],
    notification_service: Annotated[NotificationEntityService, Depends(get_notification_entity_service)],
    db: AsyncSession = Depends(get_db)
):
    notif = await notification_crud.get_notification(db, notification_id, current_user.id)
    if not notif:
        raise HTTPException(status_code=404, detail="Notification not found")

    try:
        return await notification_service.pack(notif, current_user.id)
    except (NoteNotFoundError, UserNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))
