from fastapi import APIRouter, Depends, HTTPException, status
from typing import Annotated
from notefeed.auth.auth_service import get_current_user
from notefeed.dependencies import get_user_entity_service
from notefeed.schemas import user as user_schemas
from notefeed.services.user_entity import UserEntityService, UserNotFoundError

router = APIRouter(prefix="/users", tags=["users"])

@router.get(
    "/{user_id}",
    response_model=user_schemas.PackedUserDetailed,
    response_model_exclude_none=True
)
async def get_user_profile(
    user_id: str,
    current_user: Annotated[user_schemas.Me, Depends(get_current_user)],
    user_service: Annotated[UserEntityService, Depends(get_user_entity_service)]
):
    """Profile of `user_id` with the relationship flags as seen by the caller."""
    try:
        return await user_service.pack(user_id, current_user.id, detail=True)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
