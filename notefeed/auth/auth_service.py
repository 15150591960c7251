from __future__ import annotations
import os
from typing import Annotated, Optional, TypedDict
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession
from notefeed import models
from notefeed.schemas import user as user_schemas
from notefeed.crud import user as user_crud
from notefeed.database import get_db

ALGORITHM: str = "HS256"

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token")

class JWTPayload(TypedDict, total=False):
    sub: str
    exp: int

def get_secret_key() -> str:
    secret_key = os.getenv("SECRET_KEY")
    if not secret_key:
        raise RuntimeError("SECRET_KEY environment variable is required")
    return secret_key

def decode_token(token: str) -> JWTPayload:
    payload = jwt.decode(token, get_secret_key(), algorithms=[ALGORITHM])
    return payload

async def _resolve_db_user(db: AsyncSession, user_id: str) -> models.User | None:
    return await user_crud.get_user(db, id=user_id)

def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    db: AsyncSession = Depends(get_db),
) -> user_schemas.Me:
    try:
        payload = decode_token(token)
        user_id: Optional[str] = payload.get("sub")
        if not user_id:
            raise _credentials_exception()
    except JWTError:
        raise _credentials_exception()

    db_user = await _resolve_db_user(db, user_id)
    if db_user is None:
        raise _credentials_exception()

    return user_schemas.Me.model_validate(db_user, from_attributes=True)
