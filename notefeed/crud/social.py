from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Iterable, List, Set
from notefeed import models
from .utils import execute

async def get_followee_ids(db: AsyncSession, follower_id: str, among_ids: Iterable[str]) -> Set[str]:
    """Which of `among_ids` does `follower_id` follow?"""
    among_ids = list(among_ids)
    if not among_ids:
        return set()
    result = await execute(db, select(models.Following.followee_id).where(
        models.Following.follower_id == follower_id,
        models.Following.followee_id.in_(among_ids)
    ))
    return set(result.scalars().all())

async def get_follower_ids(db: AsyncSession, followee_id: str, among_ids: Iterable[str]) -> Set[str]:
    """Which of `among_ids` follow `followee_id`?"""
    among_ids = list(among_ids)
    if not among_ids:
        return set()
    result = await execute(db, select(models.Following.follower_id).where(
        models.Following.followee_id == followee_id,
        models.Following.follower_id.in_(among_ids)
    ))
    return set(result.scalars().all())

async def get_requested_followee_ids(db: AsyncSession, follower_id: str, among_ids: Iterable[str]) -> Set[str]:
    """Which of `among_ids` have a pending request from `follower_id`?"""
    among_ids = list(among_ids)
    if not among_ids:
        return set()
    result = await execute(db, select(models.FollowRequest.followee_id).where(
        models.FollowRequest.follower_id == follower_id,
        models.FollowRequest.followee_id.in_(among_ids)
    ))
    return set(result.scalars().all())

async def get_requesting_follower_ids(db: AsyncSession, followee_id: str, among_ids: Iterable[str]) -> Set[str]:
    """Which of `among_ids` have sent a still pending request to `followee_id`?"""
    among_ids = list(among_ids)
    if not among_ids:
        return set()
    result = await execute(db, select(models.FollowRequest.follower_id).where(
        models.FollowRequest.followee_id == followee_id,
        models.FollowRequest.follower_id.in_(among_ids)
    ))
    return set(result.scalars().all())

async def get_follow_requests_by_followers(db: AsyncSession, follower_ids: Iterable[str]) -> List[models.FollowRequest]:
    follower_ids = list(follower_ids)
    if not follower_ids:
        return []
    result = await execute(db, select(models.FollowRequest).where(
        models.FollowRequest.follower_id.in_(follower_ids)
    ))
    return list(result.scalars().all())
