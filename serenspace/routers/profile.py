"""
FastAPI router for the caller's profile (check-in counters).
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from common.utils import success_response
from serenspace.dependencies import require_auth, get_profile_repository
from serenspace.repositories.base import ProfileRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("")
async def get_profile(
    user: Annotated[dict, Depends(require_auth)],
    profile_repository: Annotated[ProfileRepository, Depends(get_profile_repository)],
):
    """
    Get streak and check-in counters.

    Users who never checked in get zeroed counters.
    """
    profile = await profile_repository.get(user["uid"])

    if profile is None:
        profile = {
            "uid": user["uid"],
            "displayName": user.get("name"),
            "streakDays": 0,
            "longestStreak": 0,
            "totalCheckIns": 0,
            "lastCheckIn": None,
        }

    return success_response({**profile, "email": user.get("email")})
