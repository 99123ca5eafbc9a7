"""
Community feed pipeline functions.
"""

import logging
from typing import Any, Dict, Optional

from serenspace.repositories.base import ProfileRepository
from serenspace.services.community.post_service import PostService

logger = logging.getLogger(__name__)


async def create_post_pipeline(
    post_service: PostService,
    profile_repository: ProfileRepository,
    user_id: str,
    content: Optional[str],
    is_anonymous: bool = True,
) -> Dict[str, Any]:
    """
    Create a post, resolving the author's display name when not anonymous.

    Args:
        post_service: For post persistence
        profile_repository: For the author's display name
        user_id: Current user's uid
        content: Post body
        is_anonymous: Hide the author's name

    Returns:
        Created post
    """
    display_name = None
    if not is_anonymous:
        profile = await profile_repository.get(user_id)
        display_name = profile.get("displayName") if profile else None

    return await post_service.create_post(
        author_id=user_id,
        content=content,
        is_anonymous=is_anonymous,
        display_name=display_name,
    )
