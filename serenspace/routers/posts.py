"""
FastAPI router for the community feed.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends

from common.utils import success_response, list_response
from serenspace.dependencies import require_auth, get_post_service, get_profile_repository
from serenspace.repositories.base import ProfileRepository
from serenspace.services.community.post_service import PostService
from serenspace.schemas.post import CreatePostRequest, ReportPostRequest
from serenspace.pipelines import community as pipelines

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post("", status_code=201)
async def create_post(
    body: CreatePostRequest,
    user: Annotated[dict, Depends(require_auth)],
    post_service: Annotated[PostService, Depends(get_post_service)],
    profile_repository: Annotated[ProfileRepository, Depends(get_profile_repository)],
):
    """Publish a post, anonymous by default."""
    post = await pipelines.create_post_pipeline(
        post_service=post_service,
        profile_repository=profile_repository,
        user_id=user["uid"],
        content=body.content,
        is_anonymous=body.isAnonymous,
    )
    return success_response(post)


@router.get("")
async def get_feed(
    user: Annotated[dict, Depends(require_auth)],
    post_service: Annotated[PostService, Depends(get_post_service)],
):
    """Get the most recent community posts."""
    posts = await post_service.get_feed(viewer_id=user["uid"])
    return list_response(posts)


@router.get("/my")
async def get_my_posts(
    user: Annotated[dict, Depends(require_auth)],
    post_service: Annotated[PostService, Depends(get_post_service)],
):
    """Get the caller's own posts."""
    posts = await post_service.get_user_posts(user["uid"])
    return list_response(posts)


@router.post("/{post_id}/like")
async def toggle_like(
    post_id: str,
    user: Annotated[dict, Depends(require_auth)],
    post_service: Annotated[PostService, Depends(get_post_service)],
):
    """Like a post, or undo a previous like."""
    liked = await post_service.toggle_like(post_id, user["uid"])
    return success_response({"liked": liked})


@router.delete("/{post_id}")
async def delete_post(
    post_id: str,
    user: Annotated[dict, Depends(require_auth)],
    post_service: Annotated[PostService, Depends(get_post_service)],
):
    """Remove one of the caller's posts from the feed."""
    await post_service.delete_post(post_id, user["uid"])
    return success_response(message="Post deleted")


@router.post("/{post_id}/report")
async def report_post(
    post_id: str,
    user: Annotated[dict, Depends(require_auth)],
    post_service: Annotated[PostService, Depends(get_post_service)],
    body: Optional[ReportPostRequest] = None,
):
    """Report a post for moderation."""
    report = await post_service.report_post(
        post_id,
        reporter_id=user["uid"],
        reason=body.reason if body else None,
    )
    return success_response(report, message="Post reported")
