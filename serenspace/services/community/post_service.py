"""
Community feed service.

Handles anonymous/named posts, likes, soft deletion and reports.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from common.utils.exceptions import NotFoundException, ValidationException
from serenspace.repositories.base import to_object_id

logger = logging.getLogger(__name__)


class PostService:
    """
    Handles community post storage, likes and moderation reports.
    """

    FEED_LIMIT = 50
    MAX_CONTENT_LENGTH = 2000

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        feed_limit: int = FEED_LIMIT,
        max_content_length: int = MAX_CONTENT_LENGTH,
    ):
        """
        Initialize PostService.

        Args:
            db: MongoDB database connection
            feed_limit: Posts returned by the community feed
            max_content_length: Longest accepted post body
        """
        self._db = db
        self._posts_collection = db["posts"]
        self._reports_collection = db["reports"]
        self._feed_limit = feed_limit
        self._max_content_length = max_content_length

    async def create_post(
        self,
        author_id: str,
        content: Optional[str],
        is_anonymous: bool = True,
        display_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Create a community post.

        Args:
            author_id: Firebase uid of the author
            content: Post body (trimmed, required)
            is_anonymous: Hide the author's name
            display_name: Author's profile name, used when not anonymous

        Returns:
            Created post

        Raises:
            ValidationException: Empty or oversized content
        """
        trimmed = (content or "").strip()
        if not trimmed:
            raise ValidationException(message="Content is required", code="MISSING_CONTENT")
        if len(trimmed) > self._max_content_length:
            raise ValidationException(
                message=f"Content cannot exceed {self._max_content_length} characters",
                code="CONTENT_TOO_LONG",
            )

        now = datetime.now(timezone.utc)

        post_doc = {
            "authorId": author_id,
            "content": trimmed,
            "isAnonymous": is_anonymous,
            "displayName": "Anonymous" if is_anonymous else (display_name or "User"),
            "likes": 0,
            "likedBy": [],
            "repliesCount": 0,
            "isModerated": False,
            "isDeleted": False,
            "createdAt": now,
            "updatedAt": now,
        }

        result = await self._posts_collection.insert_one(post_doc)
        post_doc["_id"] = result.inserted_id

        logger.info(f"Post {result.inserted_id} created by user {author_id}")
        return self._format_post(post_doc, author_id)

    async def get_feed(self, viewer_id: str) -> List[Dict[str, Any]]:
        """
        Get the community feed.

        Returns:
            Most recent non-deleted posts, newest first
        """
        cursor = self._posts_collection.find({"isDeleted": {"$ne": True}})
        cursor = cursor.sort("createdAt", -1)
        cursor = cursor.limit(self._feed_limit)

        posts = await cursor.to_list(length=self._feed_limit)
        return [self._format_post(p, viewer_id) for p in posts]

    async def get_user_posts(self, author_id: str) -> List[Dict[str, Any]]:
        cursor = self._posts_collection.find({"authorId": author_id, "isDeleted": {"$ne": True}})
        cursor = cursor.sort("createdAt", -1)

        posts = await cursor.to_list(length=None)
        return [self._format_post(p, author_id) for p in posts]

    async def toggle_like(self, post_id: str, user_id: str) -> bool:
        """
        Like a post, or remove the like if already given.

        Both branches are single conditional updates, so concurrent toggles
        never double count.

        Returns:
            True if the post is now liked by the user

        Raises:
            NotFoundException: Post missing or deleted
        """
        object_id = to_object_id(post_id)
        if object_id is None:
            raise NotFoundException(message="Post not found", code="POST_NOT_FOUND")

        live = {"_id": object_id, "isDeleted": {"$ne": True}}

        liked = await self._posts_collection.update_one(
            {**live, "likedBy": {"$ne": user_id}},
            {"$inc": {"likes": 1}, "$addToSet": {"likedBy": user_id}},
        )
        if liked.modified_count:
            return True

        unliked = await self._posts_collection.update_one(
            {**live, "likedBy": user_id},
            {"$inc": {"likes": -1}, "$pull": {"likedBy": user_id}},
        )
        if unliked.modified_count:
            return False

        raise NotFoundException(message="Post not found", code="POST_NOT_FOUND")

    async def delete_post(self, post_id: str, author_id: str) -> None:
        """
        Soft delete an owned post.

        Raises:
            NotFoundException: Post missing or owned by someone else
        """
        object_id = to_object_id(post_id)
        if object_id is None:
            raise NotFoundException(message="Post not found", code="POST_NOT_FOUND")

        result = await self._posts_collection.update_one(
            {"_id": object_id, "authorId": author_id},
            {"$set": {"isDeleted": True, "updatedAt": datetime.now(timezone.utc)}},
        )
        if not result.matched_count:
            raise NotFoundException(message="Post not found", code="POST_NOT_FOUND")

        logger.info(f"Post {post_id} deleted by user {author_id}")

    async def report_post(
        self,
        post_id: str,
        reporter_id: str,
        reason: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        File a moderation report against a post.

        Raises:
            NotFoundException: Post missing or deleted
        """
        object_id = to_object_id(post_id)
        live = {"_id": object_id, "isDeleted": {"$ne": True}}
        if object_id is None or not await self._posts_collection.count_documents(live):
            raise NotFoundException(message="Post not found", code="POST_NOT_FOUND")

        report_doc = {
            "postId": object_id,
            "reportedBy": reporter_id,
            "reason": reason.strip() if reason else None,
            "createdAt": datetime.now(timezone.utc),
        }

        result = await self._reports_collection.insert_one(report_doc)

        logger.info(f"Post {post_id} reported by user {reporter_id}")
        return {"id": str(result.inserted_id), "postId": post_id}

    def _format_post(self, post: Dict[str, Any], viewer_id: str) -> Dict[str, Any]:
        """Format post for response. authorId is only shown to the author."""
        liked_by = post.get("likedBy", [])
        is_own = post.get("authorId") == viewer_id

        return {
            "id": str(post["_id"]),
            "authorId": post["authorId"] if is_own else None,
            "isOwn": is_own,
            "content": post.get("content"),
            "isAnonymous": post.get("isAnonymous", True),
            "displayName": post.get("displayName", "Anonymous"),
            "likes": post.get("likes", 0),
            "likedByMe": viewer_id in liked_by,
            "repliesCount": post.get("repliesCount", 0),
            "createdAt": post.get("createdAt"),
        }
