"""
SerenSpace API Routers.

All routers are imported here for easy access.
"""

from serenspace.routers.moods import router as moods_router
from serenspace.routers.insights import router as insights_router
from serenspace.routers.posts import router as posts_router
from serenspace.routers.tools import router as tools_router
from serenspace.routers.profile import router as profile_router

__all__ = [
    "moods_router",
    "insights_router",
    "posts_router",
    "tools_router",
    "profile_router",
]
