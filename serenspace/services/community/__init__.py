from serenspace.services.community.post_service import PostService

__all__ = ["PostService"]
