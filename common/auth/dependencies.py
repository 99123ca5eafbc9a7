"""
FastAPI authentication dependencies.

Provides a factory that builds an auth dependency for any AuthProvider.

Example:
    from common.auth import FirebaseAuth, create_auth_dependency

    auth = FirebaseAuth()
    get_current_user = create_auth_dependency(lambda: auth)

    @app.get("/profile")
    async def get_profile(user: dict = Depends(get_current_user)):
        return {"uid": user["uid"]}
"""

import logging
from typing import Any, Callable, Dict, Optional

from fastapi import Header

from common.auth.base import AuthProvider
from common.utils.exceptions import UnauthorizedException

logger = logging.getLogger(__name__)


def create_auth_dependency(
    get_auth_provider: Callable[[], AuthProvider],
    header_name: str = "Authorization",
    scheme: str = "Bearer",
):
    """
    Factory to create FastAPI auth dependencies.

    Args:
        get_auth_provider: Callable that returns the AuthProvider instance
        header_name: Header to extract token from (default: Authorization)
        scheme: Auth scheme prefix (default: Bearer)

    Returns:
        A FastAPI dependency that returns {"uid", "email", "name"} for the caller
    """

    async def get_current_user(
        authorization: Optional[str] = Header(None, alias=header_name),
    ) -> Dict[str, Any]:
        """
        Extract and verify the caller from the authorization header.

        Raises:
            UnauthorizedException: If token is missing, invalid, or expired
        """
        if not authorization:
            raise UnauthorizedException(
                message="No token provided",
                code="AUTH_REQUIRED",
            )

        prefix = f"{scheme} "
        if not authorization.startswith(prefix):
            raise UnauthorizedException(
                message=f"Invalid authorization scheme. Expected: {scheme}",
                code="INVALID_AUTH_SCHEME",
            )

        token = authorization[len(prefix):].strip()
        if not token:
            raise UnauthorizedException(message="Token is empty", code="EMPTY_TOKEN")

        auth = get_auth_provider()
        try:
            payload = await auth.verify_token(token)
        except ValueError as e:
            logger.info(f"Token verification failed: {e}")
            raise UnauthorizedException(message="Invalid token", code="INVALID_TOKEN")

        uid = payload.get("sub") or payload.get("uid")
        if not uid:
            raise UnauthorizedException(message="Token missing user ID", code="INVALID_TOKEN")

        return {"uid": uid, "email": payload.get("email"), "name": payload.get("name")}

    return get_current_user
