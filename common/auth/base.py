"""
Token verifier interface.

Identity lives with an external provider; the API only needs to turn a
bearer token into verified claims. Tests plug in a fake verifier.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any


class AuthProvider(ABC):
    """Verifies bearer tokens issued by an identity provider."""

    @abstractmethod
    async def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify an authentication token.

        Args:
            token: The raw bearer token

        Returns:
            Decoded claims; must contain `sub` or `uid`

        Raises:
            ValueError: If the token is invalid, expired, or revoked
        """
        pass
