"""
Firebase ID token verification.

The web client signs users in with the Firebase client SDK and sends the
resulting ID token as a Bearer token; this provider checks it with the
Admin SDK.

Credentials are taken, in order, from a service account file, from the
FIREBASE_PROJECT_ID / FIREBASE_CLIENT_EMAIL / FIREBASE_PRIVATE_KEY
environment variables, or from Application Default Credentials.

Example:
    auth = FirebaseAuth(credentials_path="serviceAccount.json")

    claims = await auth.verify_token(id_token)
    print(claims["uid"])
"""

import logging
import os
from typing import Dict, Any, Optional

import firebase_admin
from dotenv import load_dotenv
from firebase_admin import credentials, auth

from common.auth.base import AuthProvider

load_dotenv()

logger = logging.getLogger(__name__)

_TOKEN_URI = "https://oauth2.googleapis.com/token"


def _service_account_from_env() -> Optional[Dict[str, Any]]:
    """Build a service account dict from FIREBASE_* variables, if all are set."""
    project_id = os.environ.get("FIREBASE_PROJECT_ID")
    client_email = os.environ.get("FIREBASE_CLIENT_EMAIL")
    private_key = os.environ.get("FIREBASE_PRIVATE_KEY")

    if not (project_id and client_email and private_key):
        return None

    return {
        "type": "service_account",
        "project_id": project_id,
        "client_email": client_email,
        # .env files store the PEM with literal \n sequences
        "private_key": private_key.strip('"').replace("\\n", "\n"),
        "token_uri": _TOKEN_URI,
    }


class FirebaseAuth(AuthProvider):
    """
    Verifies Firebase ID tokens.

    Sign-up, sign-in and password resets happen in the client SDK, so the
    backend never sees credentials.
    """

    def __init__(
        self,
        credentials_path: Optional[str] = None,
        project_id: Optional[str] = None,
    ):
        """
        Initialize the Firebase Admin app once per process.

        Args:
            credentials_path: Path to service account JSON file
            project_id: Firebase project ID (inferred from credentials if omitted)
        """
        if not firebase_admin._apps:
            env_account = _service_account_from_env()

            if credentials_path:
                cred = credentials.Certificate(credentials_path)
            elif env_account:
                cred = credentials.Certificate(env_account)
            else:
                logger.info("No Firebase service account configured, using default credentials")
                cred = credentials.ApplicationDefault()

            options = {"projectId": project_id} if project_id else {}
            firebase_admin.initialize_app(cred, options)

        self._auth = auth

    async def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify a Firebase ID token.

        Returns:
            Decoded claims with `sub` mirroring `uid`

        Raises:
            ValueError: Token is expired, revoked or malformed
        """
        try:
            decoded = self._auth.verify_id_token(token)
        except self._auth.ExpiredIdTokenError:
            raise ValueError("Token has expired")
        except self._auth.RevokedIdTokenError:
            raise ValueError("Token has been revoked")
        except (self._auth.InvalidIdTokenError, ValueError) as e:
            raise ValueError(f"Invalid token: {e}")

        decoded["sub"] = decoded.get("uid")
        return decoded
