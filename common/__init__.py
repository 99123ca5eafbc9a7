"""
Common library for reusable infrastructure components.

This package provides generic modules shared by the SerenSpace services:

- database: Async MongoDB connection manager (Motor)
- auth: Pluggable token verification (Firebase)
- utils: Standard responses and API exceptions
- config: Base settings class
"""

from common.database import MongoDB
from common.auth import AuthProvider, FirebaseAuth, create_auth_dependency
from common.utils import (
    success_response,
    error_response,
    list_response,
    APIException,
    UnauthorizedException,
    NotFoundException,
    ValidationException,
)
from common.config import BaseAppSettings

__all__ = [
    # Database
    "MongoDB",
    # Auth
    "AuthProvider",
    "FirebaseAuth",
    "create_auth_dependency",
    # Utils
    "success_response",
    "error_response",
    "list_response",
    "APIException",
    "UnauthorizedException",
    "NotFoundException",
    "ValidationException",
    # Config
    "BaseAppSettings",
]
