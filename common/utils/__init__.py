"""
Utilities module - Response envelopes and API exceptions.
"""

from common.utils.responses import success_response, error_response, list_response
from common.utils.exceptions import (
    APIException,
    UnauthorizedException,
    NotFoundException,
    ValidationException,
)

__all__ = [
    "success_response",
    "error_response",
    "list_response",
    "APIException",
    "UnauthorizedException",
    "NotFoundException",
    "ValidationException",
]
