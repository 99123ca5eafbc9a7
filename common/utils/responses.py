"""
Response envelopes.

Every endpoint answers with one of:

    {"success": true, "data": ..., "message": ...}
    {"success": true, "data": [...], "count": n}
    {"success": false, "error": {"message": ..., "code": ..., "details": ...}}

Example:
    @router.get("/moods/stats")
    async def get_stats(...):
        return success_response(stats)
"""

from typing import Any, Optional, Dict


def success_response(data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
    """Wrap a payload; `data` and `message` are omitted when empty."""
    body: Dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = data
    if message:
        body["message"] = message
    return body


def error_response(
    message: str,
    code: Optional[str] = None,
    details: Optional[Any] = None,
) -> Dict[str, Any]:
    """
    Build the error envelope.

    Args:
        message: Human-readable error message
        code: Machine-readable error code (e.g. "MOOD_NOT_FOUND")
        details: Extra context such as per-field validation errors
    """
    error: Dict[str, Any] = {"message": message}
    if code:
        error["code"] = code
    if details is not None:
        error["details"] = details
    return {"success": False, "error": error}


def list_response(items: list, message: Optional[str] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": True, "data": items, "count": len(items)}
    if message:
        body["message"] = message
    return body
