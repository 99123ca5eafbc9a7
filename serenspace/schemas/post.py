"""
Pydantic models for community feed requests.
"""

from typing import Optional

from pydantic import BaseModel, Field


class CreatePostRequest(BaseModel):
    """Request body for a new community post."""
    content: Optional[str] = None
    isAnonymous: bool = True


class ReportPostRequest(BaseModel):
    """Optional body when reporting a post."""
    reason: Optional[str] = Field(None, max_length=500)
