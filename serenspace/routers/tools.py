"""
FastAPI router for the coping tool catalogue.

Browsing is public; seeding is a development convenience.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends

from common.utils import success_response, list_response, NotFoundException
from serenspace.config import settings
from serenspace.dependencies import require_auth, get_tool_service
from serenspace.schemas.tool import ToolCategory, ToolDifficulty
from serenspace.services.tools.tool_service import ToolService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tools", tags=["tools"])


@router.get("")
async def list_tools(
    tool_service: Annotated[ToolService, Depends(get_tool_service)],
    category: Optional[ToolCategory] = None,
    difficulty: Optional[ToolDifficulty] = None,
):
    """Get free coping tools, optionally filtered by category and difficulty."""
    tools = await tool_service.list_tools(
        category=category.value if category else None,
        difficulty=difficulty.value if difficulty else None,
    )
    return list_response(tools)


@router.get("/meta/categories")
async def get_categories():
    """Get the tool categories."""
    return success_response(ToolService.get_categories())


@router.post("/seed")
async def seed_tools(
    user: Annotated[dict, Depends(require_auth)],
    tool_service: Annotated[ToolService, Depends(get_tool_service)],
):
    """Insert the default catalogue. Disabled in production."""
    if settings.is_production():
        raise NotFoundException(message="Endpoint not found", code="NOT_FOUND")

    inserted = await tool_service.seed_default_tools()
    logger.info(f"Tool seed requested by {user['uid']}: {inserted} inserted")
    return success_response({"inserted": inserted}, message="Tools seeded successfully")


@router.get("/{tool_id}")
async def get_tool(
    tool_id: str,
    tool_service: Annotated[ToolService, Depends(get_tool_service)],
):
    """Get a single coping tool."""
    tool = await tool_service.get_tool(tool_id)
    return success_response(tool)
