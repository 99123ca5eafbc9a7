"""
Coping tool catalogue.

Read-mostly content: guided breathing, grounding, journaling and similar
exercises. The timers that run them live in the client.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from common.utils.exceptions import NotFoundException
from serenspace.repositories.base import to_object_id
from serenspace.schemas.tool import ToolCategory

logger = logging.getLogger(__name__)


CATEGORY_NAMES = {
    ToolCategory.BREATHING: "Breathing",
    ToolCategory.MEDITATION: "Meditation",
    ToolCategory.GROUNDING: "Grounding",
    ToolCategory.JOURNALING: "Journaling",
    ToolCategory.MOVEMENT: "Movement",
    ToolCategory.COGNITIVE: "Cognitive",
}


DEFAULT_TOOLS: List[Dict[str, Any]] = [
    {
        "title": "4-7-8 Breathing",
        "description": "Calms anxiety and helps you relax",
        "category": "breathing",
        "duration": 3,
        "content": {
            "steps": [
                "Inhale for 4 seconds",
                "Hold for 7 seconds",
                "Exhale for 8 seconds",
                "Repeat 4 times",
            ],
            "breathingPattern": {"inhale": 4, "hold": 7, "exhale": 8},
        },
        "tags": ["stress", "anxiety"],
        "difficulty": "easy",
    },
    {
        "title": "Box Breathing",
        "description": "Improve focus and calm",
        "category": "breathing",
        "duration": 5,
        "content": {
            "steps": ["Inhale 4 sec", "Hold 4 sec", "Exhale 4 sec", "Hold 4 sec"],
            "breathingPattern": {"inhale": 4, "hold": 4, "exhale": 4},
        },
        "tags": ["focus"],
        "difficulty": "easy",
    },
    {
        "title": "5-4-3-2-1 Grounding",
        "description": "Ground yourself using your senses",
        "category": "grounding",
        "duration": 5,
        "content": {
            "steps": [
                "5 things you see",
                "4 things you feel",
                "3 things you hear",
                "2 things you smell",
                "1 thing you taste",
            ],
        },
        "tags": ["panic", "anxiety"],
        "difficulty": "easy",
    },
    {
        "title": "Gratitude Journaling",
        "description": "Write 3 things you're grateful for",
        "category": "journaling",
        "duration": 10,
        "content": {"steps": ["Write 3 good things that happened today"]},
        "tags": ["positivity"],
        "difficulty": "easy",
    },
    {
        "title": "Stretching",
        "description": "Light body movement",
        "category": "movement",
        "duration": 10,
        "content": {"steps": ["Stretch arms", "Stretch legs"]},
        "tags": ["relax"],
        "difficulty": "easy",
    },
    {
        "title": "Thought Reframing",
        "description": "Change negative thoughts",
        "category": "cognitive",
        "duration": 10,
        "content": {
            "steps": ["Identify the thought", "Challenge the thought", "Replace it with a balanced one"],
        },
        "tags": ["cbt"],
        "difficulty": "medium",
    },
]


class ToolService:
    """
    Serves the free coping tool catalogue from `copingTools`.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize ToolService.

        Args:
            db: MongoDB database connection
        """
        self._db = db
        self._tools_collection = db["copingTools"]

    async def list_tools(
        self,
        category: Optional[str] = None,
        difficulty: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        Get non-premium tools, optionally filtered.

        Args:
            category: ToolCategory value
            difficulty: ToolDifficulty value

        Returns:
            List of tools sorted by title
        """
        query: Dict[str, Any] = {"isPremium": False}
        if category:
            query["category"] = category
        if difficulty:
            query["difficulty"] = difficulty

        cursor = self._tools_collection.find(query)
        cursor = cursor.sort("title", 1)

        tools = await cursor.to_list(length=None)
        return [self._format_tool(t) for t in tools]

    async def get_tool(self, tool_id: str) -> Dict[str, Any]:
        """
        Get a single tool.

        Raises:
            NotFoundException: Unknown id
        """
        object_id = to_object_id(tool_id)
        tool = await self._tools_collection.find_one({"_id": object_id}) if object_id else None

        if not tool:
            raise NotFoundException(message="Tool not found", code="TOOL_NOT_FOUND")

        return self._format_tool(tool)

    @staticmethod
    def get_categories() -> List[Dict[str, str]]:
        return [{"id": category.value, "name": name} for category, name in CATEGORY_NAMES.items()]

    async def seed_default_tools(self) -> int:
        """
        Insert the default catalogue, skipping titles already present.

        Returns:
            Number of tools inserted
        """
        existing = set(await self._tools_collection.distinct("title"))
        now = datetime.now(timezone.utc)

        new_tools = [
            {**tool, "isPremium": False, "createdAt": now}
            for tool in DEFAULT_TOOLS
            if tool["title"] not in existing
        ]

        if not new_tools:
            return 0

        await self._tools_collection.insert_many(new_tools)
        logger.info(f"Seeded {len(new_tools)} default coping tools")
        return len(new_tools)

    def _format_tool(self, tool: Dict[str, Any]) -> Dict[str, Any]:
        """Format tool for response."""
        return {
            "id": str(tool["_id"]),
            "title": tool.get("title"),
            "description": tool.get("description"),
            "category": tool.get("category"),
            "duration": tool.get("duration"),
            "content": tool.get("content", {}),
            "tags": tool.get("tags", []),
            "difficulty": tool.get("difficulty"),
            "isPremium": tool.get("isPremium", False),
        }
