"""
Coping tool vocabulary.
"""

from enum import Enum


class ToolCategory(str, Enum):
    BREATHING = "breathing"
    MEDITATION = "meditation"
    GROUNDING = "grounding"
    JOURNALING = "journaling"
    MOVEMENT = "movement"
    COGNITIVE = "cognitive"


class ToolDifficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
