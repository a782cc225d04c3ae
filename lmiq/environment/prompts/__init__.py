"""Prompt templates for LMIQ maze solving."""

from .system_prompt import SYSTEM_PROMPT
from .maze_prompt import build_maze_prompt, format_maze, format_requirements

__all__ = [
    "SYSTEM_PROMPT",
    "build_maze_prompt",
    "format_maze",
    "format_requirements",
]
