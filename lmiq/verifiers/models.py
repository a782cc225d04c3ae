"""Data models for solution verification."""

from typing import List, Optional
from pydantic import BaseModel, Field

from ..maze.models import Position


class ValidationError(BaseModel):
    """A single reason a solution fell short. Reported, never raised."""
    code: str
    message: str
    move_index: Optional[int] = None  # 0-based index into the submitted moves


class ValidationResult(BaseModel):
    """Verdict for one replayed move sequence."""
    is_valid: bool
    reaches_goal: bool
    path_length: int = 0
    final_position: Position
    efficiency: Optional[float] = None  # optimal / actual, only when the goal is reached
    constraints_satisfied: Optional[bool] = None  # None when the maze has no constraint
    path: List[Position] = Field(default_factory=list)  # visited positions, start included
    errors: List[ValidationError] = Field(default_factory=list)
