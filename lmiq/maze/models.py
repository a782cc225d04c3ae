"""Data models shared by the maze generators, solver and validator."""

from typing import Dict, List, Literal, NamedTuple, Optional, Tuple
from pydantic import BaseModel, Field, model_validator


# Type aliases
Move = Literal["UP", "DOWN", "LEFT", "RIGHT"]
Difficulty = Literal["simple", "easy", "medium", "hard", "nightmare", "horror"]
GenerationMode = Literal["dfs", "spine-first"]
RequirementType = Literal["REQUIRED_SUBSEQUENCE", "REQUIRED_TILES"]

MOVES: Tuple[Move, ...] = ("UP", "DOWN", "LEFT", "RIGHT")

# Ordered easiest to hardest
DIFFICULTIES: Tuple[Difficulty, ...] = (
    "simple",
    "easy",
    "medium",
    "hard",
    "nightmare",
    "horror",
)

# y grows downward (row-major grid)
MOVE_DELTAS: Dict[str, Tuple[int, int]] = {
    "UP": (0, -1),
    "DOWN": (0, 1),
    "LEFT": (-1, 0),
    "RIGHT": (1, 0),
}


class Position(NamedTuple):
    """A cell coordinate on the grid."""
    x: int
    y: int

    def manhattan(self, other: "Position") -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def step(self, move: str) -> "Position":
        dx, dy = MOVE_DELTAS[move]
        return Position(self.x + dx, self.y + dy)


class PathStep(BaseModel):
    """A move together with the cell it lands on."""
    move: Move
    position: Position


class MazeConstraint(BaseModel):
    """Optional ordering/coverage requirement attached to a maze."""
    requirement_type: RequirementType
    required_subsequences: List[List[PathStep]] = Field(default_factory=list)
    required_tiles: List[Position] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_payload(self) -> "MazeConstraint":
        if self.requirement_type == "REQUIRED_TILES" and not self.required_tiles:
            raise ValueError("REQUIRED_TILES constraint needs at least one tile")
        if self.requirement_type == "REQUIRED_SUBSEQUENCE":
            if not self.required_subsequences or any(not seq for seq in self.required_subsequences):
                raise ValueError("REQUIRED_SUBSEQUENCE constraint needs non-empty subsequences")
        return self

    def describe(self) -> str:
        """Human-readable summary, used in prompts and CLI output."""
        if self.requirement_type == "REQUIRED_TILES":
            tiles = ", ".join(f"({p.x}, {p.y})" for p in self.required_tiles)
            return f"Visit every one of these tiles before reaching the goal: {tiles}"

        parts = []
        for seq in self.required_subsequences:
            steps = " then ".join(f"{s.move} to ({s.position.x}, {s.position.y})" for s in seq)
            parts.append(steps)
        return "Your path must include, in order: " + "; and ".join(parts)


class SpineFirstConfig(BaseModel):
    """Tuning knobs for spine-first generation."""
    tortuosity: float = Field(default=1.5, ge=1.0)
    min_turns: Optional[int] = Field(default=None, ge=0)
    branch_chance: float = Field(default=0.5, ge=0.0, le=1.0)
    min_branch_spacing: int = Field(default=5, ge=1)
    min_branch_length: int = Field(default=1, ge=1)
    max_branch_length: int = Field(default=8, ge=1)
    sub_branch_chance: float = Field(default=0.0, ge=0.0, le=1.0)
    fill_remaining: bool = False

    @model_validator(mode="after")
    def _check_branch_lengths(self) -> "SpineFirstConfig":
        if self.max_branch_length < self.min_branch_length:
            raise ValueError(
                f"max_branch_length ({self.max_branch_length}) must be >= "
                f"min_branch_length ({self.min_branch_length})"
            )
        return self
