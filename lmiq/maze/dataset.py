"""Maze records and test-set files."""

import json
import uuid
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from pydantic import BaseModel, Field

from .grid import Grid
from .models import DIFFICULTIES, Difficulty, GenerationMode, MazeConstraint, PathStep, Position


class MazeRecord(BaseModel):
    """A generated maze plus the metadata needed to prompt and score it."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    difficulty: Difficulty
    mode: GenerationMode
    width: int
    height: int
    grid: Grid
    start: Position
    goal: Position
    shortest_path: int
    shortest_path_playthrough: List[PathStep] = Field(default_factory=list)
    constraint: Optional[MazeConstraint] = None
    special_instructions: Optional[str] = None
    seed: Optional[int] = None
    attempts: int = 1


class TestSetSummary(BaseModel):
    total_mazes: int = 0
    by_difficulty: Dict[str, int] = Field(default_factory=lambda: {d: 0 for d in DIFFICULTIES})


class TestSet(BaseModel):
    """A named collection of mazes grouped by difficulty."""

    __test__ = False  # keep pytest from collecting this class

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str = "LMIQ Test Set"
    version: str = "1.0.0"
    created_at: str = Field(default_factory=lambda: datetime.now().isoformat())
    mazes: Dict[str, List[MazeRecord]] = Field(default_factory=lambda: {d: [] for d in DIFFICULTIES})
    summary: TestSetSummary = Field(default_factory=TestSetSummary)

    def add(self, maze: MazeRecord) -> None:
        """Add a maze and keep the summary counts current."""
        self.mazes.setdefault(maze.difficulty, []).append(maze)
        self.summary.by_difficulty[maze.difficulty] = len(self.mazes[maze.difficulty])
        self.summary.total_mazes = sum(len(m) for m in self.mazes.values())

    def iter_mazes(self, difficulties: Optional[List[str]] = None) -> Iterator[MazeRecord]:
        """Mazes in difficulty order, optionally restricted to some difficulties."""
        for difficulty in DIFFICULTIES:
            if difficulties is not None and difficulty not in difficulties:
                continue
            yield from self.mazes.get(difficulty, [])

    def find_maze(self, maze_id: str) -> Optional[MazeRecord]:
        for maze in self.iter_mazes():
            if maze.id == maze_id:
                return maze
        return None

    @classmethod
    def load(cls, path: str | Path) -> "TestSet":
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Test set not found: {path}")
        with open(path) as f:
            return cls(**json.load(f))

    def save(self, path: str | Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2)
