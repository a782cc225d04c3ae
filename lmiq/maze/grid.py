"""Grid model: cells, walls and adjacency rules."""

from typing import Dict, Iterator, List, Tuple

from pydantic import BaseModel, Field

from .models import MOVE_DELTAS, Position


# (dx, dy) -> (wall on the first cell, matching wall on the second cell)
WALL_PAIRS: Dict[Tuple[int, int], Tuple[str, str]] = {
    (0, -1): ("top", "bottom"),
    (1, 0): ("right", "left"),
    (0, 1): ("bottom", "top"),
    (-1, 0): ("left", "right"),
}


class Walls(BaseModel):
    """Wall flags of a single cell. True means the wall is standing."""
    top: bool = True
    right: bool = True
    bottom: bool = True
    left: bool = True


class Cell(BaseModel):
    """A grid cell and its four walls."""
    x: int
    y: int
    walls: Walls = Field(default_factory=Walls)


class Grid(BaseModel):
    """
    Fixed-size, row-major grid of cells.

    Created fully walled; walls are only ever removed, always in matching
    pairs, so the wall between two neighbours looks the same from both sides.

    Attributes:
        width: Number of columns
        height: Number of rows
        cells: Rows of cells, indexed ``cells[y][x]``
    """

    width: int = Field(..., ge=1)
    height: int = Field(..., ge=1)
    cells: List[List[Cell]] = Field(default_factory=list)

    @classmethod
    def create(cls, width: int, height: int) -> "Grid":
        """Build a grid with every wall standing."""
        cells = [[Cell(x=x, y=y) for x in range(width)] for y in range(height)]
        return cls(width=width, height=height, cells=cells)

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def cell(self, pos: Position) -> Cell:
        if not self.in_bounds(pos):
            raise IndexError(f"Position {tuple(pos)} outside {self.width}x{self.height} grid")
        return self.cells[pos.y][pos.x]

    def positions(self) -> Iterator[Position]:
        """All positions in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield Position(x, y)

    def neighbors(self, pos: Position) -> List[Position]:
        """In-bounds adjacent positions (top, right, bottom, left), walls ignored."""
        x, y = pos
        result = []
        if y > 0:
            result.append(Position(x, y - 1))
        if x < self.width - 1:
            result.append(Position(x + 1, y))
        if y < self.height - 1:
            result.append(Position(x, y + 1))
        if x > 0:
            result.append(Position(x - 1, y))
        return result

    def has_wall_between(self, a: Position, b: Position) -> bool:
        wall, _ = self._wall_pair(a, b)
        return getattr(self.cell(a).walls, wall)

    def open_neighbors(self, pos: Position) -> List[Position]:
        """Adjacent positions reachable through an open passage."""
        return [n for n in self.neighbors(pos) if not self.has_wall_between(pos, n)]

    def remove_wall_between(self, a: Position, b: Position) -> None:
        """
        Open the passage between two adjacent cells.

        Raises:
            ValueError: If the cells are not orthogonal neighbours
        """
        wall, opposite = self._wall_pair(a, b)
        setattr(self.cell(a).walls, wall, False)
        setattr(self.cell(b).walls, opposite, False)

    def can_move(self, pos: Position, move: str) -> bool:
        """True if ``move`` from ``pos`` stays on the grid and crosses no wall."""
        target = pos.step(move)
        if not self.in_bounds(pos) or not self.in_bounds(target):
            return False
        return not self.has_wall_between(pos, target)

    def passage_count(self) -> int:
        """Number of open passages between adjacent cells."""
        count = 0
        for pos in self.positions():
            walls = self.cell(pos).walls
            # Count each passage once, from its left/top cell
            if pos.x < self.width - 1 and not walls.right:
                count += 1
            if pos.y < self.height - 1 and not walls.bottom:
                count += 1
        return count

    def is_symmetric(self) -> bool:
        """Check that every shared wall has the same state on both sides."""
        for pos in self.positions():
            for other in self.neighbors(pos):
                wall, opposite = self._wall_pair(pos, other)
                if getattr(self.cell(pos).walls, wall) != getattr(self.cell(other).walls, opposite):
                    return False
        return True

    @staticmethod
    def _wall_pair(a: Position, b: Position) -> Tuple[str, str]:
        offset = (b[0] - a[0], b[1] - a[1])
        try:
            return WALL_PAIRS[offset]
        except KeyError:
            raise ValueError(
                f"Cells {tuple(a)} and {tuple(b)} are not adjacent (offset {offset})"
            ) from None


def move_between(a: Position, b: Position) -> str:
    """The move that takes you from ``a`` to the adjacent cell ``b``."""
    offset = (b[0] - a[0], b[1] - a[1])
    for move, delta in MOVE_DELTAS.items():
        if delta == offset:
            return move
    raise ValueError(f"Cells {tuple(a)} and {tuple(b)} are not adjacent (offset {offset})")
