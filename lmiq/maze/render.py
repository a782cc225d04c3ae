"""Text renderings of a grid, used to show mazes to models and on the console."""

from typing import Iterable, List, Optional

from .grid import Grid
from .models import MOVES, Position


def render_ascii(
    grid: Grid,
    start: Position,
    goal: Position,
    path: Optional[Iterable[Position]] = None,
) -> str:
    """
    Draw the maze with ``+---+`` corners and ``|`` walls.

    Start is marked ``S``, goal ``G`` and any cell on ``path`` ``*``.
    """
    on_path = set(path) if path is not None else set()
    lines: List[str] = []

    top = "+"
    for x in range(grid.width):
        top += ("---" if grid.cells[0][x].walls.top else "   ") + "+"
    lines.append(top)

    for y in range(grid.height):
        row = "|" if grid.cells[y][0].walls.left else " "
        below = "+"
        for x in range(grid.width):
            pos = Position(x, y)
            walls = grid.cells[y][x].walls
            if pos == start:
                mark = "S"
            elif pos == goal:
                mark = "G"
            elif pos in on_path:
                mark = "*"
            else:
                mark = " "
            row += f" {mark} " + ("|" if walls.right else " ")
            below += ("---" if walls.bottom else "   ") + "+"
        lines.append(row)
        lines.append(below)

    return "\n".join(lines)


def render_adjacency(grid: Grid) -> str:
    """List, cell by cell, the moves that are open from it."""
    lines = []
    for pos in grid.positions():
        open_moves = [m for m in MOVES if grid.can_move(pos, m)]
        lines.append(f"({pos.x}, {pos.y}): {', '.join(open_moves) if open_moves else 'none'}")
    return "\n".join(lines)
