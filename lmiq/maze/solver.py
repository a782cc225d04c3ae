"""Breadth-first shortest path and reachability over open passages."""

from collections import deque
from typing import Dict, List, Optional, Set

from .grid import Grid, move_between
from .models import PathStep, Position


def shortest_path(grid: Grid, start: Position, goal: Position) -> Optional[List[Position]]:
    """
    Find a shortest path from start to goal.

    Returns:
        The positions from start to goal inclusive, or None if unreachable
    """
    queue: deque[Position] = deque([start])
    parents: Dict[Position, Optional[Position]] = {start: None}
    while queue:
        current = queue.popleft()
        if current == goal:
            break
        for nxt in grid.open_neighbors(current):
            if nxt not in parents:
                parents[nxt] = current
                queue.append(nxt)

    if goal not in parents:
        return None
    node: Optional[Position] = goal
    path: List[Position] = []
    while node is not None:
        path.append(node)
        node = parents[node]
    path.reverse()
    return path


def shortest_path_length(grid: Grid, start: Position, goal: Position) -> Optional[int]:
    """Minimum number of moves from start to goal, or None if unreachable."""
    path = shortest_path(grid, start, goal)
    return len(path) - 1 if path is not None else None


def reachable_from(grid: Grid, start: Position) -> Set[Position]:
    """Every position connected to ``start`` by open passages."""
    seen: Set[Position] = {start}
    queue: deque[Position] = deque([start])
    while queue:
        current = queue.popleft()
        for nxt in grid.open_neighbors(current):
            if nxt not in seen:
                seen.add(nxt)
                queue.append(nxt)
    return seen


def path_to_moves(path: List[Position]) -> List[str]:
    return [move_between(a, b) for a, b in zip(path, path[1:])]


def path_to_playthrough(path: List[Position]) -> List[PathStep]:
    """Turn a position path into (move, landing position) steps."""
    return [PathStep(move=move_between(a, b), position=b) for a, b in zip(path, path[1:])]
