"""
Move-sequence validation.

Replays a candidate move list against a maze:
1. Each move is checked against the wall on the current cell (leaving the
   grid counts as hitting a wall); the first blocked move ends the replay
2. The first arrival at the goal ends the replay successfully
3. Efficiency is optimal length over moves used, when the goal is reached
4. An attached constraint is checked over the realized path
"""

from typing import List, Optional, Sequence

from ..maze.dataset import MazeRecord
from ..maze.grid import Grid
from ..maze.models import MOVE_DELTAS, MazeConstraint, PathStep, Position
from .models import ValidationError, ValidationResult


def check_required_tiles(path: Sequence[Position], required: Sequence[Position]) -> List[ValidationError]:
    """Every required tile must appear somewhere in the visited positions."""
    visited = set(path)
    return [
        ValidationError(
            code="MISSING_REQUIRED_TILE",
            message=f"Required tile ({tile.x}, {tile.y}) was never visited",
        )
        for tile in required
        if tile not in visited
    ]


def contains_subsequence(steps: Sequence[PathStep], required: Sequence[PathStep]) -> bool:
    """True if ``required`` appears in ``steps`` in order, gaps allowed."""
    idx = 0
    for step in steps:
        if idx == len(required):
            break
        wanted = required[idx]
        if step.move == wanted.move and step.position == wanted.position:
            idx += 1
    return idx == len(required)


def check_required_subsequences(
    steps: Sequence[PathStep],
    subsequences: Sequence[Sequence[PathStep]],
) -> List[ValidationError]:
    errors: List[ValidationError] = []
    for i, subsequence in enumerate(subsequences):
        if not contains_subsequence(steps, subsequence):
            errors.append(ValidationError(
                code="MISSING_SUBSEQUENCE",
                message=f"Required subsequence {i + 1} ({len(subsequence)} steps) does not appear in order",
            ))
    return errors


def check_constraint(
    path: Sequence[Position],
    steps: Sequence[PathStep],
    constraint: MazeConstraint,
) -> List[ValidationError]:
    if constraint.requirement_type == "REQUIRED_TILES":
        return check_required_tiles(path, constraint.required_tiles)
    return check_required_subsequences(steps, constraint.required_subsequences)


def validate_solution(
    grid: Grid,
    start: Position,
    goal: Position,
    optimal_length: int,
    moves: Sequence[str],
    constraint: Optional[MazeConstraint] = None,
) -> ValidationResult:
    """
    Replay ``moves`` from ``start`` and score the result.

    Invalid or incomplete solutions are ordinary results, not exceptions.
    Moves after the first illegal one, or after reaching the goal, are not
    evaluated.

    Args:
        grid: The maze
        start: Start position
        goal: Goal position
        optimal_length: Shortest path length, used for efficiency
        moves: Candidate moves (UP/DOWN/LEFT/RIGHT)
        constraint: Optional required tiles or subsequences

    Returns:
        ValidationResult describing how far the moves got
    """
    start = Position(*start)
    goal = Position(*goal)
    position = start
    path: List[Position] = [start]
    steps: List[PathStep] = []
    errors: List[ValidationError] = []
    is_valid = True
    reaches_goal = position == goal

    for i, move in enumerate(moves):
        if reaches_goal:
            break

        if move not in MOVE_DELTAS:
            is_valid = False
            errors.append(ValidationError(
                code="UNKNOWN_MOVE",
                message=f"Move {i + 1} ('{move}') is not one of UP, DOWN, LEFT, RIGHT",
                move_index=i,
            ))
            break

        if not grid.can_move(position, move):
            is_valid = False
            target = position.step(move)
            if grid.in_bounds(target):
                code, detail = "WALL_COLLISION", "into a wall"
            else:
                code, detail = "OUT_OF_BOUNDS", "off the grid"
            errors.append(ValidationError(
                code=code,
                message=f"Move {i + 1} ({move}) from ({position.x}, {position.y}) runs {detail}",
                move_index=i,
            ))
            break

        position = position.step(move)
        path.append(position)
        steps.append(PathStep(move=move, position=position))
        if position == goal:
            reaches_goal = True

    path_length = len(steps)

    if is_valid and not reaches_goal:
        errors.append(ValidationError(
            code="GOAL_NOT_REACHED",
            message=f"Moves ended at ({position.x}, {position.y}) without reaching the goal",
        ))

    efficiency = None
    if reaches_goal:
        efficiency = optimal_length / path_length if path_length > 0 else 1.0

    constraints_satisfied = None
    if constraint is not None:
        constraint_errors = check_constraint(path, steps, constraint)
        errors.extend(constraint_errors)
        constraints_satisfied = reaches_goal and not constraint_errors

    return ValidationResult(
        is_valid=is_valid,
        reaches_goal=reaches_goal,
        path_length=path_length,
        final_position=position,
        efficiency=efficiency,
        constraints_satisfied=constraints_satisfied,
        path=path,
        errors=errors,
    )


def validate_maze_solution(maze: MazeRecord, moves: Sequence[str]) -> ValidationResult:
    """Validate moves against a stored maze record, constraint included."""
    return validate_solution(
        maze.grid,
        maze.start,
        maze.goal,
        maze.shortest_path,
        moves,
        maze.constraint,
    )
