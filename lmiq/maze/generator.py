"""Maze generation entry points and the caller-side retry loop."""

import random
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from .dataset import MazeRecord
from .dfs import generate_dfs_maze
from .difficulty import get_profile
from .errors import GenerationFailure
from .grid import Grid
from .models import GenerationMode, Position, SpineFirstConfig
from .solver import path_to_playthrough, shortest_path
from .spine_first import generate_spine_first_maze


DEFAULT_MAX_ATTEMPTS = 2500


class GenerationOptions(BaseModel):
    """Per-run overrides on top of a difficulty profile."""
    mode: GenerationMode = "dfs"
    fill_remaining: Optional[bool] = None
    min_shortest_path: Optional[int] = Field(default=None, ge=1)


def generate_maze(
    width: int,
    height: int,
    start: Position,
    goal: Position,
    mode: GenerationMode = "dfs",
    spine: Optional[SpineFirstConfig] = None,
    rng: Optional[random.Random] = None,
) -> Grid:
    """
    Run one generation attempt.

    Deterministic for a seeded ``rng``. DFS never fails; spine-first raises
    ``GenerationFailure`` and leaves retrying to the caller.
    """
    if mode == "dfs":
        return generate_dfs_maze(width, height, start, rng)
    if mode == "spine-first":
        return generate_spine_first_maze(width, height, start, goal, spine or SpineFirstConfig(), rng)
    raise ValueError(f"Unknown generation mode: {mode}")


def create_maze(
    difficulty: str,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    options: Optional[GenerationOptions] = None,
    seed: Optional[int] = None,
    profiles_path: Optional[str | Path] = None,
) -> MazeRecord:
    """
    Generate a maze for a difficulty, retrying with fresh randomness.

    Each attempt draws its own seed from a master stream, so the same
    ``seed`` always yields the same maze and a failed attempt never leaks
    state into the next one.

    Args:
        difficulty: Difficulty name
        max_attempts: Upper bound on generation attempts
        options: Mode and overrides (DFS by default)
        seed: Master seed for reproducible output
        profiles_path: Alternative difficulty profile YAML

    Returns:
        The maze record, with its shortest path cached

    Raises:
        GenerationFailure: If no attempt produced an acceptable maze
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    options = options or GenerationOptions()
    profile = get_profile(difficulty, profiles_path)
    spine = profile.spine
    if options.fill_remaining is not None:
        spine = spine.model_copy(update={"fill_remaining": options.fill_remaining})
    min_shortest = options.min_shortest_path or profile.min_shortest_path

    start, goal = profile.start, profile.goal
    master = random.Random(seed)
    last_failure: Optional[GenerationFailure] = None

    for attempt in range(1, max_attempts + 1):
        attempt_seed = master.getrandbits(64)
        try:
            grid = generate_maze(
                profile.width,
                profile.height,
                start,
                goal,
                mode=options.mode,
                spine=spine,
                rng=random.Random(attempt_seed),
            )
        except GenerationFailure as exc:
            last_failure = exc
            continue

        path = shortest_path(grid, start, goal)
        if path is None:
            raise RuntimeError(
                f"Generated {options.mode} maze has no path from {tuple(start)} to {tuple(goal)}"
            )

        length = len(path) - 1
        if min_shortest is not None and length < min_shortest:
            last_failure = GenerationFailure(f"shortest path {length} below minimum {min_shortest}")
            continue

        return MazeRecord(
            difficulty=difficulty,
            mode=options.mode,
            width=profile.width,
            height=profile.height,
            grid=grid,
            start=start,
            goal=goal,
            shortest_path=length,
            shortest_path_playthrough=path_to_playthrough(path),
            seed=attempt_seed,
            attempts=attempt,
        )

    reason = last_failure.reason if last_failure else "unknown"
    raise GenerationFailure(
        f"no valid {difficulty} maze after {max_attempts} attempts (last: {reason})"
    )
