"""Maze generation engine for LMIQ."""

from .models import (
    Move,
    Difficulty,
    GenerationMode,
    RequirementType,
    MOVES,
    DIFFICULTIES,
    MOVE_DELTAS,
    Position,
    PathStep,
    MazeConstraint,
    SpineFirstConfig,
)
from .grid import Grid, Cell, Walls, move_between
from .errors import GenerationFailure
from .dfs import generate_dfs_maze
from .spine_first import SpineFirstGenerator, generate_spine_first_maze
from .solver import shortest_path, shortest_path_length, reachable_from, path_to_moves, path_to_playthrough
from .difficulty import DifficultyProfile, load_profiles, get_profile
from .dataset import MazeRecord, TestSet
from .generator import GenerationOptions, generate_maze, create_maze
from .render import render_ascii, render_adjacency

__all__ = [
    # Models
    "Move",
    "Difficulty",
    "GenerationMode",
    "RequirementType",
    "MOVES",
    "DIFFICULTIES",
    "MOVE_DELTAS",
    "Position",
    "PathStep",
    "MazeConstraint",
    "SpineFirstConfig",
    # Grid
    "Grid",
    "Cell",
    "Walls",
    "move_between",
    # Generation
    "GenerationFailure",
    "generate_dfs_maze",
    "SpineFirstGenerator",
    "generate_spine_first_maze",
    "GenerationOptions",
    "generate_maze",
    "create_maze",
    # Solver
    "shortest_path",
    "shortest_path_length",
    "reachable_from",
    "path_to_moves",
    "path_to_playthrough",
    # Profiles and records
    "DifficultyProfile",
    "load_profiles",
    "get_profile",
    "MazeRecord",
    "TestSet",
    # Rendering
    "render_ascii",
    "render_adjacency",
]
