from typing import List, Optional, Sequence

from ...maze.dataset import MazeRecord
from ...maze.render import render_adjacency, render_ascii


FORMAT_TITLES = {
    "ascii": "ASCII map",
    "adjacency": "Open moves per cell",
}


def format_maze(maze: MazeRecord, prompt_format: str) -> str:
    """Render the maze in one of the supported text formats."""
    if prompt_format == "ascii":
        return render_ascii(maze.grid, maze.start, maze.goal)
    if prompt_format == "adjacency":
        return render_adjacency(maze.grid)
    raise ValueError(f"Unknown prompt format: {prompt_format}")


def format_requirements(maze: MazeRecord) -> Optional[str]:
    """Describe the constraint and any special instructions, if present."""
    lines = []
    if maze.constraint is not None:
        lines.append(maze.constraint.describe())
    if maze.special_instructions:
        lines.append(maze.special_instructions)
    if not lines:
        return None
    return "\n".join(lines)


def build_maze_prompt(maze: MazeRecord, formats: Sequence[str] = ("ascii",)) -> str:
    """
    Build the user prompt for one maze.

    Args:
        maze: The maze to solve
        formats: Text formats to include, in order

    Returns:
        Formatted prompt string
    """
    if not formats:
        raise ValueError("At least one prompt format is required")

    lines: List[str] = []

    lines.append(f"## Maze ({maze.width}x{maze.height})")
    lines.append(f"- Start: ({maze.start.x}, {maze.start.y})")
    lines.append(f"- Goal: ({maze.goal.x}, {maze.goal.y})")
    lines.append("")

    requirements = format_requirements(maze)
    if requirements:
        lines.append("### Requirements")
        lines.append(requirements)
        lines.append("")

    for prompt_format in formats:
        lines.append(f"### {FORMAT_TITLES.get(prompt_format, prompt_format)}")
        lines.append("```")
        lines.append(format_maze(maze, prompt_format))
        lines.append("```")
        lines.append("")

    lines.append("Respond with <reasoning> and <moves> tags.")

    return "\n".join(lines)
