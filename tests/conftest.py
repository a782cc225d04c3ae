from unittest.mock import Mock

import pytest

from lmiq.maze import Grid, Position, TestSet, create_maze


def create_mock_response(
    content: str = "Test response",
    model: str = "gpt-5-nano",
    finish_reason: str = "stop",
) -> Mock:
    """
    Create a mock response matching litellm's ModelResponse structure.

    ModelResponse(
        model='gpt-5-mini-2025-08-07',
        object='chat.completion',
        choices=[Choices(finish_reason='stop', index=0, message=Message(content='...', role='assistant'))],
        usage=Usage(completion_tokens=18, prompt_tokens=8, total_tokens=26)
    )
    """
    return Mock(
        id='chatcmpl-test123',
        created=1766865888,
        model=model,
        object='chat.completion',
        choices=[
            Mock(
                finish_reason=finish_reason,
                index=0,
                message=Mock(content=content, role='assistant'),
            )
        ],
        usage=Mock(completion_tokens=10, prompt_tokens=5, total_tokens=15),
    )


def open_path(grid: Grid, cells) -> Grid:
    """Carve a corridor through consecutive positions."""
    for a, b in zip(cells, cells[1:]):
        grid.remove_wall_between(Position(*a), Position(*b))
    return grid


@pytest.fixture
def mock_response():
    return create_mock_response


@pytest.fixture
def corridor_grid():
    """
    3x3 grid with a single route around the edge:

    (0,0) -> (0,1) -> (0,2) -> (1,2) -> (2,2)
    plus a dead end (1,0) -> (2,0) -> (2,1) and (1,1) hanging off (0,1).
    """
    grid = Grid.create(3, 3)
    open_path(grid, [(0, 0), (0, 1), (0, 2), (1, 2), (2, 2)])
    open_path(grid, [(0, 0), (1, 0), (2, 0), (2, 1)])
    open_path(grid, [(0, 1), (1, 1)])
    return grid


@pytest.fixture
def small_test_set():
    """Two seeded simple DFS mazes."""
    test_set = TestSet(name="Unit Test Set")
    for seed in (1, 2):
        test_set.add(create_maze("simple", seed=seed))
    return test_set
