import math
import os

import pytest

from lmiq.maze import (
    DIFFICULTIES,
    GenerationFailure,
    GenerationOptions,
    Position,
    TestSet,
    create_maze,
    get_profile,
    load_profiles,
    path_to_moves,
    shortest_path_length,
)
from lmiq.verifiers import validate_maze_solution


class TestDifficultyProfiles:
    """Test cases for the bundled difficulty profiles."""

    def test_every_difficulty_has_a_profile(self):
        profiles = load_profiles()
        assert set(profiles) == set(DIFFICULTIES)

    def test_sizes_grow_with_difficulty(self):
        profiles = load_profiles()
        sizes = [profiles[d].width * profiles[d].height for d in DIFFICULTIES]
        assert sizes == sorted(sizes)
        assert (profiles["simple"].width, profiles["simple"].height) == (5, 5)

    def test_start_and_goal_are_opposite_corners(self):
        profile = get_profile("medium")
        assert profile.start == Position(0, 0)
        assert profile.goal == Position(profile.width - 1, profile.height - 1)

    def test_unknown_difficulty(self):
        with pytest.raises(ValueError):
            get_profile("impossible")

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_profiles(tmp_path / "missing.yaml")

    def test_custom_file(self, tmp_path):
        path = tmp_path / "profiles.yaml"
        path.write_text("simple:\n  width: 3\n  height: 4\n  min_shortest_path: 5\n")
        profile = get_profile("simple", path)
        assert (profile.width, profile.height) == (3, 4)
        assert profile.min_shortest_path == 5

    def test_edited_file_is_reloaded(self, tmp_path):
        path = tmp_path / "profiles.yaml"
        path.write_text("simple:\n  width: 3\n  height: 3\n")
        assert get_profile("simple", path).width == 3

        path.write_text("simple:\n  width: 6\n  height: 3\n")
        stat = path.stat()
        os.utime(path, ns=(stat.st_atime_ns, stat.st_mtime_ns + 1_000_000_000))
        assert get_profile("simple", path).width == 6

    def test_custom_file_rejects_unknown_names(self, tmp_path):
        path = tmp_path / "profiles.yaml"
        path.write_text("extreme:\n  width: 3\n  height: 3\n")
        with pytest.raises(ValueError):
            load_profiles(path)


class TestCreateMaze:
    """Test cases for the retrying maze factory."""

    def test_dfs_record(self):
        maze = create_maze("simple", seed=7)
        assert maze.difficulty == "simple"
        assert maze.mode == "dfs"
        assert maze.grid.passage_count() == 24
        assert maze.start == Position(0, 0)
        assert maze.goal == Position(4, 4)
        assert maze.shortest_path == shortest_path_length(maze.grid, maze.start, maze.goal)
        assert len(maze.shortest_path_playthrough) == maze.shortest_path
        assert maze.shortest_path_playthrough[-1].position == maze.goal

    def test_playthrough_solves_maze(self):
        """The cached optimal playthrough validates with efficiency 1.0."""
        maze = create_maze("easy", seed=3)
        moves = [step.move for step in maze.shortest_path_playthrough]
        result = validate_maze_solution(maze, moves)
        assert result.reaches_goal
        assert result.efficiency == 1.0

    def test_seed_reproducible(self):
        a = create_maze("easy", seed=11)
        b = create_maze("easy", seed=11)
        assert a.grid == b.grid
        assert a.seed == b.seed
        assert a.id != b.id

    def test_different_seeds_differ(self):
        assert create_maze("easy", seed=1).grid != create_maze("easy", seed=2).grid

    def test_spine_first_record(self):
        options = GenerationOptions(mode="spine-first")
        maze = create_maze("simple", options=options, seed=5)
        profile = get_profile("simple")
        assert maze.mode == "spine-first"
        assert maze.shortest_path >= math.ceil(
            profile.start.manhattan(profile.goal) * profile.spine.tortuosity
        )
        assert maze.attempts >= 1

    def test_spine_first_fill_remaining(self):
        options = GenerationOptions(mode="spine-first", fill_remaining=True)
        maze = create_maze("simple", options=options, seed=5)
        assert maze.grid.passage_count() == 24

    def test_min_shortest_path_enforced(self):
        options = GenerationOptions(min_shortest_path=12)
        maze = create_maze("simple", options=options, seed=2)
        assert maze.shortest_path >= 12

    def test_unreachable_minimum_fails(self):
        """A 5x5 tree cannot have a 30 move solution."""
        options = GenerationOptions(min_shortest_path=30)
        with pytest.raises(GenerationFailure) as exc:
            create_maze("simple", max_attempts=5, options=options, seed=1)
        assert "after 5 attempts" in exc.value.reason

    def test_max_attempts_must_be_positive(self):
        with pytest.raises(ValueError):
            create_maze("simple", max_attempts=0)


class TestTestSet:
    """Test cases for test-set files."""

    def test_add_updates_summary(self, small_test_set):
        assert small_test_set.summary.total_mazes == 2
        assert small_test_set.summary.by_difficulty["simple"] == 2
        assert small_test_set.summary.by_difficulty["horror"] == 0

    def test_iter_mazes_filter(self, small_test_set):
        small_test_set.add(create_maze("easy", seed=1))
        assert [m.difficulty for m in small_test_set.iter_mazes()] == ["simple", "simple", "easy"]
        assert [m.difficulty for m in small_test_set.iter_mazes(["easy"])] == ["easy"]

    def test_find_maze(self, small_test_set):
        maze = small_test_set.mazes["simple"][1]
        assert small_test_set.find_maze(maze.id) is maze
        assert small_test_set.find_maze("nope") is None

    def test_save_and_load(self, small_test_set, tmp_path):
        path = tmp_path / "sets" / "test-set.json"
        small_test_set.save(path)
        loaded = TestSet.load(path)
        assert loaded.id == small_test_set.id
        original = small_test_set.mazes["simple"][0]
        restored = loaded.find_maze(original.id)
        assert restored.grid == original.grid
        assert restored.goal == original.goal
        assert path_to_moves([original.start, *[s.position for s in original.shortest_path_playthrough]]) == [
            s.move for s in restored.shortest_path_playthrough
        ]

    def test_load_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            TestSet.load(tmp_path / "missing.json")
