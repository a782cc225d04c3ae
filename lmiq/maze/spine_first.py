"""
Spine-first maze generation.

Builds a guaranteed main path (the spine) from start to goal first, then
hangs controlled dead-end branches off it. Solving such a maze is mostly a
matter of telling the spine apart from dead ends, rather than exploring the
whole grid.

Phase 1: biased random walk with backtracking builds the spine
Phase 2: depth-limited dead-end branches (and sub-branches) off the spine
Phase 3: optional fill of any untouched area with DFS passages
"""

import math
import random
from typing import List, Optional, Set

from .errors import GenerationFailure
from .grid import Grid, move_between
from .models import Position, SpineFirstConfig


TURN_BONUS = 10.0
GOAL_PULL = 0.1  # per unit of Manhattan distance to the goal
JITTER = 5.0
ITERATION_FACTOR = 10  # iteration cap = ITERATION_FACTOR * width * height

MAX_SUB_BRANCHES = 3
SUB_BRANCH_MIN_LENGTH = 5
SUB_BRANCH_MAX_LENGTH = 25


class SpineFirstGenerator:
    """
    One spine-first generation attempt.

    Holds the grid being carved plus the per-cell generation state
    (``visited`` and ``spine_cells``). An instance is single use: call
    ``generate()`` once and discard it.
    """

    def __init__(
        self,
        width: int,
        height: int,
        start: Position,
        goal: Position,
        config: SpineFirstConfig,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.grid = Grid.create(width, height)
        if not self.grid.in_bounds(start) or not self.grid.in_bounds(goal):
            raise ValueError(f"Start {tuple(start)} and goal {tuple(goal)} must lie on the grid")
        if start == goal:
            raise ValueError("Start and goal must differ")

        self.start = start
        self.goal = goal
        self.config = config
        self.rng = rng or random.Random()

        self.visited: Set[Position] = set()
        self.spine_cells: Set[Position] = set()
        self.spine: List[Position] = []
        self.turn_count = 0

    def generate(self) -> Grid:
        """
        Run all phases.

        Raises:
            GenerationFailure: If no acceptable spine could be built
        """
        self.build_spine()
        self.add_branches()
        if self.config.fill_remaining:
            self.fill_remaining()
        return self.grid

    # ------------------------------------------------------------------
    # Phase 1

    def build_spine(self) -> List[Position]:
        """
        Walk from start to goal, preferring turns while ``min_turns`` is unmet,
        pulled weakly toward the goal, with random jitter dominating.

        Spine walls are only knocked down once the whole walk is accepted, so
        cells abandoned by backtracking keep all their walls.
        """
        config = self.config
        min_length = math.ceil(self.start.manhattan(self.goal) * config.tortuosity)
        min_turns = config.min_turns or 0
        max_iterations = self.grid.width * self.grid.height * ITERATION_FACTOR

        spine = [self.start]
        headings: List[Optional[str]] = [None]
        turned: List[bool] = [False]
        turn_count = 0
        self._mark_spine(self.start)

        iterations = 0
        while spine[-1] != self.goal:
            iterations += 1
            if iterations > max_iterations:
                raise GenerationFailure("iteration cap hit")

            current = spine[-1]
            candidates = self._unvisited_neighbors(current)

            if not candidates:
                if len(spine) <= 1:
                    raise GenerationFailure("no spine found")
                self.visited.discard(current)
                self.spine_cells.discard(current)
                spine.pop()
                headings.pop()
                if turned.pop():
                    turn_count -= 1
                continue

            heading = headings[-1]
            scored = []
            for neighbor in candidates:
                direction = move_between(current, neighbor)
                score = 0.0
                if heading is not None and direction != heading and turn_count < min_turns:
                    score += TURN_BONUS
                score -= neighbor.manhattan(self.goal) * GOAL_PULL
                score += self.rng.random() * JITTER
                scored.append((score, neighbor, direction))

            scored.sort(key=lambda item: item[0], reverse=True)
            _, chosen, direction = scored[0]

            is_turn = heading is not None and direction != heading
            if is_turn:
                turn_count += 1
            spine.append(chosen)
            headings.append(direction)
            turned.append(is_turn)
            self._mark_spine(chosen)

        if len(spine) - 1 < min_length:
            raise GenerationFailure("spine too short")
        if min_turns > 0 and turn_count < min_turns:
            raise GenerationFailure("insufficient turns")

        for a, b in zip(spine, spine[1:]):
            self.grid.remove_wall_between(a, b)

        self.spine = spine
        self.turn_count = turn_count
        return spine

    # ------------------------------------------------------------------
    # Phase 2

    def add_branches(self) -> None:
        """Sprout dead ends from interior spine cells, respecting spacing."""
        config = self.config
        spacing = config.min_branch_spacing
        last_branch_index = -spacing

        # Endpoints never branch
        for i in range(1, len(self.spine) - 1):
            if i - last_branch_index < spacing:
                continue
            if self.rng.random() > config.branch_chance:
                continue

            spine_cell = self.spine[i]
            starts = self._unvisited_neighbors(spine_cell)
            if not starts:
                continue

            branch_start = self.rng.choice(starts)
            self._carve(spine_cell, branch_start)
            length = self.rng.randint(config.min_branch_length, config.max_branch_length)
            self._grow_branch(branch_start, length - 1)
            last_branch_index = i

    def _grow_branch(self, start: Position, remaining: int) -> None:
        """Extend a branch, then hang up to three linear sub-branches off it."""
        if remaining <= 0:
            return

        branch = [start]
        branch.extend(self._walk(start, remaining))

        chance = self.config.sub_branch_chance
        if chance <= 0 or len(branch) <= 1:
            return

        max_subs = self.rng.randint(0, MAX_SUB_BRANCHES)
        added = 0
        # Never from the cell that touches the spine
        eligible = branch[1:]
        self.rng.shuffle(eligible)
        for cell in eligible:
            if added >= max_subs:
                break
            if self.rng.random() > chance:
                continue
            options = self._unvisited_neighbors(cell)
            if not options:
                continue

            sub_start = self.rng.choice(options)
            self._carve(cell, sub_start)
            length = self.rng.randint(SUB_BRANCH_MIN_LENGTH, SUB_BRANCH_MAX_LENGTH)
            # Sub-branches are plain walks: no further branching
            self._walk(sub_start, length - 1)
            added += 1

    def _walk(self, start: Position, steps: int) -> List[Position]:
        """Random walk of up to ``steps`` cells into fresh territory."""
        carved = []
        current = start
        for _ in range(steps):
            options = self._unvisited_neighbors(current)
            if not options:
                break
            nxt = self.rng.choice(options)
            self._carve(current, nxt)
            carved.append(nxt)
            current = nxt
        return carved

    # ------------------------------------------------------------------
    # Phase 3

    def fill_remaining(self) -> None:
        """Give every untouched cell a passage into the maze, adding only dead ends."""
        grid = self.grid
        for pos in grid.positions():
            if pos in self.visited:
                continue
            anchors = [n for n in grid.neighbors(pos) if n in self.visited]
            if anchors:
                self._carve(self.rng.choice(anchors), pos)
                self._fill_area(pos)

        # Pockets the first pass could not reach: carve them on their own,
        # then join each to the maze through exactly one wall.
        for pos in grid.positions():
            if pos in self.visited:
                continue
            self.visited.add(pos)
            region = set(self._fill_area(pos))
            for cell in region:
                anchors = [n for n in grid.neighbors(cell) if n in self.visited and n not in region]
                if anchors:
                    grid.remove_wall_between(self.rng.choice(anchors), cell)
                    break

    def _fill_area(self, start: Position) -> List[Position]:
        """Depth-first carve of the unvisited area around ``start``."""
        region = [start]
        stack = [start]
        while stack:
            current = stack[-1]
            options = [n for n in self.grid.neighbors(current) if n not in self.visited]
            if not options:
                stack.pop()
                continue
            nxt = self.rng.choice(options)
            self._carve(current, nxt)
            region.append(nxt)
            stack.append(nxt)
        return region

    # ------------------------------------------------------------------

    def _mark_spine(self, pos: Position) -> None:
        self.visited.add(pos)
        self.spine_cells.add(pos)

    def _unvisited_neighbors(self, pos: Position) -> List[Position]:
        return [
            n for n in self.grid.neighbors(pos)
            if n not in self.visited and n not in self.spine_cells
        ]

    def _carve(self, frm: Position, to: Position) -> None:
        self.grid.remove_wall_between(frm, to)
        self.visited.add(to)


def generate_spine_first_maze(
    width: int,
    height: int,
    start: Position,
    goal: Position,
    config: SpineFirstConfig,
    rng: Optional[random.Random] = None,
) -> Grid:
    """
    Generate a maze with the spine-first algorithm (one attempt, no retries).

    Args:
        width: Grid width
        height: Grid height
        start: Start position
        goal: Goal position
        config: Spine-first configuration
        rng: Random source

    Returns:
        The carved grid

    Raises:
        GenerationFailure: If this attempt failed; retry with fresh randomness
    """
    return SpineFirstGenerator(width, height, start, goal, config, rng).generate()
