"""
Generate an LMIQ test set.

Usage:
    python -m lmiq.generate --count 10 --output test-sets/test-set.json
    python -m lmiq.generate --difficulties easy medium --mode spine-first --seed 7
"""

import argparse
import random
import sys
from pathlib import Path
from typing import List, Tuple

from .maze import DIFFICULTIES, GenerationFailure, GenerationOptions, TestSet, create_maze
from .maze.generator import DEFAULT_MAX_ATTEMPTS


def build_test_set(
    name: str,
    count: int,
    difficulties,
    options: GenerationOptions,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    seed=None,
    verbose: bool = False,
) -> Tuple[TestSet, List[str]]:
    """
    Generate ``count`` mazes per difficulty.

    Each maze gets its own master seed drawn from ``seed``; the record keeps
    the seed of the attempt that produced its grid. A maze that runs out of
    attempts is skipped and the rest of the set is still built.

    Returns:
        (test_set, failures) where failures describes each skipped maze
    """
    test_set = TestSet(name=name)
    failures: List[str] = []
    master = random.Random(seed)

    for difficulty in difficulties:
        if verbose:
            print(f"\nGenerating {count} {difficulty} mazes...")
        for i in range(count):
            maze_seed = master.getrandbits(32)
            try:
                maze = create_maze(difficulty, max_attempts=max_attempts, options=options, seed=maze_seed)
            except GenerationFailure as e:
                failures.append(f"{difficulty} #{i + 1}: {e.reason}")
                if verbose:
                    print(f"  [{i + 1}/{count}] Failed to generate valid maze (max attempts reached)")
                continue
            test_set.add(maze)
            if verbose:
                print(
                    f"  [{i + 1}/{count}] {maze.width}x{maze.height} "
                    f"shortest path {maze.shortest_path} ({maze.attempts} attempts)"
                )

    return test_set, failures


def main():
    parser = argparse.ArgumentParser(description="Generate an LMIQ maze test set")
    parser.add_argument("--name", default="LMIQ Test Set", help="Test set name")
    parser.add_argument("--count", "-n", type=int, default=10, help="Mazes per difficulty")
    parser.add_argument(
        "--difficulties",
        nargs="+",
        choices=DIFFICULTIES,
        default=list(DIFFICULTIES),
        help="Difficulties to generate",
    )
    parser.add_argument("--mode", choices=["dfs", "spine-first"], default="dfs", help="Generation algorithm")
    parser.add_argument(
        "--fill-remaining",
        action="store_true",
        help="Spine-first only: carve every cell left untouched by the spine and branches",
    )
    parser.add_argument("--min-shortest-path", type=int, help="Reject mazes with a shorter solution")
    parser.add_argument("--max-attempts", type=int, default=DEFAULT_MAX_ATTEMPTS, help="Attempts per maze")
    parser.add_argument("--seed", type=int, help="Master seed for reproducible test sets")
    parser.add_argument("--output", "-o", default="test-sets/test-set.json", help="Output JSON path")
    parser.add_argument("--verbose", "-v", action="store_true", help="Print progress to stdout")

    args = parser.parse_args()

    output_path = Path(args.output)
    if output_path.exists():
        print(f"Error: file already exists: {output_path}", file=sys.stderr)
        sys.exit(1)

    if args.count < 1:
        print("Error: --count must be at least 1", file=sys.stderr)
        sys.exit(1)

    try:
        options = GenerationOptions(
            mode=args.mode,
            fill_remaining=True if args.fill_remaining else None,
            min_shortest_path=args.min_shortest_path,
        )
        test_set, failures = build_test_set(
            args.name,
            args.count,
            args.difficulties,
            options,
            max_attempts=args.max_attempts,
            seed=args.seed,
            verbose=args.verbose,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    for failure in failures:
        print(f"Warning: skipped {failure}", file=sys.stderr)

    if test_set.summary.total_mazes == 0:
        print("Error: generation failed: no maze could be generated", file=sys.stderr)
        sys.exit(1)

    test_set.save(output_path)

    print(f"Saved {test_set.summary.total_mazes} mazes to {output_path}")
    for difficulty, n in test_set.summary.by_difficulty.items():
        if n:
            print(f"  {difficulty}: {n}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
