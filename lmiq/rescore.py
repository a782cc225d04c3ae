"""
Re-score stored evaluations by re-validating their parsed moves.

Usage:
    python -m lmiq.rescore results/run1.json --test-set test-sets/test-set.json
    python -m lmiq.rescore results/run1.json --test-set test-sets/test-set.json --maze-id <id>
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Tuple

from .environment import BenchmarkResult, MazeBench
from .maze import TestSet
from .verifiers import classify_validation, validate_maze_solution


def rescore_result(
    result: BenchmarkResult,
    test_set: TestSet,
    maze_id: Optional[str] = None,
    verbose: bool = False,
) -> Tuple[int, int]:
    """
    Re-validate every evaluation that has parsed moves.

    Outcome, efficiency, final position and moves executed are updated in
    place; evaluations without moves (parse errors, API errors) are left
    alone. Summaries are recomputed afterwards.

    Returns:
        (updated, unchanged) counts
    """
    updated = 0
    unchanged = 0

    for evaluation in result.evaluations:
        if maze_id is not None and evaluation.maze_id != maze_id:
            continue

        if not evaluation.parsed_moves:
            unchanged += 1
            if verbose:
                print(f"  {evaluation.agent_name[:30]:<30} no moves - skipping")
            continue

        maze = test_set.find_maze(evaluation.maze_id)
        if maze is None:
            raise ValueError(f"Maze {evaluation.maze_id} not found in test set {test_set.name}")

        validation = validate_maze_solution(maze, evaluation.parsed_moves)
        new_outcome = classify_validation(validation)
        old_outcome = evaluation.outcome

        evaluation.validation = validation
        evaluation.moves_executed = validation.path_length
        evaluation.final_position = validation.final_position
        evaluation.efficiency = validation.efficiency
        evaluation.shortest_path = maze.shortest_path

        if new_outcome != old_outcome:
            evaluation.outcome = new_outcome
            updated += 1
            if verbose:
                print(f"  {evaluation.agent_name[:30]:<30} {old_outcome:<20} -> {new_outcome}")
        else:
            unchanged += 1
            if verbose:
                print(f"  {evaluation.agent_name[:30]:<30} {old_outcome:<20} (unchanged)")

    bench = MazeBench(config=result.config, test_set=test_set, evaluations=result.evaluations)
    result.summaries = bench.summarize()

    return updated, unchanged


def main():
    parser = argparse.ArgumentParser(description="Re-score LMIQ benchmark results")
    parser.add_argument("results", help="Path to a benchmark result JSON file")
    parser.add_argument("--test-set", "-t", required=True, help="Test set JSON the results were run on")
    parser.add_argument("--maze-id", help="Only re-score evaluations of this maze")
    parser.add_argument("--output", "-o", help="Where to write the re-scored results (default: in place)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Print each evaluation")

    args = parser.parse_args()

    try:
        with open(args.results) as f:
            result = BenchmarkResult(**json.load(f))
        test_set = TestSet.load(args.test_set)
    except Exception as e:
        print(f"Error loading inputs: {e}", file=sys.stderr)
        sys.exit(1)

    if args.maze_id and test_set.find_maze(args.maze_id) is None:
        print(f"Error: maze {args.maze_id} not found in {args.test_set}", file=sys.stderr)
        sys.exit(1)

    try:
        updated, unchanged = rescore_result(result, test_set, args.maze_id, verbose=args.verbose)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    output_path = Path(args.output or args.results)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w') as f:
        json.dump(result.model_dump(mode="json"), f, indent=2, default=str)

    print(f"Updated: {updated}")
    print(f"Unchanged: {unchanged}")
    print(f"Saved to: {output_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
