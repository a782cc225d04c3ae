"""
Main entry point for running LMIQ maze benchmarks.

Usage:
    python -m lmiq.main config.yaml
    python -m lmiq.main config.yaml --output results/run1.json --verbose
    python -m lmiq.main --resume results/run1.json --verbose
"""

import argparse
import sys
from datetime import datetime
from pathlib import Path

import yaml

from .environment import MazeBench, BenchmarkConfig


def load_config(config_path: str) -> BenchmarkConfig:
    """Load benchmark configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    return BenchmarkConfig(**(data or {}))


def main():
    parser = argparse.ArgumentParser(
        description="Run an LMIQ maze benchmark",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  test_set: test-sets/default.json
  difficulties: [simple, easy, medium]
  prompt_formats: [ascii]
  trials: 1
  models:
    - model: gpt-4o
      temperature: 0.7
      max_tokens: 4096
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file (not needed with --resume)"
    )
    parser.add_argument(
        "--resume",
        help="Resume from a saved result JSON file"
    )
    parser.add_argument(
        "--output", "-o",
        help="Path to save results JSON (default: results/<timestamp>.json)"
    )
    parser.add_argument(
        "--retry",
        nargs="*",
        metavar="OUTCOME",
        help="With --resume: re-run evaluations with these outcomes (default: all retryable outcomes)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print progress to stdout"
    )

    args = parser.parse_args()

    if args.resume:
        if args.verbose:
            print(f"Resuming from: {args.resume}")
        try:
            bench = MazeBench.resume(args.resume)
            if args.retry is not None:
                discarded = bench.discard_outcomes(args.retry or None)
                if args.verbose:
                    print(f"Retrying {discarded} evaluations")
            if args.verbose:
                print(f"Loaded {len(bench.evaluations)} recorded evaluations")
                print()
        except Exception as e:
            print(f"Error resuming from {args.resume}: {e}", file=sys.stderr)
            sys.exit(1)

        # Resumed runs overwrite the file they came from unless told otherwise
        output_path = Path(args.output) if args.output else Path(args.resume)

    else:
        if not args.config:
            print("Error: config file required (or use --resume)", file=sys.stderr)
            sys.exit(1)

        try:
            config = load_config(args.config)
            bench = MazeBench.create(config=config)
        except Exception as e:
            print(f"Error loading config: {e}", file=sys.stderr)
            sys.exit(1)

        if args.output:
            output_path = Path(args.output)
        else:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            output_path = Path("results") / f"benchmark_{timestamp}.json"

        if args.verbose:
            print(f"Config: {args.config}")
            print(f"Output: {output_path}")
            print()

    try:
        bench.run(verbose=args.verbose)
    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user")
        bench.end_reason = "Interrupted by user"
    except Exception as e:
        print(f"Error during benchmark: {e}", file=sys.stderr)
        bench.end_reason = f"Error: {str(e)}"

    result = bench.get_result()
    bench.save_result(output_path)

    if args.verbose:
        print()
        print(f"Results saved to: {output_path}")

    print()
    print("=== Benchmark Summary ===")
    print(f"Evaluations: {len(result.evaluations)}")
    print(f"End reason: {result.end_reason}")
    print(f"Duration: {result.duration_seconds:.2f}s")
    for summary in result.summaries.values():
        efficiency = f"{summary.mean_efficiency:.2f}" if summary.mean_efficiency is not None else "-"
        print(f"{summary.name}: {summary.success_rate:.1%} solved, mean efficiency {efficiency}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
