"""Command-line interface for the Beans puzzle generator."""

import argparse
import json
import logging
import os
import sys

from .generator import PuzzleGenerator
from .benchmark import GenerationBenchmark
from .benchmark.visualizer import Visualizer
from .core.board import PuzzleBoard
from .core.validator import validate_placement


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Beans Puzzle Generator & Validator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate 5 puzzles on the default 8x8 board
  python -m beans.cli generate --count 5

  # Check a placement against a region map
  python -m beans.cli validate --regions "0001..." --placement "0,0 1,4 2,7 ..."

  # Measure generation speed for several sizes
  python -m beans.cli benchmark --sizes 6 7 8 --puzzles 10 --output results/
        """
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Log generation progress"
    )
    
    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    
    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Generate Beans puzzles")
    gen_parser.add_argument(
        "--count", "-n", type=int, default=5,
        help="Number of puzzles to generate (default: 5)"
    )
    gen_parser.add_argument(
        "--size", type=int, default=8,
        help="Board size (default: 8)"
    )
    gen_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Output file for puzzles (JSON format)"
    )
    gen_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )
    gen_parser.add_argument(
        "--balance", action="store_true",
        help="Even out region sizes before the uniqueness check"
    )
    
    # Validate command
    val_parser = subparsers.add_parser("validate", help="Validate a bean placement")
    val_parser.add_argument(
        "--regions", "-r", type=str, required=True,
        help="Region string (size*size chars, 0-9 then A-Z)"
    )
    val_parser.add_argument(
        "--placement", "-p", type=str, required=True,
        help='Bean positions as "row,col row,col ..."'
    )
    val_parser.add_argument(
        "--size", type=int, default=8,
        help="Board size (default: 8)"
    )
    
    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Benchmark puzzle generation")
    bench_parser.add_argument(
        "--sizes", type=int, nargs="+", default=[6, 7, 8],
        help="Board sizes to benchmark (default: 6 7 8)"
    )
    bench_parser.add_argument(
        "--puzzles", "-n", type=int, default=10,
        help="Puzzles per size (default: 10)"
    )
    bench_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    bench_parser.add_argument(
        "--seed", "-s", type=int, default=42,
        help="Random seed for reproducibility (default: 42)"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )
    
    args = parser.parse_args(argv)
    
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    
    if args.command is None:
        parser.print_help()
        sys.exit(1)
    
    if args.command == "generate":
        cmd_generate(args)
    elif args.command == "validate":
        cmd_validate(args)
    elif args.command == "benchmark":
        cmd_benchmark(args)


def parse_placement(text):
    """Parse "row,col row,col ..." into a list of (row, col) tuples."""
    positions = []
    for token in text.split():
        row, col = token.split(",")
        positions.append((int(row), int(col)))
    return positions


def cmd_generate(args):
    """Handle the generate command."""
    try:
        generator = PuzzleGenerator(size=args.size, seed=args.seed, balance_regions=args.balance)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)
    
    all_puzzles = []
    boards = []
    
    print(f"\nGenerating {args.count} {args.size}x{args.size} puzzles...")
    for i in range(1, args.count + 1):
        board, stats = generator.generate_with_stats()
        boards.append(board)
        all_puzzles.append({
            "index": i,
            "size": board.size,
            "regions": board.to_string(),
            "solution": [list(p) for p in board.solution],
            "stats": stats.to_dict()
        })
        
        print(f"\n--- Puzzle {i} ({stats.status.value}, {stats.uniqueness_attempts} partitions, "
              f"{stats.time_seconds:.3f}s) ---")
        print(board)
    
    if args.output:
        with open(args.output, "w") as f:
            json.dump(all_puzzles, f, indent=2)
        print(f"\nAll puzzles saved to {args.output}")
    else:
        base_dir = os.path.join("puzzles", f"{args.size}x{args.size}")
        PuzzleGenerator.save_to_folder(boards, base_dir, prefix="puzzle")
        print(f"\nPuzzles saved individually in the '{base_dir}/' directory")
    
    print(f"\nTotal puzzles generated: {len(all_puzzles)}")


def cmd_validate(args):
    """Handle the validate command."""
    try:
        board = PuzzleBoard.from_string(args.regions, size=args.size)
        placement = parse_placement(args.placement)
        result = validate_placement(placement, board.regions, board.size)
    except ValueError as e:
        print(f"Error parsing input: {e}")
        sys.exit(1)
    
    print(board)
    print()
    
    if result.valid:
        print("✓ Placement is correct")
        return
    
    print(f"✗ Found {len(result.violations)} violation(s):")
    for violation in result.violations:
        print(f"  - {violation}")
    sys.exit(2)


def cmd_benchmark(args):
    """Handle the benchmark command."""
    print("=" * 60)
    print("BEANS GENERATION BENCHMARK")
    print("=" * 60)
    print(f"Sizes: {args.sizes}")
    print(f"Puzzles per size: {args.puzzles}")
    print(f"Output directory: {args.output}")
    print("=" * 60)
    
    try:
        benchmark = GenerationBenchmark(
            sizes=args.sizes,
            puzzles_per_size=args.puzzles,
            seed=args.seed
        )
        results = benchmark.run()
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)
    
    summary = benchmark.get_summary()
    
    print("\n" + "=" * 60)
    print("RESULTS SUMMARY")
    print("=" * 60)
    for size, stats in summary["results_by_size"].items():
        print(f"\n{size}x{size}:")
        print(f"  Unique: {stats['unique_rate']:.1f}% ({stats['total_tested'] - stats['degraded']}/{stats['total_tested']})")
        print(f"  Avg Time: {stats['avg_time_seconds']:.4f}s")
        print(f"  Avg Partitions: {stats['avg_uniqueness_attempts']:.1f}")
    
    benchmark.save_results(args.output)
    print(f"\nResults and puzzles saved to {args.output}")
    
    if not args.no_charts:
        print("\nGenerating charts...")
        visualizer = Visualizer(results, args.output)
        charts = visualizer.generate_all()
        print(f"Charts saved to {args.output}/")
        for chart in charts:
            print(f"  - {os.path.basename(chart)}")
    
    print("\n" + "=" * 60)
    print("Benchmark complete!")


if __name__ == "__main__":
    main()
