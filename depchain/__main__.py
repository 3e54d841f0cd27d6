"""
depchain
========

Command line for dependency-graph analysis.
"""

import argparse
import logging
import sys

from . import config
from .benchmark.runner import BenchmarkRunner
from .domain.graph import GraphError
from .examples.simple_project import create_sample_project
from .services.analysis import analyze_graph
from .utils.dataset_generator import DatasetGenerator
from .utils.loader import GraphLoadError, load_graph_file


def build_parser():
    parser = argparse.ArgumentParser(
        prog="depchain", description="Task dependency graph analysis"
    )
    parser.add_argument(
        "--example", action="store_true", help="Run the example project"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command")

    analyze = subparsers.add_parser("analyze", help="Analyze a JSON graph file")
    analyze.add_argument("file", help="Path to the graph JSON file")
    analyze.add_argument(
        "--source",
        type=int,
        default=None,
        help="Source vertex (defaults to the file's 'source', else 0)",
    )

    generate = subparsers.add_parser("generate", help="Generate benchmark datasets")
    generate.add_argument("directory", nargs="?", default=config.DATA_DIR)
    generate.add_argument("--seed", type=int, default=config.SEED)

    benchmark = subparsers.add_parser("benchmark", help="Benchmark a dataset directory")
    benchmark.add_argument("directory", nargs="?", default=config.DATA_DIR)
    benchmark.add_argument("--output", default=config.BENCHMARK_OUTPUT)
    benchmark.add_argument("--repeats", type=int, default=config.BENCHMARK_REPEATS)

    return parser


def run_analyze(args):
    try:
        data = load_graph_file(args.file)
    except GraphLoadError as e:
        print(f"Error loading graph file: {e}", file=sys.stderr)
        return 1

    source = data.source if args.source is None else args.source
    print("=" * 60)
    print("Dependency Graph Analysis")
    print("=" * 60)
    print(f"Loading graph from: {args.file}")
    try:
        analysis = analyze_graph(data.graph, source, data.weight_model)
    except GraphError as e:
        print(f"Error during analysis: {e}", file=sys.stderr)
        return 1

    print(analysis.report())
    print("=" * 60)
    print("Analysis complete!")
    return 0


def run_generate(args):
    print("Generating datasets...")
    DatasetGenerator(args.seed).generate_standard_datasets(args.directory)
    print("All datasets generated successfully!")
    return 0


def run_benchmark(args):
    print("=" * 80)
    print("DEPENDENCY GRAPH BENCHMARK RUNNER")
    print("=" * 80)
    print(f"Data Directory: {args.directory}")
    print(f"Output File: {args.output}")
    print()

    runner = BenchmarkRunner()
    results = runner.run_all_benchmarks(args.directory, repeats=args.repeats)
    if not results:
        print("No results generated. Exiting.", file=sys.stderr)
        return 1

    runner.write_results_to_csv(results, args.output)
    print()
    runner.print_summary_statistics(results)
    return 0


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.example:
        print("Running example project...")
        create_sample_project()
        return 0
    if args.command == "analyze":
        return run_analyze(args)
    if args.command == "generate":
        return run_generate(args)
    if args.command == "benchmark":
        return run_benchmark(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
