"""
Command-line interface for the skyline relation generator.

Provides commands for:
- Generating a relation to a file or the terminal
- Describing the shape of a relation (column stats and correlations)
- Listing the available distributions
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from .config import GeneratorConfig, OffsetMode, load_generator_config, merge_config
from .defaults import DEFAULT_MAX, SAMPLER_NAMES, get_default_config_path
from .errors import SkylineGenError
from .exporters.file_exporter import EXPORT_FORMATS, create_exporter
from .generators.result_set import LevelResultSet
from .statistics.correlations import summarize
from .statistics.distributions import DistributionFactory

# Rows echoed to the terminal when no output file is given
_MAX_ROWS_IN_TERMINAL = 20

_DEFAULT_ROWS = 10
_DEFAULT_COLUMNS = 2


def _format_row_line(current: int, total: int, tuple_id: int, levels: list[int]) -> str:
    return f"   [{current}/{total}] id={tuple_id} levels={levels}"


def _add_generation_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML config file (default: SKYLINEGEN_CONFIG if set); flags override its values",
    )
    parser.add_argument(
        "--distribution",
        type=str,
        default=None,
        help=f"Distribution: {', '.join(DistributionFactory.names())} (default: independent)",
    )
    parser.add_argument(
        "--rows",
        type=int,
        default=None,
        help=f"Number of rows (default: {_DEFAULT_ROWS})",
    )
    parser.add_argument(
        "--columns",
        type=int,
        default=None,
        help=f"Number of columns, each with --maximum-level (default: {_DEFAULT_COLUMNS})",
    )
    parser.add_argument(
        "--maximum-level",
        type=int,
        default=None,
        help=f"Highest level of every column, replacing per-column bounds from --config (default: {DEFAULT_MAX})",
    )
    parser.add_argument(
        "--max-values",
        type=str,
        default=None,
        metavar="MAX[,MAX...]",
        help="Per-column highest levels, e.g. --max-values=9,9,4 (overrides --columns)",
    )
    parser.add_argument(
        "--offset",
        type=int,
        default=None,
        help="Rows drawn and discarded before the first returned row (default: 0)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (default: SKYLINEGEN_SEED or 0)",
    )
    parser.add_argument(
        "--sampler",
        type=str,
        choices=SAMPLER_NAMES,
        default=None,
        help="Random source (default: SKYLINEGEN_SAMPLER or lcg)",
    )
    parser.add_argument(
        "--in-memory",
        action="store_true",
        default=None,
        help="Materialize the relation before reading it",
    )
    parser.add_argument(
        "--offset-mode",
        type=str,
        choices=[m.value for m in OffsetMode],
        default=None,
        help="Offset handling for in-memory relations (default: skip)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="skylinegen",
        description="Seeded synthetic relations for preference and skyline query benchmarks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Ten independent rows with two columns, printed to the terminal
  skylinegen generate

  # 100k anti-correlated rows with three columns to CSV
  skylinegen generate --distribution anti_correlated --columns 3 --rows 100000 --output-file anti.csv

  # Check the shape of a Gaussian relation
  skylinegen describe --distribution gaussian --max-values 9,9 --rows 5000
        """,
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    generate_parser = subparsers.add_parser("generate", help="Generate a relation")
    _add_generation_arguments(generate_parser)
    generate_parser.add_argument(
        "--output-file",
        type=str,
        default=None,
        help="Output file path (if set, writes rows to file instead of the terminal)",
    )
    generate_parser.add_argument(
        "--format",
        type=str,
        choices=EXPORT_FORMATS,
        default=None,
        help="Output format (default: from the file suffix, else jsonl)",
    )
    generate_parser.add_argument(
        "--append",
        action="store_true",
        help="Append to the output file instead of replacing it",
    )

    describe_parser = subparsers.add_parser("describe", help="Show column statistics of a relation")
    _add_generation_arguments(describe_parser)

    subparsers.add_parser("list", help="List available distributions")

    return parser


def _parse_max_values(raw: str) -> list[int]:
    try:
        return [int(v.strip()) for v in raw.split(",") if v.strip()]
    except ValueError:
        raise SkylineGenError(f"--max-values must be comma-separated integers, got {raw!r}") from None


def config_from_args(args: argparse.Namespace) -> GeneratorConfig:
    """Build a GeneratorConfig from CLI flags, layered over an optional YAML file."""
    overrides: dict[str, Any] = {
        "distribution": args.distribution,
        "rows": args.rows,
        "offset": args.offset,
        "seed": args.seed,
        "sampler": args.sampler,
        "in_memory": args.in_memory,
        "offset_mode": args.offset_mode,
        "columns": args.columns,
        "maximum_level": args.maximum_level,
    }
    if args.max_values:
        overrides["max_values"] = _parse_max_values(args.max_values)
    defaults = {"rows": _DEFAULT_ROWS, "columns": _DEFAULT_COLUMNS}

    config_path = Path(args.config) if args.config else get_default_config_path()
    if config_path is not None:
        return load_generator_config(config_path, overrides, defaults)
    return GeneratorConfig.from_config(merge_config({}, overrides, defaults))


def cmd_generate(args: argparse.Namespace):
    """Generate a relation."""
    config = config_from_args(args)
    print(f"Generating {config.distribution} relation...")
    print(f"   Rows: {config.rows} (offset {config.offset})")
    print(f"   Max values: {list(config.max_values)}")
    print(f"   Seed: {config.seed} ({config.sampler})")
    print()

    with LevelResultSet.from_config(config) as result_set:
        if args.output_file:
            exporter = create_exporter(args.output_file, fmt=args.format, append=args.append)
            written = exporter.export(result_set)
            print(f"Wrote {written} rows to {exporter.output_path}")
            return

        for current, row in enumerate(result_set, start=1):
            if current <= _MAX_ROWS_IN_TERMINAL:
                print(_format_row_line(current, config.rows, row.id, list(row.levels)))
        if config.rows > _MAX_ROWS_IN_TERMINAL:
            print(f"   ... {config.rows - _MAX_ROWS_IN_TERMINAL} more rows (use --output-file)")


def cmd_describe(args: argparse.Namespace):
    """Show column statistics and correlations of a relation."""
    config = config_from_args(args)
    with LevelResultSet.from_config(config) as result_set:
        summary = summarize(result_set)

    print(f"Relation: {config.distribution}, {summary.rows} rows, {summary.columns} columns")
    print()
    for i in range(summary.columns):
        print(
            f"  col{i}: min={summary.minimums[i]} max={summary.maximums[i]} "
            f"mean={summary.means[i]:.3f} (bound {config.max_values[i]})"
        )
    if summary.columns > 1:
        print()
        print("Correlations:")
        for i, row in enumerate(summary.correlations):
            print(f"  col{i}: " + " ".join(f"{r:+.3f}" for r in row))
        print()
        print(f"Mean pairwise correlation: {summary.mean_correlation():+.3f}")


def cmd_list(args: argparse.Namespace):
    """List available distributions."""
    print("Available distributions:")
    for name in DistributionFactory.names():
        dist = DistributionFactory.create({"distribution": name})
        doc = (type(dist).__doc__ or "").strip().splitlines()
        print(f"  - {name}")
        if doc:
            print(f"     {doc[0]}")


def main(argv: list[str] | None = None):
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    try:
        if args.command == "generate":
            cmd_generate(args)
        elif args.command == "describe":
            cmd_describe(args)
        elif args.command == "list":
            cmd_list(args)
        else:
            parser.print_help()
            sys.exit(1)
    except KeyboardInterrupt:
        print("\nGeneration interrupted")
        sys.exit(0)
    except (SkylineGenError, ValueError, OSError) as e:
        print(f"\nError: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
