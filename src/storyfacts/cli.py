"""
Command line interface.

Provides the `storyfacts` command with subcommands:
- generate: Generate stories for a task and write them as JSON lines
- tasks: List available tasks
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from storyfacts import __version__

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="storyfacts",
        description="Generate synthetic stories with supported comprehension questions",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"storyfacts {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # storyfacts generate <task> <count> <output>
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate stories for a task",
        description="Generate stories and write one JSON record per line",
    )
    generate_parser.add_argument("task", help="Task name (see `storyfacts tasks`)")
    generate_parser.add_argument("count", type=int, help="Number of stories")
    generate_parser.add_argument("output", help="Output file, or - for stdout")
    generate_parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible output",
    )
    generate_parser.add_argument(
        "--knowledge-graph",
        action="store_true",
        default=None,
        help="Include a knowledge graph for every story step",
    )
    generate_parser.add_argument(
        "--limit-story",
        type=int,
        metavar="N",
        help="Discard stories longer than N lines",
    )
    generate_parser.add_argument(
        "--config",
        metavar="PATH",
        help="JSON config file (default: ~/.storyfacts/config.json)",
    )

    # storyfacts tasks
    subparsers.add_parser(
        "tasks",
        help="List available tasks",
        description="List the names of all registered tasks",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "generate":
        return handle_generate(args)
    if args.command == "tasks":
        return handle_tasks(args)

    parser.print_help(sys.stderr)
    return 1


def handle_generate(args: argparse.Namespace) -> int:
    from storyfacts.config import load_config
    from storyfacts.dataset import StoryLimitExceeded, generate_records
    from storyfacts.tasks import TASKS

    if args.task not in TASKS:
        print(f"Error: unknown task '{args.task}' (available: {', '.join(sorted(TASKS))})", file=sys.stderr)
        return 1

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"Error: cannot read config: {e}", file=sys.stderr)
        return 1

    if args.seed is not None:
        config.seed = args.seed
    if args.knowledge_graph is not None:
        config.knowledge_graph = args.knowledge_graph
    if args.limit_story is not None:
        config.limit_story = args.limit_story

    if args.count < 0:
        print("Error: count must not be negative", file=sys.stderr)
        return 1

    logger.info(f"Generating {args.count} {args.task} stories (seed={config.seed})")
    try:
        records = generate_records(args.task, args.count, config)
        if args.output == "-":
            written = _write_records(records, sys.stdout)
        else:
            written = _write_output_file(records, Path(args.output))
    except StoryLimitExceeded as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger.info(f"Wrote {written} stories to {args.output}")
    return 0


def handle_tasks(args: argparse.Namespace) -> int:
    from storyfacts.tasks import TASKS

    for name, task_cls in sorted(TASKS.items()):
        doc = (sys.modules[task_cls.__module__].__doc__ or "").strip()
        first_line = doc.splitlines()[0] if doc else ""
        print(f"{name:16} {first_line}")
    return 0


def _write_records(records, fh) -> int:
    count = 0
    for record in records:
        fh.write(json.dumps(record) + "\n")
        count += 1
    return count


def _write_output_file(records, output: Path) -> int:
    """Write records next to ``output`` and move them into place once complete."""
    output.parent.mkdir(parents=True, exist_ok=True)
    partial = output.with_name(output.name + ".partial")
    try:
        with open(partial, "w", encoding="utf-8") as fh:
            written = _write_records(records, fh)
        partial.replace(output)
    finally:
        if partial.exists():
            partial.unlink()
    return written


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
