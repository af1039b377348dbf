"""
Command line entry point.

Usage:
    flowsketch diagram.flow                 # print graph JSON
    flowsketch diagram.flow -f dsl          # print canonical DSL
    cat diagram.flow | flowsketch - -o graph.json
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from .models import FlowDirection, LayoutOptions
from .parser import parse_dsl
from .serializer import graph_to_dict, to_dsl
from .tracer import ParseTrace

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flowsketch",
        description="Parse flowchart DSL into a graph model.",
    )
    parser.add_argument("input", help="DSL file to parse, or '-' for stdin")
    parser.add_argument("-o", "--output", help="Write result to this file")
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "dsl"],
        default="json",
        help="Output format (default: json)",
    )
    parser.add_argument(
        "--direction",
        choices=[d.value for d in FlowDirection],
        help="Default flow direction; @direction in the input overrides it",
    )
    parser.add_argument(
        "--spacing",
        type=int,
        help="Default node spacing; @spacing in the input overrides it",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Print a parse trace to stderr",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def setup_logging(verbose: bool = False) -> None:
    """Send log records to stderr through rich, keeping stdout for output."""
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(name)s] %(message)s",
        handlers=[handler],
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        if args.input == "-":
            text = sys.stdin.read()
        else:
            with open(args.input, encoding="utf-8") as f:
                text = f.read()
    except OSError as e:
        print(f"flowsketch: cannot read {args.input}: {e}", file=sys.stderr)
        return 1

    options = LayoutOptions()
    if args.direction:
        options.direction = FlowDirection(args.direction)
    if args.spacing is not None:
        options.node_spacing = args.spacing

    trace = ParseTrace() if args.trace else None
    graph = parse_dsl(text, options=options, trace=trace)
    logger.debug("Parsed %d nodes, %d edges", len(graph.nodes), len(graph.edges))

    if args.format == "dsl":
        output = to_dsl(graph)
    else:
        output = json.dumps(graph_to_dict(graph), indent=2, ensure_ascii=False) + "\n"

    if args.output:
        try:
            with open(args.output, "w", encoding="utf-8") as f:
                f.write(output)
        except OSError as e:
            print(f"flowsketch: cannot write {args.output}: {e}", file=sys.stderr)
            return 1
    else:
        sys.stdout.write(output)

    if trace is not None:
        print(trace.dump(), file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
