# main.py

"""Entry point for the smartlist price comparison CLI."""

import argparse
import asyncio
import logging
import sys

from smartlist.config.logging_config import setup_logging

logger = logging.getLogger("smartlist.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="smartlist",
        description=(
            "Compare supermarket prices for a shopping list and split "
            "it across stores."
        ),
    )
    parser.add_argument(
        "keys",
        nargs="*",
        help="Product keys to compare (as printed by --search).",
    )
    parser.add_argument(
        "--search",
        default=None,
        metavar="QUERY",
        help="Search products instead of comparing.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table", "tsv"],
        default="json",
        dest="output_format",
        help="Output format; tsv prints the comparison grid (default: json).",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        dest="output_dir",
        help="Custom output directory (default: results/).",
    )
    parser.add_argument(
        "--save",
        action="store_true",
        default=False,
        help="Save the plan as JSON in the output directory.",
    )
    parser.add_argument(
        "--export",
        action="store_true",
        default=False,
        help="Also export the comparison grid as CSV in the output directory.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Show INFO log messages on stderr.",
    )
    return parser


def main() -> None:
    """Route to product search or a comparison plan."""
    parser = _build_parser()
    args = parser.parse_args()

    log_file = setup_logging(verbose=args.verbose)
    logger.info("smartlist starting, log file: %s", log_file)

    from smartlist.cli.runner import cli_plan, cli_search

    if args.search is not None:
        exit_code = cli_search(args.search, args.output_format)
    elif args.keys:
        exit_code = asyncio.run(
            cli_plan(
                keys=args.keys,
                output_format=args.output_format,
                output_dir=args.output_dir,
                save=args.save,
                export=args.export,
            )
        )
    else:
        parser.print_help(sys.stderr)
        exit_code = 2
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
