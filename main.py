# main.py

"""Entry point for the veggie_finder directory (TUI or headless CLI)."""

import argparse
import logging
import sys

from src.config.logging_config import setup_logging

logger = logging.getLogger("veggie_finder.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="veggie_finder",
        description="Find local vegetable vendors and compare prices.",
    )
    parser.add_argument(
        "query",
        nargs="?",
        default=None,
        help="Shop or vegetable to search for. Omit to launch the TUI.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )
    parser.add_argument(
        "-c",
        "--catalog",
        default=None,
        dest="catalog_path",
        help="Alternate catalog JSON file.",
    )
    parser.add_argument(
        "--vegetables",
        action="store_true",
        default=False,
        help="List every vegetable sold in the catalog.",
    )
    parser.add_argument(
        "--directions",
        type=int,
        default=None,
        metavar="SHOP_ID",
        help="Open directions to the shop with this id.",
    )
    return parser


def _run_tui(catalog_path: str | None) -> None:
    """Launch the interactive Textual TUI."""
    from src.ui.app import VeggieFinderApp

    try:
        app = VeggieFinderApp(catalog_path=catalog_path)
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        logger.info("veggie_finder TUI shutting down")


def _command_name(args: argparse.Namespace) -> str:
    """Name of the command *args* select, used to label the run log."""
    if args.vegetables:
        return "vegetables"
    if args.directions is not None:
        return "directions"
    if args.query is None:
        return "tui"
    return "search"


def main() -> None:
    """Route to TUI (no args) or one of the headless commands."""
    args = _build_parser().parse_args()

    log_file = setup_logging(_command_name(args))
    logger.info("veggie_finder starting, log file: %s", log_file)

    if args.vegetables:
        from src.cli.runner import run_list_vegetables

        sys.exit(run_list_vegetables(args.catalog_path))
    elif args.directions is not None:
        from src.cli.runner import run_directions

        sys.exit(run_directions(args.directions, args.catalog_path))
    elif args.query is None:
        _run_tui(args.catalog_path)
    else:
        from src.cli.runner import cli_search

        sys.exit(
            cli_search(
                query=args.query,
                output_format=args.output_format,
                catalog_path=args.catalog_path,
            )
        )


if __name__ == "__main__":
    main()
