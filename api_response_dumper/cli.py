"""Command-line interface for api-response-dumper."""

import argparse
import asyncio
import json
import logging
import sys

from api_response_dumper.browser_check import MasterLoadError, load_test_data
from api_response_dumper.fragment_store import DEFAULT_ROOT, FragmentStore

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging to stderr."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="api-response-dumper",
        description="Manage controller response fixtures for client-side tests",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log progress to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    root_parent = argparse.ArgumentParser(add_help=False)
    root_parent.add_argument(
        "--root",
        "-r",
        default=DEFAULT_ROOT,
        help=f"Dump root directory (default: ./{DEFAULT_ROOT})",
    )

    subparsers.add_parser(
        "reset",
        parents=[root_parent],
        help="Delete all fragments and rewrite the header and footer",
    )
    subparsers.add_parser(
        "build",
        parents=[root_parent],
        help="Merge fragments into the master test-data.js file",
    )
    show_parser = subparsers.add_parser(
        "show",
        parents=[root_parent],
        help="Evaluate the master file in a browser and print testData as JSON",
    )
    show_parser.add_argument(
        "--controller",
        "-c",
        default=None,
        help="Only print entries for this controller prefix (e.g. 'Widget')",
    )

    return parser


def run_reset(root: str) -> int:
    """Run the reset command."""
    store = FragmentStore(root)
    store.reset_fragments()
    print(f"Reset fragments in {store.parts_dir}", file=sys.stderr)
    return 0


def run_build(root: str) -> int:
    """Run the build command."""
    store = FragmentStore(root)
    try:
        path = store.build_master_file()
    except FileNotFoundError as e:
        logger.error(f"Build failed: {e}")
        print(f"Error: {e}. Run 'reset' first.", file=sys.stderr)
        return 1
    print(f"Master file written to: {path}", file=sys.stderr)
    return 0


async def run_show(root: str, controller: str | None = None) -> int:
    """Run the show command.

    Args:
        root: Dump root directory
        controller: Optional controller prefix to filter on

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    store = FragmentStore(root)
    try:
        test_data = await load_test_data(store.master_path)
    except MasterLoadError as e:
        print(f"Error ({e.phase}): {e}", file=sys.stderr)
        return 1

    if controller is not None:
        if controller not in test_data:
            print(f"Error: no entries for controller '{controller}'", file=sys.stderr)
            return 1
        test_data = {controller: test_data[controller]}

    print(json.dumps(test_data, indent=2, ensure_ascii=False))
    return 0


async def run_cli(args: list[str]) -> int:
    """Run the CLI with the given arguments.

    Args:
        args: Command-line arguments (without program name)

    Returns:
        Exit code (0 for success, non-zero for fatal errors)
    """
    try:
        parsed = create_parser().parse_args(args)
    except SystemExit as e:
        return e.code if e.code else 1

    setup_logging(parsed.verbose)

    if parsed.command is None:
        create_parser().print_help(sys.stderr)
        return 1

    if parsed.command == "reset":
        return run_reset(parsed.root)
    elif parsed.command == "build":
        return run_build(parsed.root)
    elif parsed.command == "show":
        return await run_show(parsed.root, parsed.controller)

    return 1


def main():
    """Entry point for the CLI."""
    exit_code = asyncio.run(run_cli(sys.argv[1:]))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
