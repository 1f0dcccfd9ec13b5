"""Main module for the gallery pipeline CLI."""

import sys
import argparse
from typing import List, Optional

from . import __version__
from .process_gallery import add_build_arguments
from .process_gallery import main as build_main


def main(argv: Optional[List[str]] = None) -> None:
    """
    Entry point for the unified command-line interface (CLI) of the gallery pipeline.

    Sets up an `ArgumentParser` with a "build" and a "version" command. The
    "build" command shares its options with `process_gallery.py` and hands
    the remaining arguments to that script's `main`.
    """
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="gallery-pipeline",
        description="Gallery Pipeline - static HTML galleries from a directory of JPEGs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Build a gallery with default settings (serial)
  gallery-pipeline build photos/ public/ --title "My Trip 2024"

  # Use a thread pool and shrink large originals
  gallery-pipeline build photos/ public/ --processor multithread \\
                         --max-large-size 2048 --exempt-panoramas

  # Show version
  gallery-pipeline version
        """,
    )

    subparsers: argparse._SubParsersAction = parser.add_subparsers(
        dest="command", help="Available commands"
    )

    build_parser: argparse.ArgumentParser = subparsers.add_parser(
        "build", help="Build a gallery from a directory of JPEGs"
    )
    add_build_arguments(build_parser)

    subparsers.add_parser("version", help="Show version information")

    args_list = sys.argv[1:] if argv is None else argv
    args: argparse.Namespace = parser.parse_args(args_list)

    if args.command == "build":
        build_main(args_list[1:])

    elif args.command == "version":
        print("Gallery Pipeline CLI")
        print(f"Version {__version__}")
        print("Static HTML galleries with serial and multithreaded processing")
        sys.exit(0)

    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
