#!/usr/bin/env python3
"""
Static gallery builder CLI

Scans a directory of JPEGs → Thumbnails / resized originals / ZIP → index.html
Supports serial and multithreaded processing.
"""

import sys
import argparse
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from .core import ConfigurationError, GalleryConfig, GalleryManifest, get_logger
from .core.factories import GalleryPipelineFactory, LoggerFactory
from .core.observability import RunClock


def add_build_arguments(parser: argparse.ArgumentParser) -> None:
    """Register the gallery build options on ``parser``."""
    parser.add_argument("input_dir", type=Path, help="Directory containing the JPEG files")
    parser.add_argument("output_dir", type=Path, help="Directory the gallery is written to")
    parser.add_argument("--title", default="Gallery", help="Gallery title (default: Gallery)")
    parser.add_argument(
        "--thumbnail-height",
        type=int,
        default=300,
        help="Thumbnail height in pixels (default: 300)",
    )
    parser.add_argument(
        "--max-large-size",
        type=int,
        default=None,
        help="Downscale full-size images whose longest side exceeds this many pixels",
    )
    parser.add_argument(
        "--exempt-panoramas",
        action="store_true",
        help="Do not downscale panoramas (more than twice as wide as high)",
    )
    parser.add_argument(
        "--no-download",
        action="store_true",
        help="Do not create a ZIP archive of the full-size images",
    )
    parser.add_argument(
        "--skip-processing",
        action="store_true",
        help="Only re-render index.html against existing images",
    )
    parser.add_argument(
        "--processor",
        type=str,
        default="serial",
        choices=["serial", "multithread"],
        help="Processing strategy to use (default: serial)",
    )
    parser.add_argument(
        "--workers", type=int, default=None, help="Thread count for the multithread processor"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parses command-line arguments for the gallery builder.

    Returns:
        An `argparse.Namespace` object containing the parsed arguments.
    """
    parser = argparse.ArgumentParser(
        description="Generate a static HTML gallery from a directory of JPEGs"
    )
    add_build_arguments(parser)
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> GalleryConfig:
    """Build a validated GalleryConfig from parsed arguments."""
    try:
        return GalleryConfig(
            input_dir=args.input_dir,
            output_dir=args.output_dir,
            title=args.title,
            thumbnail_height=args.thumbnail_height,
            max_large_size=args.max_large_size,
            exempt_panoramas=args.exempt_panoramas,
            create_archive=not args.no_download,
            skip_processing=args.skip_processing,
            processor=args.processor,
            workers=args.workers,
            debug=args.debug,
        )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc


def run(args: argparse.Namespace) -> GalleryManifest:
    """Build the gallery described by parsed arguments."""
    clock = RunClock()
    logger = LoggerFactory.create_logger(clock=clock, level="DEBUG" if args.debug else None)
    logger.info("Starting gallery build")

    config = config_from_args(args)
    pipeline = GalleryPipelineFactory.create_pipeline(logger=logger)
    return pipeline.build(config)


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point for the gallery build script.

    Any pipeline failure is logged with its cause and ends the process with
    exit status 1. Files written before the failure are left in place.
    """
    logger = get_logger()
    try:
        run(parse_args(argv))
    except KeyboardInterrupt:
        logger.warning("Gallery build interrupted by user.")
        sys.exit(130)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Gallery build failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
