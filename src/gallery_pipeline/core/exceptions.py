"""Custom exceptions and error handling utilities for the gallery pipeline."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from .logging_config import get_logger
from .protocols import LoggerProtocol


class GalleryPipelineError(Exception):
    """Base exception for all gallery pipeline errors."""


class ConfigurationError(GalleryPipelineError):
    """Error raised for invalid configuration options or unusable paths."""


class ImageProcessingError(GalleryPipelineError):
    """Error raised when reading, transforming or writing a single image fails."""


class ArchiveError(GalleryPipelineError):
    """Error raised when the download archive cannot be written."""


@contextmanager
def batch_error_handler(operation: str, logger: Optional[LoggerProtocol] = None) -> Iterator[None]:
    """
    Wrap one unit of batch work so every failure is a pipeline error.

    Pipeline errors pass through unchanged. Anything else is logged to
    ``logger`` (the "processor" logger when omitted) and re-raised as
    ``ImageProcessingError`` naming ``operation``.
    """
    try:
        yield
    except GalleryPipelineError:
        raise
    except Exception as exc:  # noqa: BLE001
        (logger or get_logger("processor")).error(
            f"Unhandled error in {operation}: {type(exc).__name__}: {exc}"
        )
        raise ImageProcessingError(f"{operation} failed: {exc}") from exc
