"""Serial processor implementation - processes images one by one."""

from typing import List, Optional

from ..core.exceptions import batch_error_handler
from ..core.models import GalleryItem, SourceImage
from ..core.protocols import LoggerProtocol, ProcessingService


def process_batch(
    batch: List[SourceImage],
    service: ProcessingService,
    max_workers: Optional[int] = None,
    logger: Optional[LoggerProtocol] = None,
) -> List[GalleryItem]:
    """
    Processes a batch of images serially, in the current thread.

    Items are processed in input order and the first failure stops the
    batch. ``max_workers`` is accepted for signature compatibility with the
    threaded processor and ignored.

    Args:
        batch: Source images in manifest order.
        service: Service that processes a single image.
        max_workers: Unused.
        logger: Receives unexpected errors before they are wrapped.

    Returns:
        One `GalleryItem` per source image, in input order.
    """
    results = []

    for source in batch:
        with batch_error_handler(f"Processing {source.file_name}", logger):
            results.append(service.process_image(source))

    return results
