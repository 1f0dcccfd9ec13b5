"""Multithreaded processor implementation - uses thread pool for parallelism."""

import os
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import List, Optional

from ..core.exceptions import batch_error_handler
from ..core.models import GalleryItem, SourceImage
from ..core.protocols import LoggerProtocol, ProcessingService


def default_worker_count() -> int:
    """One thread per CPU; decode and resize release the GIL in Pillow."""
    return os.cpu_count() or 4


def process_batch(
    batch: List[SourceImage],
    service: ProcessingService,
    max_workers: Optional[int] = None,
    logger: Optional[LoggerProtocol] = None,
) -> List[GalleryItem]:
    """
    Process a batch of images using a thread pool.

    Items may finish in any order; results are placed back by input index so
    the returned list always follows the batch order. On the first failure
    all not-yet-started items are cancelled and the error is re-raised.

    Args:
        batch: Source images in manifest order.
        service: Service that processes a single image.
        max_workers: Thread count (defaults to the CPU count).
        logger: Receives unexpected errors before they are wrapped.

    Returns:
        One `GalleryItem` per source image, in input order.
    """
    if not batch:
        return []

    workers = min(max_workers or default_worker_count(), len(batch))
    results: List[Optional[GalleryItem]] = [None] * len(batch)

    def run(source: SourceImage) -> GalleryItem:
        with batch_error_handler(f"Processing {source.file_name}", logger):
            return service.process_image(source)

    with ThreadPoolExecutor(max_workers=workers) as executor:
        future_to_index = {
            executor.submit(run, source): index for index, source in enumerate(batch)
        }

        done, not_done = wait(future_to_index, return_when=FIRST_EXCEPTION)
        for future in not_done:
            future.cancel()

        failed = [f for f in done if not f.cancelled() and f.exception() is not None]
        if failed:
            # Report the earliest item in batch order among the failures seen
            first = min(failed, key=lambda f: future_to_index[f])
            raise first.exception()

        for future in done:
            results[future_to_index[future]] = future.result()

    return results  # type: ignore[return-value]
