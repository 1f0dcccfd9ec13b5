"""Logging helpers shared across all processor implementations."""

from typing import Optional

from ..core.models import GalleryConfig
from ..core.observability import MetricsCollector
from ..core.protocols import LoggerProtocol


def log_configuration(
    config: GalleryConfig, processor_name: str, logger: LoggerProtocol
) -> None:
    """Log the run banner and configuration."""
    logger.info("=" * 60)
    logger.info(f"{processor_name.upper()} GALLERY BUILD")
    logger.info("=" * 60)
    logger.info(f"  Input dir:        {config.input_dir}")
    logger.info(f"  Output dir:       {config.output_dir}")
    logger.info(f"  Title:            {config.title}")
    logger.info(f"  Thumbnail height: {config.thumbnail_height}")
    logger.info(f"  Max large size:   {config.max_large_size or 'unlimited'}")
    logger.info(f"  Exempt panoramas: {'yes' if config.exempt_panoramas else 'no'}")
    logger.info(f"  Download archive: {'yes' if config.create_archive else 'no'}")
    if config.skip_processing:
        logger.info("  Image processing: skipped (index only)")
    logger.info("=" * 60)


def log_final_statistics(
    total_time: float,
    total_items: int,
    metrics_collector: Optional[MetricsCollector],
    logger: LoggerProtocol,
) -> None:
    """Log final processing statistics."""
    overall_rate = total_items / total_time if total_time > 0 else 0

    logger.info("=" * 60)
    logger.info("GALLERY COMPLETED")
    logger.info("=" * 60)
    logger.info(f"Total execution time: {total_time:.1f}s")
    logger.info(f"Images in gallery: {total_items}")
    logger.info(f"Overall rate: {overall_rate:.1f} images/sec")

    summary = metrics_collector.get_summary("process_image") if metrics_collector else {}
    if summary:
        logger.info(f"Images processed: {summary['successful_operations']}")
        logger.info(f"Average time per image: {summary['avg_duration'] * 1000:.0f}ms")
    logger.info("=" * 60)
