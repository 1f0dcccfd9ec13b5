"""Factory classes for creating configured service instances."""

from typing import Optional

from ..render.renderer import JinjaTemplateRenderer
from .observability import MetricsCollector, ProgressLogger, RunClock
from .protocols import LoggerProtocol, TemplateRendererProtocol
from .services import (
    DirectoryDiscoveryService,
    GalleryOrchestrator,
    ImageTransformerService,
)


class LoggerFactory:
    """Factory for creating logger instances."""

    @staticmethod
    def create_logger(
        name: str = "gallery-pipeline",
        clock: Optional[RunClock] = None,
        level: Optional[str] = None,
    ) -> ProgressLogger:
        """Create a progress logger timed from ``clock``."""
        return ProgressLogger(name, clock=clock or RunClock(), level=level)


class GalleryPipelineFactory:
    """Factory for creating the complete gallery pipeline."""

    @staticmethod
    def create_pipeline(
        logger: Optional[LoggerProtocol] = None,
        renderer: Optional[TemplateRendererProtocol] = None,
        metrics_collector: Optional[MetricsCollector] = None,
    ) -> GalleryOrchestrator:
        """Create a fully configured gallery pipeline."""
        if logger is None:
            logger = LoggerFactory.create_logger()

        if renderer is None:
            renderer = JinjaTemplateRenderer()

        if metrics_collector is None:
            metrics_collector = MetricsCollector()

        return GalleryOrchestrator(
            file_discovery=DirectoryDiscoveryService(logger),
            transformer=ImageTransformerService(),
            renderer=renderer,
            logger=logger,
            metrics_collector=metrics_collector,
        )
