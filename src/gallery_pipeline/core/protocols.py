"""Protocol definitions for dependency injection and testability."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Protocol

from .models import GalleryItem, SourceImage


class LoggerProtocol(Protocol):
    """Protocol for logging operations."""

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message."""
        ...

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message."""
        ...

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message."""
        ...

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message."""
        ...


class TemplateRendererProtocol(Protocol):
    """Protocol for the HTML index renderer."""

    def render(self, context: Dict[str, Any]) -> bytes:
        """Render the gallery index for a manifest context."""
        ...

    def copy_static_assets(self, output_dir: Path) -> None:
        """Copy stylesheet and script next to the index."""
        ...


class FileDiscoveryService(ABC):
    """Abstract service for discovering files to process."""

    @abstractmethod
    def discover_files(self, input_dir: Path) -> List[Path]:
        """Discover files to process, in a deterministic order."""
        ...


class ProcessingService(ABC):
    """Abstract service for processing images."""

    @abstractmethod
    def process_image(self, source: SourceImage) -> GalleryItem:
        """Process a single image and return its gallery entry."""
        ...
