"""Service implementations for the gallery pipeline."""

import time
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from PIL import Image

from .. import __version__
from ..processors import PROCESSORS
from ..processors.common import log_configuration, log_final_statistics
from .archive import ArchiveWriter
from .exceptions import (
    ConfigurationError,
    GalleryPipelineError,
    ImageProcessingError,
)
from .image_utils import decode_image, encode_jpeg, thumbnail_box, transform_image
from .models import ArchiveInfo, GalleryConfig, GalleryItem, GalleryManifest, SourceImage
from .naming import archive_filename, build_gallery_item
from .observability import MetricsCollector, PerformanceMetrics
from .orientation import Orientation, orientation_from_image
from .protocols import (
    FileDiscoveryService,
    LoggerProtocol,
    ProcessingService,
    TemplateRendererProtocol,
)

JPEG_SUFFIXES = (".jpg", ".JPG")


class ImageTransformerService:
    """Produces thumbnail and full-size bytes from a decoded image."""

    def make_thumbnail(
        self,
        image: "Image.Image",
        orientation: Orientation,
        thumbnail_height: int,
        path: Path,
    ) -> bytes:
        """Rotate and shrink an image to thumbnail size. Panoramas are not exempt."""
        max_width, max_height = thumbnail_box(thumbnail_height)
        thumb = transform_image(image, max_width, max_height, orientation)
        return self._encode(thumb, path)

    def make_large(
        self,
        data: bytes,
        image: "Image.Image",
        orientation: Orientation,
        max_large_size: Optional[int],
        exempt_panoramas: bool,
        path: Path,
    ) -> bytes:
        """
        Return the full-size bytes for an image.

        Originals that already fit ``max_large_size`` (or when no limit is
        set) are returned byte-for-byte to avoid generation loss.
        """
        if max_large_size is None:
            return data
        if image.width <= max_large_size and image.height <= max_large_size:
            return data

        large = transform_image(
            image, max_large_size, max_large_size, orientation, exempt_panoramas
        )
        return self._encode(large, path)

    @staticmethod
    def _encode(image: "Image.Image", path: Path) -> bytes:
        try:
            return encode_jpeg(image)
        except (OSError, ValueError) as exc:
            raise ImageProcessingError(f"Could not encode image {path}: {exc}") from exc


class DirectoryDiscoveryService(FileDiscoveryService):
    """Service for discovering JPEG files in a local directory."""

    def __init__(self, logger: LoggerProtocol):
        self._logger = logger

    def validate_input_dir(self, input_dir: Path) -> None:
        """Raise ConfigurationError unless ``input_dir`` is an existing directory."""
        if not input_dir.exists():
            raise ConfigurationError(f"Input directory does not exist: {input_dir}")
        if not input_dir.is_dir():
            raise ConfigurationError(f"Input directory path is not a directory: {input_dir}")

    def discover_files(self, input_dir: Path) -> List[Path]:
        """
        List JPEG files directly inside ``input_dir``.

        Subdirectories, other file types, names that are not valid UTF-8
        and entries that cannot be inspected are skipped. The result is sorted by path string, so
        ``a.JPG`` comes before ``a.jpg``.
        """
        self.validate_input_dir(input_dir)
        files = []

        for entry in input_dir.iterdir():
            if not entry.name.endswith(JPEG_SUFFIXES):
                continue
            try:
                # Undecodable bytes come back as lone surrogates
                entry.name.encode("utf-8")
            except UnicodeEncodeError:
                self._logger.debug(f"Skipping non UTF-8 file name {entry.name!r}")
                continue
            try:
                if not entry.is_file():
                    continue
            except OSError as exc:
                self._logger.debug(f"Skipping unreadable entry {entry}: {exc}")
                continue
            files.append(entry.absolute())

        files.sort(key=str)
        self._logger.info(f"Found {len(files)} JPEG files in {input_dir}")
        return files


class GalleryItemService(ProcessingService):
    """Processes one source image: thumbnail, full-size copy and archive entry."""

    def __init__(
        self,
        config: GalleryConfig,
        transformer: ImageTransformerService,
        logger: LoggerProtocol,
        archive: Optional[ArchiveWriter] = None,
        metrics_collector: Optional[MetricsCollector] = None,
    ):
        self._config = config
        self._transformer = transformer
        self._logger = logger
        self._archive = archive
        self._metrics_collector = metrics_collector

    def process_image(self, source: SourceImage) -> GalleryItem:
        """Process a single image. Any failure aborts the whole run."""
        item = build_gallery_item(source.path)
        if self._config.skip_processing:
            return item

        start_time = time.time()
        success = False
        error_message = None
        self._logger.info(f"Processing {source.file_name}")

        try:
            data = self._read(source.path)
            image = decode_image(data, source.path)
            orientation = orientation_from_image(image, self._logger)
            self._logger.debug(
                f"Decoded {source.file_name}",
                size=f"{image.width}x{image.height}",
                orientation=orientation.value,
            )

            thumbnail = self._transformer.make_thumbnail(
                image, orientation, self._config.thumbnail_height, source.path
            )
            self._write(self._config.output_dir / item.filename_thumb, thumbnail)

            large = self._transformer.make_large(
                data,
                image,
                orientation,
                self._config.max_large_size,
                self._config.exempt_panoramas,
                source.path,
            )
            self._write(self._config.output_dir / item.filename_full, large)

            if self._archive is not None:
                self._archive.append(item.filename_full, data)

            success = True
        except GalleryPipelineError as exc:
            error_message = str(exc)
            self._logger.error(f"Failed processing {source.file_name}: {exc}")
            raise
        finally:
            if self._metrics_collector is not None:
                self._metrics_collector.record_metric(
                    PerformanceMetrics(
                        operation="process_image",
                        start_time=start_time,
                        end_time=time.time(),
                        success=success,
                        error_message=error_message,
                        metadata={"file": source.file_name},
                    )
                )

        return item

    @staticmethod
    def _read(path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as exc:
            raise ImageProcessingError(f"Could not read {path}: {exc}") from exc

    @staticmethod
    def _write(path: Path, data: bytes) -> None:
        try:
            path.write_bytes(data)
        except OSError as exc:
            raise ImageProcessingError(f"Could not write {path}: {exc}") from exc


class WorkItemFactory:
    """Factory for creating work items."""

    @staticmethod
    def create_work_items(source_files: List[Path]) -> List[SourceImage]:
        """Create work items from discovered source files."""
        return [SourceImage(path=path) for path in source_files]


class ManifestAssembler:
    """Builds the render context for the gallery index."""

    @staticmethod
    def build(
        title: str,
        items: List[GalleryItem],
        archive_info: Optional[ArchiveInfo] = None,
        generated_at: Optional[datetime] = None,
        version: str = __version__,
    ) -> GalleryManifest:
        timestamp = generated_at or datetime.now().astimezone()
        return GalleryManifest(
            title=title,
            version=version,
            generated_at=timestamp.isoformat(timespec="seconds"),
            download_filename=archive_info.filename if archive_info else None,
            download_size_mib=archive_info.size_mib if archive_info else None,
            images=list(items),
        )


class GalleryOrchestrator:
    """Main orchestrator for a gallery build."""

    def __init__(
        self,
        file_discovery: DirectoryDiscoveryService,
        transformer: ImageTransformerService,
        renderer: TemplateRendererProtocol,
        logger: LoggerProtocol,
        metrics_collector: Optional[MetricsCollector] = None,
    ):
        self._file_discovery = file_discovery
        self._transformer = transformer
        self._renderer = renderer
        self._logger = logger
        self._metrics_collector = metrics_collector

    def build(self, config: GalleryConfig) -> GalleryManifest:
        """Build the gallery described by ``config`` and return its manifest."""
        start_time = time.time()
        processor_name, process_batch_fn = PROCESSORS[config.processor]
        log_configuration(config, processor_name, self._logger)

        self._file_discovery.validate_input_dir(config.input_dir)
        self._prepare_output_dir(config.output_dir)

        source_files = self._file_discovery.discover_files(config.input_dir)
        work_items = WorkItemFactory.create_work_items(source_files)
        self._warn_on_thumbnail_collisions(work_items)

        archive = None
        if config.create_archive:
            archive = ArchiveWriter(
                config.output_dir / archive_filename(config.title), logger=self._logger
            )
            self._logger.info(f"Writing archive {archive.path.name}")

        service = GalleryItemService(
            config,
            self._transformer,
            self._logger,
            archive=archive,
            metrics_collector=self._metrics_collector,
        )

        self._logger.info(f"Processing {len(work_items)} images using {processor_name}")
        archive_info = None
        try:
            items = process_batch_fn(
                work_items, service, config.workers, logger=self._logger
            )
            if archive is not None:
                archive_info = archive.close()
        except Exception:
            if archive is not None:
                archive.abort()
            raise

        manifest = ManifestAssembler.build(config.title, items, archive_info)
        self._render(manifest, config.output_dir)

        log_final_statistics(
            time.time() - start_time, len(items), self._metrics_collector, self._logger
        )
        return manifest

    def _prepare_output_dir(self, output_dir: Path) -> None:
        if output_dir.exists():
            if not output_dir.is_dir():
                raise ConfigurationError(f"Output path is not a directory: {output_dir}")
            return
        self._logger.info(f"Creating output directory {output_dir}")
        try:
            output_dir.mkdir(parents=True)
        except OSError as exc:
            raise ConfigurationError(f"Could not create output directory {output_dir}: {exc}") from exc

    def _warn_on_thumbnail_collisions(self, work_items: List[SourceImage]) -> None:
        # Raises ConfigurationError for unnameable paths before anything is written
        names = Counter(build_gallery_item(item.path).filename_thumb for item in work_items)
        for name, count in sorted(names.items()):
            if count > 1:
                self._logger.warning(
                    f"{count} source images share the thumbnail name {name}; "
                    "the last one processed wins"
                )

    def _render(self, manifest: GalleryManifest, output_dir: Path) -> None:
        index_path = output_dir / "index.html"
        self._logger.info(f"Rendering {index_path.name}")
        html = self._renderer.render(manifest.to_context())
        try:
            index_path.write_bytes(html)
            self._renderer.copy_static_assets(output_dir)
        except OSError as exc:
            raise GalleryPipelineError(f"Could not write gallery index: {exc}") from exc
