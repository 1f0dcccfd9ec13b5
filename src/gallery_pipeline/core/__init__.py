"""Core utilities and shared components for the gallery pipeline."""

from .image_utils import (
    decode_image,
    encode_jpeg,
    fit_within,
    is_panorama,
    rotate_image,
    transform_image,
)
from .logging_config import get_logger, setup_logger
from .exceptions import (
    GalleryPipelineError,
    ConfigurationError,
    ImageProcessingError,
    ArchiveError,
    batch_error_handler,
)
from .models import (
    ArchiveInfo,
    GalleryConfig,
    GalleryItem,
    GalleryManifest,
    SourceImage,
)
from .naming import archive_filename, build_gallery_item, stem_from_thumbnail
from .orientation import Orientation, orientation_from_image, read_orientation

__all__ = [
    "GalleryConfig",
    "SourceImage",
    "GalleryItem",
    "ArchiveInfo",
    "GalleryManifest",
    "Orientation",
    "orientation_from_image",
    "read_orientation",
    "decode_image",
    "encode_jpeg",
    "fit_within",
    "is_panorama",
    "rotate_image",
    "transform_image",
    "archive_filename",
    "build_gallery_item",
    "stem_from_thumbnail",
    "setup_logger",
    "get_logger",
    "GalleryPipelineError",
    "ConfigurationError",
    "ImageProcessingError",
    "ArchiveError",
    "batch_error_handler",
]
