"""Image processing utilities for the gallery pipeline."""

import io
from pathlib import Path
from typing import Tuple, Union

from PIL import Image

from .exceptions import ImageProcessingError
from .orientation import Orientation

# Width/height ratio above which an image counts as a panorama
PANORAMA_RATIO = 2.0

# Thumbnails are bounded by height; width may be up to this many heights
THUMBNAIL_WIDTH_FACTOR = 4

RESAMPLE_FILTER = Image.Resampling.BICUBIC

_TRANSPOSE_FOR = {
    Orientation.DEG_90: Image.Transpose.ROTATE_90,
    Orientation.DEG_180: Image.Transpose.ROTATE_180,
    Orientation.DEG_270: Image.Transpose.ROTATE_270,
}


def decode_image(data: bytes, path: Union[str, Path]) -> "Image.Image":
    """
    Decode image bytes into a fully loaded PIL Image.

    Args:
        data: Raw file contents
        path: Source path, used in error messages only

    Returns:
        Loaded PIL Image

    Raises:
        ImageProcessingError: If the data is not a decodable image
    """
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
        raise ImageProcessingError(f"Could not decode image {path}: {exc}") from exc
    return image


def is_panorama(width: int, height: int) -> bool:
    """Return True if the image is more than twice as wide as it is high."""
    if height <= 0:
        return False
    return width / height > PANORAMA_RATIO


def fit_within(
    width: int, height: int, max_width: int, max_height: int
) -> Tuple[int, int]:
    """
    Calculate dimensions that fit inside a bounding box, preserving aspect ratio.

    Images already inside the box keep their size.

    Args:
        width: Current width
        height: Current height
        max_width: Bounding box width
        max_height: Bounding box height

    Returns:
        (width, height) of the scaled image
    """
    if width <= max_width and height <= max_height:
        return width, height

    ratio = min(max_width / width, max_height / height)
    return max(1, round(width * ratio)), max(1, round(height * ratio))


def rotate_image(img: "Image.Image", orientation: Orientation) -> "Image.Image":
    """Apply the corrective rotation for an orientation."""
    method = _TRANSPOSE_FOR.get(orientation)
    if method is None:
        return img
    return img.transpose(method)


def transform_image(
    img: "Image.Image",
    max_width: int,
    max_height: int,
    orientation: Orientation,
    exempt_panoramas: bool = False,
) -> "Image.Image":
    """
    Rotate and downscale an image to fit a bounding box.

    Panoramas are returned untouched when ``exempt_panoramas`` is set, so
    their long side is not clipped to the bound meant for regular photos.
    """
    if exempt_panoramas and is_panorama(img.width, img.height):
        return img

    rotated = rotate_image(img, orientation)
    size = fit_within(rotated.width, rotated.height, max_width, max_height)
    if size == rotated.size:
        return rotated
    return rotated.resize(size, RESAMPLE_FILTER)


def thumbnail_box(thumbnail_height: int) -> Tuple[int, int]:
    """Bounding box used for thumbnails."""
    return thumbnail_height * THUMBNAIL_WIDTH_FACTOR, thumbnail_height


def encode_jpeg(img: "Image.Image") -> bytes:
    """Encode an image as JPEG with the library default quality."""
    if img.mode not in ("RGB", "L"):
        img = img.convert("RGB")
    output = io.BytesIO()
    img.save(output, format="JPEG")
    return output.getvalue()
