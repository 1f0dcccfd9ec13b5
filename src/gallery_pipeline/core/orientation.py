"""EXIF orientation handling for the gallery pipeline."""

from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union

from PIL import Image

from .logging_config import get_logger
from .protocols import LoggerProtocol

ORIENTATION_TAG = 0x0112


class Orientation(Enum):
    """Counter-clockwise rotation, in degrees, that makes an image upright.

    Only pure rotations are represented. Mirrored EXIF variants are treated
    as upright.
    """

    DEG_0 = 0
    DEG_90 = 90
    DEG_180 = 180
    DEG_270 = 270


# EXIF 6 is "rotate 90 CW to view", i.e. 270 degrees counter-clockwise.
_TAG_TO_ORIENTATION = {
    1: Orientation.DEG_0,
    6: Orientation.DEG_270,
    3: Orientation.DEG_180,
    8: Orientation.DEG_90,
}


def _debug(logger: Optional[LoggerProtocol], message: str) -> None:
    (logger or get_logger("processor")).debug(message)

def orientation_from_tag(value: Any) -> Orientation:
    """
    Map a raw EXIF orientation value to an Orientation.

    Lists and tuples contribute their first element. Anything that is not
    one of the four rotation values maps to ``Orientation.DEG_0``.
    """
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if isinstance(value, bool) or not isinstance(value, int):
        return Orientation.DEG_0
    return _TAG_TO_ORIENTATION.get(value, Orientation.DEG_0)


def orientation_from_image(
    img: "Image.Image", logger: Optional[LoggerProtocol] = None
) -> Orientation:
    """Read the orientation tag from the primary IFD of an opened image."""
    try:
        exif = img.getexif()
    except Exception as exc:  # noqa: BLE001
        _debug(logger, f"Unreadable EXIF data, assuming upright: {exc}")
        return Orientation.DEG_0
    return orientation_from_tag(exif.get(ORIENTATION_TAG))


def read_orientation(
    path: Union[str, Path], logger: Optional[LoggerProtocol] = None
) -> Orientation:
    """
    Read the orientation of an image file.

    Never raises: a missing file, a non-image or a malformed EXIF block all
    yield ``Orientation.DEG_0``.
    """
    try:
        with Image.open(path) as img:
            return orientation_from_image(img, logger)
    except Exception as exc:  # noqa: BLE001
        _debug(logger, f"Could not read orientation of {path}: {exc}")
        return Orientation.DEG_0
