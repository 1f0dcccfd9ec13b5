"""File naming rules for gallery items and the download archive."""

import re
from pathlib import Path
from typing import Union

from .exceptions import ConfigurationError
from .models import GalleryItem

THUMBNAIL_SUFFIX = ".thumb.jpg"

_ARCHIVE_UNSAFE = re.compile(r"[^A-Za-z0-9._-]")


def build_gallery_item(path: Union[str, Path]) -> GalleryItem:
    """
    Derive the output file names for a source image.

    The full-size name is the source file name unchanged. The thumbnail is
    named after the stem, so ``a.jpg`` and ``a.JPG`` share ``a.thumb.jpg``.

    Raises:
        ConfigurationError: If the path has no file name or stem
    """
    text = str(path)
    if not text or text.endswith(("/", "\\")):
        raise ConfigurationError(f"Could not determine file name for {text!r}")

    source = Path(text)
    if not source.name or source.name in (".", ".."):
        raise ConfigurationError(f"Could not determine file name for {text!r}")
    if not source.stem:
        raise ConfigurationError(f"Could not determine file stem for {text!r}")

    return GalleryItem(
        filename_full=source.name,
        filename_thumb=f"{source.stem}{THUMBNAIL_SUFFIX}",
    )


def stem_from_thumbnail(filename_thumb: str) -> str:
    """Recover the source stem from a thumbnail file name."""
    if not filename_thumb.endswith(THUMBNAIL_SUFFIX):
        raise ValueError(f"Not a thumbnail file name: {filename_thumb}")
    return filename_thumb[: -len(THUMBNAIL_SUFFIX)]


def archive_filename(title: str) -> str:
    """
    Build the download archive name from a gallery title.

    >>> archive_filename("My Trip 2024")
    'My_Trip_2024.zip'
    """
    return _ARCHIVE_UNSAFE.sub("", title.replace(" ", "_")) + ".zip"
