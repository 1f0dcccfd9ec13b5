"""Testing utilities and fakes for the gallery pipeline."""

from .fakes import (
    FakeLogger,
    FakeTemplateRenderer,
    create_test_image,
    setup_test_gallery_dir,
)

__all__ = [
    "FakeLogger",
    "FakeTemplateRenderer",
    "create_test_image",
    "setup_test_gallery_dir",
]
