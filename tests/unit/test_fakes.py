"""Tests for the testing fakes."""

import io
import json

import pytest
from PIL import Image

from gallery_pipeline.core.orientation import Orientation, read_orientation
from gallery_pipeline.testing.fakes import (
    FakeLogger,
    FakeTemplateRenderer,
    create_test_image,
    setup_test_gallery_dir,
)


class TestFakeLogger:
    """Tests for FakeLogger."""

    def test_records_levels_and_metadata(self):
        """Test messages are stored with their level and extra fields."""
        logger = FakeLogger()

        logger.info("hello", file="a.jpg")
        logger.error("broken")

        assert [log["level"] for log in logger.get_logs()] == ["INFO", "ERROR"]
        assert logger.get_logs("INFO")[0]["file"] == "a.jpg"

    def test_clear_logs(self):
        """Test clearing recorded messages."""
        logger = FakeLogger()
        logger.warning("careful")

        logger.clear_logs()

        assert logger.get_logs() == []

    def test_should_fail(self):
        """Test simulated logging failures."""
        logger = FakeLogger()
        logger.should_fail = True

        with pytest.raises(Exception, match="Simulated logging failure"):
            logger.debug("anything")


class TestFakeTemplateRenderer:
    """Tests for FakeTemplateRenderer."""

    def test_render_records_context(self, tmp_path):
        """Test contexts and static copies are recorded."""
        renderer = FakeTemplateRenderer()

        output = renderer.render({"title": "T", "images": []})
        renderer.copy_static_assets(tmp_path)

        assert json.loads(output) == {"title": "T", "images": []}
        assert renderer.last_context["title"] == "T"
        assert renderer.static_copies == [tmp_path]


class TestCreateTestImage:
    """Tests for create_test_image."""

    def test_size_and_colors(self):
        """Test the image halves are red and blue."""
        with Image.open(io.BytesIO(create_test_image(40, 20))) as image:
            assert image.size == (40, 20)
            red, _, blue = image.getpixel((2, 10))
            assert red > 200 and blue < 60
            red, _, blue = image.getpixel((37, 10))
            assert blue > 200 and red < 60

    def test_orientation_tag(self, tmp_path):
        """Test the EXIF orientation tag is written."""
        path = tmp_path / "rotated.jpg"
        path.write_bytes(create_test_image(40, 20, orientation=8))

        assert read_orientation(path) == Orientation.DEG_90


def test_setup_test_gallery_dir(tmp_path):
    """Test the fixture directory holds images and decoys."""
    directory = setup_test_gallery_dir(tmp_path / "photos", {"x.jpg": (10, 10)})

    assert sorted(p.name for p in directory.iterdir()) == [
        "nested.jpg",
        "photo.jpeg",
        "readme.txt",
        "x.jpg",
    ]
