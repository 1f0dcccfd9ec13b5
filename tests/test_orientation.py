"""Tests for EXIF orientation reading."""

from unittest.mock import Mock

import pytest

from gallery_pipeline.core.orientation import (
    Orientation,
    orientation_from_image,
    orientation_from_tag,
    read_orientation,
)
from gallery_pipeline.testing.fakes import FakeLogger, create_test_image


class TestOrientationFromTag:
    """Tests for orientation_from_tag function."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (1, Orientation.DEG_0),
            (3, Orientation.DEG_180),
            (6, Orientation.DEG_270),
            (8, Orientation.DEG_90),
        ],
    )
    def test_rotation_values(self, value, expected):
        """Test the four rotation tag values."""
        assert orientation_from_tag(value) is expected

    @pytest.mark.parametrize("value", [0, 2, 4, 5, 7, 9, 255, -1])
    def test_mirrored_and_unknown_values_are_upright(self, value):
        """Test mirrored and out-of-range values collapse to DEG_0."""
        assert orientation_from_tag(value) is Orientation.DEG_0

    @pytest.mark.parametrize("value", [None, "6", 6.0, b"\x06", True, {"value": 6}])
    def test_non_integer_shapes_are_upright(self, value):
        """Test values that are not integers collapse to DEG_0."""
        assert orientation_from_tag(value) is Orientation.DEG_0

    def test_sequence_uses_first_element(self):
        """Test list and tuple values use their first element."""
        assert orientation_from_tag([6]) is Orientation.DEG_270
        assert orientation_from_tag((8, 1)) is Orientation.DEG_90
        assert orientation_from_tag([]) is Orientation.DEG_0


class TestOrientationFromImage:
    """Tests for orientation_from_image function."""

    def test_missing_tag(self):
        """Test images without an orientation tag are upright."""
        mock_img = Mock()
        mock_img.getexif.return_value = {}

        assert orientation_from_image(mock_img) is Orientation.DEG_0

    def test_tag_present(self):
        """Test the orientation tag is read from the primary IFD."""
        mock_img = Mock()
        mock_img.getexif.return_value = {0x0112: 6}

        assert orientation_from_image(mock_img) is Orientation.DEG_270

    def test_unreadable_exif(self):
        """Test EXIF parse failures degrade to DEG_0."""
        mock_img = Mock()
        mock_img.getexif.side_effect = SyntaxError("bad exif")

        assert orientation_from_image(mock_img) is Orientation.DEG_0

    def test_unreadable_exif_is_logged_to_given_logger(self):
        """Test the fallback is reported through the caller's logger."""
        mock_img = Mock()
        mock_img.getexif.side_effect = SyntaxError("bad exif")
        logger = FakeLogger()

        orientation_from_image(mock_img, logger)

        assert "bad exif" in logger.get_logs("DEBUG")[0]["message"]


class TestReadOrientation:
    """Tests for read_orientation function."""

    @pytest.mark.parametrize(
        "tag,expected",
        [
            (1, Orientation.DEG_0),
            (3, Orientation.DEG_180),
            (6, Orientation.DEG_270),
            (8, Orientation.DEG_90),
            (2, Orientation.DEG_0),
            (5, Orientation.DEG_0),
        ],
    )
    def test_read_orientation_from_file(self, tmp_path, tag, expected):
        """Test orientation is read from a JPEG's EXIF block."""
        path = tmp_path / "photo.jpg"
        path.write_bytes(create_test_image(40, 20, orientation=tag))

        assert read_orientation(path) is expected

    def test_read_orientation_is_idempotent(self, tmp_path):
        """Test repeated reads of the same file agree."""
        path = tmp_path / "photo.jpg"
        path.write_bytes(create_test_image(40, 20, orientation=8))

        results = {read_orientation(path) for _ in range(3)}

        assert results == {Orientation.DEG_90}

    def test_read_orientation_without_exif(self, tmp_path):
        """Test JPEGs without EXIF are upright."""
        path = tmp_path / "plain.jpg"
        path.write_bytes(create_test_image(40, 20))

        assert read_orientation(path) is Orientation.DEG_0

    def test_read_orientation_missing_file(self, tmp_path):
        """Test a missing file degrades to DEG_0 instead of raising."""
        assert read_orientation(tmp_path / "missing.jpg") is Orientation.DEG_0

    def test_read_orientation_not_an_image(self, tmp_path):
        """Test a non-image file degrades to DEG_0 instead of raising."""
        path = tmp_path / "fake.jpg"
        path.write_text("definitely not a jpeg")

        assert read_orientation(path) is Orientation.DEG_0

    def test_read_orientation_logs_to_given_logger(self, tmp_path):
        """Test read failures are reported through the caller's logger."""
        logger = FakeLogger()

        read_orientation(tmp_path / "missing.jpg", logger)

        assert "missing.jpg" in logger.get_logs("DEBUG")[0]["message"]
