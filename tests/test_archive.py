"""Tests for the shared ZIP archive writer."""

import threading
import zipfile

import pytest

from gallery_pipeline.core.archive import ArchiveWriter
from gallery_pipeline.core.exceptions import ArchiveError
from gallery_pipeline.testing.fakes import FakeLogger


class TestArchiveWriter:
    """Tests for ArchiveWriter."""

    def test_append_and_close(self, tmp_path):
        """Test entries are written in append order and stored uncompressed."""
        path = tmp_path / "gallery.zip"
        writer = ArchiveWriter(path)

        writer.append("b.jpg", b"second image")
        writer.append("a.jpg", b"first image")
        info = writer.close()

        assert info.filename == "gallery.zip"
        assert info.size_bytes == path.stat().st_size
        assert writer.entry_count == 2
        with zipfile.ZipFile(path) as archive:
            assert archive.namelist() == ["b.jpg", "a.jpg"]
            assert archive.read("a.jpg") == b"first image"
            assert all(
                entry.compress_type == zipfile.ZIP_STORED for entry in archive.infolist()
            )

    def test_empty_archive_is_valid(self, tmp_path):
        """Test an archive with no entries is still finalized."""
        path = tmp_path / "empty.zip"

        info = ArchiveWriter(path).close()

        assert info.size_bytes > 0
        with zipfile.ZipFile(path) as archive:
            assert archive.namelist() == []

    def test_close_is_idempotent(self, tmp_path):
        """Test closing twice returns the same info."""
        writer = ArchiveWriter(tmp_path / "gallery.zip")
        writer.append("a.jpg", b"data")

        first = writer.close()
        second = writer.close()

        assert first == second
        assert writer.closed

    def test_append_after_close_fails(self, tmp_path):
        """Test a finalized archive is never mutated again."""
        writer = ArchiveWriter(tmp_path / "gallery.zip")
        writer.close()

        with pytest.raises(ArchiveError, match="already finalized"):
            writer.append("late.jpg", b"data")

    def test_abort_removes_partial_archive(self, tmp_path):
        """Test abort deletes the incomplete file."""
        path = tmp_path / "gallery.zip"
        writer = ArchiveWriter(path)
        writer.append("a.jpg", b"data")

        writer.abort()

        assert not path.exists()
        assert writer.closed

    def test_abort_reports_to_given_logger(self, tmp_path):
        """Test abort warns through the logger the writer was given."""
        logger = FakeLogger()
        writer = ArchiveWriter(tmp_path / "gallery.zip", logger=logger)

        writer.abort()

        warnings = logger.get_logs("WARNING")
        assert len(warnings) == 1
        assert "Removing incomplete archive" in warnings[0]["message"]

    def test_context_manager_closes_on_success(self, tmp_path):
        """Test leaving the context normally finalizes the archive."""
        path = tmp_path / "gallery.zip"

        with ArchiveWriter(path) as writer:
            writer.append("a.jpg", b"data")

        with zipfile.ZipFile(path) as archive:
            assert archive.namelist() == ["a.jpg"]

    def test_context_manager_aborts_on_error(self, tmp_path):
        """Test an exception inside the context removes the archive."""
        path = tmp_path / "gallery.zip"

        with pytest.raises(RuntimeError):
            with ArchiveWriter(path) as writer:
                writer.append("a.jpg", b"data")
                raise RuntimeError("worker failed")

        assert not path.exists()

    def test_unwritable_location(self, tmp_path):
        """Test creating an archive in a missing directory raises ArchiveError."""
        with pytest.raises(ArchiveError, match="Could not create archive"):
            ArchiveWriter(tmp_path / "missing" / "gallery.zip")

    def test_concurrent_appends_do_not_interleave(self, tmp_path):
        """Test appends from many threads produce a valid archive."""
        path = tmp_path / "gallery.zip"
        writer = ArchiveWriter(path)
        payload = bytes(range(256)) * 64

        def worker(worker_id: int) -> None:
            for i in range(10):
                writer.append(f"w{worker_id}_{i}.jpg", payload)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        writer.close()

        with zipfile.ZipFile(path) as archive:
            assert len(archive.namelist()) == 80
            assert archive.testzip() is None
            assert all(archive.read(name) == payload for name in archive.namelist())
