"""Shared ZIP archive writer for the full-size download."""

import os
import threading
import zipfile
from pathlib import Path
from typing import Optional, Union

from .exceptions import ArchiveError
from .logging_config import get_logger
from .models import ArchiveInfo
from .protocols import LoggerProtocol


class ArchiveWriter:
    """
    Append-only ZIP archive shared by all image workers of a run.

    Entries are stored uncompressed; JPEG data does not shrink anyway. Each
    ``append`` writes a complete entry while holding the writer's lock, so
    concurrent workers never interleave partial entries. ``close`` writes
    the central directory exactly once.
    """

    def __init__(self, path: Union[str, Path], logger: Optional[LoggerProtocol] = None):
        self.path = Path(path)
        self._logger = logger or get_logger("processor")
        self._lock = threading.Lock()
        self._entry_count = 0
        self._closed = False
        self._info: Optional[ArchiveInfo] = None
        try:
            self._zip = zipfile.ZipFile(self.path, mode="w", compression=zipfile.ZIP_STORED)
        except OSError as exc:
            raise ArchiveError(f"Could not create archive {self.path}: {exc}") from exc

    @property
    def entry_count(self) -> int:
        return self._entry_count

    @property
    def closed(self) -> bool:
        return self._closed

    def append(self, name: str, data: bytes) -> None:
        """Add one stored entry. Safe to call from several threads."""
        with self._lock:
            if self._closed:
                raise ArchiveError(f"Archive {self.path} is already finalized")
            try:
                self._zip.writestr(name, data)
            except (OSError, ValueError, zipfile.BadZipFile) as exc:
                raise ArchiveError(
                    f"Could not add {name} to archive {self.path}: {exc}"
                ) from exc
            self._entry_count += 1

    def close(self) -> ArchiveInfo:
        """Finalize the archive and report its size. Idempotent."""
        with self._lock:
            if self._info is not None:
                return self._info
            try:
                self._zip.close()
                size = os.path.getsize(self.path)
            except OSError as exc:
                raise ArchiveError(f"Could not finalize archive {self.path}: {exc}") from exc
            finally:
                self._closed = True
            self._info = ArchiveInfo(filename=self.path.name, size_bytes=size)
            return self._info

    def abort(self) -> None:
        """Close the archive and remove the incomplete file."""
        with self._lock:
            if not self._closed:
                self._closed = True
                try:
                    self._zip.close()
                except (OSError, ValueError) as exc:
                    self._logger.debug(f"Ignoring error while closing aborted archive: {exc}")
            self._info = None
            if self.path.exists():
                self._logger.warning(f"Removing incomplete archive {self.path}")
                self.path.unlink()

    def __enter__(self) -> "ArchiveWriter":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is None:
            self.close()
        else:
            self.abort()
        return False
