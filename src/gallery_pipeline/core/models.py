"""Shared data models for the gallery pipeline."""

from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

MIB = 1024 * 1024


class GalleryConfig(BaseModel):
    """Configuration for one gallery build."""

    input_dir: Path
    output_dir: Path
    title: str = "Gallery"
    thumbnail_height: int = Field(default=300, gt=0)
    max_large_size: Optional[int] = Field(default=None, gt=0)
    exempt_panoramas: bool = False
    create_archive: bool = True
    skip_processing: bool = False
    processor: Literal["serial", "multithread"] = "serial"
    workers: Optional[int] = Field(default=None, gt=0)
    debug: bool = False


class SourceImage(BaseModel):
    """A JPEG discovered in the input directory."""

    model_config = ConfigDict(frozen=True)

    path: Path

    @property
    def file_name(self) -> str:
        return self.path.name

    @property
    def stem(self) -> str:
        return self.path.stem


class GalleryItem(BaseModel):
    """Public file names of one gallery entry."""

    model_config = ConfigDict(frozen=True)

    filename_full: str
    filename_thumb: str


class ArchiveInfo(BaseModel):
    """Name and size of a finalized download archive."""

    filename: str
    size_bytes: int = 0

    @property
    def size_mib(self) -> int:
        """Archive size in whole mebibytes, rounded up."""
        return (self.size_bytes + MIB - 1) // MIB


class GalleryManifest(BaseModel):
    """Everything the index template needs to render the gallery."""

    title: str
    version: str
    generated_at: str
    download_filename: Optional[str] = None
    download_size_mib: Optional[int] = None
    images: List[GalleryItem] = Field(default_factory=list)

    def to_context(self) -> Dict[str, Any]:
        """Plain dict handed to the template renderer."""
        return self.model_dump()
