"""Shared data models for the walker and the file pipeline."""

from dataclasses import dataclass
from pathlib import Path

from ..segmenters.base import Language


@dataclass(frozen=True)
class DiscoveredFile:
    """A regular file found under the source root."""
    path: Path
    rel_path: Path
    language: Language | None


@dataclass(frozen=True)
class SourceFile:
    """A file whose text has been read and is ready for segmentation."""
    path: Path
    rel_path: Path
    language: Language
    text: str
