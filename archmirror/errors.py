"""Exception hierarchy for archmirror.

File-level failures are recovered at the pipeline boundary and recorded in the
error log. Only :class:`OutputRootError` aborts a run.
"""

from pathlib import Path


class ArchMirrorError(Exception):
    """Base class for all archmirror errors."""


class FileProcessingError(ArchMirrorError):
    """A failure scoped to a single source file."""

    label = "Error processing"

    def __init__(self, cause: str, path: Path | str | None = None):
        super().__init__(cause)
        self.cause = cause
        self.path = path

    def describe(self) -> str:
        """Render the one-line error log entry."""
        return f"{self.label} {self.path}: {self.cause}"


class ReadFailure(FileProcessingError):
    """The file could not be opened or decoded."""

    label = "Error reading file"


class ParseFailure(FileProcessingError):
    """The language grammar rejected the file's content."""

    label = "Error parsing file"


class WriteFailure(FileProcessingError):
    """The mirrored output or a summary entry could not be written."""

    label = "Error writing file"


class DirectoryCreateFailure(FileProcessingError):
    """A parent directory for mirrored output could not be created."""

    label = "Error creating directory"


class OutputRootError(ArchMirrorError):
    """The top-level output root could not be created."""


class CloneError(ArchMirrorError):
    """A remote repository could not be cloned."""


class ConfigError(ArchMirrorError):
    """The configuration file is missing or invalid."""
