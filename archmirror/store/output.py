"""Output root allocation and the shared summary / error sinks."""

import logging
import random
import string
import threading
from pathlib import Path

from ..errors import OutputRootError, WriteFailure

logger = logging.getLogger(__name__)

OUTPUT_ROOT_PREFIX = "_arch_"
SUFFIX_LENGTH = 6
SUMMARY_FILE_NAME = "summary.txt"
ERROR_FILE_NAME = "error.txt"
ENTRY_SEPARATOR = "=" * 80


def allocate_output_root(source_root: Path, attempts: int = 100) -> Path:
    """Create a fresh ``_arch_XXXXXX`` directory next to *source_root*.

    The suffix is re-drawn until it names a directory that does not exist yet.
    Any other failure is fatal for the run.
    """
    parent = Path(source_root).parent
    alphabet = string.ascii_letters + string.digits

    for _ in range(attempts):
        suffix = "".join(random.choices(alphabet, k=SUFFIX_LENGTH))
        candidate = parent / f"{OUTPUT_ROOT_PREFIX}{suffix}"
        try:
            candidate.mkdir()
        except FileExistsError:
            continue
        except OSError as e:
            raise OutputRootError(f"Could not create output directory {candidate}: {e}") from e
        return candidate

    raise OutputRootError(f"Could not find a free output directory name under {parent}")


class SummaryWriter:
    """Append-only summary document and error log for one run.

    Each append holds the lock for its whole write, so entries never
    interleave no matter which thread calls in.
    """

    def __init__(self, output_root: Path | str):
        self.output_root = Path(output_root)
        self.summary_path = self.output_root / SUMMARY_FILE_NAME
        self.error_path = self.output_root / ERROR_FILE_NAME
        self.entry_count = 0
        self.error_count = 0
        self._lock = threading.Lock()

        try:
            self._summary = self.summary_path.open("w", encoding="utf-8")
            self._errors = self.error_path.open("w", encoding="utf-8")
        except OSError as e:
            raise OutputRootError(f"Could not open output files in {self.output_root}: {e}") from e

    def __enter__(self) -> "SummaryWriter":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def write_tree(self, tree: str) -> None:
        """Write the rendered directory tree at the top of the summary."""
        with self._lock:
            try:
                self._summary.write(tree if tree.endswith("\n") else f"{tree}\n")
                self._summary.write("\n")
                self._summary.flush()
            except OSError as e:
                self._write_error(WriteFailure(str(e), path=self.summary_path).describe())

    def append_entry(self, rel_path: str, text: str) -> bool:
        """Append one processed file's section. Returns False if the write failed."""
        body = text if not text or text.endswith("\n") else f"{text}\n"
        with self._lock:
            try:
                self._summary.write(f"File: {rel_path}\n{body}{ENTRY_SEPARATOR}\n")
                self._summary.flush()
            except OSError as e:
                self._write_error(
                    WriteFailure(f"summary entry failed: {e}", path=rel_path).describe()
                )
                return False
            self.entry_count += 1
            return True

    def append_error(self, message: str) -> None:
        """Append one line to the error log."""
        with self._lock:
            self._write_error(message)

    def close(self) -> None:
        with self._lock:
            for handle in (self._summary, self._errors):
                if not handle.closed:
                    handle.close()

    def _write_error(self, message: str) -> None:
        line = " ".join(message.splitlines()) or "unknown error"
        try:
            self._errors.write(f"{line}\n")
            self._errors.flush()
        except OSError as e:
            logger.error("Could not write to error log %s: %s (%s)", self.error_path, e, line)
            return
        self.error_count += 1
