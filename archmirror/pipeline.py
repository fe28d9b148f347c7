"""Concurrent file pipeline.

:class:`FilePipeline` handles one file: read, segment, write the mirror
copy. :class:`MirrorRun` fans every classified file out to a bounded worker
pool and is the single writer of the summary document and error log.
"""

import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

from .config import SummaryOrder
from .crawler.models import DiscoveredFile, SourceFile
from .crawler.walker import DirectoryWalker, render_tree
from .errors import DirectoryCreateFailure, FileProcessingError, ReadFailure, WriteFailure
from .segmenters.base import Segmenter
from .segmenters.registry import SegmenterRegistry, create_default_registry
from .store.output import (
    ERROR_FILE_NAME,
    SUMMARY_FILE_NAME,
    SummaryWriter,
    allocate_output_root,
)

logger = logging.getLogger(__name__)

console = Console()


class OutcomeStatus(str, Enum):
    PROCESSED = "processed"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class FileOutcome:
    """Result of running one file through the pipeline."""
    rel_path: str
    status: OutcomeStatus
    text: str = ""
    error: str | None = None


@dataclass
class RunReport:
    """Counts and locations for a completed run."""
    source_root: Path
    output_root: Path
    processed: int = 0
    failed: int = 0
    skipped: int = 0

    @property
    def summary_path(self) -> Path:
        return self.output_root / SUMMARY_FILE_NAME

    @property
    def error_path(self) -> Path:
        return self.output_root / ERROR_FILE_NAME


class FilePipeline:
    """Read -> segment -> write for a single file, with failures kept local."""

    def __init__(self, registry: SegmenterRegistry, output_root: Path):
        self.registry = registry
        self.output_root = Path(output_root)

    def mirror_path(self, rel_path: Path) -> Path:
        """Location of the simplified copy of *rel_path*."""
        return self.output_root / rel_path

    def process(self, discovered: DiscoveredFile) -> FileOutcome:
        """Process one file. Never raises for file-level failures."""
        rel = discovered.rel_path.as_posix()

        segmenter = self.registry.create(discovered.language)
        if segmenter is None:
            return FileOutcome(rel_path=rel, status=OutcomeStatus.SKIPPED)

        try:
            source = self._read(discovered)
            text = self._segment(segmenter, source)
            self._write(discovered.rel_path, text)
        except FileProcessingError as e:
            if e.path is None:
                e.path = discovered.path
            logger.debug("%s", e.describe())
            return FileOutcome(rel_path=rel, status=OutcomeStatus.FAILED, error=e.describe())

        return FileOutcome(rel_path=rel, status=OutcomeStatus.PROCESSED, text=text)

    def _read(self, discovered: DiscoveredFile) -> SourceFile:
        try:
            text = discovered.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ReadFailure(str(e), path=discovered.path) from e

        return SourceFile(
            path=discovered.path,
            rel_path=discovered.rel_path,
            language=discovered.language,
            text=text,
        )

    def _segment(self, segmenter: Segmenter, source: SourceFile) -> str:
        # ParseFailure propagates with the path filled in by the caller
        return segmenter.simplify(source.text)

    def _write(self, rel_path: Path, text: str) -> None:
        target = self.mirror_path(rel_path)

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryCreateFailure(str(e), path=target.parent) from e

        try:
            target.write_text(text, encoding="utf-8")
        except OSError as e:
            raise WriteFailure(str(e), path=target) from e


class MirrorRun:
    """Mirror a whole source tree into a fresh output root.

    Usage::

        report = MirrorRun(Path("my-project")).execute()
        print(report.summary_path)
    """

    def __init__(
        self,
        source_root: Path | str,
        registry: SegmenterRegistry | None = None,
        max_workers: int | None = None,
        summary_order: SummaryOrder = SummaryOrder.COMPLETION,
        show_progress: bool = True,
    ):
        # The output root is allocated next to the resolved tree
        self.source_root = Path(source_root).resolve()
        self.registry = registry or create_default_registry()
        self.max_workers = max_workers or os.cpu_count() or 1
        self.summary_order = SummaryOrder(summary_order)
        self.show_progress = show_progress

    def execute(self) -> RunReport:
        """Run the whole pipeline and join every unit before returning.

        Raises :class:`~archmirror.errors.OutputRootError` if the output root
        cannot be created; nothing else aborts the run.
        """
        output_root = allocate_output_root(self.source_root)
        report = RunReport(source_root=self.source_root, output_root=output_root)

        files = DirectoryWalker(self.registry).discover(self.source_root)
        classified = [f for f in files if self.registry.supports(f.path)]
        report.skipped = len(files) - len(classified)

        pipeline = FilePipeline(self.registry, output_root)

        with SummaryWriter(output_root) as writer:
            writer.write_tree(render_tree(self.source_root))

            pending: list[FileOutcome] = []

            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TextColumn("{task.completed}/{task.total}"),
                console=console,
                disable=not self.show_progress,
            ) as progress:
                task = progress.add_task("Mirroring files...", total=len(classified))

                with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                    futures = {
                        executor.submit(pipeline.process, discovered): discovered
                        for discovered in classified
                    }

                    for future in as_completed(futures):
                        outcome = self._collect(future, futures[future])

                        if outcome.status is OutcomeStatus.FAILED and self.show_progress:
                            progress.console.print(
                                f"  [red]✗[/red] {outcome.rel_path}: {outcome.error}"
                            )

                        if self.summary_order is SummaryOrder.COMPLETION:
                            self._record(writer, outcome, report)
                        else:
                            pending.append(outcome)

                        progress.advance(task)

            for outcome in sorted(pending, key=lambda o: o.rel_path):
                self._record(writer, outcome, report)

        logger.info(
            "Mirrored %s into %s: %d processed, %d failed, %d skipped",
            self.source_root, output_root, report.processed, report.failed, report.skipped,
        )
        return report

    def _collect(self, future: Future, discovered: DiscoveredFile) -> FileOutcome:
        try:
            return future.result()
        except Exception as e:
            logger.exception("Unexpected error processing %s", discovered.path)
            return FileOutcome(
                rel_path=discovered.rel_path.as_posix(),
                status=OutcomeStatus.FAILED,
                error=f"Unexpected error processing {discovered.path}: {e}",
            )

    def _record(self, writer: SummaryWriter, outcome: FileOutcome, report: RunReport) -> None:
        if outcome.status is OutcomeStatus.PROCESSED:
            writer.append_entry(outcome.rel_path, outcome.text)
            report.processed += 1
        elif outcome.status is OutcomeStatus.FAILED:
            writer.append_error(outcome.error or f"Error processing {outcome.rel_path}")
            report.failed += 1
        else:
            report.skipped += 1
