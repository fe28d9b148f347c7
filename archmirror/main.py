"""Main entry point for archmirror."""

import argparse
import logging
from pathlib import Path

from rich.console import Console

from .config import MirrorConfig, load_config, parse_summary_order
from .crawler.repo_manager import RepoManager, is_remote
from .errors import ArchMirrorError, CloneError
from .pipeline import MirrorRun, RunReport
from .segmenters.registry import create_default_registry

console = Console()


def resolve_source(source: str, config: MirrorConfig) -> Path:
    """Turn the SOURCE argument into an existing local directory.

    Remote URLs are cloned first; local paths are canonicalised.
    """
    source = source.removeprefix("--")

    if is_remote(source):
        clone_config = config.clone
        manager = RepoManager(
            base_path=clone_config.base_path,
            depth=clone_config.depth,
            timeout=clone_config.timeout,
        )
        console.print(f"[blue]Cloning {source}[/blue]")
        cloned = manager.clone_repo(source, refresh=clone_config.refresh)
        if not cloned.success:
            raise CloneError(f"Failed to clone {source}: {cloned.error}")
        return cloned.local_path.resolve()

    path = Path(source).expanduser()
    try:
        path = path.resolve(strict=True)
    except OSError:
        path = path.absolute()

    if not path.is_dir():
        raise ArchMirrorError(f"Source directory not found: {path}")
    return path


def run_mirror(source_root: Path, config: MirrorConfig, show_progress: bool = True) -> RunReport:
    """Mirror *source_root* using the settings in *config*."""
    registry = create_default_registry(config.extensions)
    run = MirrorRun(
        source_root,
        registry=registry,
        max_workers=config.pipeline.max_workers,
        summary_order=config.pipeline.summary_order,
        show_progress=show_progress,
    )
    return run.execute()


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="archmirror - mirror a source tree as signatures and structure only"
    )
    parser.add_argument(
        "source",
        help="Local directory or git URL to mirror",
    )
    parser.add_argument(
        "--config", "-c",
        help="Path to configuration file (default: config/config.yaml if present)",
    )
    parser.add_argument(
        "--workers", "-w",
        type=int,
        help="Number of worker threads (default: CPU count)",
    )
    parser.add_argument(
        "--order",
        choices=["completion", "path"],
        help="Summary entry order: completion order or sorted by path",
    )
    parser.add_argument(
        "--clone-dir",
        help="Directory remote repositories are cloned into",
    )
    parser.add_argument(
        "--refresh",
        action="store_true",
        help="Delete and re-clone an existing checkout",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable the progress bar",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(Path(args.config) if args.config else None)

        # CLI flags override the config file
        if args.workers:
            config.pipeline.max_workers = args.workers
        if args.order:
            config.pipeline.summary_order = parse_summary_order(args.order)
        if args.clone_dir:
            config.clone.base_path = args.clone_dir
        if args.refresh:
            config.clone.refresh = True

        source_root = resolve_source(args.source, config)
        report = run_mirror(source_root, config, show_progress=not args.no_progress)
    except ArchMirrorError as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1

    console.print("\n[bold]Mirror Complete[/bold]")
    console.print(f"  Output: {report.output_root}")
    console.print(f"  Processed: {report.processed}")
    console.print(f"  Failed: {report.failed}")
    console.print(f"  Skipped: {report.skipped}")
    if report.failed:
        console.print(f"[yellow]See {report.error_path} for details[/yellow]")
    else:
        console.print(f"[green]✓[/green] Summary written to {report.summary_path}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
