"""Directory traversal and the human-readable tree view."""

import logging
import os
from pathlib import Path

from ..segmenters.registry import SegmenterRegistry
from .models import DiscoveredFile

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Hidden from the rendered tree only. Files below them are still segmented.
TREE_EXCLUDED_DIRS = frozenset({
    # Version control
    ".git", ".hg", ".svn",
    # Dependency caches / virtualenvs
    "node_modules", "vendor", ".venv", "venv", "__pycache__",
    ".pytest_cache", ".mypy_cache", ".tox", ".gradle",
    # Build outputs
    "target", "build", "dist", "out", ".next",
    # Coverage artifacts
    "coverage", "htmlcov", ".nyc_output",
    # IDE caches
    ".idea", ".vscode",
})

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE = "│   "
SPACE = "    "


class DirectoryWalker:
    """Enumerate and classify every regular file under a root."""

    def __init__(self, registry: SegmenterRegistry):
        self.registry = registry

    def discover(self, root: Path) -> list[DiscoveredFile]:
        """Depth-first walk with an explicit stack; nothing is excluded.

        Directory symlinks are listed as entries but not descended into.
        """
        root = Path(root)
        found: list[DiscoveredFile] = []
        stack = [root]

        while stack:
            current = stack.pop()
            try:
                with os.scandir(current) as it:
                    entries = list(it)
            except OSError as e:
                logger.warning("Could not list %s: %s", current, e)
                continue

            for entry in entries:
                path = Path(entry.path)
                try:
                    if entry.is_dir(follow_symlinks=False):
                        stack.append(path)
                    elif entry.is_file():
                        found.append(DiscoveredFile(
                            path=path,
                            rel_path=path.relative_to(root),
                            language=self.registry.language_for(path),
                        ))
                except OSError as e:
                    logger.warning("Could not stat %s: %s", path, e)

        logger.debug("Discovered %d files under %s", len(found), root)
        return found


def render_tree(root: Path, excluded: frozenset[str] = TREE_EXCLUDED_DIRS) -> str:
    """Render *root* as an ASCII tree, hiding noise directories by exact name."""
    root = Path(root)
    lines: list[str] = [f"{root.name}/"]
    _render_children(root, "", excluded, lines)
    return "\n".join(lines) + "\n"


def _render_children(directory: Path, prefix: str, excluded: frozenset[str], lines: list[str]) -> None:
    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        logger.warning("Could not list %s: %s", directory, e)
        return

    visible = [
        entry for entry in entries
        if not (entry.name in excluded and _is_real_dir(entry))
    ]

    for index, entry in enumerate(visible):
        is_last = index == len(visible) - 1
        connector = LAST_BRANCH if is_last else BRANCH

        if _is_real_dir(entry):
            lines.append(f"{prefix}{connector}{entry.name}/")
            _render_children(entry, prefix + (SPACE if is_last else PIPE), excluded, lines)
        else:
            lines.append(f"{prefix}{connector}{entry.name}")


def _is_real_dir(path: Path) -> bool:
    return path.is_dir() and not path.is_symlink()
