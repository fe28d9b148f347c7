"""Fetching remote sources with the ``git`` client."""

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

from rich.console import Console

logger = logging.getLogger(__name__)

console = Console()

REMOTE_PREFIXES = ("http://", "https://", "ssh://", "git@")


def is_remote(source: str) -> bool:
    """Whether *source* looks like a git URL rather than a local path."""
    return source.startswith(REMOTE_PREFIXES)


def repo_path_from_url(url: str) -> Path:
    """Relative checkout directory for a clone URL: host, then owner and name.

    ``https://github.com/org/project.git`` and ``git@github.com:org/project``
    both give ``github.com/org/project``.
    """
    url = url.strip().rstrip("/")
    if "://" in url:
        parsed = urlparse(url)
        host, path = parsed.hostname or "", parsed.path
    else:
        # scp-like syntax: user@host:owner/name
        remote, _, path = url.partition(":")
        host = remote.rsplit("@", 1)[-1].lower()

    parts = [part for part in path.split("/") if part and part not in (".", "..")]
    if parts and parts[-1].endswith(".git"):
        parts[-1] = parts[-1][: -len(".git")]
    parts = [part for part in parts if part]

    return Path(host or "repo", *parts)


@dataclass
class ClonedRepo:
    """Where a remote source ended up, or why it did not."""
    url: str
    local_path: Path
    success: bool
    error: str | None = None


class RepoManager:
    """Keeps one working copy per remote source under ``base_path``."""

    def __init__(
        self,
        base_path: Path | str,
        depth: int = 1,
        timeout: int = 300,
    ):
        self.base_path = Path(base_path)
        self.depth = depth
        self.timeout = timeout

    def get_repo_path(self, url: str) -> Path:
        """Checkout directory for *url*."""
        return self.base_path / repo_path_from_url(url)

    def clone_command(self, url: str) -> list[str]:
        args = ["git", "clone"]
        if self.depth > 0:
            args += ["--depth", str(self.depth)]
        return args + [url, str(self.get_repo_path(url))]

    def clone_repo(self, url: str, refresh: bool = False) -> ClonedRepo:
        """Clone *url*, or reuse the working copy a previous run left behind."""
        target = self.get_repo_path(url)

        if refresh:
            self.cleanup_repo(url)

        if (target / ".git").is_dir():
            console.print(f"[dim]Reusing existing clone at {target}[/dim]")
            return ClonedRepo(url=url, local_path=target, success=True)

        target.parent.mkdir(parents=True, exist_ok=True)
        logger.debug("Cloning %s into %s", url, target)

        try:
            completed = subprocess.run(
                self.clone_command(url),
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            return ClonedRepo(url, target, False, "Clone timed out")
        except OSError as e:
            return ClonedRepo(url, target, False, f"Could not run git: {e}")

        if completed.returncode != 0:
            reason = completed.stderr.strip() or f"git exited with {completed.returncode}"
            return ClonedRepo(url, target, False, reason)

        return ClonedRepo(url=url, local_path=target, success=True)

    def cleanup_repo(self, url: str) -> bool:
        """Delete the working copy for *url*. Returns whether anything was removed."""
        target = self.get_repo_path(url)
        if not target.exists():
            return False
        shutil.rmtree(target)
        return True
