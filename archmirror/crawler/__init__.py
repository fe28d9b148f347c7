"""Source discovery: directory walking and repository cloning."""

from .models import DiscoveredFile, SourceFile
from .repo_manager import ClonedRepo, RepoManager
from .walker import DirectoryWalker, render_tree

__all__ = [
    "DiscoveredFile",
    "SourceFile",
    "ClonedRepo",
    "RepoManager",
    "DirectoryWalker",
    "render_tree",
]
