"""Tests for repository cloning."""

import subprocess
from pathlib import Path
from types import SimpleNamespace

from archmirror.crawler import repo_manager
from archmirror.crawler.repo_manager import RepoManager, is_remote, repo_path_from_url


def test_repo_path_from_url():
    assert repo_path_from_url("https://github.com/org/project.git") == Path("github.com/org/project")
    assert repo_path_from_url("https://github.com/org/project/") == Path("github.com/org/project")
    assert repo_path_from_url("https://user@GitHub.com:8443/org/project") == Path("github.com/org/project")
    assert repo_path_from_url("git@github.com:org/project.git") == Path("github.com/org/project")
    assert repo_path_from_url("ssh://git@host/group/sub/project.git") == Path("host/group/sub/project")


def test_same_name_under_different_owners_gets_separate_checkouts(tmp_path, monkeypatch):
    calls = []
    monkeypatch.setattr(
        repo_manager.subprocess, "run",
        lambda cmd, **kwargs: calls.append(cmd) or SimpleNamespace(returncode=0, stderr=""),
    )
    manager = RepoManager(tmp_path)
    alice = manager.clone_repo("https://github.com/alice/utils")
    (alice.local_path / ".git").mkdir(parents=True)
    bob = manager.clone_repo("https://github.com/bob/utils")

    assert alice.local_path == tmp_path / "github.com" / "alice" / "utils"
    assert bob.local_path == tmp_path / "github.com" / "bob" / "utils"
    assert len(calls) == 2
    assert calls[1][-2:] == ["https://github.com/bob/utils", str(bob.local_path)]


def test_is_remote():
    assert is_remote("https://github.com/org/project")
    assert is_remote("git@github.com:org/project.git")
    assert is_remote("ssh://git@host/project")
    assert not is_remote("./project")
    assert not is_remote("/srv/code/project")


def test_clone_runs_shallow_git_clone(tmp_path, monkeypatch):
    calls = []

    def fake_run(cmd, **kwargs):
        calls.append((cmd, kwargs))
        return SimpleNamespace(returncode=0, stdout="", stderr="")

    monkeypatch.setattr(repo_manager.subprocess, "run", fake_run)
    manager = RepoManager(tmp_path / "repos", depth=1, timeout=60)
    result = manager.clone_repo("https://github.com/org/project.git")

    assert result.success
    assert result.local_path == tmp_path / "repos" / "github.com" / "org" / "project"
    cmd, kwargs = calls[0]
    assert cmd == [
        "git", "clone", "--depth", "1",
        "https://github.com/org/project.git", str(tmp_path / "repos" / "github.com" / "org" / "project"),
    ]
    assert kwargs["timeout"] == 60


def test_full_clone_when_depth_is_zero(tmp_path, monkeypatch):
    calls = []
    monkeypatch.setattr(
        repo_manager.subprocess, "run",
        lambda cmd, **kwargs: calls.append(cmd) or SimpleNamespace(returncode=0, stderr=""),
    )
    RepoManager(tmp_path, depth=0).clone_repo("https://example.com/app.git")
    assert "--depth" not in calls[0]


def test_clone_failure_reports_stderr(tmp_path, monkeypatch):
    monkeypatch.setattr(
        repo_manager.subprocess, "run",
        lambda cmd, **kwargs: SimpleNamespace(returncode=128, stderr="fatal: repository not found\n"),
    )
    result = RepoManager(tmp_path).clone_repo("https://example.com/missing.git")

    assert not result.success
    assert result.error == "fatal: repository not found"


def test_clone_timeout(tmp_path, monkeypatch):
    def slow(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

    monkeypatch.setattr(repo_manager.subprocess, "run", slow)
    result = RepoManager(tmp_path, timeout=1).clone_repo("https://example.com/slow.git")

    assert not result.success
    assert result.error == "Clone timed out"


def test_existing_clone_is_reused(tmp_path, monkeypatch):
    (tmp_path / "example.com" / "project" / ".git").mkdir(parents=True)

    def unexpected(cmd, **kwargs):
        raise AssertionError("git should not run")

    monkeypatch.setattr(repo_manager.subprocess, "run", unexpected)
    result = RepoManager(tmp_path).clone_repo("https://example.com/project.git")
    assert result.success


def test_refresh_removes_existing_clone(tmp_path, monkeypatch):
    stale = tmp_path / "example.com" / "project"
    (stale / ".git").mkdir(parents=True)
    (stale / "old.py").write_text("x = 1\n")

    monkeypatch.setattr(
        repo_manager.subprocess, "run",
        lambda cmd, **kwargs: SimpleNamespace(returncode=0, stderr=""),
    )
    result = RepoManager(tmp_path).clone_repo("https://example.com/project.git", refresh=True)

    assert result.success
    assert not (stale / "old.py").exists()
