"""Tests for directory discovery and tree rendering."""

from pathlib import Path

from archmirror.crawler.walker import DirectoryWalker, render_tree
from archmirror.segmenters.base import Language


def test_discover_finds_every_regular_file(registry, sample_project):
    files = DirectoryWalker(registry).discover(sample_project)
    rel_paths = {f.rel_path.as_posix() for f in files}
    assert rel_paths == {
        "pkg/foo.py",
        "notes.txt",
        "bad.rs",
        "broken.py",
        "node_modules/dep/index.js",
        "lib/lib.rs",
    }


def test_discover_classifies_by_extension(registry, sample_project):
    files = {f.rel_path.as_posix(): f for f in DirectoryWalker(registry).discover(sample_project)}
    assert files["pkg/foo.py"].language is Language.PYTHON
    assert files["lib/lib.rs"].language is Language.RUST
    assert files["notes.txt"].language is None
    assert files["pkg/foo.py"].path == sample_project / "pkg" / "foo.py"


def test_discover_does_not_skip_excluded_dirs(registry, make_project):
    root = make_project({
        ".git/hooks/pre-commit.py": "print('hook')\n",
        "build/gen.py": "x = 1\n",
    })
    rel_paths = {f.rel_path.as_posix() for f in DirectoryWalker(registry).discover(root)}
    assert rel_paths == {".git/hooks/pre-commit.py", "build/gen.py"}


def test_discover_empty_directory(registry, make_project):
    root = make_project({})
    assert DirectoryWalker(registry).discover(root) == []


def test_discover_does_not_follow_directory_symlinks(registry, make_project, tmp_path):
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "secret.py").write_text("x = 1\n")
    root = make_project({"main.py": "y = 2\n"})
    (root / "linked").symlink_to(outside, target_is_directory=True)

    rel_paths = {f.rel_path.as_posix() for f in DirectoryWalker(registry).discover(root)}
    assert rel_paths == {"main.py"}


def test_render_tree(make_project):
    root = make_project({
        "b.py": "",
        "a.txt": "",
        "src/main.py": "",
        "node_modules/dep/index.js": "",
    }, name="proj")
    assert render_tree(root) == (
        "proj/\n"
        "├── a.txt\n"
        "├── b.py\n"
        "└── src/\n"
        "    └── main.py\n"
    )


def test_render_tree_nested_pipes(make_project):
    root = make_project({
        "pkg/sub/mod.py": "",
        "pkg/util.py": "",
        "setup.cfg": "",
    }, name="proj")
    assert render_tree(root) == (
        "proj/\n"
        "├── pkg/\n"
        "│   ├── sub/\n"
        "│   │   └── mod.py\n"
        "│   └── util.py\n"
        "└── setup.cfg\n"
    )


def test_render_tree_only_hides_directories(make_project):
    # a regular file that happens to share an excluded name stays visible
    root = make_project({"build": "not a directory\n"}, name="proj")
    assert render_tree(root) == "proj/\n└── build\n"


def test_render_tree_custom_exclusions(make_project):
    root = make_project({"docs/index.md": "", "main.py": ""}, name="proj")
    assert render_tree(root, excluded=frozenset({"docs"})) == "proj/\n└── main.py\n"
