"""Shared test fixtures."""

from pathlib import Path

import pytest

from archmirror.segmenters.registry import create_default_registry


FOO_PY = '''class Foo:
    def __init__(self, x):
        self.x = x

    def bar(self):
        return self.x * 2
'''

FOO_PY_SIMPLIFIED = (
    "class Foo:\n"
    "    def __init__(self, x):\n"
    "        self.x = x\n"
    "    def bar(self):\n"
    "        pass\n"
)

LIB_RS = '''pub struct Config {
    pub name: String,
}

pub fn load(path: &str) -> Config {
    Config { name: path.to_string() }
}
'''


@pytest.fixture
def registry():
    """The default dispatch table."""
    return create_default_registry()


@pytest.fixture
def make_project(tmp_path):
    """Build a source tree under ``tmp_path/<name>`` from a ``{rel_path: content}`` dict."""

    def _make(files: dict[str, str | bytes], name: str = "project") -> Path:
        root = tmp_path / name
        root.mkdir()
        for rel, content in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        return root

    return _make


@pytest.fixture
def sample_project(make_project):
    """A small mixed tree: valid, unsupported, undecodable and malformed files."""
    return make_project({
        "pkg/foo.py": FOO_PY,
        "notes.txt": "just some notes\n",
        "bad.rs": b"fn main() { \xff\xfe }\n",
        "broken.py": "def broken(:\n    pass\n",
        "node_modules/dep/index.js": "function dep(a) {\n  return a;\n}\n",
        "lib/lib.rs": LIB_RS,
    })


@pytest.fixture
def foo_source():
    """``class Foo`` with an initializer and one ordinary method."""
    return FOO_PY


@pytest.fixture
def foo_simplified():
    return FOO_PY_SIMPLIFIED
