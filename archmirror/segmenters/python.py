"""Python segmenter."""

from functools import lru_cache

import tree_sitter_python
from tree_sitter import Language as Grammar
from tree_sitter import Node

from .base import Language, Segmenter, SyntaxTree


@lru_cache(maxsize=None)
def _grammar() -> Grammar:
    return Grammar(tree_sitter_python.language())


class PythonSegmenter(Segmenter):
    """Segmenter for Python source files.

    Methods become ``def name(params):`` followed by ``pass``. ``__init__``
    keeps its body, re-indented one level under its header.
    """

    language = Language.PYTHON
    extensions = [".py", ".pyi"]

    root_kinds = frozenset({"module"})
    function_kinds = frozenset({"function_definition", "async_function_definition"})
    container_kinds = frozenset({"class_definition"})
    wrapper_kinds = {"decorated_definition": "definition"}
    initializer_names = frozenset({"__init__"})

    stub_marker = "\n    pass"

    def grammar(self) -> Grammar:
        return _grammar()

    def render_initializer(self, tree: SyntaxTree, node: Node) -> str:
        body = node.child_by_field_name("body")
        if body is None:
            return tree.text(node)
        # One-line bodies (``def __init__(self): self.x = 1``) end up on their own line too
        return f"{tree.header(node, body)}\n{self.indent(tree.text(body))}"

    def format_container(self, header: str, members: list[str]) -> str:
        if not members:
            members = ["pass"]
        return "\n".join([header] + [self.indent(member) for member in members])
