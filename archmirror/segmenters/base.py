"""Shared segmentation framework.

A segmenter parses a file with tree-sitter and walks the syntax tree once,
top-down, deciding for every node whether to recurse into it, copy it
verbatim, or replace it with a signature-only stub. Language modules only
declare which node kinds belong to which policy; the walk itself lives here.
"""

import textwrap
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from tree_sitter import Language as Grammar
from tree_sitter import Node, Parser, Tree

from ..errors import ParseFailure


class Language(str, Enum):
    """Closed set of language identifiers known to the dispatch table."""

    PYTHON = "python"
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    TSX = "tsx"
    JAVA = "java"
    RUST = "rust"
    GO = "go"
    KOTLIN = "kotlin"
    # Recognised extensions without a registered segmenter
    C = "c"
    CPP = "cpp"
    CSHARP = "csharp"
    RUBY = "ruby"
    SCALA = "scala"
    LUA = "lua"
    PERL = "perl"
    PHP = "php"
    ELIXIR = "elixir"
    COBOL = "cobol"


def _strip_margin(line: str, width: int) -> str:
    """Remove up to *width* leading blanks from *line*."""
    index = 0
    while index < width and index < len(line) and line[index] in " \t":
        index += 1
    return line[index:]


@dataclass(frozen=True)
class SyntaxTree:
    """A parsed file: the tree-sitter tree plus the bytes it was built from."""

    tree: Tree
    source: bytes

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def margin(self, offset: int) -> int:
        """Width of the indentation of the line containing *offset*."""
        line_start = self.source.rfind(b"\n", 0, offset) + 1
        width = 0
        while line_start + width < offset and self.source[line_start + width] in b" \t":
            width += 1
        return width

    def span(self, start_byte: int, end_byte: int) -> str:
        """Source text between two offsets with its indentation made relative.

        Continuation lines lose the indentation of the line the span starts
        on, so the caller can re-indent the text to any nesting level.
        """
        text = self.source[start_byte:end_byte].decode("utf-8", errors="replace")
        width = self.margin(start_byte)
        if not width or "\n" not in text:
            return text
        first, *rest = text.split("\n")
        return "\n".join([first] + [_strip_margin(line, width) for line in rest])

    def text(self, node: Node) -> str:
        """Verbatim text of *node*."""
        return self.span(node.start_byte, node.end_byte).rstrip()

    def header(self, node: Node, body: Node) -> str:
        """Everything in *node* that precedes its *body*."""
        return self.span(node.start_byte, body.start_byte).rstrip()


def first_error(node: Node) -> Node | None:
    """Return the first ERROR or MISSING node below *node*, in source order."""
    stack = [node]
    while stack:
        current = stack.pop()
        if current.is_error or current.is_missing:
            return current
        stack.extend(
            child for child in reversed(current.children) if child.has_error or child.is_missing
        )
    return None


class Segmenter(ABC):
    """Base class for per-language segmenters.

    Subclasses fill in the node-kind tables below. Anything a table does not
    mention is copied verbatim, at the top level and inside containers alike.
    """

    language: Language
    extensions: list[str] = []

    # File/module/program roots
    root_kinds: frozenset[str] = frozenset()
    # Declarations whose body is replaced by ``stub_marker``
    function_kinds: frozenset[str] = frozenset()
    # Declarations whose ``body`` field is recursed into member by member
    container_kinds: frozenset[str] = frozenset()
    # Wrapper kind -> field holding the wrapped definition
    wrapper_kinds: dict[str, str] = {}
    # Kinds kept whole, body included
    initializer_kinds: frozenset[str] = frozenset()
    # Function names kept whole, body included
    initializer_names: frozenset[str] = frozenset()

    indent_unit = "    "
    stub_marker = " { }"

    @abstractmethod
    def grammar(self) -> Grammar:
        """Return the tree-sitter grammar for this language."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def parse(self, source: str) -> SyntaxTree:
        """Parse *source*, raising :class:`ParseFailure` on any syntax error."""
        data = source.encode("utf-8")
        try:
            tree = Parser(self.grammar()).parse(data)
        except (ValueError, RuntimeError) as e:
            raise ParseFailure(f"{self.language.value} parser failed: {e}") from e

        if tree is None:
            raise ParseFailure(f"{self.language.value} parser returned no tree")

        if tree.root_node.has_error:
            bad = first_error(tree.root_node) or tree.root_node
            row, column = bad.start_point
            what = "missing token" if bad.is_missing else "syntax error"
            raise ParseFailure(
                f"{self.language.value} {what} at line {row + 1}, column {column + 1}"
            )

        return SyntaxTree(tree=tree, source=data)

    def simplify(self, source: str) -> str:
        """Reduce *source* to its declarations with bodies elided."""
        tree = self.parse(source)
        text = self.render(tree, tree.root)
        return f"{text}\n" if text else ""

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def render(self, tree: SyntaxTree, node: Node) -> str:
        """Simplify a single node according to the kind tables."""
        kind = node.type

        if kind in self.root_kinds:
            return self.render_unit(tree, node.named_children)

        if self.is_initializer(tree, node):
            return self.render_initializer(tree, node)

        if kind in self.function_kinds:
            return self.render_function(tree, node)

        if kind in self.container_kinds:
            return self.render_container(tree, node)

        if kind in self.wrapper_kinds:
            return self.render_wrapper(tree, node)

        return tree.text(node)

    def render_unit(self, tree: SyntaxTree, nodes: list[Node]) -> str:
        """Join the non-empty simplified form of each node, one per line."""
        parts = (self.render(tree, node) for node in nodes)
        return "\n".join(part for part in parts if part.strip()).rstrip()

    def is_initializer(self, tree: SyntaxTree, node: Node) -> bool:
        if node.type in self.initializer_kinds:
            return True
        if node.type in self.function_kinds and self.initializer_names:
            name = node.child_by_field_name("name")
            return name is not None and tree.text(name) in self.initializer_names
        return False

    # ------------------------------------------------------------------
    # Policies
    # ------------------------------------------------------------------

    def render_initializer(self, tree: SyntaxTree, node: Node) -> str:
        return tree.text(node)

    def body_of(self, node: Node) -> Node | None:
        """The node holding *node*'s body, or ``None`` for bodiless declarations."""
        return node.child_by_field_name("body")

    def render_function(self, tree: SyntaxTree, node: Node) -> str:
        """Keep the declaration header, drop the body."""
        body = self.body_of(node)
        if body is None:
            return tree.text(node)
        return tree.header(node, body) + self.stub_marker

    def render_container(self, tree: SyntaxTree, node: Node) -> str:
        body = self.body_of(node)
        if body is None:
            return tree.text(node)
        return self.format_container(tree.header(node, body), self.render_members(tree, body))

    def render_members(self, tree: SyntaxTree, body: Node) -> list[str]:
        parts = (self.render(tree, child) for child in body.named_children)
        return [part for part in parts if part.strip()]

    def format_container(self, header: str, members: list[str]) -> str:
        lines = [f"{header} {{"]
        lines.extend(self.indent(member) for member in members)
        lines.append("}")
        return "\n".join(lines)

    def render_wrapper(self, tree: SyntaxTree, node: Node) -> str:
        """Re-emit the wrapper's own text, then the simplified inner definition."""
        inner = node.child_by_field_name(self.wrapper_kinds[node.type])
        if inner is None:
            return tree.text(node)

        prefix = tree.span(node.start_byte, inner.start_byte)
        stripped = prefix.rstrip()
        if not stripped:
            return self.render(tree, inner)

        separator = "\n" if "\n" in prefix[len(stripped):] else " "
        return stripped + separator + self.render(tree, inner)

    def indent(self, text: str) -> str:
        return textwrap.indent(text, self.indent_unit)
