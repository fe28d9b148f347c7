"""Java segmenter."""

from functools import lru_cache

import tree_sitter_java
from tree_sitter import Language as Grammar
from tree_sitter import Node

from .base import Language, Segmenter, SyntaxTree


@lru_cache(maxsize=None)
def _grammar() -> Grammar:
    return Grammar(tree_sitter_java.language())


class JavaSegmenter(Segmenter):
    """Segmenter for Java source files.

    Methods are reduced to ``modifiers Type name(params);``. Constructors and
    static initializer blocks are kept whole; fields are kept verbatim.
    """

    language = Language.JAVA
    extensions = [".java"]

    root_kinds = frozenset({"program"})
    function_kinds = frozenset({"method_declaration"})
    container_kinds = frozenset({
        "class_declaration",
        "interface_declaration",
        "enum_declaration",
        "record_declaration",
    })
    initializer_kinds = frozenset({
        "constructor_declaration",
        "compact_constructor_declaration",
        "static_initializer",
    })

    stub_marker = ";"

    def grammar(self) -> Grammar:
        return _grammar()

    def render_members(self, tree: SyntaxTree, body: Node) -> list[str]:
        if body.type != "enum_body":
            return super().render_members(tree, body)

        # Constants first, on one line, then whatever follows the ``;``
        members: list[str] = []
        constants = [
            tree.text(child) for child in body.named_children
            if child.type == "enum_constant"
        ]
        if constants:
            members.append(", ".join(constants) + ";")

        for child in body.named_children:
            if child.type == "enum_constant":
                continue
            if child.type == "enum_body_declarations":
                members.extend(super().render_members(tree, child))
                continue
            text = self.render(tree, child)
            if text.strip():
                members.append(text)

        return members
