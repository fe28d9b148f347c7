"""Kotlin segmenter."""

from functools import lru_cache

import tree_sitter_kotlin
from tree_sitter import Language as Grammar
from tree_sitter import Node

from .base import Language, Segmenter

# The Kotlin grammar names few fields, so bodies are found by node kind
BODY_KINDS = frozenset({"class_body", "enum_class_body", "function_body"})


@lru_cache(maxsize=None)
def _grammar() -> Grammar:
    return Grammar(tree_sitter_kotlin.language())


class KotlinSegmenter(Segmenter):
    """Segmenter for Kotlin source files.

    Package and import headers and properties are kept verbatim. Classes,
    objects and companion objects are descended into; functions become
    ``fun name(params): Ret;``. Secondary constructors and ``init`` blocks keep
    their bodies, and the primary constructor stays in the class header.
    """

    language = Language.KOTLIN
    extensions = [".kt"]

    root_kinds = frozenset({"source_file"})
    function_kinds = frozenset({"function_declaration"})
    container_kinds = frozenset({
        "class_declaration",
        "object_declaration",
        "companion_object",
    })
    initializer_kinds = frozenset({"secondary_constructor", "anonymous_initializer"})

    stub_marker = ";"

    def grammar(self) -> Grammar:
        return _grammar()

    def body_of(self, node: Node) -> Node | None:
        for child in node.named_children:
            if child.type in BODY_KINDS:
                return child
        return None
