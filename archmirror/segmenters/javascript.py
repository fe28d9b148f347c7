"""JavaScript segmenter."""

from functools import lru_cache

import tree_sitter_javascript
from tree_sitter import Language as Grammar
from tree_sitter import Node

from .base import Language, Segmenter, SyntaxTree


@lru_cache(maxsize=None)
def _grammar() -> Grammar:
    return Grammar(tree_sitter_javascript.language())


class JavaScriptSegmenter(Segmenter):
    """Segmenter for JavaScript (and JSX) source files."""

    language = Language.JAVASCRIPT
    extensions = [".js", ".jsx", ".mjs", ".cjs"]

    root_kinds = frozenset({"program"})
    function_kinds = frozenset({
        "function_declaration",
        "generator_function_declaration",
        "method_definition",
    })
    container_kinds = frozenset({"class_declaration"})
    wrapper_kinds = {"export_statement": "declaration"}
    initializer_names = frozenset({"constructor"})

    # Class members whose ``;`` is a sibling token rather than part of the node
    terminated_kinds = frozenset({"field_definition"})

    def grammar(self) -> Grammar:
        return _grammar()

    def render(self, tree: SyntaxTree, node: Node) -> str:
        text = super().render(tree, node)
        if node.type in self.terminated_kinds:
            following = node.next_sibling
            if following is not None and following.type == ";":
                text += ";"
        return text
