"""TypeScript and TSX segmenters."""

from functools import lru_cache

import tree_sitter_typescript
from tree_sitter import Language as Grammar
from tree_sitter import Node

from .base import Language, SyntaxTree
from .javascript import JavaScriptSegmenter


@lru_cache(maxsize=None)
def _typescript_grammar() -> Grammar:
    return Grammar(tree_sitter_typescript.language_typescript())


@lru_cache(maxsize=None)
def _tsx_grammar() -> Grammar:
    return Grammar(tree_sitter_typescript.language_tsx())


class TypeScriptSegmenter(JavaScriptSegmenter):
    """Segmenter for TypeScript source files.

    Shares the JavaScript rules and adds abstract classes and namespaces as
    containers. Interfaces, type aliases and enums carry no bodies and are
    kept verbatim.
    """

    language = Language.TYPESCRIPT
    extensions = [".ts", ".mts", ".cts"]

    namespace_kinds = frozenset({"internal_module", "module"})
    container_kinds = JavaScriptSegmenter.container_kinds | {"abstract_class_declaration"} | namespace_kinds
    terminated_kinds = JavaScriptSegmenter.terminated_kinds | {
        "public_field_definition",
        "abstract_method_signature",
        "method_signature",
        "index_signature",
    }

    def grammar(self) -> Grammar:
        return _typescript_grammar()

    def render(self, tree: SyntaxTree, node: Node) -> str:
        # A bare ``namespace N { ... }`` parses as an expression statement
        if node.type == "expression_statement":
            inner = node.named_children
            if len(inner) == 1 and inner[0].type in self.namespace_kinds:
                return self.render(tree, inner[0])
        return super().render(tree, node)


class TSXSegmenter(TypeScriptSegmenter):
    """Segmenter for TypeScript files containing JSX."""

    language = Language.TSX
    extensions = [".tsx"]

    def grammar(self) -> Grammar:
        return _tsx_grammar()
