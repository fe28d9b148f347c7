"""Go segmenter."""

from functools import lru_cache

import tree_sitter_go
from tree_sitter import Language as Grammar

from .base import Language, Segmenter


@lru_cache(maxsize=None)
def _grammar() -> Grammar:
    return Grammar(tree_sitter_go.language())


class GoSegmenter(Segmenter):
    """Segmenter for Go source files.

    Type declarations (structs, interfaces) are kept verbatim. Functions and
    methods keep their signature; the package ``init`` function keeps its body.
    """

    language = Language.GO
    extensions = [".go"]

    root_kinds = frozenset({"source_file"})
    function_kinds = frozenset({"function_declaration", "method_declaration"})
    initializer_names = frozenset({"init"})

    def grammar(self) -> Grammar:
        return _grammar()
