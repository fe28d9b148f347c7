"""Rust segmenter."""

from functools import lru_cache

import tree_sitter_rust
from tree_sitter import Language as Grammar

from .base import Language, Segmenter


@lru_cache(maxsize=None)
def _grammar() -> Grammar:
    return Grammar(tree_sitter_rust.language())


class RustSegmenter(Segmenter):
    """Segmenter for Rust source files.

    Structs and enums are kept whole (their field lists are the layout).
    ``impl``, ``trait`` and inline ``mod`` blocks are descended into and their
    functions reduced to ``fn name(params) -> Ret;``. ``new`` is treated as
    the constructor and kept intact.
    """

    language = Language.RUST
    extensions = [".rs"]

    root_kinds = frozenset({"source_file"})
    function_kinds = frozenset({"function_item"})
    container_kinds = frozenset({"impl_item", "trait_item", "mod_item"})
    initializer_names = frozenset({"new"})

    stub_marker = ";"

    def grammar(self) -> Grammar:
        return _grammar()
