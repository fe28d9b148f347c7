"""Language-specific segmenters."""

from .base import Language, Segmenter, SyntaxTree
from .registry import EXTENSION_LANGUAGES, SegmenterRegistry, create_default_registry

__all__ = [
    "Language",
    "Segmenter",
    "SyntaxTree",
    "SegmenterRegistry",
    "EXTENSION_LANGUAGES",
    "create_default_registry",
]
