"""Dispatch table: file extension -> language -> segmenter."""

from pathlib import Path
from typing import Type

from .base import Language, Segmenter

# Every extension the dispatch table recognises. Languages without a
# registered segmenter are skipped exactly like unknown extensions.
EXTENSION_LANGUAGES: dict[str, Language] = {
    ".py": Language.PYTHON,
    ".pyi": Language.PYTHON,
    ".js": Language.JAVASCRIPT,
    ".jsx": Language.JAVASCRIPT,
    ".mjs": Language.JAVASCRIPT,
    ".cjs": Language.JAVASCRIPT,
    ".ts": Language.TYPESCRIPT,
    ".mts": Language.TYPESCRIPT,
    ".cts": Language.TYPESCRIPT,
    ".tsx": Language.TSX,
    ".java": Language.JAVA,
    ".rs": Language.RUST,
    ".go": Language.GO,
    ".kt": Language.KOTLIN,
    ".c": Language.C,
    ".cpp": Language.CPP,
    ".cs": Language.CSHARP,
    ".rb": Language.RUBY,
    ".scala": Language.SCALA,
    ".lua": Language.LUA,
    ".pl": Language.PERL,
    ".php": Language.PHP,
    ".ex": Language.ELIXIR,
    ".exs": Language.ELIXIR,
    ".cobol": Language.COBOL,
}


def normalize_extension(extension: str) -> str:
    """Lower-case *extension* and make sure it starts with a dot."""
    extension = extension.strip().lower()
    return extension if extension.startswith(".") else f".{extension}"


class SegmenterRegistry:
    """Registry of available segmenters.

    Holds segmenter classes rather than instances: every file gets a fresh
    segmenter, so nothing parsed is ever shared between worker threads.
    """

    def __init__(self, extensions: dict[str, Language] | None = None):
        self._segmenters: dict[Language, Type[Segmenter]] = {}
        self._extension_map: dict[str, Language] = dict(
            EXTENSION_LANGUAGES if extensions is None else extensions
        )

    def register(self, segmenter_cls: Type[Segmenter]) -> None:
        """Register a segmenter class and the extensions it declares."""
        self._segmenters[segmenter_cls.language] = segmenter_cls

        for ext in segmenter_cls.extensions:
            self._extension_map[normalize_extension(ext)] = segmenter_cls.language

    def map_extension(self, extension: str, language: Language | str) -> None:
        """Route an additional extension to an existing language."""
        self._extension_map[normalize_extension(extension)] = Language(language)

    def language_for(self, file_path: Path) -> Language | None:
        """Classify a file by its extension."""
        return self._extension_map.get(file_path.suffix.lower())

    def get_segmenter(self, language: Language) -> Type[Segmenter] | None:
        """Get the segmenter class registered for a language."""
        return self._segmenters.get(language)

    def create(self, language: Language | None) -> Segmenter | None:
        """Instantiate a segmenter, or ``None`` when the language has none."""
        if language is None:
            return None
        segmenter_cls = self.get_segmenter(language)
        return segmenter_cls() if segmenter_cls else None

    def supports(self, file_path: Path) -> bool:
        """Whether a file would be segmented rather than silently skipped."""
        language = self.language_for(file_path)
        return language is not None and language in self._segmenters

    @property
    def languages(self) -> list[Language]:
        return list(self._segmenters)


def create_default_registry(extra_extensions: dict[str, str] | None = None) -> SegmenterRegistry:
    """Create registry with all built-in segmenters."""
    from .go import GoSegmenter
    from .java import JavaSegmenter
    from .javascript import JavaScriptSegmenter
    from .kotlin import KotlinSegmenter
    from .python import PythonSegmenter
    from .rust import RustSegmenter
    from .typescript import TSXSegmenter, TypeScriptSegmenter

    registry = SegmenterRegistry()

    registry.register(PythonSegmenter)
    registry.register(JavaScriptSegmenter)
    registry.register(TypeScriptSegmenter)
    registry.register(TSXSegmenter)
    registry.register(JavaSegmenter)
    registry.register(RustSegmenter)
    registry.register(GoSegmenter)
    registry.register(KotlinSegmenter)

    for ext, language in (extra_extensions or {}).items():
        registry.map_extension(ext, language)

    return registry
