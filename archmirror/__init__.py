"""archmirror - mirror a source tree as declarations with bodies elided."""

__version__ = "0.1.0"
