"""Core components for line indexing and retrieval."""

from linegetter.core.getter import (
    MAX_LINE_LENGTH,
    LineGetter,
    LineGetterConfig,
    LineResult,
    build,
)

__all__ = ["MAX_LINE_LENGTH", "LineGetter", "LineGetterConfig", "LineResult", "build"]
