"""
linegetter - random access to lines of huge line-delimited files.

A one-time scan indexes every line boundary of a seekable byte stream
(typically a log file); afterwards any line is fetched by number with a
single seek and read, without holding the file in memory.
"""

__version__ = "0.1.0"

import logging

from linegetter.core.getter import (
    MAX_LINE_LENGTH,
    LineGetter,
    LineGetterConfig,
    LineResult,
    build,
)
from linegetter.core.index import READ_CHUNK_SIZE, LineIndex, LineIndexer, LineSpan
from linegetter.errors import (
    InvalidArgumentError,
    LineGetterError,
    LineTruncatedError,
    ShortReadError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "MAX_LINE_LENGTH",
    "READ_CHUNK_SIZE",
    "LineGetter",
    "LineGetterConfig",
    "LineResult",
    "LineIndex",
    "LineIndexer",
    "LineSpan",
    "build",
    "LineGetterError",
    "InvalidArgumentError",
    "LineTruncatedError",
    "ShortReadError",
]
