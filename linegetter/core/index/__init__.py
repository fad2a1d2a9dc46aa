"""
Line boundary indexing.

A single forward scan records where every line ends, so later lookups by
line number need no further scanning.
"""

from linegetter.core.index.indexer import DELIMITER, READ_CHUNK_SIZE, LineIndexer
from linegetter.core.index.line_index import LineIndex, LineSpan

__all__ = ["DELIMITER", "READ_CHUNK_SIZE", "LineIndexer", "LineIndex", "LineSpan"]
