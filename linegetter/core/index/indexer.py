"""
One-pass line indexer.

Scans a seekable byte stream from the start, recording the offset of every
line feed, and produces a LineIndex. This is the only linear-time step;
every later lookup is answered from the index.
"""

import time
from array import array
from typing import Any, BinaryIO, Union

from linegetter.core.index.line_index import LineIndex
from linegetter.errors import InvalidArgumentError
from linegetter.utils.logging import get_logger

logger = get_logger(__name__)

DELIMITER = b"\n"
READ_CHUNK_SIZE = 16383  # 0x3FFF


def check_stream(stream: Any) -> None:
    """
    Validate that a stream can be read and positioned.

    Raises:
        InvalidArgumentError: If stream is None or lacks read/seek
    """
    if stream is None:
        raise InvalidArgumentError("Stream must not be None")

    for method in ("read", "seek"):
        if not callable(getattr(stream, method, None)):
            raise InvalidArgumentError(
                f"Stream {type(stream).__name__} has no {method}() method"
            )


class LineIndexer:
    """
    Builds a LineIndex by scanning a stream in fixed-size chunks.

    Chunked reads find the same boundaries a byte-at-a-time scan would.

    Attributes:
        chunk_size: Bytes requested per read call
    """

    def __init__(self, chunk_size: int = READ_CHUNK_SIZE):
        """
        Initialize the indexer.

        Args:
            chunk_size: Bytes per read (default: 16383)

        Raises:
            InvalidArgumentError: If chunk_size is not positive
        """
        if chunk_size <= 0:
            raise InvalidArgumentError(f"Chunk size must be positive: {chunk_size}")

        self.chunk_size = chunk_size

    def build(self, stream: Union[BinaryIO, Any]) -> LineIndex:
        """
        Scan the whole stream and index its lines.

        The stream is rewound first. The segment after the last delimiter is
        always recorded as a line, so an empty stream has one empty line and
        a stream ending with a delimiter has a trailing empty line.

        Args:
            stream: Readable, seekable binary stream

        Returns:
            Fully populated LineIndex

        Raises:
            InvalidArgumentError: If the stream is missing or unusable
            Exception: Whatever the stream raises while seeking or reading
        """
        check_stream(stream)

        started = time.monotonic()
        logger.debug("Indexing stream", stream=type(stream).__name__)

        stream.seek(0)

        ends = array("q")
        position = 0

        while True:
            chunk = stream.read(self.chunk_size)

            if chunk is None:
                # Non-blocking source with nothing available yet
                continue

            if len(chunk) == 0:
                break

            found = chunk.find(DELIMITER)
            while found != -1:
                ends.append(position + found)
                found = chunk.find(DELIMITER, found + 1)

            position += len(chunk)

        ends.append(position)

        index = LineIndex(ends)

        logger.info(
            "Built line index",
            lines=index.count(),
            bytes=index.total_bytes,
            elapsed_ms=round((time.monotonic() - started) * 1000, 3),
        )

        return index
