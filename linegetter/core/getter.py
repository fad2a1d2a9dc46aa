"""
Random access to lines of a seekable byte stream.

A LineGetter indexes its stream once at construction, then serves any line
with a single seek and a bounded read. Lines longer than the configured
maximum are clipped and flagged; read failures are reported together with
the bytes that were obtained.
"""

from dataclasses import dataclass
from typing import Any, BinaryIO, Iterator, Optional, Union

from linegetter.core.index.indexer import READ_CHUNK_SIZE, LineIndexer, check_stream
from linegetter.core.index.line_index import LineIndex, LineSpan
from linegetter.errors import (
    InvalidArgumentError,
    LineTruncatedError,
    ShortReadError,
)
from linegetter.utils.config import Config
from linegetter.utils.logging import get_logger

logger = get_logger(__name__)

MAX_LINE_LENGTH = READ_CHUNK_SIZE


@dataclass
class LineGetterConfig:
    """
    Tuning values for a LineGetter.

    Attributes:
        max_line_length: Longest line returned in full
        chunk_size: Bytes per read while indexing
    """
    max_line_length: int = MAX_LINE_LENGTH
    chunk_size: int = READ_CHUNK_SIZE

    def __post_init__(self):
        if self.max_line_length <= 0:
            raise InvalidArgumentError(
                f"Maximum line length must be positive: {self.max_line_length}"
            )
        if self.chunk_size <= 0:
            raise InvalidArgumentError(f"Chunk size must be positive: {self.chunk_size}")

    @classmethod
    def from_config(cls, config: Config) -> "LineGetterConfig":
        """
        Build settings from a Config.

        Args:
            config: Loaded configuration

        Returns:
            LineGetterConfig with reader/indexer values
        """
        return cls(
            max_line_length=int(config.get("reader.max_line_length", MAX_LINE_LENGTH)),
            chunk_size=int(config.get("indexer.chunk_size", READ_CHUNK_SIZE)),
        )


@dataclass
class LineResult:
    """
    Outcome of reading one line.

    Content and error are independent: a truncated or short read still
    carries the bytes that were obtained.

    Attributes:
        line_number: 1-based line number
        content: Line bytes, delimiter excluded
        truncated: Whether the line was clipped to the maximum length
        error: None, LineTruncatedError, ShortReadError or the exception the
            stream raised
    """
    line_number: int
    content: bytes
    truncated: bool = False
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def raise_for_error(self) -> None:
        """
        Raise the read failure, if any.

        Truncation alone is not raised.
        """
        if self.error is not None and not isinstance(self.error, LineTruncatedError):
            raise self.error


class LineGetter:
    """
    Line-number access to a seekable byte stream.

    The stream is scanned once on construction. The getter keeps a reference
    to the stream but never closes it. Reads seek the shared stream, so one
    getter must not be used from several threads at once; use attach() to
    give each thread its own handle over the same index.

    Attributes:
        max_line_length: Longest line returned in full
    """

    def __init__(
        self,
        stream: Union[BinaryIO, Any],
        config: Optional[LineGetterConfig] = None,
        index: Optional[LineIndex] = None,
    ):
        """
        Initialize a line getter.

        Args:
            stream: Readable, seekable binary stream
            config: Tuning values (default: LineGetterConfig())
            index: Prebuilt index for this stream's data; skips the scan

        Raises:
            InvalidArgumentError: If the stream is missing or unusable
            Exception: Whatever the stream raises while being indexed
        """
        check_stream(stream)

        self._config = config or LineGetterConfig()
        self._stream = stream
        self.max_line_length = self._config.max_line_length

        if index is None:
            index = LineIndexer(chunk_size=self._config.chunk_size).build(stream)
        self._index = index

    @property
    def index(self) -> LineIndex:
        return self._index

    def count(self) -> int:
        """Total number of lines."""
        return self._index.count()

    def span(self, line_number: int) -> LineSpan:
        """
        Byte range of a line.

        Raises:
            InvalidArgumentError: If the line number is not in [1, count()]
        """
        return self._index.span(line_number)

    def get_line(self, line_number: int) -> LineResult:
        """
        Read one line.

        Lines are separated by a line feed byte (0x0A), which is not part
        of the content. A carriage return before it is kept as content.

        Args:
            line_number: 1-based line number

        Returns:
            LineResult with the content and any read problem:
            - LineTruncatedError if the line exceeds max_line_length; the
              content is then exactly max_line_length bytes
            - ShortReadError if the stream ended early; content is partial
            - the stream's own exception if seeking or reading failed

        Raises:
            InvalidArgumentError: If the line number is not in [1, count()]
        """
        line_number = self._index.check_line_number(line_number)
        span = self._index.span(line_number)

        length = span.length
        truncated = length > self.max_line_length
        if truncated:
            logger.debug(
                "Truncating line",
                line_number=line_number,
                length=length,
                max_line_length=self.max_line_length,
            )
            length = self.max_line_length

        content, error = self._read_at(span.begin, length)

        if error is not None:
            logger.warning(
                "Line read failed",
                line_number=line_number,
                position=span.begin,
                expected=length,
                got=len(content),
                error=str(error),
            )
        elif truncated:
            error = LineTruncatedError(line_number, span.length, self.max_line_length)

        return LineResult(
            line_number=line_number,
            content=content,
            truncated=truncated,
            error=error,
        )

    def _read_at(self, position: int, length: int) -> tuple[bytes, Optional[BaseException]]:
        """
        Seek to position and read up to length bytes.

        Returns:
            Tuple of (bytes read, error or None)
        """
        parts = []
        received = 0

        try:
            self._stream.seek(position)

            while received < length:
                data = self._stream.read(length - received)

                if data is None:
                    continue

                if len(data) == 0:
                    return b"".join(parts), ShortReadError(length, received)

                parts.append(bytes(data))
                received += len(data)

        except Exception as e:
            return b"".join(parts), e

        return b"".join(parts), None

    def read_line(self, line_number: int) -> bytes:
        """
        Read one line, raising on read failures.

        Truncated lines are returned clipped without raising.

        Raises:
            InvalidArgumentError: If the line number is not in [1, count()]
            ShortReadError: If the stream ended early
            Exception: Whatever the stream raised while seeking or reading
        """
        result = self.get_line(line_number)
        result.raise_for_error()
        return result.content

    def lines(self, start: int = 1, stop: Optional[int] = None) -> Iterator[LineResult]:
        """
        Read a run of lines in order.

        Args:
            start: First line number
            stop: Last line number, inclusive (default: last line)

        Yields:
            LineResult for each line

        Raises:
            InvalidArgumentError: If start or stop is out of range, or stop < start
        """
        if stop is None:
            stop = self.count()

        start = self._index.check_line_number(start)
        stop = self._index.check_line_number(stop)
        if stop < start:
            raise InvalidArgumentError(f"Stop line {stop} precedes start line {start}")

        return (self.get_line(n) for n in range(start, stop + 1))

    def attach(self, stream: Union[BinaryIO, Any]) -> "LineGetter":
        """
        Create a getter over another handle to the same data.

        The index is shared, not rebuilt, so the new stream must hold the
        same bytes this getter was indexed from.

        Args:
            stream: Independent handle (e.g., the same file opened again)

        Returns:
            New LineGetter sharing this getter's index and settings
        """
        return LineGetter(stream, config=self._config, index=self._index)

    def __len__(self) -> int:
        return self._index.count()

    def __repr__(self) -> str:
        return (
            f"LineGetter(lines={self._index.count()}, "
            f"max_line_length={self.max_line_length})"
        )


def build(
    stream: Union[BinaryIO, Any],
    config: Optional[LineGetterConfig] = None,
) -> LineGetter:
    """
    Index a stream and return a getter for it.

    Args:
        stream: Readable, seekable binary stream
        config: Tuning values (default: LineGetterConfig())

    Returns:
        Ready LineGetter

    Raises:
        InvalidArgumentError: If the stream is missing or unusable
        Exception: Whatever the stream raises while being indexed
    """
    return LineGetter(stream, config=config)
