"""
Error kinds raised or reported by linegetter.

Argument problems are raised immediately. Read problems during line
retrieval are reported inside a LineResult together with whatever bytes
were obtained, so callers can still use partial content.
"""


class LineGetterError(Exception):
    """Base class for linegetter errors."""
    pass


class InvalidArgumentError(LineGetterError, ValueError):
    """Raised for a missing stream, a bad setting or an out-of-range line."""
    pass


class LineTruncatedError(LineGetterError):
    """
    Signals that returned content is a prefix of a longer line.

    Not a failure: the prefix is exactly max_length bytes long.

    Attributes:
        line_number: Line that was clipped
        length: Full length of the line in bytes
        max_length: Configured maximum line length
    """

    def __init__(self, line_number: int, length: int, max_length: int):
        super().__init__(
            f"Line {line_number} truncated: {length} bytes exceeds "
            f"maximum of {max_length}"
        )
        self.line_number = line_number
        self.length = length
        self.max_length = max_length


class ShortReadError(LineGetterError, EOFError):
    """
    Stream ended before the expected number of bytes could be read.

    Attributes:
        expected: Bytes the index says should be there
        received: Bytes actually read
    """

    def __init__(self, expected: int, received: int):
        super().__init__(
            f"Unexpected end of stream: expected {expected} bytes, got {received}"
        )
        self.expected = expected
        self.received = received
