"""
In-memory line boundary index.

The index stores one end offset per line. Line i (1-based) spans the
half-open byte range [end[i-1] + 1, end[i]), with line 1 starting at 0,
so lookups by line number are O(1).
"""

import operator
from array import array
from typing import Iterable, Iterator

from linegetter.errors import InvalidArgumentError


class LineSpan:
    """
    Byte range of a single line, delimiter excluded.

    Attributes:
        begin: Offset of the first byte of the line
        end: Offset one past the last byte of the line
    """

    __slots__ = ("begin", "end")

    def __init__(self, begin: int, end: int):
        """
        Create a line span.

        Args:
            begin: Offset of the first byte
            end: Offset one past the last byte

        Raises:
            ValueError: If begin is negative or end precedes begin
        """
        if begin < 0:
            raise ValueError(f"Begin must be non-negative: {begin}")
        if end < begin:
            raise ValueError(f"End {end} precedes begin {begin}")

        self.begin = begin
        self.end = end

    @property
    def length(self) -> int:
        return self.end - self.begin

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LineSpan):
            return NotImplemented
        return self.begin == other.begin and self.end == other.end

    def __hash__(self) -> int:
        return hash((self.begin, self.end))

    def __repr__(self) -> str:
        return f"LineSpan(begin={self.begin}, end={self.end})"


class LineIndex:
    """
    Immutable table of line end offsets.

    Built once by LineIndexer and never revalidated against the stream.
    Safe to share between getters reading through different stream handles.

    Attributes:
        total_bytes: Stream length at the time the index was built
    """

    def __init__(self, ends: Iterable[int]):
        """
        Create an index from per-line end offsets.

        Args:
            ends: End offset of every line, in order. Each end except the
                last is the position of a delimiter byte. An array("q") is
                taken over without copying.

        Raises:
            ValueError: If no lines are given or the offsets go backwards
        """
        if isinstance(ends, array) and ends.typecode == "q":
            self._ends = ends
        else:
            self._ends = array("q", ends)

        if len(self._ends) == 0:
            raise ValueError("Index must contain at least one line")

        previous_begin = 0
        for end in self._ends:
            if end < previous_begin:
                raise ValueError(
                    f"Line end {end} precedes line begin {previous_begin}"
                )
            previous_begin = end + 1

        self.total_bytes = self._ends[-1]

    def count(self) -> int:
        """Number of lines in the index."""
        return len(self._ends)

    def span(self, line_number: int) -> LineSpan:
        """
        Byte range of a line.

        Args:
            line_number: 1-based line number

        Returns:
            LineSpan for the line

        Raises:
            InvalidArgumentError: If the line number is not in [1, count()]
        """
        line_number = self.check_line_number(line_number)

        begin = 0 if line_number == 1 else self._ends[line_number - 2] + 1
        return LineSpan(begin, self._ends[line_number - 1])

    def check_line_number(self, line_number: int) -> int:
        """
        Validate a 1-based line number.

        Accepts any integer-like object (one with __index__) except bool.

        Returns:
            The line number as a plain int

        Raises:
            InvalidArgumentError: If it is not an integer within [1, count()]
        """
        if isinstance(line_number, bool):
            raise InvalidArgumentError("Line number must be an integer, got bool")
        try:
            line_number = operator.index(line_number)
        except TypeError:
            raise InvalidArgumentError(
                f"Line number must be an integer, got {type(line_number).__name__}"
            ) from None
        if line_number < 1 or line_number > len(self._ends):
            raise InvalidArgumentError(
                f"Line number {line_number} out of range [1, {len(self._ends)}]"
            )

        return line_number

    def spans(self) -> Iterator[LineSpan]:
        begin = 0
        for end in self._ends:
            yield LineSpan(begin, end)
            begin = end + 1

    def __len__(self) -> int:
        return len(self._ends)

    def __repr__(self) -> str:
        return f"LineIndex(lines={len(self._ends)}, bytes={self.total_bytes})"
