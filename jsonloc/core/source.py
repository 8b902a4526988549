"""
Source buffers for jsonloc - immutable input text plus a line-start index.

A Source maps raw byte offsets to line and column numbers without rescanning
the whole buffer: line starts are recorded once at construction and looked up
by binary search, so only the bytes of a single line are ever rescanned.
"""

import logging
import sys
from array import array
from bisect import bisect_right
from pathlib import Path
from typing import BinaryIO, Iterable, NamedTuple, Optional, Union

import regex

from ..security.exceptions import SourceLoadError
from ..utils.config import DEFAULT_TAB_SIZE

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]

_NEWLINE = regex.compile(rb"\n")
_TAB = 0x09


class LineAndIndex(NamedTuple):
    """Line number (0-based) and the offset of that line's first byte."""

    line: int = 0
    index: int = 0


class LineAndColumn(NamedTuple):
    """Line number and tab-expanded column, both 0-based."""

    line: int = 0
    column: int = 0

    def append_to_string(self, buffer: str = "") -> str:
        """Append ``line:column`` in 1-based display form."""
        return f"{buffer}{self.line + 1}:{self.column + 1}"

    def to_string(self) -> str:
        """Render as ``line:column`` in 1-based display form."""
        return self.append_to_string()

    def __str__(self) -> str:
        return self.to_string()


def find_line_start_indexes(buffer: BytesLike, size: int) -> array:
    """Offsets following every newline byte in ``buffer[:size]``.

    Offset 0 is implied and not stored. A newline in the final byte records
    nothing, so every entry is strictly less than ``size``.
    """
    indexes = array("Q")
    for match in _NEWLINE.finditer(buffer, 0, size):
        start = match.end()
        if start < size:
            indexes.append(start)
    return indexes


class Source:
    """Immutable input text with a precomputed line-start index.

    The buffer is never written to. Sources built from an existing buffer
    share it through a read-only view; the underlying storage lives as long
    as its last holder.
    """

    __slots__ = ("file_name", "buffer", "size", "line_start_indexes")

    default_tab_size = DEFAULT_TAB_SIZE

    def __init__(
        self,
        file_name: str = "",
        buffer: Optional[BytesLike] = None,
        size: Optional[int] = None,
    ) -> None:
        self.file_name = file_name
        if buffer is None:
            self.buffer: Optional[BytesLike] = None
            self.size = 0
            self.line_start_indexes = array("Q")
            return
        if size is None:
            size = len(buffer)
        if size < 0 or size > len(buffer):
            raise ValueError(f"size {size} out of range for buffer of {len(buffer)} bytes")
        self.buffer = buffer
        self.size = size
        self.line_start_indexes = find_line_start_indexes(buffer, size)

    @classmethod
    def from_buffer(
        cls, file_name: str, buffer: BytesLike, size: Optional[int] = None
    ) -> "Source":
        """Share an existing buffer (e.g. an ``mmap``) without copying it."""
        view = memoryview(buffer).cast("B")
        if size is not None:
            view = view[:size]
        return cls(file_name, view.toreadonly())

    @classmethod
    def from_text(cls, file_name: str, text: str) -> "Source":
        """Own a copy of ``text``, stored as UTF-8."""
        return cls(file_name, text.encode("utf-8"))

    @classmethod
    def from_bytes(
        cls, file_name: str, data: Union[bytes, bytearray, Iterable[int]]
    ) -> "Source":
        """Own an immutable copy of raw bytes."""
        if not isinstance(data, bytes):
            data = bytes(data)
        return cls(file_name, data)

    @classmethod
    def load_file(cls, file_name: Union[str, Path]) -> "Source":
        """Read a whole file into a new Source."""
        name = str(file_name)
        try:
            contents = Path(name).read_bytes()
        except OSError as e:
            raise SourceLoadError(name, e) from e
        source = cls(name, contents)
        logger.debug(
            f"Loaded {name}: {source.size} bytes, {source.line_count} lines"
        )
        return source

    @classmethod
    def load_stdin(cls, stream: Optional[BinaryIO] = None) -> "Source":
        """Read all of standard input into a new Source named ``<stdin>``."""
        if stream is None:
            stream = sys.stdin.buffer
        try:
            contents = stream.read()
        except OSError as e:
            raise SourceLoadError("<stdin>", e) from e
        source = cls("<stdin>", contents)
        logger.debug(f"Loaded <stdin>: {source.size} bytes")
        return source

    def __bool__(self) -> bool:
        return self.buffer is not None

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"Source(file_name={self.file_name!r}, size={self.size})"

    @property
    def line_count(self) -> int:
        """Number of lines, counting a final line without a terminator."""
        if self.buffer is None:
            return 0
        return len(self.line_start_indexes) + 1

    def get_line_and_start_index(self, char_index: int) -> LineAndIndex:
        """Find the line containing ``char_index`` by binary search."""
        line = bisect_right(self.line_start_indexes, char_index)
        if line == 0:
            return LineAndIndex(0, 0)
        return LineAndIndex(line, self.line_start_indexes[line - 1])

    def get_line_and_column(
        self, char_index: int, tab_size: int = DEFAULT_TAB_SIZE
    ) -> LineAndColumn:
        """Line and tab-expanded column of ``char_index``.

        Only the bytes between the line start and ``char_index`` are scanned.
        """
        char_index = min(char_index, self.size)
        line, column_index = self.get_line_and_start_index(char_index)
        if self.buffer is None:
            return LineAndColumn(line, 0)
        segment = self.buffer[column_index:char_index]
        if _TAB not in segment:
            return LineAndColumn(line, len(segment))
        column = 0
        for byte in segment:
            if byte == _TAB:
                column = (column // tab_size + 1) * tab_size
            else:
                column += 1
        return LineAndColumn(line, column)

    def get_line_text(self, line: int) -> str:
        """Text of ``line`` without its line terminator."""
        if self.buffer is None or line < 0 or line > len(self.line_start_indexes):
            return ""
        start = self.line_start_indexes[line - 1] if line > 0 else 0
        if line < len(self.line_start_indexes):
            end = self.line_start_indexes[line]
        else:
            end = self.size
        text = bytes(self.buffer[start:end]).decode("utf-8", errors="replace")
        return text.rstrip("\r\n")
