"""
Locations - a (Source, offset) pair rendered as ``file:line:column``.
"""

from dataclasses import dataclass
from typing import Optional

from ..utils.config import DEFAULT_TAB_SIZE
from .source import LineAndColumn, LineAndIndex, Source

UNKNOWN_FILE_NAME = "<unknown>"


@dataclass(frozen=True)
class Location:
    """Byte offset into a Source.

    Holds a plain reference to its Source and never outlives it in practice;
    a Location without a Source renders as ``<unknown>``.
    """

    source: Optional[Source] = None
    char_index: int = 0

    def get_line_and_start_index(self) -> LineAndIndex:
        if self.source is None:
            return LineAndIndex()
        return self.source.get_line_and_start_index(self.char_index)

    def get_line_and_column(self, tab_size: int = DEFAULT_TAB_SIZE) -> LineAndColumn:
        if self.source is None:
            return LineAndColumn()
        return self.source.get_line_and_column(self.char_index, tab_size)

    def append_to_string(self, buffer: str = "", tab_size: int = DEFAULT_TAB_SIZE) -> str:
        """Append ``file:line:column`` (1-based line and column) to ``buffer``."""
        if self.source is None or not self.source.file_name:
            buffer += UNKNOWN_FILE_NAME
        else:
            buffer += self.source.file_name
        buffer += ":"
        return self.get_line_and_column(tab_size).append_to_string(buffer)

    def to_string(self, tab_size: int = DEFAULT_TAB_SIZE) -> str:
        return self.append_to_string("", tab_size)

    def __str__(self) -> str:
        return self.to_string()
