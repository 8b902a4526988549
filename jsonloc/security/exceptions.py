"""
Exception classes for jsonloc parsing.

Every parse failure is a ParseError tagged with the Location of the offending
byte. The rendered message is built once, when the error is raised.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..core.location import Location


@dataclass
class ErrorContext:
    """Source excerpt pointing at an error location."""

    line_text: str
    column_indicator: str

    @classmethod
    def from_location(cls, location: "Location", tab_size: int = 8) -> "ErrorContext":
        """Build the excerpt for the line containing ``location``."""
        source = location.source
        if source is None or source.buffer is None:
            return cls(line_text="", column_indicator="^")
        line, line_start = location.get_line_and_start_index()
        line_text = source.get_line_text(line).expandtabs(tab_size)
        # Caret column counts decoded characters, not bytes
        end = max(line_start, min(location.char_index, source.size))
        prefix = bytes(source.buffer[line_start:end]).decode("utf-8", errors="replace")
        column = len(prefix.rstrip("\r\n").expandtabs(tab_size))
        return cls(line_text=line_text, column_indicator=" " * column + "^")

    def __str__(self) -> str:
        return f"{self.line_text}\n{self.column_indicator}"


class jsonlocError(Exception):
    """Base exception for jsonloc."""


class ParseError(jsonlocError):
    """A grammar violation at a specific source location."""

    def __init__(
        self,
        location: "Location",
        message: str,
        tab_size: int = 8,
        include_context: bool = False,
    ):
        self.location = location
        self.message = message
        self.formatted = f"{location.to_string(tab_size)}: {message}"
        self.context: Optional[ErrorContext] = (
            ErrorContext.from_location(location, tab_size) if include_context else None
        )
        super().__init__(self.formatted)

    def __str__(self) -> str:
        return self.formatted

    def show_context(self) -> str:
        """Return the rendered error followed by a source excerpt, if any."""
        if self.context is None:
            return self.formatted
        return f"{self.formatted}\n{self.context}"


class SecurityError(ParseError):
    """Raised when input exceeds a configured structure or size limit."""


class SourceLoadError(jsonlocError, OSError):
    """Raised when a source cannot be read from a file or standard input."""

    def __init__(self, file_name: str, cause: Optional[BaseException] = None):
        self.file_name = file_name
        self.cause = cause
        reason = (getattr(cause, "strerror", None) or str(cause)) if cause else "read failed"
        super().__init__(f"{file_name}: cannot read input: {reason}")

    def __str__(self) -> str:
        return self.args[0]
