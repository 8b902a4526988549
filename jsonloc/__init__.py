"""
jsonloc - JSON parser that pins every syntax error to file:line:column.

jsonloc parses JSON text held in an immutable byte buffer into plain Python
values, and reports the first syntax error with its exact location. Columns
account for tab expansion, and line lookups are a binary search over a line
index computed once per input.

Key Features:
- Strict RFC 8259 parsing by default
- Opt-in relaxations: Infinity/NaN, leading '+', single-quoted strings,
  numbers starting with '.'
- Fail-fast errors rendered as "file:line:column: message"
- Sources from files, standard input, text, bytes or shared buffers (mmap)
- Nesting depth and size limits

Quick Start:
    import jsonloc
    data = jsonloc.loads('{"a": 1, "b": [1, 2, 3]}')

    source = jsonloc.Source.load_file("settings.json")
    data = jsonloc.parse(source, jsonloc.ParseOptions.relaxed_options())

    try:
        jsonloc.loads('{"a": 1,}', file_name="inline.json")
    except jsonloc.ParseError as e:
        print(e)  # inline.json:1:9: expected string for object key, found '}'
"""

from .core.engine import Parser, load, loads, parse, parse_file
from .core.location import Location
from .core.source import LineAndColumn, LineAndIndex, Source
from .security.exceptions import (
    ErrorContext,
    ParseError,
    SecurityError,
    SourceLoadError,
    jsonlocError,
)
from .utils.config import ErrorReporting, ParseConfig, ParseLimits, ParseOptions

__version__ = "0.1.0"
__author__ = "jsonloc contributors"

__all__ = [
    # Parsing entry points
    "parse", "parse_file", "loads", "load", "Parser",
    # Sources and locations
    "Source", "Location", "LineAndIndex", "LineAndColumn",
    # Configuration classes
    "ParseOptions", "ParseLimits", "ErrorReporting", "ParseConfig",
    # Exception classes
    "jsonlocError", "ParseError", "SecurityError", "SourceLoadError", "ErrorContext",
]
