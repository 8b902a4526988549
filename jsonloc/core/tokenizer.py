"""
Lexer for jsonloc - scans a Source buffer into tokens on demand.

The lexer never materializes a token list. The parser pulls one token at a
time with next_token(), and the lexer's current offset is the only state.
"""

from collections.abc import Iterator
from enum import Enum
from typing import Any, NamedTuple, Optional, Union

import regex

from ..security.exceptions import ParseError
from ..security.limits import LimitValidator
from ..utils.config import ErrorReporting, ParseOptions
from .constants import (
    DIGIT_BYTES,
    HEX_DIGIT_BYTES,
    JSON_ESCAPE_MAP,
    KEYWORD_VALUES,
    SPECIAL_NUMBER_VALUES,
    describe_byte,
    get_structural_token_map,
)
from .location import Location
from .source import Source

END = -1

QUOTE = ord('"')
APOSTROPHE = ord("'")
BACKSLASH = ord("\\")
MINUS = ord("-")
PLUS = ord("+")
DOT = ord(".")
ZERO = ord("0")
LOWER_U = ord("u")
EXPONENT_BYTES = frozenset(b"eE")
SIGN_BYTES = frozenset(b"+-")
NUMBER_START_BYTES = frozenset(b"-+.0123456789")
SPECIAL_NUMBER_START_BYTES = frozenset(b"IN")
KEYWORD_START_BYTES = frozenset(b"tfn")

_WHITESPACE = regex.compile(rb"[ \t\r\n]*")
_DIGITS = regex.compile(rb"[0-9]*")
_DOUBLE_QUOTED_CHUNK = regex.compile(rb'[^"\\\x00-\x1f]*')
_SINGLE_QUOTED_CHUNK = regex.compile(rb"[^'\\\x00-\x1f]*")
_KEYWORD = regex.compile(rb"true|false|null")
_SPECIAL_NUMBER = regex.compile(rb"-?Infinity|NaN")


class TokenType(Enum):
    """Token types for JSON parsing."""

    LBRACE = "LBRACE"
    RBRACE = "RBRACE"
    LBRACKET = "LBRACKET"
    RBRACKET = "RBRACKET"
    COLON = "COLON"
    COMMA = "COMMA"

    STRING = "STRING"
    NUMBER = "NUMBER"
    BOOLEAN = "BOOLEAN"
    NULL = "NULL"

    EOF = "EOF"


class Token(NamedTuple):
    """Token with type, decoded value and the byte offset where it starts."""

    type: TokenType
    value: Any
    offset: int


class Lexer:
    """Lexical analyzer over a Source buffer."""

    def __init__(
        self,
        source: Source,
        options: Optional[ParseOptions] = None,
        error_reporting: Optional[ErrorReporting] = None,
        validator: Optional[LimitValidator] = None,
    ) -> None:
        if not source:
            raise ValueError(f"Source {source.file_name!r} has no contents")
        self.source = source
        self.buffer = source.buffer
        self.size = source.size
        self.options = options or ParseOptions.default_options()
        self.error_reporting = error_reporting or ErrorReporting()
        self.validator = validator
        self.pos = 0
        self._structural = get_structural_token_map()

    def location(self, offset: Optional[int] = None) -> Location:
        """Location of ``offset``, or of the current position."""
        return Location(self.source, self.pos if offset is None else offset)

    def error(self, message: str, offset: Optional[int] = None) -> ParseError:
        """Build a ParseError located at ``offset`` (default: current position)."""
        return ParseError(
            self.location(offset),
            message,
            tab_size=self.error_reporting.tab_size,
            include_context=self.error_reporting.include_context,
        )

    def peek(self, offset: int = 0) -> int:
        """Byte at the given offset from the current position, or END."""
        pos = self.pos + offset
        if pos >= self.size:
            return END
        return self.buffer[pos]

    def at_end(self) -> bool:
        return self.pos >= self.size

    def skip_whitespace(self) -> None:
        """Skip spaces, tabs, carriage returns and line feeds."""
        self.pos = _WHITESPACE.match(self.buffer, self.pos, self.size).end()

    def next_token(self) -> Token:
        """Skip whitespace and scan the next token."""
        self.skip_whitespace()
        start = self.pos
        if start >= self.size:
            return Token(TokenType.EOF, None, start)

        byte = self.buffer[start]
        token_type = self._structural.get(byte)
        if token_type is not None:
            self.pos += 1
            return Token(token_type, chr(byte), start)
        if byte in (QUOTE, APOSTROPHE):
            return Token(TokenType.STRING, self.read_string(), start)
        if byte in NUMBER_START_BYTES or (
            byte in SPECIAL_NUMBER_START_BYTES
            and _SPECIAL_NUMBER.match(self.buffer, start, self.size)
        ):
            return Token(TokenType.NUMBER, self.read_number(), start)
        if byte in KEYWORD_START_BYTES:
            value = self.read_keyword()
            token_type = TokenType.NULL if value is None else TokenType.BOOLEAN
            return Token(token_type, value, start)
        raise self.error(f"unexpected character {describe_byte(byte)}", start)

    def tokenize(self) -> Iterator[Token]:
        """Lazily yield tokens up to and including EOF."""
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    def read_keyword(self) -> Optional[bool]:
        """Read ``true``, ``false`` or ``null``."""
        start = self.pos
        match = _KEYWORD.match(self.buffer, start, self.size)
        if match is None:
            raise self.error("invalid literal, expected 'true', 'false' or 'null'", start)
        self.pos = match.end()
        return KEYWORD_VALUES[bytes(self.buffer[start : self.pos])]

    def read_string(self) -> str:
        """Read a quoted string, decoding escapes."""
        start = self.pos
        quote = self.buffer[start]
        if quote == APOSTROPHE and not self.options.allow_single_quote_strings:
            raise self.error(
                "single-quoted strings are not allowed "
                "(enable allow_single_quote_strings)",
                start,
            )
        chunk_pattern = _DOUBLE_QUOTED_CHUNK if quote == QUOTE else _SINGLE_QUOTED_CHUNK
        self.pos += 1
        chunks: list[str] = []

        while True:
            chunk_end = chunk_pattern.match(self.buffer, self.pos, self.size).end()
            if chunk_end > self.pos:
                chunks.append(self._decode_chunk(self.pos, chunk_end))
                self.pos = chunk_end
            if self.pos >= self.size:
                raise self.error("unterminated string")
            byte = self.buffer[self.pos]
            if byte == quote:
                self.pos += 1
                break
            if byte == BACKSLASH:
                chunks.append(self._read_escape(quote))
                continue
            raise self.error(f"control character {describe_byte(byte)} in string")

        value = "".join(chunks)
        if self.validator:
            self.validator.validate_string_length(len(value), self.location(start))
        return value

    def _decode_chunk(self, start: int, end: int) -> str:
        try:
            return bytes(self.buffer[start:end]).decode("utf-8")
        except UnicodeDecodeError as e:
            raise self.error("invalid UTF-8 in string", start + e.start) from None

    def _read_escape(self, quote: int) -> str:
        """Read one escape sequence; the current byte is the backslash."""
        self.pos += 1
        byte = self.peek()
        if byte == END:
            raise self.error("unterminated string")
        if byte == LOWER_U:
            self.pos += 1
            return self._read_unicode_escape()
        if byte == APOSTROPHE and quote == APOSTROPHE:
            self.pos += 1
            return "'"
        char = JSON_ESCAPE_MAP.get(byte)
        if char is None:
            raise self.error(f"invalid escape sequence {describe_byte(byte)} after '\\'")
        self.pos += 1
        return char

    def _read_hex_digits(self) -> int:
        """Read exactly 4 hexadecimal digits."""
        for i in range(4):
            byte = self.peek(i)
            if byte == END:
                self.pos = self.size
                raise self.error("unterminated string")
            if byte not in HEX_DIGIT_BYTES:
                raise self.error(
                    f"invalid \\u escape sequence: expected hex digit, "
                    f"found {describe_byte(byte)}",
                    self.pos + i,
                )
        value = int(bytes(self.buffer[self.pos : self.pos + 4]), 16)
        self.pos += 4
        return value

    def _read_unicode_escape(self) -> str:
        """Read the digits of a ``\\u`` escape, pairing surrogates."""
        escape_start = self.pos - 2
        code_point = self._read_hex_digits()
        if 0xDC00 <= code_point <= 0xDFFF:
            raise self.error("unpaired low surrogate in \\u escape", escape_start)
        if 0xD800 <= code_point <= 0xDBFF:
            low_start = self.pos
            if self.peek() != BACKSLASH or self.peek(1) != LOWER_U:
                raise self.error(
                    "high surrogate must be followed by a \\u low surrogate escape"
                )
            self.pos += 2
            low = self._read_hex_digits()
            if not 0xDC00 <= low <= 0xDFFF:
                raise self.error(
                    "high surrogate must be followed by a \\u low surrogate escape",
                    low_start,
                )
            code_point = 0x10000 + ((code_point - 0xD800) << 10) + (low - 0xDC00)
        return chr(code_point)

    def read_number(self) -> Union[int, float]:
        """Read a number literal with a left-to-right state machine."""
        start = self.pos
        options = self.options

        special = _SPECIAL_NUMBER.match(self.buffer, start, self.size)
        if special is not None:
            if not options.allow_infinity_and_nan:
                raise self.error(
                    "Infinity and NaN are not allowed (enable allow_infinity_and_nan)",
                    start,
                )
            self.pos = special.end()
            return SPECIAL_NUMBER_VALUES[bytes(self.buffer[start : self.pos])]

        byte = self.peek()
        if byte == MINUS:
            self.pos += 1
        elif byte == PLUS:
            if not options.allow_explicit_plus_sign_in_mantissa:
                raise self.error(
                    "explicit '+' sign in number is not allowed "
                    "(enable allow_explicit_plus_sign_in_mantissa)",
                    start,
                )
            self.pos += 1

        is_float = False
        byte = self.peek()
        if byte == ZERO:
            self.pos += 1
            if self.peek() in DIGIT_BYTES:
                raise self.error("invalid number: leading zeros are not allowed")
        elif byte in DIGIT_BYTES:
            self._skip_digits()
        elif byte == DOT:
            if not options.allow_number_to_start_with_dot:
                raise self.error(
                    "number must not start with '.' "
                    "(enable allow_number_to_start_with_dot)"
                )
        else:
            raise self._expected_digit("in number")

        if self.peek() == DOT:
            is_float = True
            self.pos += 1
            if not self._skip_digits():
                raise self._expected_digit("after decimal point")

        if self.peek() in EXPONENT_BYTES:
            is_float = True
            self.pos += 1
            if self.peek() in SIGN_BYTES:
                self.pos += 1
            if not self._skip_digits():
                raise self._expected_digit("in exponent")

        if self.validator:
            self.validator.validate_number_length(self.pos - start, self.location(start))

        text = bytes(self.buffer[start : self.pos]).decode("ascii")
        if is_float:
            return float(text)
        try:
            return int(text)
        except ValueError:
            raise self.error("invalid number: integer literal too long", start) from None

    def _skip_digits(self) -> bool:
        """Consume a run of decimal digits; True if any were consumed."""
        start = self.pos
        self.pos = _DIGITS.match(self.buffer, start, self.size).end()
        return self.pos > start

    def _expected_digit(self, where: str) -> ParseError:
        byte = self.peek()
        if byte == END:
            return self.error(f"unexpected end of input, expected digit {where}")
        return self.error(
            f"invalid number: expected digit {where}, found {describe_byte(byte)}"
        )
