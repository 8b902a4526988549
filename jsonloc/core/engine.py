"""
Parser for jsonloc - converts tokens into Python data structures.

The value grammar is parsed by recursive descent with a single token of
lookahead. The first violation raises a ParseError located at the offending
byte; nothing is returned on failure.
"""

import logging
from pathlib import Path
from typing import IO, Any, Optional, Union

from ..security.exceptions import ParseError
from ..security.limits import LimitValidator
from ..utils.config import ParseConfig, ParseOptions
from .source import Source
from .tokenizer import Lexer, Token, TokenType

logger = logging.getLogger(__name__)

SCALAR_TOKEN_TYPES = frozenset(
    {TokenType.STRING, TokenType.NUMBER, TokenType.BOOLEAN, TokenType.NULL}
)


def describe_token(token: Token) -> str:
    """Short description of a token for error messages."""
    if token.type == TokenType.EOF:
        return "end of input"
    if token.type == TokenType.STRING:
        return "string"
    if token.type == TokenType.NUMBER:
        return "number"
    if token.type == TokenType.BOOLEAN:
        return "'true'" if token.value else "'false'"
    if token.type == TokenType.NULL:
        return "'null'"
    return repr(token.value)


class Parser:
    """JSON parser that pulls tokens from a Lexer and builds Python values."""

    def __init__(self, source: Source, config: Optional[ParseConfig] = None):
        self.source = source
        self.config = config or ParseConfig()
        self.validator = LimitValidator(self.config.limits, self.config.error_reporting)
        self.lexer = Lexer(
            source, self.config.options, self.config.error_reporting, self.validator
        )
        self._token: Optional[Token] = None

    def current_token(self) -> Token:
        """Get the lookahead token, scanning it on first access."""
        if self._token is None:
            self._token = self.lexer.next_token()
        return self._token

    def advance(self) -> Token:
        """Consume and return the lookahead token."""
        token = self.current_token()
        self._token = None
        return token

    def error(self, message: str, token: Token) -> ParseError:
        return self.lexer.error(message, token.offset)

    def _unexpected(self, token: Token, expected: str, structure: str) -> ParseError:
        if token.type == TokenType.EOF:
            return self.error(f"unterminated {structure}", token)
        return self.error(f"expected {expected}, found {describe_token(token)}", token)

    def parse(self) -> Any:
        """Parse the whole source as exactly one JSON value."""
        logger.debug(
            f"Parsing {self.source.file_name or '<unknown>'} "
            f"({self.source.size} bytes, options={self.config.options})"
        )
        self.validator.reset()
        self.validator.validate_input_size(self.source.size, self.lexer.location(0))
        try:
            value = self.parse_value()
            self.lexer.skip_whitespace()
            if not self.lexer.at_end():
                raise self.lexer.error("unexpected trailing data after JSON value")
        except ParseError as e:
            logger.debug(f"Parse failed: {e}")
            raise
        except RecursionError:
            error = self.validator.stack_exhausted(self.lexer.location())
            logger.debug(f"Parse failed: {error}")
            raise error from None
        return value

    def parse_value(self) -> Any:
        """Parse a JSON value (string, number, boolean, null, object, or array)."""
        token = self.current_token()

        if token.type in SCALAR_TOKEN_TYPES:
            self.advance()
            return token.value

        if token.type == TokenType.LBRACE:
            return self.parse_object()

        if token.type == TokenType.LBRACKET:
            return self.parse_array()

        if token.type == TokenType.EOF:
            raise self.error("unexpected end of input, expected value", token)
        raise self.error(f"expected value, found {describe_token(token)}", token)

    def parse_object(self) -> dict[str, Any]:
        """Parse a JSON object into a dict, preserving member order."""
        open_token = self.advance()
        self.validator.enter_structure(self.lexer.location(open_token.offset))
        obj: dict[str, Any] = {}

        if self.current_token().type == TokenType.RBRACE:
            self.advance()
            self.validator.exit_structure()
            return obj

        while True:
            key_token = self.current_token()
            if key_token.type != TokenType.STRING:
                raise self._unexpected(key_token, "string for object key", "object")
            self.advance()

            colon = self.current_token()
            if colon.type != TokenType.COLON:
                raise self._unexpected(colon, "':' after object key", "object")
            self.advance()

            # Duplicate keys: the last value wins
            obj[key_token.value] = self.parse_value()

            separator = self.advance()
            if separator.type == TokenType.COMMA:
                continue
            if separator.type == TokenType.RBRACE:
                break
            raise self._unexpected(separator, "',' or '}' after object member", "object")

        self.validator.exit_structure()
        return obj

    def parse_array(self) -> list[Any]:
        """Parse a JSON array into a list."""
        open_token = self.advance()
        self.validator.enter_structure(self.lexer.location(open_token.offset))
        arr: list[Any] = []

        if self.current_token().type == TokenType.RBRACKET:
            self.advance()
            self.validator.exit_structure()
            return arr

        while True:
            if self.current_token().type == TokenType.EOF:
                raise self.error("unterminated array", self.current_token())
            arr.append(self.parse_value())

            separator = self.advance()
            if separator.type == TokenType.COMMA:
                continue
            if separator.type == TokenType.RBRACKET:
                break
            raise self._unexpected(separator, "',' or ']' after array element", "array")

        self.validator.exit_structure()
        return arr


def _resolve_config(
    options: Optional[ParseOptions], config: Optional[ParseConfig]
) -> ParseConfig:
    if config is None:
        return ParseConfig(options=options or ParseOptions.default_options())
    if options is not None:
        return config.with_options(options)
    return config


def parse(
    source: Source,
    options: Optional[ParseOptions] = None,
    *,
    config: Optional[ParseConfig] = None,
) -> Any:
    """
    Parse a Source into a Python data structure.

    Args:
        source: Source holding the text to parse
        options: Grammar relaxations; strict JSON when omitted
        config: Optional ParseConfig for limits and error rendering. When both
            are given, ``options`` replaces ``config.options``.

    Returns:
        Parsed value: dict, list, str, int, float, bool or None

    Raises:
        ParseError: On the first grammar violation
        SecurityError: If a configured limit or the interpreter stack is exceeded
        ValueError: If the Source has no contents
    """
    return Parser(source, _resolve_config(options, config)).parse()


def loads(
    s: Union[str, bytes, bytearray],
    *,
    options: Optional[ParseOptions] = None,
    config: Optional[ParseConfig] = None,
    file_name: str = "<string>",
) -> Any:
    """Parse JSON text held in memory; errors name ``file_name``."""
    if isinstance(s, str):
        source = Source.from_text(file_name, s)
    elif isinstance(s, (bytes, bytearray)):
        source = Source.from_bytes(file_name, s)
    else:
        raise TypeError(
            f"the JSON object must be str, bytes or bytearray, not {type(s).__name__}"
        )
    return parse(source, options, config=config)


def load(
    fp: IO[Any],
    *,
    options: Optional[ParseOptions] = None,
    config: Optional[ParseConfig] = None,
    file_name: Optional[str] = None,
) -> Any:
    """Parse the contents of a text or binary file object."""
    if file_name is None:
        name = getattr(fp, "name", None)
        file_name = name if isinstance(name, str) else "<stream>"
    return loads(fp.read(), options=options, config=config, file_name=file_name)


def parse_file(
    path: Union[str, Path],
    options: Optional[ParseOptions] = None,
    *,
    config: Optional[ParseConfig] = None,
) -> Any:
    """Load a file into a Source and parse it."""
    return parse(Source.load_file(path), options, config=config)
