"""
Common constants and byte tables used by the jsonloc tokenizer.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .tokenizer import TokenType

# Single-character escapes, keyed by the byte following the backslash
JSON_ESCAPE_MAP = {
    ord("n"): "\n",
    ord("t"): "\t",
    ord("r"): "\r",
    ord("b"): "\b",
    ord("f"): "\f",
    ord('"'): '"',
    ord("\\"): "\\",
    ord("/"): "/",
}

DIGIT_BYTES = frozenset(b"0123456789")
HEX_DIGIT_BYTES = frozenset(b"0123456789abcdefABCDEF")

KEYWORD_VALUES = {
    b"true": True,
    b"false": False,
    b"null": None,
}

SPECIAL_NUMBER_VALUES = {
    b"-Infinity": float("-inf"),
    b"Infinity": float("inf"),
    b"NaN": float("nan"),
}


def get_structural_token_map() -> dict[int, "TokenType"]:
    """Get the mapping of structural bytes to TokenType enums."""
    # Import here to avoid circular imports
    from .tokenizer import TokenType  # pylint: disable=import-outside-toplevel

    return {
        ord("{"): TokenType.LBRACE,
        ord("}"): TokenType.RBRACE,
        ord("["): TokenType.LBRACKET,
        ord("]"): TokenType.RBRACKET,
        ord(":"): TokenType.COLON,
        ord(","): TokenType.COMMA,
    }


def describe_byte(byte: int) -> str:
    """Human-readable rendering of a single input byte for error messages."""
    if 0x20 < byte < 0x7F:
        return repr(chr(byte))
    if byte == 0x20:
        return "space"
    return f"byte 0x{byte:02x}"
