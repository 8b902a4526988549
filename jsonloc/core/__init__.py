"""
jsonloc Core Parsing Engine.

This module provides source buffers, locations, the tokenizer and the parser.
"""

from .engine import Parser, load, loads, parse, parse_file
from .location import Location
from .source import LineAndColumn, LineAndIndex, Source, find_line_start_indexes
from .tokenizer import Lexer, Token, TokenType

__all__ = [
    'parse', 'parse_file', 'loads', 'load', 'Parser',
    'Source', 'Location', 'LineAndIndex', 'LineAndColumn', 'find_line_start_indexes',
    'Lexer', 'Token', 'TokenType',
]
