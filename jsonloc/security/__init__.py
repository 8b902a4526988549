"""
jsonloc error types and input limits.
"""

from .exceptions import ErrorContext, ParseError, SecurityError, SourceLoadError, jsonlocError
from .limits import LimitValidator

__all__ = [
    'jsonlocError', 'ParseError', 'SecurityError', 'SourceLoadError', 'ErrorContext',
    'LimitValidator',
]
