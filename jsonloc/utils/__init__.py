"""
jsonloc configuration.
"""

from .config import ErrorReporting, ParseConfig, ParseLimits, ParseOptions

__all__ = ['ParseOptions', 'ParseLimits', 'ErrorReporting', 'ParseConfig']
