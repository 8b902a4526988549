"""
Structure and size limits for jsonloc.

A LimitValidator is created per parse call, so its counters are never shared
between parses.
"""

from typing import TYPE_CHECKING

from ..utils.config import ErrorReporting, ParseLimits
from .exceptions import SecurityError

if TYPE_CHECKING:
    from ..core.location import Location


class LimitValidator:
    """Validates parsing limits to prevent resource exhaustion."""

    def __init__(self, limits: ParseLimits, error_reporting: ErrorReporting = ErrorReporting()):
        self.limits = limits
        self.error_reporting = error_reporting
        self.nesting_depth = 0

    def _fail(self, location: "Location", message: str) -> SecurityError:
        return SecurityError(
            location,
            message,
            tab_size=self.error_reporting.tab_size,
            include_context=self.error_reporting.include_context,
        )

    def validate_input_size(self, size: int, location: "Location") -> None:
        """Validate that input size is within limits."""
        limit = self.limits.max_input_size
        if limit is not None and size > limit:
            raise self._fail(location, f"input size {size} exceeds limit {limit}")

    def validate_string_length(self, length: int, location: "Location") -> None:
        """Validate that a decoded string's length is within limits."""
        limit = self.limits.max_string_length
        if limit is not None and length > limit:
            raise self._fail(location, f"string length {length} exceeds limit {limit}")

    def validate_number_length(self, length: int, location: "Location") -> None:
        """Validate that a number literal's length is within limits."""
        limit = self.limits.max_number_length
        if limit is not None and length > limit:
            raise self._fail(location, f"number length {length} exceeds limit {limit}")

    def enter_structure(self, location: "Location") -> None:
        """Track entering a nested array or object and validate depth."""
        self.nesting_depth += 1
        if self.nesting_depth > self.limits.max_nesting_depth:
            raise self._fail(
                location,
                f"nesting depth {self.nesting_depth} exceeds limit "
                f"{self.limits.max_nesting_depth}",
            )

    def stack_exhausted(self, location: "Location") -> SecurityError:
        """Error for nesting that ran out of interpreter stack below the limit."""
        return self._fail(
            location,
            f"nesting depth {self.nesting_depth} exceeds the interpreter recursion limit",
        )

    def exit_structure(self) -> None:
        """Track exiting a nested structure."""
        if self.nesting_depth > 0:
            self.nesting_depth -= 1

    def reset(self) -> None:
        """Reset validator state for reuse."""
        self.nesting_depth = 0
