"""
Configuration and limits for jsonloc parsing.

This module defines the grammar toggles, structure limits and error reporting
settings that drive a single parse call. All of them are immutable values; a
parse never consults process-wide state.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

DEFAULT_TAB_SIZE = 8
DEFAULT_MAX_NESTING_DEPTH = 256


@dataclass(frozen=True)
class ParseOptions:
    """Grammar relaxations beyond strict RFC 8259 JSON."""

    allow_infinity_and_nan: bool = False
    allow_explicit_plus_sign_in_mantissa: bool = False
    allow_single_quote_strings: bool = False
    allow_number_to_start_with_dot: bool = False

    @classmethod
    def default_options(cls) -> "ParseOptions":
        """Strict JSON: every relaxation disabled."""
        return cls()

    @classmethod
    def relaxed_options(cls) -> "ParseOptions":
        """Every relaxation enabled."""
        return cls(
            allow_infinity_and_nan=True,
            allow_explicit_plus_sign_in_mantissa=True,
            allow_single_quote_strings=True,
            allow_number_to_start_with_dot=True,
        )

    @classmethod
    def from_features(cls, enabled_features: Iterable[str]) -> "ParseOptions":
        """Create options from a set of enabled feature names.

        Accepts either the full field name (``allow_single_quote_strings``)
        or the short form without the ``allow_`` prefix.
        """
        known = set(cls.feature_names())
        enabled = {}
        for feature_name in enabled_features:
            name = feature_name.replace("-", "_")
            if not name.startswith("allow_"):
                name = f"allow_{name}"
            if name not in known:
                raise ValueError(f"Unknown parse option: {feature_name}")
            enabled[name] = True
        return cls(**enabled)

    @classmethod
    def feature_names(cls) -> tuple[str, ...]:
        """Names of all grammar toggles, in declaration order."""
        return (
            "allow_infinity_and_nan",
            "allow_explicit_plus_sign_in_mantissa",
            "allow_single_quote_strings",
            "allow_number_to_start_with_dot",
        )

    @property
    def is_strict(self) -> bool:
        """True when no relaxation is enabled."""
        return not any(getattr(self, name) for name in self.feature_names())


@dataclass(frozen=True)
class ParseLimits:
    """Structure and size limits guarding against pathological input.

    ``None`` disables a size limit. Nesting depth is always bounded because
    the value grammar is parsed recursively.
    """

    max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH
    max_input_size: Optional[int] = None
    max_string_length: Optional[int] = None
    max_number_length: Optional[int] = None

    def __post_init__(self) -> None:
        if self.max_nesting_depth <= 0:
            raise ValueError("max_nesting_depth must be positive")
        for name in ("max_input_size", "max_string_length", "max_number_length"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise ValueError(f"{name} must be positive")


@dataclass(frozen=True)
class ErrorReporting:
    """Error rendering settings."""

    tab_size: int = DEFAULT_TAB_SIZE
    include_context: bool = False

    def __post_init__(self) -> None:
        if self.tab_size <= 0:
            raise ValueError("tab_size must be positive")


@dataclass(frozen=True)
class ParseConfig:
    """Configuration options for one jsonloc parse."""

    options: ParseOptions = field(default_factory=ParseOptions)
    limits: ParseLimits = field(default_factory=ParseLimits)
    error_reporting: ErrorReporting = field(default_factory=ErrorReporting)

    @classmethod
    def strict(cls) -> "ParseConfig":
        """Strict JSON grammar with default limits."""
        return cls(options=ParseOptions.default_options())

    @classmethod
    def relaxed(cls) -> "ParseConfig":
        """Relaxed grammar with default limits."""
        return cls(options=ParseOptions.relaxed_options())

    def with_options(self, options: ParseOptions) -> "ParseConfig":
        """Return a copy using different grammar options."""
        return ParseConfig(
            options=options,
            limits=self.limits,
            error_reporting=self.error_reporting,
        )

    @property
    def tab_size(self) -> int:
        """Tab width used when rendering error columns."""
        return self.error_reporting.tab_size

    @property
    def include_context(self) -> bool:
        """Whether errors carry a source excerpt."""
        return self.error_reporting.include_context

    @property
    def max_nesting_depth(self) -> int:
        """Maximum nesting depth for arrays and objects."""
        return self.limits.max_nesting_depth
