"""Shared utilities for lenient markup parsing.

This module provides the classification tables, configuration objects,
exception types and logging helpers used across all processing layers.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    ParserConfig,
)
from .errors import (
    LenientMarkupError,
    MarkupParseError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)
from .tables import (
    BLOCK_ELEMENTS,
    CLOSE_SELF_ELEMENTS,
    FILL_ATTRIBUTES,
    INLINE_ELEMENTS,
    RAW_TEXT_ELEMENTS,
    VOID_ELEMENTS,
)

__all__ = [
    "BLOCK_ELEMENTS",
    "CLOSE_SELF_ELEMENTS",
    "ConfigError",
    "ConfigValidationError",
    "CorrelationLogger",
    "FILL_ATTRIBUTES",
    "INLINE_ELEMENTS",
    "LenientMarkupError",
    "MarkupParseError",
    "ParserConfig",
    "RAW_TEXT_ELEMENTS",
    "VOID_ELEMENTS",
    "get_logger",
]
