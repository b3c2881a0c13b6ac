"""Configuration classes for lenient markup parsing.

A ``ParserConfig`` bundles the classification tables that drive recovery
together with the few behavioral switches of the tokenizer. The default
configuration reproduces HTML authoring conventions; ``ParserConfig.xml()``
turns every HTML-specific rule off and leaves pure tag balancing.
"""

import re
from dataclasses import dataclass, field, fields, replace
from typing import AbstractSet, Any, Dict, List, Optional

from .errors import LenientMarkupError
from .tables import (
    BLOCK_ELEMENTS,
    CLOSE_SELF_ELEMENTS,
    EMPTY_SET,
    FILL_ATTRIBUTES,
    INLINE_ELEMENTS,
    RAW_TEXT_ELEMENTS,
    VOID_ELEMENTS,
)

_TAG_NAME_PATTERN = re.compile(r"[-A-Za-z0-9_]+\Z")

_TABLE_FIELDS = (
    "void_elements",
    "block_elements",
    "inline_elements",
    "close_self_elements",
    "fill_attributes",
    "raw_text_elements",
)


class ConfigError(LenientMarkupError):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class ParserConfig:
    """Immutable configuration for the tokenizer and tag balancer.

    Frozen, so a single instance can be shared between parses running in
    different threads.

    Attributes:
        void_elements: Elements that never receive children
        block_elements: Elements that force open inline elements closed
        inline_elements: Elements closed when a block element opens inside them
        close_self_elements: Elements implicitly closed by a sibling of the same name
        fill_attributes: Boolean attributes defaulting to their own name
        raw_text_elements: Elements whose content is not tokenized as markup
        lowercase_tag_names: Fold start and end tag names to lower case
        correlation_id: Optional correlation ID attached to every log record
    """

    void_elements: AbstractSet[str] = VOID_ELEMENTS
    block_elements: AbstractSet[str] = BLOCK_ELEMENTS
    inline_elements: AbstractSet[str] = INLINE_ELEMENTS
    close_self_elements: AbstractSet[str] = CLOSE_SELF_ELEMENTS
    fill_attributes: AbstractSet[str] = FILL_ATTRIBUTES
    raw_text_elements: AbstractSet[str] = RAW_TEXT_ELEMENTS
    lowercase_tag_names: bool = True
    correlation_id: Optional[str] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Normalize tables to frozensets and validate them."""
        for name in _TABLE_FIELDS:
            value = getattr(self, name)
            if isinstance(value, str) or not hasattr(value, "__iter__"):
                raise ConfigValidationError(
                    f"{name} must be a collection of names, not {type(value).__name__}",
                    field_name=name,
                )
            names = frozenset(value)
            for item in names:
                if not isinstance(item, str) or not item:
                    raise ConfigValidationError(
                        f"{name} must only contain non-empty strings",
                        field_name=name,
                    )
            # frozen dataclass: bypass __setattr__ for normalization
            object.__setattr__(self, name, names)

        for tag in self.raw_text_elements:
            if not _TAG_NAME_PATTERN.match(tag):
                raise ConfigValidationError(
                    f"raw_text_elements contains invalid tag name {tag!r}",
                    field_name="raw_text_elements",
                    suggestions=["Use letters, digits, '-' and '_' only"],
                )

        if self.lowercase_tag_names:
            for name in ("void_elements", "block_elements", "inline_elements",
                         "close_self_elements", "raw_text_elements"):
                upper = sorted(tag for tag in getattr(self, name) if tag != tag.lower())
                if upper:
                    raise ConfigValidationError(
                        f"{name} contains {upper[0]!r} which can never match "
                        "lower-cased tag names",
                        field_name=name,
                        suggestions=[f"Use {upper[0].lower()!r}",
                                     "Set lowercase_tag_names=False"],
                    )

    @classmethod
    def html(cls, correlation_id: Optional[str] = None) -> "ParserConfig":
        """Create the default configuration with HTML recovery rules."""
        return cls(correlation_id=correlation_id)

    @classmethod
    def xml(cls, correlation_id: Optional[str] = None) -> "ParserConfig":
        """Create a configuration without any HTML-specific classification.

        Tag names keep their case, nothing is void unless written ``<x/>``,
        and the only recovery left is stack-based tag balancing.
        """
        return cls(
            void_elements=EMPTY_SET,
            block_elements=EMPTY_SET,
            inline_elements=EMPTY_SET,
            close_self_elements=EMPTY_SET,
            fill_attributes=EMPTY_SET,
            raw_text_elements=EMPTY_SET,
            lowercase_tag_names=False,
            correlation_id=correlation_id,
        )

    def with_correlation_id(self, correlation_id: Optional[str]) -> "ParserConfig":
        """Return a copy of this configuration tagged with ``correlation_id``."""
        return replace(self, correlation_id=correlation_id)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a JSON-compatible dictionary."""
        result: Dict[str, Any] = {
            name: sorted(getattr(self, name)) for name in _TABLE_FIELDS
        }
        result["lowercase_tag_names"] = self.lowercase_tag_names
        if self.correlation_id is not None:
            result["correlation_id"] = self.correlation_id
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from a dictionary.

        A ``"preset"`` key of ``"html"`` or ``"xml"`` selects the starting
        point; any other recognized key overrides the preset's value.
        """
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration data must be a dictionary")

        values = dict(data)
        preset = values.pop("preset", "html")
        if preset == "html":
            base = cls.html()
        elif preset == "xml":
            base = cls.xml()
        else:
            raise ConfigValidationError(
                f"Unknown preset {preset!r}",
                field_name="preset",
                suggestions=["html", "xml"],
            )

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration field {unknown[0]!r}",
                field_name=unknown[0],
                suggestions=sorted(known),
            )

        merged = {f.name: getattr(base, f.name) for f in fields(cls)}
        merged.update(values)
        return cls(**merged)
