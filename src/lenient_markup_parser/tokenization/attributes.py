"""Attribute grammar for start tags.

Parses the attribute region of a start tag (everything between the tag name
and the closing ``>``) into an ordered list of ``Attribute`` records.
"""

import re
from dataclasses import dataclass
from typing import AbstractSet, List

# Shared by the start-tag pattern so both agree on what an attribute is
ATTRIBUTE_NAME = r"[a-zA-Z_:][-a-zA-Z0-9_:.]*"
DOUBLE_QUOTED = r'"((?:[^"\\]|\\.)*)"'
SINGLE_QUOTED = r"'((?:[^'\\]|\\.)*)'"
UNQUOTED = r"([^>\s]+)"

ATTRIBUTE_PATTERN = re.compile(
    rf"({ATTRIBUTE_NAME})"
    rf"(?:\s*=\s*(?:{DOUBLE_QUOTED}|{SINGLE_QUOTED}|{UNQUOTED}))?",
    re.DOTALL,
)

# A run of backslashes ending at a double quote or at the end of the value
_BACKSLASHES_BEFORE_QUOTE = re.compile(r'(\\*)("|\Z)')


@dataclass(frozen=True)
class Attribute:
    """A single attribute of a start tag.

    Attributes:
        name: Attribute name as written in the source
        value: Resolved value, possibly empty
        escaped: Value with every unescaped ``"`` backslash-escaped, safe to
            place between double quotes when re-serializing
    """

    name: str
    value: str
    escaped: str

    @classmethod
    def create(cls, name: str, value: str) -> "Attribute":
        """Create an attribute, computing its escaped form."""
        return cls(name=name, value=value, escaped=escape_value(value))


def _escape_run(match: "re.Match[str]") -> str:
    backslashes, quote = match.groups()
    if quote:
        # an even run escapes only itself, leaving the quote bare
        return backslashes + ("\\" if len(backslashes) % 2 == 0 else "") + quote
    # an odd trailing run would escape the closing quote
    return backslashes + ("\\" if len(backslashes) % 2 else "")


def escape_value(value: str) -> str:
    """Backslash-escape every double quote not already escaped.

    A quote counts as escaped only when an odd number of backslashes precede
    it. A value ending in an odd number of backslashes gets one more, so the
    result never escapes the closing quote it is placed before.
    """
    return _BACKSLASHES_BEFORE_QUOTE.sub(_escape_run, value)


def parse_attributes(region: str, fill_attributes: AbstractSet[str]) -> List[Attribute]:
    """Parse a start tag's attribute region into attributes in source order.

    The value of each attribute is, in order of preference, its double-quoted
    content, its single-quoted content, its unquoted token, its own name if it
    is a fill attribute, or the empty string. Duplicate names are kept.

    Args:
        region: Text between the tag name and the closing ``/>`` or ``>``
        fill_attributes: Boolean attribute names that default to themselves

    Returns:
        List of attributes in the order they appear in ``region``
    """
    attributes = []
    for match in ATTRIBUTE_PATTERN.finditer(region):
        name = match.group(1)
        # an empty explicit value counts as absent, so disabled="" is filled too
        value = (
            match.group(2)
            or match.group(3)
            or match.group(4)
            or (name if name in fill_attributes else "")
        )
        attributes.append(Attribute.create(name, value))
    return attributes
