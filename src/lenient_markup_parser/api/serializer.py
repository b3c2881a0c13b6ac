"""Well-formed markup serialization.

``serialize`` is a reference consumer of the event stream: it re-emits every
event as markup, so any input, however broken, comes back balanced.
"""

from typing import List, Optional

from lenient_markup_parser.shared import ParserConfig
from lenient_markup_parser.tokenization import Attribute

from .parser import MarkupParser


class MarkupSerializer:
    """Event handler accumulating well-formed markup."""

    def __init__(self) -> None:
        self._parts: List[str] = []
        self._void_pending = False

    def start(self, name: str, attributes: List[Attribute], is_void: bool) -> None:
        self._parts.append("<" + name)
        for attribute in attributes:
            self._parts.append(f' {attribute.name}="{attribute.escaped}"')
        self._parts.append("/>" if is_void else ">")
        self._void_pending = is_void

    def end(self, name: str) -> None:
        # A void start is already closed by its "/>"
        if self._void_pending:
            self._void_pending = False
            return
        self._parts.append(f"</{name}>")

    def text(self, content: str) -> None:
        self._parts.append(content)

    def comment(self, content: str) -> None:
        self._parts.append(f"<!--{content}-->")

    def getvalue(self) -> str:
        """Return the markup serialized so far."""
        return "".join(self._parts)


def serialize(markup: str, config: Optional[ParserConfig] = None) -> str:
    """Rebuild ``markup`` as well-formed markup.

    Unclosed elements are closed, stray end tags are dropped, void elements
    are written as ``<name/>`` and attribute values are always double-quoted.

    Args:
        markup: Possibly malformed HTML or XML text
        config: Optional parser configuration

    Returns:
        Balanced markup string

    Examples:
        >>> serialize('<p>Bad formed<br> html document')
        '<p>Bad formed<br/> html document</p>'
        >>> serialize('<input disabled>')
        '<input disabled="disabled"/>'
    """
    serializer = MarkupSerializer()
    MarkupParser(config).parse(markup, serializer)
    return serializer.getvalue()
