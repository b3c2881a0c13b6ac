"""Integration adapter building lxml element trees from the event stream.

``LxmlTreeBuilder`` implements the same event sink contract as every other
consumer and produces an ``lxml.etree`` tree, so lenient parsing can feed
XPath queries, XSLT or ``etree.tostring`` directly.

lxml is imported when the adapter is used, not when this module is loaded,
so the rest of the package works where lxml is not installed.
"""

import re
from typing import Any, List, Optional

from lenient_markup_parser.shared import ParserConfig, get_logger
from lenient_markup_parser.tokenization import Attribute

from .parser import MarkupParser

# Characters lxml refuses in text and attribute values
_XML_INCOMPATIBLE_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")

DEFAULT_ROOT_TAG = "div"


def is_available() -> bool:
    """Check if lxml is available."""
    try:
        import lxml.etree  # noqa: F401
        return True
    except ImportError:
        return False


class LxmlTreeBuilder:
    """Event handler building an ``lxml.etree`` tree under a wrapper element.

    Text is stored the lxml way: before the first child it is the parent's
    ``.text``, after a child it is that child's ``.tail``. Names lxml rejects
    are handled leniently: an invalid attribute is skipped, and an element
    with an invalid tag name is dropped while its content is kept in place.
    """

    def __init__(
        self,
        root_tag: str = DEFAULT_ROOT_TAG,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize the builder.

        Args:
            root_tag: Tag of the wrapper element holding the parsed content
            correlation_id: Optional correlation ID for request tracking

        Raises:
            ImportError: If lxml is not installed
        """
        from lxml import etree

        self._etree = etree
        self.logger = get_logger(__name__, correlation_id, "lxml_tree_builder")
        self.root = etree.Element(root_tag)
        # None marks an element dropped for its invalid tag name
        self._stack: List[Optional[Any]] = [self.root]

    def _container(self) -> Any:
        for element in reversed(self._stack):
            if element is not None:
                return element
        return self.root

    def _append_text(self, content: str) -> None:
        container = self._container()
        if len(container):
            last = container[-1]
            last.tail = (last.tail or "") + content
        else:
            container.text = (container.text or "") + content

    def start(self, name: str, attributes: List[Attribute], is_void: bool) -> None:
        try:
            element = self._etree.Element(name)
        except ValueError:
            self.logger.debug("Dropping element with invalid tag name", extra={"tag": name})
            self._stack.append(None)
            return

        for attribute in attributes:
            try:
                element.set(
                    attribute.name,
                    _XML_INCOMPATIBLE_CHARS.sub("", attribute.value),
                )
            except ValueError:
                self.logger.debug(
                    "Skipping attribute with invalid name",
                    extra={"tag": name, "attribute": attribute.name},
                )
        self._stack.append(element)

    def end(self, name: str) -> None:
        if len(self._stack) < 2:
            return
        element = self._stack.pop()
        if element is not None:
            self._container().append(element)

    def text(self, content: str) -> None:
        if content:
            self._append_text(_XML_INCOMPATIBLE_CHARS.sub("", content))

    def comment(self, content: str) -> None:
        try:
            comment = self._etree.Comment(_XML_INCOMPATIBLE_CHARS.sub("", content))
        except ValueError:
            # lxml rejects comments containing "--" or ending in "-"
            self.logger.debug("Dropping comment lxml cannot represent")
            return
        self._container().append(comment)

    def build(self, markup: str, config: Optional[ParserConfig] = None) -> Any:
        """Parse ``markup`` into this builder and return the wrapper element."""
        MarkupParser(config).parse(markup, self)
        return self.root


def to_lxml(
    markup: str,
    config: Optional[ParserConfig] = None,
    root_tag: str = DEFAULT_ROOT_TAG
) -> Any:
    """Parse markup into an ``lxml.etree`` element wrapped in ``root_tag``.

    Examples:
        >>> from lxml import etree
        >>> etree.tostring(to_lxml('<p>one<p>two'), encoding='unicode')
        '<div><p>one</p><p>two</p></div>'
    """
    builder = LxmlTreeBuilder(
        root_tag=root_tag,
        correlation_id=config.correlation_id if config else None,
    )
    return builder.build(markup, config)
