"""Stack-based tag balancing with lenient recovery rules.

The balancer owns the open-element stack of one parse. It turns resolved
start and end tags into start/end events, synthesizing the end events that
malformed input leaves out:

- a block element opening inside inline elements closes those first
- reopening a close-self element (``li``, ``p``, ...) closes the previous one
- void and self-closing elements are closed immediately
- an end tag closes every element opened after its match
- an end tag without a match is dropped
- whatever is still open at the end of input is closed by ``flush``
"""

from typing import TYPE_CHECKING, List, Optional, Sequence

from lenient_markup_parser.shared import ParserConfig, get_logger

from .attributes import Attribute

if TYPE_CHECKING:
    from lenient_markup_parser.api.events import EventDispatcher


class TagBalancer:
    """Open-element stack machine driving start and end events."""

    def __init__(
        self,
        dispatcher: "EventDispatcher",
        config: Optional[ParserConfig] = None
    ) -> None:
        """Initialize the balancer.

        Args:
            dispatcher: Receives every start and end event, in order
            config: Parser configuration supplying the classification tables
        """
        self.dispatcher = dispatcher
        self.config = config or ParserConfig()
        self.logger = get_logger(__name__, self.config.correlation_id, "tag_balancer")
        self._stack: List[str] = []
        self.flushed = False

    @property
    def current(self) -> Optional[str]:
        """Name of the innermost open element, or None if nothing is open."""
        return self._stack[-1] if self._stack else None

    @property
    def depth(self) -> int:
        """Number of open elements."""
        return len(self._stack)

    @property
    def open_elements(self) -> Sequence[str]:
        """Snapshot of the stack, outermost first."""
        return tuple(self._stack)

    def open(
        self,
        name: str,
        attributes: Optional[List[Attribute]] = None,
        self_closing: bool = False
    ) -> None:
        """Resolve a start tag."""
        config = self.config

        if name in config.block_elements:
            while self._stack and self._stack[-1] in config.inline_elements:
                self.logger.debug(
                    "Closing inline element before block element",
                    extra={"inline": self._stack[-1], "block": name},
                )
                self._pop()

        if name in config.close_self_elements and self.current == name:
            self.logger.debug("Closing implicitly ended element", extra={"tag": name})
            self._pop()

        is_void = self_closing or name in config.void_elements
        if not is_void:
            self._stack.append(name)
        self.dispatcher.start(name, list(attributes or []), is_void)
        if is_void:
            self.dispatcher.end(name)

    def close(self, name: Optional[str] = None) -> None:
        """Resolve an end tag; a missing name flushes the whole stack."""
        if not name:
            self.flush()
            return

        for position in range(len(self._stack) - 1, -1, -1):
            if self._stack[position] == name:
                break
        else:
            self.logger.debug("Ignoring end tag without open element", extra={"tag": name})
            return

        if position < len(self._stack) - 1:
            self.logger.debug(
                "Closing elements left open inside end tag",
                extra={"tag": name, "closed": self._stack[position + 1:][::-1]},
            )
        self._truncate(position)

    def flush(self) -> None:
        """Close every open element. Terminal: the parse ends after a flush."""
        if self._stack:
            self.logger.debug(
                "Closing elements open at end of input",
                extra={"closed": self._stack[::-1]},
            )
        self._truncate(0)
        self.flushed = True

    def _pop(self) -> None:
        self.dispatcher.end(self._stack.pop())

    def _truncate(self, position: int) -> None:
        # Pop one at a time so the stack is consistent while handlers run
        while len(self._stack) > position:
            self._pop()
