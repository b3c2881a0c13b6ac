"""Event sink contract and synchronous event dispatch.

A handler is any object with up to four optional callables named ``start``,
``end``, ``text`` and ``comment``, or a mapping with those keys. A missing
callable means the corresponding events are dropped, not buffered.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from lenient_markup_parser.tokenization.attributes import Attribute

StartCallback = Callable[[str, List[Attribute], bool], Any]
NameCallback = Callable[[str], Any]

HANDLER_SLOTS = ("start", "end", "text", "comment")


class EventType(Enum):
    """Structural event kinds."""

    START = auto()
    END = auto()
    TEXT = auto()
    COMMENT = auto()


@dataclass(frozen=True)
class MarkupEvent:
    """A single structural event, as recorded by ``EventCollector``.

    ``value`` is the tag name for START and END events and the content for
    TEXT and COMMENT events. ``attributes`` and ``is_void`` are only
    meaningful for START events.
    """

    type: EventType
    value: str
    attributes: Tuple[Attribute, ...] = ()
    is_void: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to a JSON-compatible dictionary."""
        result: Dict[str, Any] = {"event": self.type.name.lower()}
        if self.type in (EventType.START, EventType.END):
            result["name"] = self.value
        else:
            result["content"] = self.value
        if self.type is EventType.START:
            result["attributes"] = [
                {"name": attr.name, "value": attr.value} for attr in self.attributes
            ]
            result["void"] = self.is_void
        return result


@dataclass
class CallbackHandler:
    """Handler built from four independently optional callbacks."""

    start: Optional[StartCallback] = None
    end: Optional[NameCallback] = None
    text: Optional[NameCallback] = None
    comment: Optional[NameCallback] = None


@dataclass
class EventCollector:
    """Handler that records every event it receives."""

    events: List[MarkupEvent] = field(default_factory=list)

    def start(self, name: str, attributes: List[Attribute], is_void: bool) -> None:
        self.events.append(MarkupEvent(EventType.START, name, tuple(attributes), is_void))

    def end(self, name: str) -> None:
        self.events.append(MarkupEvent(EventType.END, name))

    def text(self, content: str) -> None:
        self.events.append(MarkupEvent(EventType.TEXT, content))

    def comment(self, content: str) -> None:
        self.events.append(MarkupEvent(EventType.COMMENT, content))


def _resolve_slot(handler: Any, slot: str) -> Optional[Callable[..., Any]]:
    if handler is None:
        return None
    if isinstance(handler, Mapping):
        callback = handler.get(slot)
    else:
        callback = getattr(handler, slot, None)
    if callback is not None and not callable(callback):
        raise TypeError(f"Handler slot {slot!r} must be callable, got {type(callback).__name__}")
    return callback


class EventDispatcher:
    """Forwards events to a handler's optional callbacks.

    Slots are looked up once, when the dispatcher is created. Each event is
    delivered synchronously: the parser does not continue until the callback
    has returned, and exceptions raised by a callback propagate to the caller
    of ``parse``.
    """

    def __init__(self, handler: Any = None) -> None:
        self.handler = handler
        self._start = _resolve_slot(handler, "start")
        self._end = _resolve_slot(handler, "end")
        self._text = _resolve_slot(handler, "text")
        self._comment = _resolve_slot(handler, "comment")
        self.event_count = 0

    def start(self, name: str, attributes: List[Attribute], is_void: bool) -> None:
        self.event_count += 1
        if self._start is not None:
            self._start(name, attributes, is_void)

    def end(self, name: str) -> None:
        self.event_count += 1
        if self._end is not None:
            self._end(name)

    def text(self, content: str) -> None:
        self.event_count += 1
        if self._text is not None:
            self._text(content)

    def comment(self, content: str) -> None:
        self.event_count += 1
        if self._comment is not None:
            self._comment(content)
