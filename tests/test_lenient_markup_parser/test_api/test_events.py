"""Tests for event records and the event dispatcher."""

from unittest.mock import Mock

import pytest

from lenient_markup_parser.api import (
    CallbackHandler,
    EventCollector,
    EventDispatcher,
    EventType,
    MarkupEvent,
)
from lenient_markup_parser.tokenization import Attribute


class TestMarkupEvent:
    """Tests for MarkupEvent serialization."""

    def test_start_event_to_dict(self):
        event = MarkupEvent(
            EventType.START, "input", (Attribute.create("disabled", "disabled"),), True
        )
        assert event.to_dict() == {
            "event": "start",
            "name": "input",
            "attributes": [{"name": "disabled", "value": "disabled"}],
            "void": True,
        }

    def test_end_event_to_dict(self):
        assert MarkupEvent(EventType.END, "p").to_dict() == {"event": "end", "name": "p"}

    def test_text_event_to_dict(self):
        assert MarkupEvent(EventType.TEXT, "hi").to_dict() == {"event": "text", "content": "hi"}

    def test_comment_event_to_dict(self):
        assert MarkupEvent(EventType.COMMENT, " c ").to_dict() == {
            "event": "comment",
            "content": " c ",
        }


class TestEventDispatcher:
    """Tests for slot lookup and forwarding."""

    def test_counts_all_events_even_without_handler(self):
        dispatcher = EventDispatcher()
        dispatcher.start("p", [], False)
        dispatcher.text("x")
        dispatcher.comment("c")
        dispatcher.end("p")
        assert dispatcher.event_count == 4

    def test_forwards_to_callback_handler(self):
        start = Mock()
        dispatcher = EventDispatcher(CallbackHandler(start=start))
        dispatcher.start("p", [], False)
        dispatcher.end("p")
        start.assert_called_once_with("p", [], False)

    def test_slots_resolved_once(self):
        """Test replacing a handler method after creation has no effect."""
        collector = EventCollector()
        dispatcher = EventDispatcher(collector)
        collector.text = Mock()
        dispatcher.text("x")
        assert collector.events == [MarkupEvent(EventType.TEXT, "x")]
        collector.text.assert_not_called()

    @pytest.mark.parametrize("slot", ["start", "end", "text", "comment"])
    def test_non_callable_slot_rejected(self, slot):
        with pytest.raises(TypeError, match=slot):
            EventDispatcher({slot: 42})


class TestEventCollector:
    """Tests for EventCollector recording."""

    def test_records_attributes_as_tuple(self):
        collector = EventCollector()
        attributes = [Attribute.create("id", "a")]
        collector.start("div", attributes, False)
        assert collector.events[0].attributes == tuple(attributes)
