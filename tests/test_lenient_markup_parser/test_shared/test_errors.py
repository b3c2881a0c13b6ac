"""Tests for exception types."""

from lenient_markup_parser.shared.errors import (
    REMAINDER_PREVIEW_LENGTH,
    LenientMarkupError,
    MarkupParseError,
)


class TestMarkupParseError:
    """Test MarkupParseError attributes and messages."""

    def test_attributes(self):
        error = MarkupParseError("<?x", 12)
        assert error.remainder == "<?x"
        assert error.offset == 12
        assert isinstance(error, LenientMarkupError)

    def test_message_quotes_remainder(self):
        assert str(MarkupParseError("<?x", 12)) == "Parse error at offset 12: '<?x'"

    def test_long_remainder_truncated_in_message(self):
        remainder = "x" * (REMAINDER_PREVIEW_LENGTH + 10)
        error = MarkupParseError(remainder, 0)

        assert str(error).endswith("...'")
        assert error.remainder == remainder

    def test_custom_message(self):
        assert str(MarkupParseError("", 3, "stalled")) == "stalled"
