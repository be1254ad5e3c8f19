import pytest
from utils.parsing import extract_json_block, parse_numeric_value, format_magnitude
from utils.validation import InputValidator, ValidationError


class TestExtractJsonBlock:
    """Tests for extract_json_block function."""

    def test_valid_json(self):
        """Test extracting valid JSON from text."""
        text = 'Here is my answer: {"accuracy": 0.8, "issues": []} hope it helps'
        result = extract_json_block(text)
        assert result == {"accuracy": 0.8, "issues": []}

    def test_nested_json(self):
        text = 'Text {"outer": {"inner": "value"}} more'
        result = extract_json_block(text)
        assert result == {"outer": {"inner": "value"}}

    def test_no_json(self):
        assert extract_json_block("No JSON here at all") is None

    def test_empty_and_none(self):
        assert extract_json_block("") is None
        assert extract_json_block(None) is None

    def test_invalid_json_fallback(self):
        """Test with malformed JSON."""
        text = 'Text {"key": "value", "bad": } end'
        assert extract_json_block(text) is None

    def test_json_with_control_characters(self):
        """Test JSON with control characters (should clean them)."""
        text = '{"explanation": "line one\nline two"}'
        result = extract_json_block(text)
        assert result is not None
        assert "explanation" in result


class TestParseNumericValue:
    def test_simple_integer(self):
        assert parse_numeric_value("123") == 123.0

    def test_with_commas(self):
        """Test parsing number with commas."""
        assert parse_numeric_value("1,234,567.89") == 1234567.89

    def test_with_dollar_sign(self):
        assert parse_numeric_value("$1,234.56") == 1234.56

    def test_negative_parentheses(self):
        """Test parsing negative number in parentheses."""
        assert parse_numeric_value("(123.45)") == -123.45

    def test_numeric_input(self):
        assert parse_numeric_value(1428627663) == 1428627663.0

    def test_none_and_bool(self):
        assert parse_numeric_value(None) is None
        assert parse_numeric_value(True) is None

    def test_invalid_format(self):
        assert parse_numeric_value("not a number") is None
        assert parse_numeric_value("") is None


class TestFormatMagnitude:
    @pytest.mark.parametrize("value,expected", [
        (1428627663, "1.43 billion"),
        (2_300_000, "2.30 million"),
        (45_200, "45.20 thousand"),
        (3.2e12, "3.20 trillion"),
        (12.5, "12.50"),
    ])
    def test_format(self, value, expected):
        assert format_magnitude(value) == expected

    def test_negative_values(self):
        assert format_magnitude(-5_000_000) == "-5.00 million"


class TestInputValidator:
    def test_empty_statement_rejected(self):
        with pytest.raises(ValidationError, match="cannot be empty"):
            InputValidator.sanitize_statement("")

    def test_short_statement_rejected(self):
        with pytest.raises(ValidationError, match="at least 3 characters"):
            InputValidator.sanitize_statement("  ab  ")

    def test_script_rejected(self):
        with pytest.raises(ValidationError, match="suspicious"):
            InputValidator.sanitize_statement("Paris <script>alert(1)</script> is big")

    def test_whitespace_and_control_chars_normalized(self):
        result = InputValidator.sanitize_statement("  Paris   is the\x07 capital\n of France ")
        assert result == "Paris is the capital of France"

    def test_context_truncated(self):
        context = "x" * (InputValidator.MAX_CONTEXT_LENGTH + 50)
        assert len(InputValidator.sanitize_context(context)) == InputValidator.MAX_CONTEXT_LENGTH
