"""Tests for the shared logging helpers."""
import sys
from unittest.mock import patch

from period_tracker.utils.logging import format_exception, logger

def test_format_exception_single_line():
    """Test tracebacks are flattened onto one line."""
    try:
        raise ValueError("bad value")
    except ValueError:
        formatted = format_exception(sys.exc_info())

    assert "\n" not in formatted
    assert "ValueError: bad value" in formatted
    assert " | " in formatted

def test_format_exception_without_exception():
    """Test nothing is formatted outside an except block."""
    assert format_exception(None) is None
    assert format_exception((None, None, None)) is None

def test_recovered_logs_key_and_fields():
    """Test soft errors are logged as warnings with the store key."""
    with patch.object(logger, "warning") as mock_warning:
        logger.recovered("Ignoring value", "period_tracker_cycle_length", value=99)

    mock_warning.assert_called_once_with("Ignoring value", extra={
        "key": "period_tracker_cycle_length",
        "recovered": True,
        "value": 99
    })

def test_recovered_includes_active_exception():
    """Test the exception being handled is attached."""
    with patch.object(logger, "warning") as mock_warning:
        try:
            raise ValueError("not json")
        except ValueError:
            logger.recovered("Malformed stored value", "period_tracker_history")

    extra = mock_warning.call_args.kwargs["extra"]
    assert "ValueError: not json" in extra["exception"]
