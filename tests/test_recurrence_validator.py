"""Tests for raw recurrence input validation."""

from app.services.recurrence_validator import RecurrenceValidator


def test_valid_weekly_pattern():
    result = RecurrenceValidator.validate_recurrence_pattern("week", 2, ["monday", "Friday"])
    assert result == {"valid": True, "errors": [], "warnings": []}


def test_unknown_unit():
    result = RecurrenceValidator.validate_recurrence_pattern("hour")
    assert result["valid"] is False
    assert result["errors"] == ["Repeat unit must be one of: day, week, month, year"]


def test_non_positive_interval():
    result = RecurrenceValidator.validate_recurrence_pattern("day", 0)
    assert result["valid"] is False


def test_weekly_without_days_only_warns():
    result = RecurrenceValidator.validate_recurrence_pattern("week", 1, [])
    assert result["valid"] is True
    assert result["warnings"] == ["Weekly recurrence without repeat days will never be scheduled"]


def test_exhausted_count_warns():
    result = RecurrenceValidator.validate_recurrence_pattern("day", 1, None, 0)
    assert result["valid"] is True
    assert len(result["warnings"]) == 1


def test_non_repeating_task_skips_rule_checks():
    result = RecurrenceValidator.validate_task_with_recurrence({"repeats": False, "repeat_unit": "hour"})
    assert result["valid"] is True
