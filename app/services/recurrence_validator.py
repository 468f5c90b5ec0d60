"""Recurrence Validator."""
from datetime import date
from typing import Dict, Any, List, Optional

from app.models.recurrence_rule import RecurrenceUnit, WEEKDAY_NAMES

VALID_UNITS = [unit.value for unit in RecurrenceUnit]


class RecurrenceValidator:
    """Validate raw recurrence settings before a RecurrenceRule is built."""

    @staticmethod
    def validate_recurrence_pattern(
        repeat_unit: Optional[str],
        repeat_interval: Optional[int] = 1,
        repeat_days: Optional[List[str]] = None,
        remaining_occurrences: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Validate a recurrence pattern.

        Args:
            repeat_unit: One of day, week, month, year
            repeat_interval: Every N units, must be >= 1
            repeat_days: Weekday names for weekly recurrence
            remaining_occurrences: Optional cap on the number of resets

        Returns:
            Dict with validation result
        """
        result = {
            "valid": True,
            "errors": [],
            "warnings": []
        }

        if repeat_unit not in VALID_UNITS:
            result["valid"] = False
            result["errors"].append(f"Repeat unit must be one of: {', '.join(VALID_UNITS)}")
            return result

        if repeat_interval is not None and (not isinstance(repeat_interval, int) or repeat_interval < 1):
            result["valid"] = False
            result["errors"].append(f"Repeat interval must be a positive integer, got: {repeat_interval}")
            return result

        if repeat_days:
            unknown = [day for day in repeat_days if str(day).lower() not in WEEKDAY_NAMES]
            if unknown:
                result["valid"] = False
                result["errors"].append(f"Invalid weekday name(s): {', '.join(map(str, unknown))}")
                return result
            if repeat_unit != RecurrenceUnit.WEEK.value:
                result["warnings"].append("Repeat days are ignored unless the repeat unit is week")

        if repeat_unit == RecurrenceUnit.WEEK.value and not repeat_days:
            result["warnings"].append("Weekly recurrence without repeat days will never be scheduled")

        if remaining_occurrences is not None and remaining_occurrences <= 0:
            result["warnings"].append("Occurrence count is exhausted; the task will not be rescheduled")

        return result

    @staticmethod
    def validate_task_with_recurrence(task_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate a task payload that may carry recurrence settings.

        Args:
            task_data: Task data dictionary

        Returns:
            Dict with validation result
        """
        result = {
            "valid": True,
            "errors": [],
            "warnings": []
        }

        if not task_data.get("repeats"):
            return result

        validation = RecurrenceValidator.validate_recurrence_pattern(
            task_data.get("repeat_unit"),
            task_data.get("repeat_interval", 1),
            task_data.get("repeat_days"),
            task_data.get("remaining_occurrences"),
        )
        if not validation["valid"]:
            return validation
        result["warnings"].extend(validation["warnings"])

        start_date: Optional[date] = task_data.get("start_date")
        end_date: Optional[date] = task_data.get("end_date")
        if start_date and end_date and end_date < start_date:
            result["valid"] = False
            result["errors"].append("End date must not be before start date")

        return result
