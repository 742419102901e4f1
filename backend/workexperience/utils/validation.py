"""Input validation for submitted work-experience records."""

import re
from typing import List, Mapping, Optional

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)

REQUIRED_FIELDS = (
    ("companyName", "Company name is required"),
    ("jobTitle", "Job title is required"),
    ("location", "Location is required"),
    ("startDate", "Start date is required"),
    ("description", "Description is required"),
)


def _text(data: Mapping, key: str) -> Optional[str]:
    value = data.get(key)
    return value if isinstance(value, str) else None


def is_valid_date(value: str) -> bool:
    """Return True when `value` is exactly `YYYY-MM-DD` shaped."""
    return DATE_PATTERN.fullmatch(value) is not None


def validate_work_experience(data: Mapping) -> List[str]:
    """Check a submitted record and return every problem found.

    `data` maps camelCase field names to the submitted values. Rules are
    evaluated independently and all violations are collected in a fixed
    order; an empty list means the record is valid. The date pattern is
    checked against the untrimmed value, only the presence checks trim.
    """
    errors = []
    for key, message in REQUIRED_FIELDS:
        value = _text(data, key)
        if value is None or not value.strip():
            errors.append(message)

    start_date = _text(data, "startDate")
    if start_date and not is_valid_date(start_date):
        errors.append("Start date must be in format YYYY-MM-DD")

    end_date = _text(data, "endDate")
    if end_date and end_date.strip() and not is_valid_date(end_date):
        errors.append("End date must be in format YYYY-MM-DD")

    return errors
