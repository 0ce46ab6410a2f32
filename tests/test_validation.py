"""Tests for event field validation."""

import pytest

from core.validation import is_valid_date, is_valid_time, validate_event


@pytest.mark.parametrize("value", ["2025-03-10", "2024-02-29", "1999-12-31"])
def test_valid_dates(value):
    assert is_valid_date(value)


@pytest.mark.parametrize(
    "value", ["2025-3-10", "2023-02-29", "2025-13-01", "10/03/2025", "", None]
)
def test_invalid_dates(value):
    assert not is_valid_date(value)


@pytest.mark.parametrize("value", ["00:00", "09:00", "23:59"])
def test_valid_times(value):
    assert is_valid_time(value)


@pytest.mark.parametrize("value", ["9:00", "24:00", "12:60", "0900", "", None])
def test_invalid_times(value):
    assert not is_valid_time(value)


def test_validate_event_accepts_sample(sample_event):
    assert validate_event(sample_event) == []


def test_validate_event_collects_all_errors(sample_event):
    event = {**sample_event, "title": " ", "date": "2025-02-30", "time": "25:00", "color": "teal"}

    errors = validate_event(event)

    assert len(errors) == 4
    assert any("title" in error for error in errors)
    assert any("color" in error for error in errors)
