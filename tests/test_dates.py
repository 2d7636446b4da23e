from datetime import datetime

import pytest

from finance_tracker.domain.dates import find_date, parse_date

NOW = datetime(2026, 3, 10, 12, 0)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("el 15 de julio", datetime(2025, 7, 15)),
        ("3 de marzo", datetime(2026, 3, 3)),
        ("10 de marzo", datetime(2026, 3, 10)),
        ("el 1 de Enero", datetime(2026, 1, 1)),
        ("15/02", datetime(2026, 2, 15)),
        ("15-07", datetime(2025, 7, 15)),
        ("15/07/2024", datetime(2024, 7, 15)),
        ("julio 4", datetime(2025, 7, 4)),
        ("4 feb", datetime(2026, 2, 4)),
    ],
)
def test_calendar_dates(text, expected):
    assert parse_date(text, NOW) == expected


def test_explicit_year_is_not_rolled_back():
    assert parse_date("31/12/2026", NOW) == datetime(2026, 12, 31)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("ayer", datetime(2026, 3, 9, 12, 0)),
        ("anteayer", datetime(2026, 3, 8, 12, 0)),
        ("hace 3 días", datetime(2026, 3, 7, 12, 0)),
        ("hace 1 dia", datetime(2026, 3, 9, 12, 0)),
        ("hace 2 semanas", datetime(2026, 2, 24, 12, 0)),
        ("hace una semana", datetime(2026, 3, 3, 12, 0)),
    ],
)
def test_relative_dates(text, expected):
    assert parse_date(text, NOW) == expected


def test_impossible_date_does_not_match():
    assert parse_date("el 31 de febrero", NOW) is None


def test_no_date():
    assert parse_date("sin fecha", NOW) is None
    assert parse_date("hoy", NOW) is None


def test_find_date_reports_span_in_original_text():
    text = "Pagué 50€ el 3 de mayo"
    found = find_date(text, NOW)
    assert found is not None
    assert found.value == datetime(2025, 5, 3)
    assert text[found.start:found.end] == "el 3 de mayo"


def test_day_name_rule_wins_over_relative_words():
    assert parse_date("ayer, el 2 de marzo", NOW) == datetime(2026, 3, 2)


def test_relative_count_out_of_range_does_not_match():
    assert parse_date("hace 999999 días", NOW) is None
    assert parse_date("hace 99999999999 semanas", NOW) is None
