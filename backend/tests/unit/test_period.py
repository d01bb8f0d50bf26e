"""Unit tests for reporting period resolution."""

from datetime import date

import pytest

from app.application.services.period import resolve_period

TODAY = date(2024, 5, 15)  # a Wednesday


@pytest.mark.parametrize(
    ("preset", "expected"),
    [
        ("today", (date(2024, 5, 15), date(2024, 5, 15))),
        ("yesterday", (date(2024, 5, 14), date(2024, 5, 14))),
        ("last-7d", (date(2024, 5, 9), date(2024, 5, 15))),
        ("last-30d", (date(2024, 4, 16), date(2024, 5, 15))),
        ("this-week", (date(2024, 5, 13), date(2024, 5, 19))),
        ("last-week", (date(2024, 5, 6), date(2024, 5, 12))),
        ("this-month", (date(2024, 5, 1), date(2024, 5, 31))),
        ("last-month", (date(2024, 4, 1), date(2024, 4, 30))),
        ("this-quarter", (date(2024, 4, 1), date(2024, 6, 30))),
        ("last-quarter", (date(2024, 1, 1), date(2024, 3, 31))),
        ("qtd", (date(2024, 4, 1), date(2024, 5, 15))),
        ("this-year", (date(2024, 1, 1), date(2024, 12, 31))),
        ("ytd", (date(2024, 1, 1), date(2024, 5, 15))),
    ],
)
def test_presets(preset, expected):
    assert resolve_period(TODAY, preset) == expected


def test_unknown_preset_falls_back_to_current_month():
    assert resolve_period(TODAY, "fortnight") == (date(2024, 5, 1), date(2024, 5, 31))
    assert resolve_period(TODAY) == (date(2024, 5, 1), date(2024, 5, 31))


def test_explicit_bounds_win_and_are_swapped_when_reversed():
    assert resolve_period(TODAY, "today", date(2024, 3, 10), date(2024, 3, 1)) == (
        date(2024, 3, 1),
        date(2024, 3, 10),
    )


def test_single_bound_selects_one_day():
    assert resolve_period(TODAY, None, from_date=date(2024, 2, 29)) == (
        date(2024, 2, 29),
        date(2024, 2, 29),
    )


def test_last_quarter_crosses_year_boundary():
    assert resolve_period(date(2024, 2, 10), "last-quarter") == (
        date(2023, 10, 1),
        date(2023, 12, 31),
    )
