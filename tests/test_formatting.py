from __future__ import annotations

import locale
import math

import pytest

from backend.formatting import decimal_point, format_number, parse_number


@pytest.mark.parametrize(
    "value, text",
    [
        (3.0, "3"),
        (0, "0"),
        (1234.5, "1,234.5"),
        (-1234567.0, "-1,234,567"),
        (0.1234567, "0.123457"),
        (2.5e-7, "0"),
        (10.0, "10"),
        (math.pi, "3.141593"),
    ],
)
def test_format_number(value, text):
    assert format_number(value) == text


def test_format_non_finite():
    assert format_number(math.inf) == "∞"
    assert format_number(-math.inf) == "-∞"
    assert format_number(math.nan) == "NaN"


@pytest.mark.parametrize(
    "text, value",
    [
        ("12", 12.0),
        ("1,234.5", 1234.5),
        ("-0.5", -0.5),
        ("0.", 0.0),
    ],
)
def test_parse_number(text, value):
    assert parse_number(text) == value


@pytest.mark.parametrize("text", ["", "-", ".", "abc", None])
def test_parse_number_rejects_non_numbers(text):
    assert parse_number(text) is None


@pytest.fixture
def comma_locale(monkeypatch):
    monkeypatch.setattr(
        locale, "localeconv", lambda: {"decimal_point": ",", "thousands_sep": "."}
    )


def test_format_number_uses_locale_separators(comma_locale):
    assert format_number(1234.5) == "1.234,5"
    assert format_number(-0.25) == "-0,25"
    assert decimal_point() == ","


def test_parse_number_uses_locale_separators(comma_locale):
    assert parse_number("1.234,5") == 1234.5
    assert parse_number("0,5") == 0.5
