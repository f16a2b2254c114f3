import math

import pytest

from calculator.engine import format_number, get_display_number, parse_number, round_to_epsilon


class TestRoundToEpsilon:

    def test_removes_representation_noise(self):
        assert round_to_epsilon(0.1 + 0.2) == 0.3

    def test_default_precision_is_eight_places(self):
        assert round_to_epsilon(1 / 3) == 0.33333333

    def test_precision_parameter(self):
        assert round_to_epsilon(1 / 3, precision=3) == 0.333

    def test_half_rounds_up(self):
        assert round_to_epsilon(2.5, precision=0) == 3.0
        assert round_to_epsilon(-2.5, precision=0) == -2.0

    def test_non_finite_values_pass_through(self):
        assert round_to_epsilon(math.inf) == math.inf
        assert math.isnan(round_to_epsilon(math.nan))

    def test_huge_values_pass_through(self):
        assert round_to_epsilon(1e305) == 1e305


@pytest.mark.parametrize(
    "text, expected",
    [
        ("42", 42.0),
        ("3.", 3.0),
        ("0.25", 0.25),
        ("-2.5", -2.5),
        ("1e+21", 1e21),
        ("Infinity", math.inf),
        ("-Infinity", -math.inf),
    ],
)
def test_parse_number(text, expected):
    assert parse_number(text) == expected


@pytest.mark.parametrize("text", ["", "-", ".", "NaN", "abc"])
def test_parse_number_rejects(text):
    assert parse_number(text) is None


@pytest.mark.parametrize(
    "value, expected",
    [
        (20.0, "20"),
        (-2.0, "-2"),
        (-0.0, "0"),
        (0.3, "0.3"),
        (1234.5, "1234.5"),
        (1e-05, "0.00001"),
        (1e-08, "0.00000001"),
        (1e21, "1e+21"),
        (math.inf, "Infinity"),
        (-math.inf, "-Infinity"),
        (math.nan, "NaN"),
    ],
)
def test_format_number(value, expected):
    assert format_number(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("0", "0"),
        ("1234567", "1,234,567"),
        ("1234.", "1,234."),
        ("1234.5000", "1,234.5000"),
        ("-1234.5", "-1,234.5"),
        ("0.000", "0.000"),
        (".", "."),
        ("-", ""),
        ("", ""),
        ("Infinity", "∞"),
        (1234.5, "1,234.5"),
    ],
)
def test_get_display_number(value, expected):
    assert get_display_number(value) == expected
