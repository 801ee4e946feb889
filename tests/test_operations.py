from __future__ import annotations

import math

import pytest

from backend.operations import (
    DEGREE_OPERATIONS,
    EQUALS,
    RADIAN_OPERATIONS,
    Binary,
    Constant,
    Equals,
    Unary,
    build_operations,
    lookup,
    operations_for,
)


def test_lookup_known_symbols():
    assert lookup("π") == Constant(math.pi)
    assert isinstance(lookup("√"), Unary)
    assert isinstance(lookup("+"), Binary)
    assert lookup("=") is EQUALS
    assert isinstance(lookup("="), Equals)


@pytest.mark.parametrize("symbol", ["foo", "", "M", "x", "*", None, 3])
def test_lookup_unknown_symbols(symbol):
    assert lookup(symbol) is None


@pytest.mark.parametrize(
    "symbol, priority",
    [("+", 0), ("−", 0), ("×", 1), ("÷", 1), ("∧", 2)],
)
def test_binary_priorities(symbol, priority):
    assert lookup(symbol).priority == priority


@pytest.mark.parametrize(
    "symbol, a, b, result, trace",
    [
        ("+", 2, 3, 5, "2+3"),
        ("−", 2, 3, -1, "2-3"),
        ("×", 2, 3, 6, "2×3"),
        ("÷", 3, 2, 1.5, "3÷2"),
        ("∧", 2, 3, 8, "2^3"),
    ],
)
def test_binary_functions_and_traces(symbol, a, b, result, trace):
    op = lookup(symbol)

    assert op.fn(float(a), float(b)) == pytest.approx(result)
    assert op.describe(str(a), str(b)) == trace


@pytest.mark.parametrize(
    "symbol, trace",
    [
        ("±", "±(x)"),
        ("√", "√(x)"),
        ("ln", "ln(x)"),
        ("log", "log(x)"),
        ("sin", "sin(x)"),
        ("cos⁻¹", "cos⁻¹(x)"),
        ("x⁻¹", "(x)⁻¹"),
        ("x²", "(x)²"),
    ],
)
def test_unary_traces(symbol, trace):
    assert lookup(symbol).describe("x") == trace


def test_table_is_read_only():
    with pytest.raises(TypeError):
        RADIAN_OPERATIONS["+"] = EQUALS


def test_tables_share_keys_across_modes():
    assert set(RADIAN_OPERATIONS) == set(DEGREE_OPERATIONS)
    assert operations_for("deg") is DEGREE_OPERATIONS
    assert operations_for("rad") is RADIAN_OPERATIONS


def test_degree_table_converts_angles():
    sin = lookup("sin", DEGREE_OPERATIONS)
    asin = lookup("sin⁻¹", DEGREE_OPERATIONS)

    assert sin.fn(90.0) == pytest.approx(1.0)
    assert asin.fn(1.0) == pytest.approx(90.0)


def test_build_operations_rejects_unknown_mode():
    with pytest.raises(ValueError):
        build_operations("grad")
