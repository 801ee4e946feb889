"""
Operation registry: the keypad symbols the calculator engine understands.

Every entry pairs a numeric function with a function that builds the
human-readable trace for it. Numeric functions are numpy ufuncs, so domain
errors (1 ÷ 0, ln of a negative number, ...) produce inf/nan instead of
raising. Tables are built once per angle mode and are read-only.
"""
import math
from types import MappingProxyType
from typing import Callable, Mapping, NamedTuple, Optional, Union

import numpy as np

DEFAULT_MODE = "rad"
ANGLE_MODES = ("rad", "deg")


class Constant(NamedTuple):
    value: float


class Unary(NamedTuple):
    fn: Callable[[float], float]
    describe: Callable[[str], str]


class Binary(NamedTuple):
    fn: Callable[[float, float], float]
    describe: Callable[[str, str], str]
    priority: int


class Equals(NamedTuple):
    """Forces the pending binary operation to resolve."""


EQUALS = Equals()

Operation = Union[Constant, Unary, Binary, Equals]


def _angle_wrapper(trig_fn, mode: str):
    # Return a wrapper that converts the argument from the mode's unit to radians
    if mode == "rad":
        return trig_fn
    return lambda x: trig_fn(np.radians(x))


def _inverse_angle_wrapper(arc_fn, mode: str):
    # Inverse trig answers in the mode's unit
    if mode == "rad":
        return arc_fn
    return lambda x: np.degrees(arc_fn(x))


def _function(name: str) -> Callable[[str], str]:
    return lambda s: f"{name}({s})"


def _postfix(mark: str) -> Callable[[str], str]:
    return lambda s: f"({s}){mark}"


def _infix(mark: str) -> Callable[[str, str], str]:
    return lambda a, b: f"{a}{mark}{b}"


def build_operations(mode: str = DEFAULT_MODE) -> Mapping[str, Operation]:
    """Build the read-only symbol table for an angle mode ("rad" or "deg")."""
    if mode not in ANGLE_MODES:
        raise ValueError(f"Unknown angle mode: {mode!r}")

    table = {
        "π": Constant(math.pi),
        "e": Constant(math.e),

        "±": Unary(np.negative, _function("±")),
        "√": Unary(np.sqrt, _function("√")),
        "ln": Unary(np.log, _function("ln")),
        "log": Unary(np.log10, _function("log")),

        # trig (mode-aware)
        "sin": Unary(_angle_wrapper(np.sin, mode), _function("sin")),
        "cos": Unary(_angle_wrapper(np.cos, mode), _function("cos")),
        "tan": Unary(_angle_wrapper(np.tan, mode), _function("tan")),
        "sin⁻¹": Unary(_inverse_angle_wrapper(np.arcsin, mode), _function("sin⁻¹")),
        "cos⁻¹": Unary(_inverse_angle_wrapper(np.arccos, mode), _function("cos⁻¹")),
        "tan⁻¹": Unary(_inverse_angle_wrapper(np.arctan, mode), _function("tan⁻¹")),

        "x⁻¹": Unary(lambda x: np.divide(1.0, x), _postfix("⁻¹")),
        "x²": Unary(np.square, _postfix("²")),

        "÷": Binary(np.divide, _infix("÷"), 1),
        "×": Binary(np.multiply, _infix("×"), 1),
        "−": Binary(np.subtract, _infix("-"), 0),
        "+": Binary(np.add, _infix("+"), 0),
        "∧": Binary(np.power, _infix("^"), 2),

        "=": EQUALS,
    }
    return MappingProxyType(table)


RADIAN_OPERATIONS = build_operations("rad")
DEGREE_OPERATIONS = build_operations("deg")


def operations_for(mode: str) -> Mapping[str, Operation]:
    """Shared table for an angle mode."""
    return DEGREE_OPERATIONS if mode == "deg" else RADIAN_OPERATIONS


def lookup(symbol: str, operations: Optional[Mapping[str, Operation]] = None) -> Optional[Operation]:
    if operations is None:
        operations = RADIAN_OPERATIONS
    if not isinstance(symbol, str):
        return None
    return operations.get(symbol)
