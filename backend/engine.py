import logging
import math
from numbers import Real
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, NamedTuple, Optional, Sequence, Union

import numpy as np

from backend.formatting import format_number
from backend.operations import (
    ANGLE_MODES,
    DEFAULT_MODE,
    Binary,
    Constant,
    Equals,
    Unary,
    lookup,
    operations_for,
)

logger = logging.getLogger("calculator.engine")

Token = Union[float, str]

NO_PRIORITY = math.inf


class PendingBinaryOperation(NamedTuple):
    fn: Callable[[float, float], float]
    left_operand: float
    describe: Callable[[str, str], str]
    left_trace: str


def _is_number(token: Any) -> bool:
    return isinstance(token, Real) and not isinstance(token, bool)


class CalculatorEngine:
    """
    The calculator "brain": takes operands and operator symbols one token at a
    time, keeps a single pending binary operation, and builds a readable trace
    of what was entered.

    Every token is recorded in the history. The history is the program: it is
    what undo trims and replays, and what gets handed to the grapher.
    """

    def __init__(self, mode: str = DEFAULT_MODE):
        self.mode = mode if mode in ANGLE_MODES else DEFAULT_MODE
        self._operations = operations_for(self.mode)
        self._variables: Dict[str, float] = {}
        self.clear()

    # -------------------------
    # State
    # -------------------------
    @property
    def result(self) -> float:
        return self._accumulator

    @property
    def is_partial_result(self) -> bool:
        return self._pending is not None

    @property
    def variables(self) -> Mapping[str, float]:
        return MappingProxyType(self._variables)

    @property
    def _last_trace(self) -> str:
        return self._trace_text

    @_last_trace.setter
    def _last_trace(self, value: str):
        self._trace_text = value
        # A trace written with nothing pending starts a new chain
        if self._pending is None:
            self._current_priority = NO_PRIORITY

    @property
    def trace(self) -> str:
        """Readable form of the expression entered so far."""
        pending = self._pending
        if pending is not None:
            right = self._last_trace if self._last_trace != pending.left_trace else ""
            return pending.describe(pending.left_trace, right)
        return self._last_trace

    @property
    def sequence(self) -> str:
        """Trace with '...' while an operation is pending, '=' otherwise."""
        trace = self.trace
        if not trace and not self._history:
            return ""
        return trace + ("..." if self.is_partial_result else "=")

    # -------------------------
    # Token input
    # -------------------------
    def set_operand(self, operand: Token):
        """Enter a number, or a variable name whose stored value is used (0 if unset)."""
        if isinstance(operand, str):
            self._accumulator = float(self._variables.get(operand, 0.0))
            self._last_trace = operand
            self._history.append(operand)
        elif isinstance(operand, bool):
            logger.warning("Ignoring boolean operand %r", operand)
        else:
            value = float(operand)
            self._accumulator = value
            self._last_trace = format_number(value)
            self._history.append(value)

    def perform_operation(self, symbol: str):
        self._history.append(symbol)
        operation = lookup(symbol, self._operations)
        if operation is None:
            logger.debug("Ignoring unknown operation %r", symbol)
            return

        with np.errstate(all="ignore"):
            if isinstance(operation, Constant):
                self._accumulator = operation.value
                self._last_trace = symbol
            elif isinstance(operation, Unary):
                self._accumulator = float(operation.fn(self._accumulator))
                self._last_trace = operation.describe(self._last_trace)
            elif isinstance(operation, Binary):
                self._resolve_pending()
                if self._current_priority < operation.priority:
                    self._last_trace = "(" + self._last_trace + ")"
                self._current_priority = operation.priority
                self._pending = PendingBinaryOperation(
                    fn=operation.fn,
                    left_operand=self._accumulator,
                    describe=operation.describe,
                    left_trace=self._last_trace,
                )
            elif isinstance(operation, Equals):
                self._resolve_pending()

    def _resolve_pending(self):
        pending = self._pending
        if pending is None:
            return
        self._accumulator = float(pending.fn(pending.left_operand, self._accumulator))
        # trace is written before the slot empties, so the operator's priority
        # is still in force for the next binary operator
        self._last_trace = pending.describe(pending.left_trace, self._last_trace)
        self._pending = None

    # -------------------------
    # Reset / undo
    # -------------------------
    def clear(self):
        """Reset to the initial state. Variables are kept."""
        self._accumulator = 0.0
        self._pending: Optional[PendingBinaryOperation] = None
        self._last_trace = ""
        self._current_priority = NO_PRIORITY
        self._history: List[Token] = []

    def clear_variables(self):
        self._variables.clear()
        self.program = self._history

    def set_variable(self, name: str, value: float):
        """Store a value in memory and re-run the program so the result uses it."""
        self._variables[name] = float(value)
        self.program = self._history

    def undo(self):
        """Drop the last token and rebuild the state by replaying the rest."""
        if not self._history:
            self.clear()
            return
        self.program = self._history[:-1]

    # -------------------------
    # Program (history) get/set
    # -------------------------
    @property
    def program(self) -> List[Token]:
        return list(self._history)

    @program.setter
    def program(self, tokens: Sequence[Token]):
        tokens = list(tokens)
        self.clear()
        for token in tokens:
            if _is_number(token):
                self.set_operand(token)
            elif isinstance(token, str):
                if token in self._operations:
                    self.perform_operation(token)
                else:
                    self.set_operand(token)
            else:
                logger.warning("Skipping program entry of type %s: %r", type(token).__name__, token)
        logger.debug("Replayed %d tokens, result=%s", len(self._history), self._accumulator)

    # -------------------------
    # Angle mode
    # -------------------------
    def set_mode(self, mode: str):
        """Switch trig functions between radians and degrees and re-run the program."""
        if mode not in ANGLE_MODES:
            logger.debug("Ignoring unknown angle mode %r", mode)
            return
        if mode == self.mode:
            return
        self.mode = mode
        self._operations = operations_for(mode)
        self.program = self._history
