import logging
import math
from typing import Iterable, Optional

import numpy as np

from backend.engine import CalculatorEngine

logger = logging.getLogger("calculator.sampler")

DEFAULT_VARIABLE = "M"


class FunctionSampler:
    """
    y = f(x) view of a calculator program, used by the grapher.

    The program, memory and angle mode are copied from the engine when the
    sampler is created; sampling runs on a private engine, so the caller's
    engine is left untouched.
    """

    def __init__(self, engine: CalculatorEngine, variable: str = DEFAULT_VARIABLE):
        self.variable = variable
        self.title = engine.trace
        self._program = engine.program
        self._engine = CalculatorEngine(mode=engine.mode)
        for name, value in engine.variables.items():
            self._engine.set_variable(name, value)
        self._engine.program = self._program

    def sample(self, x: float) -> Optional[float]:
        """Result of the program with the bound variable set to x; None if undefined."""
        # storing the variable re-runs the program
        self._engine.set_variable(self.variable, x)
        y = self._engine.result
        if not math.isfinite(y):
            return None
        return y

    def __call__(self, x: float) -> Optional[float]:
        return self.sample(x)

    def sample_many(self, xs: Iterable[float]) -> np.ndarray:
        """Sample every x; undefined points become NaN so the plot shows a gap."""
        ys = []
        for xv in xs:
            y = self.sample(float(xv))
            ys.append(float("nan") if y is None else y)
        logger.debug("Sampled %d points of %r", len(ys), self.title)
        return np.array(ys, dtype=float)
