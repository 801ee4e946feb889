"""
Keypad input state, kept separate from Tkinter so it can be tested.

The GUI forwards button presses here; the controller decides whether a key
edits the number being typed or goes to the engine as a token.
"""
from typing import Optional

from backend.engine import CalculatorEngine
from backend.formatting import decimal_point, format_number, parse_number
from backend.sampler import DEFAULT_VARIABLE


class KeypadController:
    def __init__(self, engine: Optional[CalculatorEngine] = None):
        self.engine = engine or CalculatorEngine()
        self.display = "0"
        self.sequence = ""
        self.typing = False
        self.decimal_used = False

    @property
    def display_value(self) -> Optional[float]:
        return parse_number(self.display)

    @property
    def can_graph(self) -> bool:
        return not self.engine.is_partial_result

    def refresh(self):
        self.display = format_number(self.engine.result)
        self.sequence = self.engine.sequence

    def _commit_typed(self):
        if self.typing:
            value = self.display_value
            if value is not None:
                self.engine.set_operand(value)
            self.typing = False
            self.decimal_used = False

    # -------------------------
    # Keys
    # -------------------------
    def digit(self, key: str):
        """Type a digit; "." types the locale's decimal point."""
        if key == ".":
            if self.decimal_used:
                return
            self.decimal_used = True
            key = decimal_point()
            if not self.typing:
                key = "0" + key
        if self.typing:
            self.display += key
        else:
            self.display = key
        self.typing = True

    def operation(self, symbol: str):
        self._commit_typed()
        self.engine.perform_operation(symbol)
        self.refresh()

    def toggle_sign(self):
        if not self.typing:
            self.operation("±")
            return
        if self.display.startswith("-"):
            self.display = self.display[1:]
        else:
            self.display = "-" + self.display

    def backspace(self):
        if self.typing:
            removed = self.display[-1:]
            self.display = self.display[:-1]
            if removed == decimal_point():
                self.decimal_used = False
            if self.display in ("", "-"):
                self.typing = False
                self.decimal_used = False
                self.refresh()
        else:
            self.engine.undo()
            self.refresh()

    def clear(self):
        self.engine.clear()
        self.engine.clear_variables()
        self.display = "0"
        self.sequence = ""
        self.typing = False
        self.decimal_used = False

    def store_memory(self, name: str = DEFAULT_VARIABLE):
        """→M: save the displayed value and re-evaluate the program with it."""
        value = self.display_value
        self.typing = False
        self.decimal_used = False
        if value is None:
            return
        self.engine.set_variable(name, value)
        self.refresh()

    def recall_memory(self, name: str = DEFAULT_VARIABLE):
        """M: use the memory variable as the next operand."""
        self.typing = False
        self.decimal_used = False
        self.engine.set_operand(name)
        self.refresh()
