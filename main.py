#!/usr/bin/env python3
"""
Entry point for the Calculator application.

Run:

    python main.py

Set CALCULATOR_LOG_LEVEL (DEBUG, INFO, ...) to see engine and grapher logs.
"""
import locale
import logging
import os
import sys
from pathlib import Path

# Ensure the repo root is on sys.path so `backend` and `frontend` import when run as a script
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

logger = logging.getLogger("calculator")


def configure_logging():
    level = os.environ.get("CALCULATOR_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def configure_locale():
    """Use the user's locale for number separators on the display."""
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        logger.warning("Unsupported locale settings; using the C locale for numbers")


def main():
    configure_logging()
    configure_locale()
    try:
        from frontend.gui import CalculatorGUI
    except ImportError:
        logger.exception("Failed to import the GUI; Tkinter and matplotlib are required")
        raise

    app = CalculatorGUI()
    app.mainloop()


if __name__ == "__main__":
    main()
