"""stackcalc: an arithmetic expression compiler and bytecode VM."""

__version__ = "0.1.0"
