"""Error taxonomy for the parameter calculator.

Both kinds are raised before any arithmetic happens, so an operation
either returns a complete record or raises exactly one of these.
"""


class CalculatorError(Exception):
    """Base class for all calculator failures."""


class InvalidInput(CalculatorError, ValueError):
    """Raised when a value lies outside its mathematical domain.

    Non-positive counts, probabilities outside (0, 1), a request with
    neither a target rate nor a memory budget, or unparseable unit text.
    """


class UnsupportedConfiguration(CalculatorError):
    """Raised for a valid but unimplemented parameter combination.

    Example: an entries-per-bucket value with no recommended load factor.
    """
