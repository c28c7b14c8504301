"""Calculation engine exceptions"""


class CalculationError(Exception):
    """Base exception for the calculation core"""

    pass


class DomainError(CalculationError):
    """A mathematical precondition failed (the result would be NaN or infinite)"""

    pass


class InputShapeError(CalculationError):
    """Required inputs are missing, mistyped or out of their allowed range"""

    pass
