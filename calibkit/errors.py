"""Error taxonomy for calibration routines."""


class CalibrationError(Exception):
    """Base class for every error raised by calibkit."""


class InvalidArgument(CalibrationError, ValueError):
    """Raised when an input violates a precondition on entry."""


class ConvergenceError(CalibrationError, RuntimeError):
    """Raised when a root-finding or bootstrap step fails to converge."""


class DuplicateMaturityError(CalibrationError, ValueError):
    """Raised when two calibrating instruments share a maturity."""


class NumericalInconsistency(CalibrationError, ArithmeticError):
    """Raised when a computed result violates its postcondition."""


def require(condition: bool, message: str) -> None:
    """Raise :class:`InvalidArgument` with ``message`` unless ``condition`` holds."""
    if not condition:
        raise InvalidArgument(message)


def ensure(condition: bool, message: str) -> None:
    """Raise :class:`NumericalInconsistency` with ``message`` unless ``condition`` holds."""
    if not condition:
        raise NumericalInconsistency(message)
