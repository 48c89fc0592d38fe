"""Errors raised by the metrics core. Sentinel zero / None results are not errors."""

from __future__ import annotations


class InvalidInput(ValueError):
    """Missing, malformed or future date of birth (and other unusable form input)."""


class OutOfRange(ValueError):
    """Height or weight outside the accepted human range."""

    def __init__(
        self,
        message: str,
        *,
        field: str,
        lower: float,
        upper: float,
        unit_system: str = "metric",
    ) -> None:
        super().__init__(message)
        self.field = field
        self.lower = lower
        self.upper = upper
        self.unit_system = unit_system
