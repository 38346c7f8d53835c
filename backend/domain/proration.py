from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class ProrataError(ValueError):
    """Base error for rejected pro-rata inputs; ``field`` names the offending input."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class InvalidAmount(ProrataError):
    pass


class InvalidDate(ProrataError):
    pass


class InvalidAnchorDay(ProrataError):
    pass


class UnsupportedLocale(ProrataError):
    pass


class ProrationMode(str, Enum):
    ELAPSED = "elapsed"
    REMAINING = "remaining"


class FormatMode(str, Enum):
    SCRIPT = "script"
    TOTALS = "totals"
    VAT = "vat"


@dataclass(frozen=True)
class Cycle:
    """Billing cycle ``[start, end)`` at day granularity."""

    start: date
    end: date
    days: int


@dataclass(frozen=True)
class ProrationResult:
    start: date
    end: date
    days: int
    used_days: int
    ratio: float
    value: float

    @property
    def cycle(self) -> Cycle:
        return Cycle(start=self.start, end=self.end, days=self.days)


@dataclass(frozen=True)
class ActivationProrata:
    activation: date
    first_anchor: date
    cycle: Cycle
    anchor: int
    pro_days: int
    ratio: float
    monthly: float
    pro_amount: float

    # display strings, same shape the calculator page shows
    period: str
    pct: str
    pro_amount_text: str
    monthly_text: str
    total_text: str
