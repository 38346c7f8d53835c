"""Anchor-day billing cycles and pro-rata charges.

Cycles run from one anchor boundary to the next, ``[start, end)``. The anchor
day is clamped to the length of every month it lands in, so anchor 31 falls on
the 30th in April and on the 28th/29th in February.
"""

from __future__ import annotations

import math
from datetime import date
from numbers import Real
from typing import Any, Mapping, Union

from backend.core.dates import (
    DateLike,
    add_months_utc,
    clamp_day,
    days_between,
    parse_utc_date,
    to_utc_midnight,
    utc_date,
)
from backend.core.locale import format_currency, format_percent, format_range
from backend.domain.proration import (
    ActivationProrata,
    Cycle,
    InvalidAmount,
    InvalidAnchorDay,
    ProrationMode,
    ProrationResult,
)
from backend.schemas.proration import (
    DEFAULT_ANCHOR_DAY,
    GrossProrataInput,
    MonthlyProrataInput,
    ProrataOutput,
    prorata_input_adapter,
)


def require_positive_amount(value: Any, field: str = "monthly") -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidAmount(f"{field} must be a positive number", field=field)
    amount = float(value)
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidAmount(f"{field} must be a positive number", field=field)
    return amount


def require_anchor_day(anchor_day: Any) -> int:
    if isinstance(anchor_day, bool) or not isinstance(anchor_day, int) or not 1 <= anchor_day <= 31:
        raise InvalidAnchorDay(
            f"anchorDay must be an integer between 1 and 31, got {anchor_day!r}",
            field="anchorDay",
        )
    return anchor_day


def _bounded(days: int, limit: int) -> int:
    return max(0, min(limit, days))


def _ratio(used_days: int, days: int) -> float:
    return 0.0 if days == 0 else used_days / days


def month_anchor_utc(year: int, month0: int, anchor_day: int = DEFAULT_ANCHOR_DAY) -> date:
    require_anchor_day(anchor_day)
    return utc_date(year, month0, clamp_day(year, month0, anchor_day))


def anchor_cycle(reference: DateLike, anchor_day: int = DEFAULT_ANCHOR_DAY) -> Cycle:
    """Return the cycle containing ``reference``.

    A reference that falls exactly on an anchor opens the cycle starting there.
    """
    pivot = to_utc_midnight(reference)
    this_anchor = month_anchor_utc(pivot.year, pivot.month - 1, anchor_day)
    if pivot < this_anchor:
        start = add_months_utc(this_anchor, -1, anchor_day)
        end = this_anchor
    else:
        start = this_anchor
        end = add_months_utc(this_anchor, 1, anchor_day)
    return Cycle(start=start, end=end, days=max(0, days_between(start, end)))


def prorate(
    monthly: float,
    pivot: DateLike,
    anchor_day: int = DEFAULT_ANCHOR_DAY,
    mode: Union[ProrationMode, str] = ProrationMode.REMAINING,
) -> ProrationResult:
    """Prorate ``monthly`` over the cycle containing ``pivot``.

    ``elapsed`` counts days from the cycle start to the pivot, ``remaining``
    counts days from the pivot to the cycle end.
    """
    amount = require_positive_amount(monthly)
    mode = ProrationMode(mode)

    cycle = anchor_cycle(pivot, anchor_day)
    day = to_utc_midnight(pivot)
    if mode is ProrationMode.ELAPSED:
        used_days = _bounded(days_between(cycle.start, day), cycle.days)
    else:
        used_days = _bounded(days_between(day, cycle.end), cycle.days)

    ratio = _ratio(used_days, cycle.days)
    return ProrationResult(
        start=cycle.start,
        end=cycle.end,
        days=cycle.days,
        used_days=used_days,
        ratio=ratio,
        value=amount * ratio,
    )


def first_anchor_after_activation(activation: DateLike, anchor_day: int = DEFAULT_ANCHOR_DAY) -> date:
    """First anchor strictly after the activation day."""
    day = to_utc_midnight(activation)
    month0 = day.month - 1
    this_anchor = month_anchor_utc(day.year, month0, anchor_day)
    if day.day >= clamp_day(day.year, month0, anchor_day):
        return add_months_utc(this_anchor, 1, anchor_day)
    return this_anchor


def cycle_from_anchor(end: DateLike, anchor_day: int = DEFAULT_ANCHOR_DAY) -> Cycle:
    """The cycle closing at anchor ``end``."""
    require_anchor_day(anchor_day)
    closing = to_utc_midnight(end)
    opening = add_months_utc(closing, -1, anchor_day)
    return Cycle(start=opening, end=closing, days=max(0, days_between(opening, closing)))


def compute_activation_prorata(
    monthly: float,
    activation: DateLike,
    anchor_day: int = DEFAULT_ANCHOR_DAY,
) -> ActivationProrata:
    """Single-invoice proration from activation up to the first anchor."""
    amount = require_positive_amount(monthly)
    day = to_utc_midnight(activation)
    first_anchor = first_anchor_after_activation(day, anchor_day)
    cycle = cycle_from_anchor(first_anchor, anchor_day)
    pro_days = _bounded(days_between(day, first_anchor), cycle.days)
    ratio = _ratio(pro_days, cycle.days)
    pro_amount = amount * ratio

    return ActivationProrata(
        activation=day,
        first_anchor=first_anchor,
        cycle=cycle,
        anchor=anchor_day,
        pro_days=pro_days,
        ratio=ratio,
        monthly=amount,
        pro_amount=pro_amount,
        period=format_range(day, first_anchor),
        pct=format_percent(ratio),
        pro_amount_text=format_currency(pro_amount),
        monthly_text=format_currency(amount),
        total_text=format_currency(amount + pro_amount),
    )


ProrataPayload = Union[GrossProrataInput, MonthlyProrataInput, Mapping[str, Any]]


def compute_prorata(data: ProrataPayload) -> ProrataOutput:
    """Prorate the first invoice for an activation date.

    ``data`` is either input model or a mapping with ``mode`` set to
    ``"gross"`` (VAT-inclusive ``fullInvoiceGross``) or ``"monthly"``
    (``monthlyNet``). Gross totals are converted with
    ``net = gross / (1 + vatRate)`` before any date math.
    """
    if not isinstance(data, (GrossProrataInput, MonthlyProrataInput)):
        data = prorata_input_adapter.validate_python(data)

    vat_rate = data.vatRate
    anchor_day = require_anchor_day(data.anchorDay)

    if isinstance(data, GrossProrataInput):
        gross = require_positive_amount(data.fullInvoiceGross, field="fullInvoiceGross")
        monthly_net = gross / (1 + vat_rate)
    else:
        gross = None
        monthly_net = require_positive_amount(data.monthlyNet, field="monthlyNet")

    activation = parse_utc_date(data.activationDate)

    cycle = anchor_cycle(activation, anchor_day)
    pro_days = _bounded(days_between(activation, cycle.end), cycle.days)
    ratio = _ratio(pro_days, cycle.days)
    prorata_net = monthly_net * ratio
    vat_amount = (monthly_net + prorata_net) * vat_rate

    return ProrataOutput(
        cycleDays=cycle.days,
        proDays=pro_days,
        ratio=ratio,
        prorataNet=prorata_net,
        monthlyNet=monthly_net,
        vatRate=vat_rate,
        vatAmount=vat_amount,
        grossTotal=monthly_net + prorata_net + vat_amount,
        cycleStartUTC=cycle.start,
        cycleEndUTC=cycle.end,
        nextCycleEndUTC=add_months_utc(cycle.end, 1, anchor_day),
        pctText=format_percent(ratio),
        prorataNetText=format_currency(prorata_net),
        monthlyNetText=format_currency(monthly_net),
        cycleRangeText=format_range(cycle.start, cycle.end),
        proDaysText=f"{pro_days} / {cycle.days}",
        fullInvoiceGross=gross,
    )
