"""Data contracts for pro-rata calculations."""

from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

DEFAULT_VAT_RATE = 0.16
DEFAULT_ANCHOR_DAY = 15

ActivationDate = Union[datetime, date, str]
# Amounts are range-checked by require_positive_amount, which names the field.
Amount = Any


class GrossProrataInput(BaseModel):
    """Invoice total including VAT; converted to a monthly net before prorating."""

    model_config = ConfigDict(extra="forbid")

    mode: Literal["gross"]
    activationDate: ActivationDate
    fullInvoiceGross: Amount
    vatRate: float = Field(DEFAULT_VAT_RATE, ge=0)
    anchorDay: int = Field(DEFAULT_ANCHOR_DAY, ge=1, le=31)


class MonthlyProrataInput(BaseModel):
    """Monthly subscription before VAT."""

    model_config = ConfigDict(extra="forbid")

    mode: Literal["monthly"]
    activationDate: ActivationDate
    monthlyNet: Amount
    vatRate: float = Field(DEFAULT_VAT_RATE, ge=0)
    anchorDay: int = Field(DEFAULT_ANCHOR_DAY, ge=1, le=31)


ProrataInput = Annotated[
    Union[GrossProrataInput, MonthlyProrataInput],
    Field(discriminator="mode"),
]
prorata_input_adapter: TypeAdapter[ProrataInput] = TypeAdapter(ProrataInput)


class ProrataOutput(BaseModel):
    model_config = ConfigDict(frozen=True)

    cycleDays: int = Field(..., ge=0)
    proDays: int = Field(..., ge=0)
    ratio: float = Field(..., ge=0, le=1)
    prorataNet: float
    monthlyNet: float
    vatRate: float
    vatAmount: float
    grossTotal: float

    cycleStartUTC: date
    cycleEndUTC: date
    nextCycleEndUTC: date

    pctText: str
    prorataNetText: str
    monthlyNetText: str
    cycleRangeText: str
    proDaysText: str

    fullInvoiceGross: Optional[float] = None


class ProrateRequest(BaseModel):
    """Body of ``POST /api/pro-rata/format``."""

    model_config = ConfigDict(extra="forbid")

    monthly: Amount
    pivotDate: ActivationDate
    anchorDay: int = Field(DEFAULT_ANCHOR_DAY, ge=1, le=31)
    mode: Literal["elapsed", "remaining"] = "remaining"
    format: Literal["script", "totals", "vat"] = "script"
    language: Literal["ar", "en"] = "en"
    vatRate: float = Field(DEFAULT_VAT_RATE, ge=0)


class ProrationResultPayload(BaseModel):
    start: date
    end: date
    days: int
    usedDays: int
    ratio: float
    value: float


class ProrateResponse(BaseModel):
    text: str
    result: ProrationResultPayload
