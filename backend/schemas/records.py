"""Saved calculator and pro-rata records."""

from __future__ import annotations

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from backend.schemas.proration import DEFAULT_ANCHOR_DAY, DEFAULT_VAT_RATE


class CalculationCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: Literal["add", "percentage", "compound"]
    input1: float
    input2: float
    input3: Optional[float] = None
    result: float
    formula: str = Field(..., min_length=1)


class Calculation(CalculationCreate):
    id: str
    createdAt: datetime


class ProRataCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    monthlyNet: float = Field(..., gt=0)
    activationDate: date
    anchorDay: int = Field(DEFAULT_ANCHOR_DAY, ge=1, le=31)
    vatRate: float = Field(DEFAULT_VAT_RATE, ge=0)
    language: Literal["ar", "en"] = "en"

    proDays: int = Field(..., ge=0)
    cycleDays: int = Field(..., ge=0)
    prorataNet: float = Field(..., ge=0)


class ProRata(ProRataCreate):
    id: str
    createdAt: datetime
