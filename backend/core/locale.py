"""Bilingual (Arabic/English) rendering of pro-rata results."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from types import MappingProxyType
from typing import Callable, Mapping, Union

from backend.domain.proration import FormatMode, ProrationResult, UnsupportedLocale
from backend.schemas.proration import DEFAULT_VAT_RATE, ProrataOutput

RANGE_ARROW = "→"
# Left-to-right mark; keeps "JD 1.000:" from flipping inside RTL paragraphs.
LRM = "\u200e"


def format_amount(value: float) -> str:
    return f"{value:.3f}"


def format_currency(value: float) -> str:
    return f"JD {format_amount(value)}"


def format_percent(ratio: float) -> str:
    return f"{ratio * 100:.2f}%"


def format_ymd(day: date) -> str:
    """Machine form, ``YYYY-MM-DD``."""
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def format_dmy(day: date) -> str:
    """Narrative form, ``DD-MM-YYYY``."""
    return f"{day.day:02d}-{day.month:02d}-{day.year:04d}"


def format_range(start: date, end: date, narrative: bool = False) -> str:
    fmt = format_dmy if narrative else format_ymd
    return f"{fmt(start)} {RANGE_ARROW} {fmt(end)}"


@dataclass(frozen=True)
class LocaleStrings:
    prorated_days: str
    of: str
    pro_amount: str
    monthly: str
    vat_header: str
    net: str
    vat: str
    gross: str
    currency: Callable[[float], str] = format_currency
    range_arrow: str = RANGE_ARROW

    def vat_heading(self, rate: float) -> str:
        return self.vat_header.format(rate=f"{rate * 100:g}")


STRINGS: Mapping[str, LocaleStrings] = MappingProxyType(
    {
        "en": LocaleStrings(
            prorated_days="Prorated days",
            of="of",
            pro_amount="Pro-rata amount",
            monthly="Monthly",
            vat_header="VAT breakdown ({rate}%)",
            net="Net",
            vat="VAT",
            gross="Gross",
        ),
        "ar": LocaleStrings(
            prorated_days="أيام البروراتا",
            of="من",
            pro_amount="قيمة البروراتا",
            monthly="الاشتراك الشهري",
            vat_header="تفصيل الضريبة (٪{rate})",
            net="الصافي",
            vat="الضريبة",
            gross="الإجمالي",
        ),
    }
)


def strings_for(locale: str) -> LocaleStrings:
    try:
        return STRINGS[locale]
    except (KeyError, TypeError):
        raise UnsupportedLocale(
            f"unsupported language {locale!r}, expected one of {sorted(STRINGS)}",
            field="language",
        ) from None


def format_prorata_output(
    locale: str,
    mode: Union[FormatMode, str],
    monthly_amount: float,
    result: ProrationResult,
    vat_rate: float = DEFAULT_VAT_RATE,
) -> str:
    """Render a proration result as ``script``, ``totals`` or ``vat`` lines."""
    labels = strings_for(locale)
    mode = FormatMode(mode)

    if mode is FormatMode.SCRIPT:
        return "\n".join(
            [
                f"{format_dmy(result.start)} {labels.range_arrow} {format_dmy(result.end)}",
                f"{labels.prorated_days}: {result.used_days} {labels.of} {result.days}"
                f" ({format_percent(result.ratio)})",
                f"{labels.pro_amount}: {labels.currency(result.value)}",
                f"{labels.monthly}: {labels.currency(monthly_amount)}",
            ]
        )

    if mode is FormatMode.TOTALS:
        return "\n".join(
            [
                f"{labels.monthly}: {labels.currency(monthly_amount)}",
                f"{labels.pro_amount}: {labels.currency(result.value)}",
            ]
        )

    net = monthly_amount + result.value
    vat = net * vat_rate
    return "\n".join(
        [
            labels.vat_heading(vat_rate),
            f"{labels.net}: {labels.currency(net)}",
            f"{labels.vat}: {labels.currency(vat)}",
            f"{labels.gross}: {labels.currency(net + vat)}",
        ]
    )


def build_script(output: ProrataOutput, locale: str) -> str:
    """Client-facing paragraph explaining the first invoice."""
    strings_for(locale)

    activation = output.cycleEndUTC - timedelta(days=output.proDays)
    start = format_dmy(activation)
    end = format_dmy(output.cycleEndUTC)
    following = format_dmy(output.nextCycleEndUTC)

    monthly = format_currency(output.monthlyNet) + LRM
    prorata = format_currency(output.prorataNet) + LRM
    total = format_currency(output.monthlyNet + output.prorataNet) + LRM

    if locale == "ar":
        return (
            f"أوضّح لحضرتك أن الفاتورة صدرت بنسبة وتناسب من تاريخ التفعيل {start} حتى يوم {end}، "
            f"وفي نفس الفاتورة تم احتساب قيمة الاشتراك الشهري مقدماً من {end} حتى {following}. "
            f"قيمة الاشتراك الشهري: {monthly}، وقيمة النسبة والتناسب: {prorata}، "
            f"وبالتالي قيمة الفاتورة الكليّة (الصافي قبل الضريبة): {total}. "
            f"تاريخ إصدار الفاتورة {end} وتغطي الخدمة مقدماً حتى {following}."
        )

    return (
        f"Just to clarify, the invoice prorates the service from {start} through {end}, "
        f"and on the same invoice bills the monthly subscription in advance from {end} until {following}. "
        f"Monthly subscription: {monthly}, pro-rata amount: {prorata}, "
        f"so the total (net before VAT) is {total}. "
        f"The invoice is issued on {end} and covers the service in advance until {following}."
    )
