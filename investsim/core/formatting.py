"""Presentation helpers: currency strings and month labels."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Tuple

DEFAULT_LOCALE = "ro-RO"
DEFAULT_CURRENCY = "EUR"

NBSP = "\u00a0"


@dataclass(frozen=True)
class LocaleConventions:
    group_separator: str
    symbol_first: bool
    short_months: Tuple[str, ...]


LOCALES: Dict[str, LocaleConventions] = {
    "ro-RO": LocaleConventions(
        group_separator=".",
        symbol_first=False,
        short_months=(
            "ian.", "feb.", "mar.", "apr.", "mai", "iun.",
            "iul.", "aug.", "sept.", "oct.", "nov.", "dec.",
        ),
    ),
    "en-US": LocaleConventions(
        group_separator=",",
        symbol_first=True,
        short_months=(
            "Jan", "Feb", "Mar", "Apr", "May", "Jun",
            "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
        ),
    ),
    "de-DE": LocaleConventions(
        group_separator=".",
        symbol_first=False,
        short_months=(
            "Jan.", "Feb.", "März", "Apr.", "Mai", "Juni",
            "Juli", "Aug.", "Sept.", "Okt.", "Nov.", "Dez.",
        ),
    ),
}

CURRENCY_SYMBOLS: Dict[str, str] = {
    "EUR": "€",
    "USD": "$",
    "GBP": "£",
    "RON": "RON",
}


def conventions_for(locale: str) -> LocaleConventions:
    try:
        return LOCALES[locale]
    except KeyError:
        raise ValueError(f"unsupported locale: {locale}") from None


def format_currency(value: float, currency: str = DEFAULT_CURRENCY, locale: str = DEFAULT_LOCALE) -> str:
    """
    Whole-unit currency string, e.g. 1234.5 -> '1.235 €' (ro-RO) or '€1,235' (en-US).
    """
    conv = conventions_for(locale)
    symbol = CURRENCY_SYMBOLS.get(currency, currency)

    units = int(math.floor(abs(value) + 0.5))
    digits = f"{units:,}".replace(",", conv.group_separator)
    # -0.4 keeps its sign, as Intl.NumberFormat renders it ("-€0")
    sign = "-" if value < 0 else ""

    if conv.symbol_first:
        return f"{sign}{symbol}{digits}"
    return f"{sign}{digits}{NBSP}{symbol}"


def month_label(index: int, base_year: int = 2025, locale: str = DEFAULT_LOCALE) -> str:
    """
    Short month name for the index-th month counted from January of base_year.
    From the second year on the two-digit year is appended: "ian. '26".
    """
    conv = conventions_for(locale)
    name = conv.short_months[(index - 1) % 12]
    if index <= 12:
        return name
    year = base_year + (index - 1) // 12
    return f"{name} '{str(year)[2:]}"
