"""
Currency display helpers.

Currency is a presentation concern only: the calculators work in plain
numbers and never see a currency.  Callers pick a CurrencyConfig (usually
from the company settings or the request) and pass it to the formatters.

Exchange rates are illustrative constants, not market data.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from app.core.exceptions import InputShapeError


class Currency(str, Enum):
    ZMW = "ZMW"
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"


@dataclass(frozen=True)
class CurrencyConfig:
    code: Currency
    symbol: str
    name: str
    locale: str
    thousands_separator: str = ","
    decimal_separator: str = "."


CURRENCIES: dict[Currency, CurrencyConfig] = {
    Currency.ZMW: CurrencyConfig(Currency.ZMW, "K", "Zambian Kwacha", "en-ZM"),
    Currency.USD: CurrencyConfig(Currency.USD, "$", "US Dollar", "en-US"),
    Currency.EUR: CurrencyConfig(Currency.EUR, "€", "Euro", "de-DE", ".", ","),
    Currency.GBP: CurrencyConfig(Currency.GBP, "£", "British Pound", "en-GB"),
}

# 1 ZMW in each currency (approximate, 2025)
EXCHANGE_RATES: dict[Currency, float] = {
    Currency.ZMW: 1.0,
    Currency.USD: 0.048,
    Currency.EUR: 0.044,
    Currency.GBP: 0.038,
}

_COMPACT_STEPS = ((1e9, "B"), (1e6, "M"), (1e3, "K"))


def get_currency(code: Union[Currency, str]) -> CurrencyConfig:
    try:
        return CURRENCIES[Currency(code)]
    except ValueError:
        valid = ", ".join(c.value for c in Currency)
        raise InputShapeError(f"currency must be one of {valid}, got {code!r}")


def _group(value: float, decimals: int, config: CurrencyConfig) -> str:
    text = f"{value:,.{decimals}f}"
    # swap to the locale's separators via a placeholder
    return (
        text.replace(",", "\0")
        .replace(".", config.decimal_separator)
        .replace("\0", config.thousands_separator)
    )


def format_compact_number(value: float, config: Optional[CurrencyConfig] = None) -> str:
    """1234567 → '$ 1.2M'; symbol omitted when no currency is given."""
    abs_value = abs(value)
    sign = "-" if value < 0 else ""
    prefix = f"{config.symbol} " if config else ""

    for step, suffix in _COMPACT_STEPS:
        if abs_value >= step:
            return f"{sign}{prefix}{abs_value / step:.1f}{suffix}"
    return f"{sign}{prefix}{abs_value:.0f}"


def format_currency(
    amount: Optional[float],
    config: CurrencyConfig,
    show_symbol: bool = True,
    decimals: int = 2,
    compact: bool = False,
) -> str:
    if amount is None:
        return f"{config.symbol} 0"

    sign = "-" if amount < 0 else ""

    # compact figures carry the sign after the symbol: "K -1.2M"
    if compact and abs(amount) >= 1000:
        return f"{config.symbol} {sign}{format_compact_number(abs(amount))}"

    number = _group(abs(amount), decimals, config)
    if not show_symbol:
        return f"{sign}{number}"
    return f"{sign}{config.symbol} {number}"


def format_percentage(value: float, decimals: int = 1) -> str:
    return f"{value:.{decimals}f}%"


def convert_currency(amount: float, from_currency: Union[Currency, str], to_currency: Union[Currency, str]) -> float:
    source = get_currency(from_currency).code
    target = get_currency(to_currency).code
    in_zmw = amount / EXCHANGE_RATES[source]
    return in_zmw * EXCHANGE_RATES[target]
