"""Formatting utilities for currency and text display."""

from __future__ import annotations

from datetime import date, datetime
from typing import Union

try:
    from .config import CURRENCIES, DEFAULT_CURRENCY
    from .models import NOT_AVAILABLE
except ImportError:
    from config import CURRENCIES, DEFAULT_CURRENCY
    from models import NOT_AVAILABLE


def format_currency(amount: Union[float, int], currency_symbol: str = CURRENCIES[DEFAULT_CURRENCY]) -> str:
    """Format an amount with a currency symbol and two decimals.

    Args:
        amount: The amount to format; the sign is kept in front of the symbol
        currency_symbol: Symbol placed before the digits

    Returns:
        Formatted currency string (e.g. "₹1,234.56" or "-$500.00")

    Example:
        >>> format_currency(1234.56, "$")
        '$1,234.56'
        >>> format_currency(-500, "$")
        '-$500.00'
    """
    value = float(amount)
    sign = "-" if value < 0 else ""
    return f"{sign}{currency_symbol}{abs(value):,.2f}"


def escape_dollar_for_markdown(text: str) -> str:
    """Escape dollar signs so Streamlit markdown doesn't start LaTeX mode."""
    return text.replace("$", "\\$")


def format_runway(runway: Union[int, str]) -> str:
    return f"{runway} days"


def format_trend(trend: float) -> str:
    """Arrow and percentage for the expense trend (e.g. "▲ 12.5%")."""
    arrow = "▲" if trend > 0 else "▼"
    return f"{arrow} {trend * 100:.1f}%"


def format_forecast_date(value: Union[date, str]) -> str:
    if value == NOT_AVAILABLE or not isinstance(value, date):
        return NOT_AVAILABLE
    return value.isoformat()


def greeting_for(moment: datetime) -> str:
    """Time-of-day greeting shown on the dashboard header."""
    if moment.hour < 12:
        return "Good Morning"
    if moment.hour < 18:
        return "Good Afternoon"
    return "Good Evening"
