"""Plotly visualisation helpers for the finance tracker.

Each function accepts one of the frames produced by :mod:`charts` and
returns a ``plotly.graph_objects.Figure`` that Streamlit renders via
``st.plotly_chart``.  Empty input yields a placeholder figure titled
"No data to display" rather than an error.
"""

from __future__ import annotations

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

try:
    from .config import CATEGORY_COLORS, EXPENSE_COLOR, INCOME_COLOR
    from .formatting import format_currency
except ImportError:
    from config import CATEGORY_COLORS, EXPENSE_COLOR, INCOME_COLOR
    from formatting import format_currency


def _empty_figure(title: str = "No data to display") -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title=title)
    return fig


def create_balance_pie(balance: pd.DataFrame, currency_symbol: str, title: str | None = None) -> go.Figure:
    """Income vs expense pie.

    Parameters
    ----------
    balance : pandas.DataFrame
        Frame with ``name`` and ``value`` columns from
        :func:`charts.balance_pie_data`.
    currency_symbol : str
        Symbol used in hover labels.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Pie chart.
    """
    if balance.empty:
        return _empty_figure()
    colors = {'Total Income': INCOME_COLOR, 'Total Expense': EXPENSE_COLOR}
    fig = px.pie(balance, names="name", values="value", color="name", color_discrete_map=colors)
    fig.update_traces(
        hovertext=[format_currency(v, currency_symbol) for v in balance['value']],
        hoverinfo="label+text+percent",
    )
    fig.update_layout(title=title or "Income vs Expense")
    return fig


def create_category_pie(categories: pd.DataFrame, currency_symbol: str, title: str | None = None) -> go.Figure:
    """Donut chart of expense per category."""
    if categories.empty:
        return _empty_figure()
    fig = px.pie(
        categories,
        names="name",
        values="value",
        hole=0.4,
        color_discrete_sequence=CATEGORY_COLORS,
    )
    fig.update_traces(
        hovertext=[format_currency(v, currency_symbol) for v in categories['value']],
        hoverinfo="label+text+percent",
    )
    fig.update_layout(title=title or "Expense Distribution by Category")
    return fig


def create_monthly_net_bar(monthly: pd.DataFrame, currency_symbol: str, title: str | None = None) -> go.Figure:
    """Bar per month of net amount, green when non-negative and red otherwise."""
    if monthly.empty:
        return _empty_figure()
    colors = [INCOME_COLOR if value >= 0 else EXPENSE_COLOR for value in monthly['net_amount']]
    fig = go.Figure(
        go.Bar(
            x=monthly['month'],
            y=monthly['net_amount'],
            marker_color=colors,
            hovertext=[format_currency(v, currency_symbol) for v in monthly['net_amount']],
            hoverinfo="x+text",
            name="Net Amount",
        )
    )
    fig.update_layout(
        title=title or "Monthly Net Breakdown",
        xaxis_title="Month",
        yaxis_title="Net Amount",
    )
    return fig
