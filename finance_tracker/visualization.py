"""Plotly visualisation helpers for the finance tracker.

Each function accepts a value produced by :mod:`finance_tracker.aggregation`
or :mod:`finance_tracker.goals` and returns a ``plotly.graph_objects.Figure``
that Streamlit renders with ``st.plotly_chart``. Empty inputs produce a
figure titled "No data to display" rather than raising.
"""

from __future__ import annotations

from typing import Sequence, Tuple

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .formatting import category_text, format_short_date

INCOME_COLOR = '#28a745'
EXPENSE_COLOR = '#dc3545'
CATEGORY_COLORS = ['#06ce7e', '#512889', '#E75481', '#9C51B7', '#006A4E', '#783EA9', '#009257']


def empty_figure(title: str = "No data to display") -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title=title)
    return fig


def create_trend_chart(series: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Generate an income vs expense line chart.

    Parameters
    ----------
    series : pandas.DataFrame
        Frame with ``Date``, ``Income`` and ``Expense`` columns, as returned
        by ``daily_series`` or ``date_totals``.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Filled line chart with one trace per flow.
    """
    if series.empty:
        return empty_figure()
    labels = [format_short_date(day) for day in series['Date']]
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=labels, y=series['Income'], name='Income', mode='lines',
        line=dict(color=INCOME_COLOR, shape='spline'), fill='tozeroy',
    ))
    fig.add_trace(go.Scatter(
        x=labels, y=series['Expense'], name='Expenses', mode='lines',
        line=dict(color=EXPENSE_COLOR, shape='spline'), fill='tozeroy',
    ))
    fig.update_layout(
        title=title or "Income vs expenses",
        legend=dict(orientation='h', y=-0.2),
        yaxis=dict(rangemode='tozero', tickprefix='$'),
    )
    return fig


def create_category_doughnut(breakdown: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Generate a doughnut chart from a category breakdown.

    Parameters
    ----------
    breakdown : pandas.DataFrame
        Frame with ``Category`` and ``Amount`` columns.
    title : str, optional
        Chart title.
    """
    if breakdown.empty:
        return empty_figure()
    df = breakdown.copy()
    df['Label'] = df['Category'].map(category_text)
    fig = px.pie(
        df, names='Label', values='Amount', hole=0.5,
        color_discrete_sequence=CATEGORY_COLORS,
    )
    fig.update_layout(title=title or "Expenses by category")
    return fig


def create_goal_progress_chart(rows: Sequence[Tuple[str, float]], title: str | None = None) -> go.Figure:
    """Horizontal bars of goal completion percentages (0-100)."""
    if not rows:
        return empty_figure()
    df = pd.DataFrame(list(rows), columns=['Goal', 'Percentage'])
    fig = px.bar(df, x='Percentage', y='Goal', orientation='h', range_x=[0, 100])
    fig.update_layout(title=title or "Goal progress", xaxis_title="% complete", yaxis_title="")
    return fig
