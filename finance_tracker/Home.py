"""Main entry point for the Streamlit multi-page app: the dashboard.

Pages in the pages/ directory will automatically appear in the sidebar.
"""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

import streamlit as st

# Add project root to path for imports
project_root = Path(__file__).parent.parent.resolve()
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from finance_tracker import aggregation as agg
from finance_tracker.config import BASE_CURRENCY, SUMMARY_REFRESH_SECONDS
from finance_tracker.dates import end_of_previous_month, format_iso
from finance_tracker.formatting import (
    category_text,
    format_change,
    format_currency,
    format_full_date,
    format_percentage,
    format_short_date,
)
from finance_tracker.goals import pinned_overview
from finance_tracker.rates import SUPPORTED_CURRENCIES
from finance_tracker.shared_sidebar import render_shared_sidebar
from finance_tracker.visualization import create_trend_chart


def render_summary(transactions, today) -> None:
    comparison = agg.monthly_comparison(transactions, today.month, today.year)
    current, previous = comparison['current'], comparison['previous']
    balance = agg.net_balance(transactions)
    balance_last_month = agg.net_balance(agg.filter_until(transactions, end_of_previous_month(today)))

    col1, col2, col3 = st.columns(3)
    col1.metric("Net Balance", format_currency(balance), format_change(balance, balance_last_month))
    col2.metric("Monthly Income", format_currency(current['income']), format_change(current['income'], previous['income']))
    col3.metric(
        "Monthly Spending",
        format_currency(current['expense']),
        format_change(current['expense'], previous['expense']),
        delta_color="inverse",
    )


@st.fragment(run_every=SUMMARY_REFRESH_SECONDS)
def summary_fragment(ledger, context) -> None:
    """Re-read transactions and redraw the summary cards every minute."""
    now = datetime.now()
    render_summary(ledger.all(), now.date())
    context.mark_summary_refreshed(now)
    st.caption(f"Summary updated {context.summary_refreshed_at.strftime('%H:%M:%S')}")


def render_latest_spending(ledger) -> None:
    st.subheader("🧾 Latest Spending")
    expenses = ledger.latest_expenses()
    if not expenses:
        st.info("No recent spending")
        return
    for expense in expenses:
        col1, col2, col3 = st.columns([3, 2, 2])
        col1.write(category_text(expense.category))
        col2.write(format_short_date(expense.date))
        col3.write(format_currency(expense.amount))
    st.caption(f"Total: {format_currency(sum(e.amount for e in expenses))}")


def render_pinned_goals(goal_manager, balance: float) -> None:
    st.subheader("🎯 Goals")
    overview = pinned_overview(goal_manager.goals(), balance)
    if not overview:
        st.info("No active goals")
        return
    for goal, progress in overview:
        st.write(f"**{goal.name}** · Target: {format_full_date(goal.deadline)} · {format_percentage(progress.percentage)}")
        st.progress(progress.percentage / 100)


def _swap_currencies() -> None:
    st.session_state.fx_from, st.session_state.fx_to = st.session_state.fx_to, st.session_state.fx_from


def render_currency_exchange(services, now: datetime) -> None:
    st.subheader("💱 Currency Exchange")
    context = services['context']
    currencies = list(SUPPORTED_CURRENCIES)
    if 'fx_from' not in st.session_state:
        st.session_state.fx_from = BASE_CURRENCY if BASE_CURRENCY in currencies else currencies[0]
    if 'fx_to' not in st.session_state:
        st.session_state.fx_to = next(c for c in currencies if c != st.session_state.fx_from)

    col1, col2, col3 = st.columns([4, 1, 4])
    with col1:
        from_currency = st.selectbox("From", currencies, key='fx_from')
        amount = st.number_input("Amount", min_value=0.0, value=1.0, step=1.0)
    with col2:
        st.button("⇄", key='fx_swap', help="Swap currencies", on_click=_swap_currencies)
    with col3:
        to_currency = st.selectbox("To", currencies, key='fx_to')

    snapshot = context.refresh_rates(services['rates'], now, base=from_currency)
    converted = context.convert(amount, from_currency, to_currency)
    with col3:
        st.metric("Converted", f"{converted:,.2f} {to_currency}")
    st.caption(context.rate_label(from_currency, to_currency))
    if snapshot.ok and snapshot.fetched_at:
        st.caption(f"Updated: {snapshot.fetched_at.strftime('%H:%M:%S')}")
    else:
        st.caption("Failed to update rates; showing fallback rates")


def main():
    """Render the dashboard."""
    st.set_page_config(page_title="Finance Tracker", page_icon="💰", layout="wide")
    services = render_shared_sidebar()
    now = datetime.now()
    today = now.date()

    transactions = services['ledger'].all()

    st.header("📊 Dashboard")
    st.caption(f"As of {format_iso(today)}")
    summary_fragment(services['ledger'], services['context'])

    left, right = st.columns(2)
    with left:
        st.subheader("📈 This Week")
        weekly = agg.daily_series(transactions, 7, today)
        st.plotly_chart(create_trend_chart(weekly, title="Last 7 days"), use_container_width=True)
        render_latest_spending(services['ledger'])
    with right:
        render_pinned_goals(services['goals'], agg.net_balance(transactions))
        render_currency_exchange(services, now)


if __name__ == "__main__":
    main()
