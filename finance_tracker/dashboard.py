"""Streamlit app for the finance tracker.

The app is a thin shell: it reads the current collection from the
record store, keeps form and filter values in ``st.session_state`` and
hands everything to the pure helpers in :mod:`analytics`, :mod:`filters`,
:mod:`goals` and :mod:`charts`.  Mutations go through :mod:`mutations`
and the resulting collection replaces the stored one wholesale.

To run the dashboard from the command line::

    streamlit run finance_tracker/dashboard.py
"""

from __future__ import annotations

import os
import sys
from datetime import date
from typing import Any, Dict, Optional

import pandas as pd
import streamlit as st

if __package__:
    from . import charts
    from . import visualization as viz
    from .analytics import TransactionAnalytics
    from .clock import SystemClock
    from .config import CURRENCIES, EXPENSE_CATEGORIES, INCOME_CATEGORIES, ensure_data_directories
    from .filters import CATEGORY_SELECTOR_OPTIONS, SORT_OPTIONS, filter_transactions, parse_category_selector
    from .formatting import (
        escape_dollar_for_markdown,
        format_currency,
        format_forecast_date,
        format_runway,
        format_trend,
        greeting_for,
    )
    from .goals import calculate_goal_forecast
    from .logging_setup import configure_logging
    from .models import FilterCriteria, Goal, TransactionRecord, TransactionType
    from .mutations import TransactionDraft, bulk_delete, delete_transaction, submit_draft, toggle_selection
    from .store import RecordStore
else:
    CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
    PARENT_DIR = os.path.dirname(CURRENT_DIR)
    if PARENT_DIR not in sys.path:
        sys.path.insert(0, PARENT_DIR)
    from finance_tracker import charts  # type: ignore
    from finance_tracker import visualization as viz  # type: ignore
    from finance_tracker.analytics import TransactionAnalytics  # type: ignore
    from finance_tracker.clock import SystemClock  # type: ignore
    from finance_tracker.config import (  # type: ignore
        CURRENCIES,
        EXPENSE_CATEGORIES,
        INCOME_CATEGORIES,
        ensure_data_directories,
    )
    from finance_tracker.filters import (  # type: ignore
        CATEGORY_SELECTOR_OPTIONS,
        SORT_OPTIONS,
        filter_transactions,
        parse_category_selector,
    )
    from finance_tracker.formatting import (  # type: ignore
        escape_dollar_for_markdown,
        format_currency,
        format_forecast_date,
        format_runway,
        format_trend,
        greeting_for,
    )
    from finance_tracker.goals import calculate_goal_forecast  # type: ignore
    from finance_tracker.logging_setup import configure_logging  # type: ignore
    from finance_tracker.models import FilterCriteria, Goal, TransactionRecord, TransactionType  # type: ignore
    from finance_tracker.mutations import (  # type: ignore
        TransactionDraft,
        bulk_delete,
        delete_transaction,
        submit_draft,
        toggle_selection,
    )
    from finance_tracker.store import RecordStore  # type: ignore

PAGES = ["Dashboard", "Transactions", "Reports", "Goals", "Settings"]

SESSION_DEFAULTS: Dict[str, Any] = {
    'edit_id': None,
    'selected_ids': frozenset(),
    'bulk_mode': False,
    'search_term': "",
    'filter_type': "all",
    'filter_category': "all",
    'sort_key': "dateDesc",
    'start_date': None,
    'end_date': None,
}


class StreamlitNotifier:
    """Show validation messages as Streamlit error boxes."""

    def notify(self, message: str) -> None:
        st.error(message)


def _ensure_session_state() -> None:
    for key, value in SESSION_DEFAULTS.items():
        if key not in st.session_state:
            st.session_state[key] = value


def _get_store() -> RecordStore:
    store = st.session_state.get('_record_store')
    if store is None:
        store = RecordStore()
        st.session_state['_record_store'] = store
    return store


def _rerun() -> None:
    rerun = getattr(st, "rerun", None) or getattr(st, "experimental_rerun", None)
    if rerun is not None:
        rerun()


def build_filter_criteria(state: Any) -> FilterCriteria:
    """Collect the filter widgets' values into a :class:`FilterCriteria`."""
    start = state.get('start_date')
    end = state.get('end_date')
    return FilterCriteria(
        search_term=(state.get('search_term') or "").strip(),
        type=state.get('filter_type') or "all",
        category=parse_category_selector(state.get('filter_category')),
        start_date=start.isoformat() if isinstance(start, date) else start,
        end_date=end.isoformat() if isinstance(end, date) else end,
        sort_key=state.get('sort_key') or "dateDesc",
    )


def transactions_to_display_frame(records, currency_symbol: str) -> pd.DataFrame:
    """Tabular view used by the reports data grid."""
    rows = [
        {
            'Date': r.date,
            'Description': r.description,
            'Category': r.category,
            'Amount': format_currency(r.amount, currency_symbol),
            'Status': getattr(r.status, 'value', r.status),
            'Recurrent': "Yes" if r.recurrent else "No",
            'Last Modified': pd.to_datetime(r.last_edited, unit='ms').strftime('%H:%M:%S') if r.last_edited else "",
        }
        for r in records
    ]
    return pd.DataFrame(rows, columns=['Date', 'Description', 'Category', 'Amount', 'Status', 'Recurrent', 'Last Modified'])


def _start_edit(record: TransactionRecord) -> None:
    st.session_state.edit_id = record.id
    st.session_state.form_description = record.description
    st.session_state.form_amount = f"{abs(record.amount):g}"
    st.session_state.form_type = getattr(record.type, 'value', record.type)
    st.session_state.form_category = record.category
    st.session_state.form_date = date.fromisoformat(record.date)
    st.session_state.form_note = record.note
    st.session_state.form_sub_category = record.sub_category
    st.session_state.form_recurrent = record.recurrent
    st.session_state.form_status = getattr(record.status, 'value', record.status)


def _clear_form() -> None:
    for key in list(st.session_state.keys()):
        if str(key).startswith('form_'):
            del st.session_state[key]
    st.session_state.edit_id = None


def render_sidebar(settings: Dict[str, Any], clock: SystemClock) -> str:
    st.sidebar.markdown(f"### 👤 {settings['user_name']}")
    st.sidebar.caption(f"Last login: {clock.now().strftime('%H:%M:%S')}")
    return st.sidebar.radio("Navigate", PAGES, key='active_page')


def _draft_from_form() -> TransactionDraft:
    state = st.session_state
    return TransactionDraft(
        description=state.get('form_description', ""),
        amount=state.get('form_amount', ""),
        type=state.get('form_type', TransactionType.EXPENSE.value),
        category=state.get('form_category', ""),
        date=state.get('form_date', ""),
        note=state.get('form_note', ""),
        sub_category=state.get('form_sub_category', ""),
        recurrent=state.get('form_recurrent', False),
        status=state.get('form_status', "Cleared"),
    )


def _submit_form(store: RecordStore, clock: SystemClock) -> None:
    if submit_draft(store, _draft_from_form(), StreamlitNotifier(), edit_id=st.session_state.edit_id, clock=clock):
        _clear_form()


def render_transaction_form(store: RecordStore, clock: SystemClock) -> None:
    editing = st.session_state.edit_id is not None
    st.subheader("✏️ Edit Transaction" if editing else "Quick Add Transaction")

    txn_type = st.radio("Type", [t.value for t in TransactionType], horizontal=True, key='form_type')
    categories = EXPENSE_CATEGORIES if txn_type == TransactionType.EXPENSE.value else INCOME_CATEGORIES
    if st.session_state.get('form_category') not in categories:
        st.session_state.form_category = categories[0]
    if 'form_date' not in st.session_state:
        st.session_state.form_date = clock.today()

    with st.form("transaction_form"):
        st.text_input("Description", key='form_description')
        col1, col2 = st.columns(2)
        with col1:
            st.text_input("Amount", key='form_amount')
            st.selectbox("Category", categories, key='form_category')
            st.date_input("Date", key='form_date')
        with col2:
            st.text_input("Sub-category", key='form_sub_category')
            st.selectbox("Status", ["Cleared", "Pending"], key='form_status')
            st.checkbox("Recurrent", key='form_recurrent')
        st.text_input("Note", key='form_note', help="Add 'Goal: <name>' to count this expense towards a goal")
        st.form_submit_button(
            "Save Changes" if editing else "Add Transaction",
            on_click=_submit_form,
            args=(store, clock),
        )

    if editing:
        st.button("Cancel Edit", on_click=_clear_form)


def render_goal_card(forecast: Dict[str, Any], currency_symbol: str) -> None:
    st.subheader(f"🎯 {forecast['name']} Goal")
    col1, col2 = st.columns(2)
    col1.metric("Target", format_currency(forecast['target'], currency_symbol))
    col2.metric("Saved", format_currency(forecast['saved'], currency_symbol))
    st.progress(forecast['progress_pct'] / 100)
    st.caption(f"{forecast['progress_pct']:.1f}% Complete")
    st.write(escape_dollar_for_markdown(
        f"Remaining: {format_currency(forecast['remaining'], currency_symbol)} | "
        f"Est. Completion: {format_forecast_date(forecast['forecasted_date'])} "
        f"(Monthly Allocation: {format_currency(forecast['monthly_contribution'], currency_symbol)})"
    ))


def render_dashboard(store: RecordStore, settings: Dict[str, Any], clock: SystemClock) -> None:
    symbol = CURRENCIES[settings['currency']]
    analytics = TransactionAnalytics(store.load(), today=clock.today())
    summary = analytics.summary()
    mismatched = analytics.type_mismatches()
    if mismatched:
        st.warning(f"{len(mismatched)} transaction(s) have a type that doesn't match the amount sign.")

    st.header(f"{greeting_for(clock.now())}, {settings['user_name']}!")
    st.caption("Your financial snapshot for the current period.")

    col1, col2 = st.columns(2)
    with col1:
        st.metric("Net Balance", format_currency(summary['balance'], symbol))
        st.caption(
            f"Income: {format_currency(summary['total_income'], symbol)} · "
            f"Expense: {format_currency(summary['total_expense'], symbol)}"
        )
    with col2:
        st.metric(
            f"{summary['month_name']} {clock.today().year} Net",
            format_currency(summary['monthly_net'], symbol),
        )
        st.caption(
            f"I: {format_currency(summary['monthly_income'], symbol)} · "
            f"E: {format_currency(summary['monthly_expense'], symbol)}"
        )

    left, right = st.columns(2)
    with left:
        render_transaction_form(store, clock)
    with right:
        forecast = calculate_goal_forecast(store.load_goal(), store.load(), clock.today())
        render_goal_card(forecast, symbol)

    st.subheader("Key Financial Insights")
    cols = st.columns(5)
    cols[0].metric("Highest Expense 📉", format_currency(summary['highest_expense'], symbol))
    cols[1].metric("Highest Income 📈", format_currency(summary['highest_income'], symbol))
    cols[2].metric("Avg. Daily Burn 🔥", format_currency(summary['avg_daily_spending'], symbol))
    cols[3].metric("Cash Runway ⏳", format_runway(summary['runway_days']))
    cols[4].metric(f"Expense Trend ({summary['month_name']})", format_trend(summary['trend']))


def _edit_from_list(record: TransactionRecord) -> None:
    _start_edit(record)
    st.session_state.active_page = "Dashboard"


def _delete_record(store: RecordStore, record_id: int) -> None:
    store.replace(delete_transaction(store.load(), record_id))


def _toggle_selected(record_id: int) -> None:
    st.session_state.selected_ids = toggle_selection(st.session_state.selected_ids, record_id)


def _toggle_bulk_mode() -> None:
    st.session_state.bulk_mode = not st.session_state.bulk_mode
    st.session_state.selected_ids = frozenset()


def _delete_selected(store: RecordStore) -> None:
    remaining, st.session_state.selected_ids = bulk_delete(store.load(), st.session_state.selected_ids)
    store.replace(remaining)
    st.session_state.bulk_mode = False


def _clear_dates() -> None:
    st.session_state.start_date = None
    st.session_state.end_date = None


def render_transactions(store: RecordStore, settings: Dict[str, Any]) -> None:
    symbol = CURRENCIES[settings['currency']]
    st.subheader("Transaction Filters")
    col1, col2, col3, col4 = st.columns(4)
    col1.text_input("Search", key='search_term', placeholder="Search text or category...")
    col2.selectbox("Type", ["all", "income", "expense"], key='filter_type')
    labels = dict((raw, label) for label, raw in CATEGORY_SELECTOR_OPTIONS)
    col3.selectbox("Category/Status/Recurrence", list(labels), format_func=labels.get, key='filter_category')
    col4.selectbox("Sort", list(SORT_OPTIONS), format_func=SORT_OPTIONS.get, key='sort_key')

    dcol1, dcol2, dcol3 = st.columns([2, 2, 1])
    dcol1.date_input("From", key='start_date')
    dcol2.date_input("To", key='end_date')
    dcol3.button("Clear Dates", on_click=_clear_dates)

    visible = filter_transactions(store.load(), build_filter_criteria(st.session_state))
    bulk_mode = st.session_state.bulk_mode
    selected = st.session_state.selected_ids

    bulk_col, delete_col = st.columns(2)
    bulk_col.button("Exit Bulk Mode" if bulk_mode else "Bulk Select", on_click=_toggle_bulk_mode)
    if bulk_mode and selected:
        delete_col.button(f"Delete ({len(selected)})", on_click=_delete_selected, args=(store,))

    st.subheader(f"Transaction History ({len(visible)} Items)")
    if not visible:
        st.info("No transactions found.")
        return

    for record in visible:
        cols = st.columns([0.5, 4, 2, 1, 1]) if bulk_mode else st.columns([4, 2, 1, 1])
        offset = 0
        if bulk_mode:
            cols[0].checkbox(
                "Select",
                value=record.id in selected,
                key=f"select_{record.id}",
                on_change=_toggle_selected,
                args=(record.id,),
                label_visibility="collapsed",
            )
            offset = 1
        tags = f"`{record.category}`" + (f" `{record.sub_category}`" if record.sub_category else "")
        status = getattr(record.status, 'value', record.status)
        cols[offset].markdown(
            f"**{escape_dollar_for_markdown(record.description)}** {tags}  \n"
            f"{record.date} | Status: {status}{' | Recurrent' if record.recurrent else ''}"
        )
        cols[offset + 1].write(format_currency(record.amount, symbol))
        cols[offset + 2].button("✎", key=f"edit_{record.id}", help="Edit",
                                on_click=_edit_from_list, args=(record,))
        cols[offset + 3].button("×", key=f"delete_{record.id}", help="Delete",
                                on_click=_delete_record, args=(store, record.id))


def render_reports(store: RecordStore, settings: Dict[str, Any], clock: SystemClock) -> None:
    symbol = CURRENCIES[settings['currency']]
    analytics = TransactionAnalytics(store.load(), today=clock.today())
    bundle = charts.chart_bundle(analytics)

    st.subheader("Detailed Monthly Breakdown")
    st.plotly_chart(viz.create_monthly_net_bar(bundle['monthly'], symbol), use_container_width=True)

    st.subheader("Expense Distribution by Category")
    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(viz.create_category_pie(bundle['category'], symbol), use_container_width=True)
        st.plotly_chart(viz.create_balance_pie(bundle['balance'], symbol), use_container_width=True)
    with col2:
        st.markdown("#### Top 5 Expenses Breakdown")
        top = analytics.top_categories()
        if not top:
            st.caption("No expenses recorded yet.")
        for category, amount in top:
            st.write(escape_dollar_for_markdown(f"{category}: {format_currency(amount, symbol)}"))

    st.subheader("Data Grid View")
    st.dataframe(
        transactions_to_display_frame(analytics.recent_transactions(), symbol),
        use_container_width=True,
        hide_index=True,
    )
    st.caption("Showing top 10 recent transactions. Go to Transactions page for full list.")


def render_goals(store: RecordStore, settings: Dict[str, Any], clock: SystemClock) -> None:
    symbol = CURRENCIES[settings['currency']]
    goal = store.load_goal()
    render_goal_card(calculate_goal_forecast(goal, store.load(), clock.today()), symbol)

    st.subheader("Edit Goal Settings")
    with st.form("goal_form"):
        name = st.text_input("Goal Name", value=goal.name)
        target = st.number_input("Target Amount", value=float(goal.target), min_value=0.0, step=100.0)
        saved = st.number_input("Currently Saved", value=float(goal.saved), min_value=0.0, step=100.0)
        if st.form_submit_button("Save Goal"):
            store.save_goal(Goal(name=name.strip() or goal.name, target=target, saved=saved))
            _rerun()
    st.caption(
        f'To contribute to this goal, add a new expense transaction and include a note like: "Goal: {goal.name}".'
    )


def render_settings(store: RecordStore, settings: Dict[str, Any]) -> None:
    st.subheader("Account & Appearance Settings")
    with st.form("settings_form"):
        user_name = st.text_input("User Name", value=settings['user_name'])
        currencies = list(CURRENCIES)
        currency = st.selectbox(
            "Currency Symbol",
            currencies,
            index=currencies.index(settings['currency']),
            format_func=lambda code: f"{code} ({CURRENCIES[code]})",
        )
        if st.form_submit_button("Save Settings"):
            store.save_settings({'user_name': user_name.strip() or settings['user_name'], 'currency': currency})
            _rerun()

    st.subheader("Data Management")
    st.download_button(
        "Export Data (JSON)",
        data=store.export_json(),
        file_name="transactions.json",
        mime="application/json",
    )
    uploaded = st.file_uploader("Import Data (JSON)", type=["json"])
    if uploaded is not None and st.button("Import"):
        try:
            count = store.import_json(uploaded.getvalue().decode('utf-8'))
        except ValueError as exc:
            st.error(str(exc))
        else:
            st.success(f"Imported {count} transactions")

    if st.button("Reset All Data", type="primary"):
        store.reset()
        st.success("All local data reset!")


def main(clock: Optional[SystemClock] = None) -> None:
    """Entry point for the Streamlit app."""
    configure_logging()
    ensure_data_directories()
    st.set_page_config(page_title="Finance Tracker", page_icon="💰", layout="wide")
    clock = clock or SystemClock()
    _ensure_session_state()
    store = _get_store()
    settings = store.load_settings()

    page = render_sidebar(settings, clock)
    if page == "Transactions":
        render_transactions(store, settings)
    elif page == "Reports":
        render_reports(store, settings, clock)
    elif page == "Goals":
        render_goals(store, settings, clock)
    elif page == "Settings":
        render_settings(store, settings)
    else:
        render_dashboard(store, settings, clock)


if __name__ == "__main__":
    main()
