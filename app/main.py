import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import streamlit as st
import structlog

from app.auth import initials, login, register, update_account
from app.views import (
    category_figure,
    format_money,
    is_placeholder_chart,
    signed_label,
    toast_duration,
    toast_icon,
    transactions_frame,
)
from core.config import get_settings
from core.domain import EXPENSE, INCOME, Period
from core.log import setup_logging
from core.services import FinanceTracker
from core.store import TransactionStore
from core.transforms import load_seed

settings = get_settings()
setup_logging(settings.log_level, settings.log_format)
logger = structlog.get_logger(__name__)

st.set_page_config(page_title=settings.app_name, layout="wide")

PERIOD_LABELS = {
    Period.TODAY: "Today",
    Period.WEEK: "Week",
    Period.MONTH: "Month",
    Period.YEAR: "Year",
    Period.ALL_TIME: "All time",
}


def new_tracker() -> FinanceTracker:
    try:
        seed = load_seed(settings.seed_path)
    except (OSError, ValueError, KeyError) as e:
        logger.error("seed_load_failed", path=settings.seed_path, error=str(e))
        st.error(f"Could not load demo data from {settings.seed_path}: {e}")
        seed = ()
    return FinanceTracker(
        store=TransactionStore(seed),
        initial_balance=settings.initial_balance,
        period=settings.default_period,
        default_category=settings.default_category,
        toast_seconds=settings.toast_seconds,
    )


if "tracker" not in st.session_state:
    st.session_state.tracker = new_tracker()
if "form_version" not in st.session_state:
    st.session_state.form_version = 0
if "user" not in st.session_state:
    st.session_state.user = None

tracker: FinanceTracker = st.session_state.tracker


def show_login():
    st.title(f"$ {settings.app_name}")
    st.caption("Keep track of your money, simply.")
    tab_login, tab_register = st.tabs(["Log in", "Create account"])

    with tab_login:
        with st.form("login_form"):
            email = st.text_input("Email", placeholder="example@mail.com")
            password = st.text_input("Password", type="password")
            submitted = st.form_submit_button("Log in")
        if submitted:
            user = login(email, password)
            if user.is_some():
                st.session_state.user = user.get_or_else(None)
                logger.info("user_logged_in")
                st.rerun()
            else:
                st.error("Enter your email and password.")

    with tab_register:
        with st.form("register_form"):
            name = st.text_input("Full name", placeholder="e.g. Jane Doe")
            email = st.text_input("Email", placeholder="example@mail.com", key="register_email")
            password = st.text_input("Password", type="password", key="register_password")
            submitted = st.form_submit_button("Create account")
        if submitted:
            user = register(name, email, password)
            if user.is_some():
                st.session_state.user = user.get_or_else(None)
                logger.info("user_registered")
                st.rerun()
            else:
                st.error("Enter your email and password.")


def show_account_menu():
    user = st.session_state.user
    st.sidebar.markdown(f"### {initials(user.name)} · {user.name or 'User'}")
    st.sidebar.caption(user.email or "no-email")

    with st.sidebar.expander("Edit account"):
        with st.form("account_form"):
            name = st.text_input("Name *", value=user.name)
            email = st.text_input("Email *", value=user.email)
            st.text_input("New password", type="password")
            saved = st.form_submit_button("Save changes")
        if saved:
            st.session_state.user = update_account(user, name, email)
            st.rerun()

    if st.sidebar.button("Log out"):
        st.session_state.user = None
        logger.info("user_logged_out")
        st.rerun()


def show_summary():
    st.subheader("Overview")
    selected = st.radio(
        "Period",
        options=list(PERIOD_LABELS),
        format_func=PERIOD_LABELS.get,
        index=list(PERIOD_LABELS).index(tracker.period),
        horizontal=True,
    )
    tracker.set_period(selected)
    aggregates = tracker.get_aggregates()
    label = PERIOD_LABELS[aggregates.period]

    k1, k2, k3 = st.columns(3)
    with k1:
        st.metric("Current balance", format_money(aggregates.balance))
    with k2:
        st.metric(f"Income ({label})", format_money(aggregates.period_income))
    with k3:
        st.metric(f"Expenses ({label})", format_money(aggregates.period_expense))

    st.subheader(f"Spending by category ({label})")
    st.plotly_chart(category_figure(aggregates), use_container_width=True)
    if is_placeholder_chart(aggregates):
        st.caption("No expenses in this period.")

    st.subheader("Recent transactions")
    if not aggregates.filtered:
        st.info("No transactions in this period.")
    for t in aggregates.filtered:
        with st.expander(f"{t.date} · {t.kind.upper()} · {t.category} — {t.description}   {signed_label(t)}"):
            st.write(f"**Category:** {t.category}")
            st.write(f"**Method:** {t.method or '—'}")
            st.write(f"**Note:** {t.note or '—'}")

    with st.expander("Table view"):
        st.dataframe(transactions_frame(aggregates.filtered), use_container_width=True)


def show_entry_form():
    st.subheader("Add a record")
    kind = st.radio(
        "Type",
        options=[EXPENSE, INCOME],
        format_func=str.capitalize,
        horizontal=True,
    )
    today = tracker.clock().date()
    # A new form key after each saved record resets its fields; a rejected
    # record keeps what the user typed.
    with st.form(f"entry_form_{st.session_state.form_version}"):
        description = st.text_input("Description")
        amount = st.text_input("Amount")
        col1, col2 = st.columns(2)
        with col1:
            category = st.selectbox("Category", settings.categories)
            day = st.date_input("Date", value=today, max_value=today)
        with col2:
            method = st.selectbox("Method", settings.methods)
        note = st.text_input("Note (optional)")
        submitted = st.form_submit_button(f"Save {kind}")

    if submitted:
        result = tracker.submit_transaction(
            {
                "description": description,
                "amount": amount,
                "category": category,
                "date": day.isoformat() if day else "",
                "method": method,
                "note": note,
            },
            kind=kind,
        )
        st.session_state.toast = tracker.toast_for(result)
        if result.accepted:
            st.session_state.form_version += 1
            st.rerun()


def show_toast():
    toast = st.session_state.pop("toast", None)
    if toast is None:
        return
    st.toast(toast.text, icon=toast_icon(toast), duration=toast_duration(toast))


if st.session_state.user is None:
    show_login()
else:
    show_account_menu()
    st.title(f"$ {settings.app_name}")
    main_col, form_col = st.columns([2, 1])
    with form_col:
        show_entry_form()
        show_toast()
    with main_col:
        show_summary()
