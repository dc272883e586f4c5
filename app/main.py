import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dataclasses import replace
from datetime import date
from uuid import uuid4

import numpy as np
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from ledger import config
from ledger.domain import (
    Budget,
    BudgetState,
    Expense,
    PeriodType,
    Scope,
    Tone,
    effective_category,
    parse_date,
    to_amount,
)
from ledger.aggregation import total_spent
from ledger.events import event_bus, EXPENSE_ADDED
from ledger.frames import category_frame, daily_frame, monthly_frame, progress_frame
from ledger.filters import by_amount_range, by_category, by_date_range, by_keyword, iter_expenses
from ledger.functional import validate_budget, validate_expense
from ledger.logging_setup import configure_logging, get_logger
from ledger.memo import cached_insights, cached_progress
from ledger.periods import month_start, week_start
from ledger.formatting import budget_label, format_amount, period_label
from ledger.services import default_budget_service, default_report_service
from ledger.summary import spending_summary
from ledger.transforms import (
    add_budget,
    add_expense,
    load_seed,
    remove_budget,
    remove_expense,
    sort_expenses,
    update_budget,
    update_expense,
)

configure_logging()
logger = get_logger("ledger.app")

st.set_page_config(page_title="Expense Ledger", layout="wide")

if "expenses" not in st.session_state:
    if config.SEED_PATH.exists():
        st.session_state.expenses, st.session_state.budgets = load_seed(config.get_seed_path())
    else:
        logger.warning("seed file %s not found, starting empty", config.SEED_PATH)
        st.session_state.expenses, st.session_state.budgets = (), ()

expenses = st.session_state.expenses
budgets = st.session_state.budgets
today = date.today()

CATEGORIES = ["Food", "Transport", "Bills", "Shopping", "Health", "Entertainment", "Other"]
TONE_ICONS = {Tone.POSITIVE: "🟢", Tone.NEGATIVE: "🟠", Tone.NEUTRAL: "💡"}
STATE_COLORS = {BudgetState.OK.value: "#22d3ee", BudgetState.NEAR.value: "#fbbf24", BudgetState.OVER.value: "#ef4444"}


def period_start_for(period_type: str, d: date) -> str:
    starts = {
        PeriodType.DAY.value: d.isoformat(),
        PeriodType.WEEK.value: week_start(d),
        PeriodType.MONTH.value: month_start(d),
    }
    return starts[period_type]


menu = st.sidebar.radio("Menu", ["🏠 Overview", "📊 Charts", "🧾 Expenses", "💰 Budgets", "📑 Reports"])

if menu == "🏠 Overview":
    summary = spending_summary(expenses, today)
    k1, k2, k3, k4 = st.columns(4)
    for col, (label, stat) in zip(
        (k1, k2, k3, k4),
        (("Today", summary.today), ("This week", summary.week),
         ("This month", summary.month), ("All time", summary.all_time)),
    ):
        with col:
            st.metric(label, format_amount(stat.total), f"{stat.count} expenses", delta_color="off")

    budget_report = default_budget_service().budget_report(today, expenses, budgets)
    for alert in budget_report["result"].get("alerts", []):
        if alert.get("state") is BudgetState.OVER:
            st.error(alert["alert"])
        else:
            st.warning(alert["alert"])

    problems = [m for v in budget_report["validation"] for m in v["messages"]]
    if problems:
        with st.expander(f"{len(problems)} records need attention", expanded=False):
            for m in problems:
                st.write(m)

    st.subheader("💡 Insights")
    insights = cached_insights(expenses, today)
    if insights:
        for ins in insights:
            st.markdown(f"{TONE_ICONS[ins.tone]} **{ins.label}**: {ins.text}")
    else:
        st.info("Add some expenses to see insights here.")

elif menu == "📊 Charts":
    st.title("📊 Charts")
    if not expenses:
        st.info("Add some expenses to see charts here.")
    else:
        c1, c2 = st.columns(2)
        with c1:
            df_cat = category_frame(expenses)
            fig_cat = px.pie(df_cat, values="total", names="category", title="By category")
            st.plotly_chart(fig_cat, use_container_width=True)
        with c2:
            df_month = monthly_frame(expenses)
            fig_month = px.bar(df_month, x="month", y="total", title="By month", template="plotly_dark")
            st.plotly_chart(fig_month, use_container_width=True)

        end = pd.Timestamp(today)
        days = pd.date_range(end=end, periods=30, freq="D")
        df_day = daily_frame(expenses)
        if not df_day.empty:
            daily = df_day.set_index("date")["total"].reindex(days, fill_value=0)
        else:
            daily = pd.Series(np.zeros(len(days)), index=days)

        fig_ts = go.Figure()
        fig_ts.add_trace(go.Scatter(x=[d.strftime("%d %b") for d in days], y=daily.values, mode="lines+markers", name="Spent"))
        fig_ts.update_layout(template="plotly_dark", title="Last 30 days", margin=dict(t=40, b=10, l=10, r=10))
        st.plotly_chart(fig_ts, use_container_width=True)

elif menu == "🧾 Expenses":
    st.title("🧾 Expenses")

    with st.form("add_expense", clear_on_submit=True):
        c1, c2, c3 = st.columns(3)
        with c1:
            exp_date = st.date_input("Date", value=today)
        with c2:
            exp_category = st.selectbox("Category", CATEGORIES)
        with c3:
            exp_amount = st.number_input(f"Amount ({config.CURRENCY_SYMBOL})", min_value=0.0, step=100.0)
        exp_description = st.text_input("Description")
        submitted = st.form_submit_button("Add expense")

    if submitted:
        new_expense = Expense(
            id=str(uuid4()),
            date=exp_date.isoformat(),
            category=exp_category,
            description=exp_description,
            amount=exp_amount,
            created_at=pd.Timestamp.now().isoformat(),
        )
        result = validate_expense(new_expense)
        if result.is_left():
            st.error(result.get_error()["message"])
        else:
            st.session_state.expenses = add_expense(expenses, new_expense)
            event_bus.publish(EXPENSE_ADDED, {"amount": new_expense.amount})
            st.success(f"Added {format_amount(new_expense.amount)}")
            st.rerun()

    if expenses:
        f1, f2, f3 = st.columns(3)
        with f1:
            date_range = st.date_input("Date range", value=(today.replace(day=1), today), key="exp_date_range")
        with f2:
            selected_category = st.selectbox("Category filter", ["All"] + CATEGORIES)
        with f3:
            keyword = st.text_input("Search", placeholder="description, notes, category")
        a1, a2 = st.columns(2)
        with a1:
            min_amount = st.number_input(f"Min {config.CURRENCY_SYMBOL}", min_value=0.0, value=None, step=100.0)
        with a2:
            max_amount = st.number_input(f"Max {config.CURRENCY_SYMBOL}", min_value=0.0, value=None, step=100.0)

        shown = expenses
        if len(date_range) == 2:
            shown = tuple(iter_expenses(shown, by_date_range(date_range[0].isoformat(), date_range[1].isoformat())))
        if selected_category != "All":
            shown = tuple(iter_expenses(shown, by_category(selected_category)))
        if keyword.strip():
            shown = tuple(iter_expenses(shown, by_keyword(keyword)))
        if min_amount is not None or max_amount is not None:
            shown = tuple(iter_expenses(shown, by_amount_range(min_amount, max_amount)))

        st.caption(f"{len(shown)} expenses · {format_amount(total_spent(shown))}")
        ordered = sort_expenses(shown)
        disp = pd.DataFrame([
            {"Date": e.date, "Category": effective_category(e.category), "Description": e.description,
             "Amount": format_amount(e.amount), "id": e.id}
            for e in ordered
        ], columns=["Date", "Category", "Description", "Amount", "id"])
        st.dataframe(disp.drop(columns=["id"]), use_container_width=True, hide_index=True)

        selected_id = st.selectbox("Select expense", [""] + [e.id for e in ordered],
                                   format_func=lambda i: "" if not i else next(
                                       f"{e.date} · {e.description or effective_category(e.category)} · {format_amount(e.amount)}"
                                       for e in ordered if e.id == i))
        selected = next((e for e in ordered if e.id == selected_id), None)
        if selected is not None:
            with st.form(f"edit_expense_{selected.id}"):
                c1, c2, c3 = st.columns(3)
                current = effective_category(selected.category)
                with c1:
                    edit_date = st.date_input("Date", value=parse_date(selected.date) or today, key=f"edit_exp_date_{selected.id}")
                with c2:
                    edit_category = st.selectbox("Category", CATEGORIES, key=f"edit_exp_category_{selected.id}",
                                                 index=CATEGORIES.index(current) if current in CATEGORIES else len(CATEGORIES) - 1)
                with c3:
                    edit_amount = st.number_input(f"Amount ({config.CURRENCY_SYMBOL})", min_value=0.0,
                                                  value=max(0.0, to_amount(selected.amount)), step=100.0,
                                                  key=f"edit_exp_amount_{selected.id}")
                edit_description = st.text_input("Description", value=selected.description or "", key=f"edit_exp_description_{selected.id}")
                saved = st.form_submit_button("💾 Save changes")

            if saved:
                changes = {
                    "date": edit_date.isoformat(),
                    "category": edit_category,
                    "description": edit_description,
                    "amount": edit_amount,
                }
                result = validate_expense(replace(selected, **changes))
                if result.is_left():
                    st.error(result.get_error()["message"])
                else:
                    st.session_state.expenses = update_expense(expenses, selected.id, **changes)
                    st.rerun()

            if st.button("🗑 Delete"):
                st.session_state.expenses = remove_expense(expenses, selected.id)
                st.rerun()
    else:
        st.info("No expenses yet.")

elif menu == "💰 Budgets":
    st.title("💰 Budgets")

    with st.form("add_budget", clear_on_submit=True):
        c1, c2, c3 = st.columns(3)
        with c1:
            scope = st.selectbox("Scope", [Scope.OVERALL.value, Scope.CATEGORY.value])
            category = st.selectbox("Category", CATEGORIES)
        with c2:
            period_type = st.selectbox("Period type", [p.value for p in PeriodType], index=2)
            period_date = st.date_input("Period", value=today)
        with c3:
            limit = st.number_input(f"Limit ({config.CURRENCY_SYMBOL})", min_value=0.0, step=1000.0)
        submitted = st.form_submit_button("Add budget")

    if submitted:
        new_budget = Budget(
            id=str(uuid4()),
            scope=scope,
            category=category if scope == Scope.CATEGORY.value else None,
            period_type=period_type,
            period_start=period_start_for(period_type, period_date),
            amount=limit,
        )
        result = validate_budget(new_budget)
        if result.is_left():
            st.error(result.get_error()["message"])
        else:
            st.session_state.budgets = add_budget(budgets, new_budget)
            st.rerun()

    progresses = cached_progress(budgets, expenses)
    if not progresses:
        st.info("No budgets yet.")
    else:
        for p in progresses:
            b = p.budget
            c1, c2, c3 = st.columns([5, 1, 1])
            with c1:
                suffix = {BudgetState.OVER: " (over)", BudgetState.NEAR: " (near limit)"}.get(p.state, "")
                st.markdown(f"**{budget_label(b)}** · {b.period_type} · {period_label(b)}")
                st.progress(p.progress, text=f"{format_amount(p.spent)} / {format_amount(b.amount)}{suffix}")
            with c2:
                if st.button("✏️", key=f"edit_{b.id}"):
                    st.session_state.editing_budget = b.id
            with c3:
                if st.button("🗑", key=f"del_{b.id}"):
                    st.session_state.budgets = remove_budget(budgets, b.id)
                    st.rerun()

        editing = next((b for b in budgets if b.id == st.session_state.get("editing_budget")), None)
        if editing is not None:
            st.subheader(f"Edit {budget_label(editing)} budget")
            with st.form(f"edit_budget_{editing.id}"):
                c1, c2 = st.columns(2)
                types = [p.value for p in PeriodType]
                with c1:
                    edit_type = st.selectbox("Period type", types, key=f"edit_budget_type_{editing.id}",
                                             index=types.index(editing.period_type) if editing.period_type in types else 2)
                    edit_date = st.date_input("Period", value=parse_date(editing.period_start) or today, key=f"edit_budget_date_{editing.id}")
                with c2:
                    edit_limit = st.number_input(f"Limit ({config.CURRENCY_SYMBOL})", min_value=0.0,
                                                 value=max(0.0, to_amount(editing.amount)), step=1000.0,
                                                 key=f"edit_budget_limit_{editing.id}")
                saved = st.form_submit_button("💾 Save changes")

            if saved:
                changes = {
                    "period_type": edit_type,
                    "period_start": period_start_for(edit_type, edit_date),
                    "amount": edit_limit,
                }
                result = validate_budget(replace(editing, **changes))
                if result.is_left():
                    st.error(result.get_error()["message"])
                else:
                    st.session_state.budgets = update_budget(budgets, editing.id, **changes)
                    del st.session_state["editing_budget"]
                    st.rerun()

        df_prog = progress_frame(progresses)
        fig = px.bar(df_prog, x="budget", y="spent", color="state", color_discrete_map=STATE_COLORS,
                     hover_data=["period", "limit", "remaining"], title="Spent per budget", template="plotly_dark")
        st.plotly_chart(fig, use_container_width=True)

elif menu == "📑 Reports":
    st.title("📑 Reports")
    show_steps = st.checkbox("Show intermediate steps", value=False)

    report = default_report_service().spending_report(today, expenses)
    result = report["result"]
    summary = result["summary"]

    col1, col2, col3 = st.columns(3)
    col1.metric("Date", report["date"])
    col2.metric("This month", format_amount(summary.month.total), f"{summary.month.count} expenses", delta_color="off")
    col3.metric("All time", format_amount(summary.all_time.total), f"{summary.all_time.count} expenses", delta_color="off")

    if result["by_category"]:
        st.subheader("By category")
        df_cat = pd.DataFrame(
            [{"Category": t.category, "Total": format_amount(t.total)} for t in result["by_category"]]
        )
        st.table(df_cat)
    if result["by_month"]:
        st.subheader("By month")
        df_month = pd.DataFrame(
            [{"Month": m.month, "Total": format_amount(m.total)} for m in result["by_month"]]
        )
        st.table(df_month)
    if not expenses:
        st.info("No expenses to report on yet.")

    budget_report = default_budget_service().budget_report(today, expenses, budgets)
    st.subheader("Budgets")
    st.caption("Records checked by {} validators".format(len(budget_report["validation"])))
    for p in budget_report["result"].get("progress", []):
        st.write(f"**{budget_label(p.budget)}** · {period_label(p.budget)}: "
                 f"{format_amount(p.spent)} / {format_amount(p.budget.amount)} ({p.state.value})")

    if show_steps:
        with st.expander("Intermediate steps and validation", expanded=False):
            st.subheader("Validation Messages")
            for v in budget_report["validation"]:
                st.write(v)
            st.subheader("Calculator Steps")
            for s in budget_report["steps"]:
                st.write(s["calculator"], s["output"])
            st.subheader("Aggregator Steps")
            for s in report["steps"]:
                st.write(s["aggregator"], s["output"])
