"""Fleet Cash Flow Planner — Streamlit dashboard.

Run with:
    streamlit run src/fleet_cashflow/dashboard/app.py

Layout: sidebar settings + break-even inputs → summary metrics → monthly
cash-flow chart → editable month and vehicle tables → import / export.
The plan is autosaved to ``$FLEET_CASHFLOW_PLAN_PATH`` after every rerun.
"""

from __future__ import annotations

import json
import os

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from fleet_cashflow.config import FleetPlan, GlobalSettings, SeasonMonth, Vehicle
from fleet_cashflow.engine.orchestrator import run_plan
from fleet_cashflow.engine.roster import MAX_VEHICLES, add_vehicle, replace_roster
from fleet_cashflow.exceptions import FleetCashflowError
from fleet_cashflow.io.plan_files import load_plan_or_default, plan_from_text, save_plan
from fleet_cashflow.io.vehicles_csv import import_vehicles_csv, vehicles_to_csv
from fleet_cashflow.logging_config import configure_logging

PLAN_PATH = os.environ.get("FLEET_CASHFLOW_PLAN_PATH", ".fleet_cashflow/plan.json")

_VEHICLE_COLUMNS = [
    "id", "name", "category", "base_adr", "base_util_pct",
    "fixed_monthly", "variable_per_day", "maintenance_reserve", "notes",
]
_MONTH_COLUMNS = ["label", "days", "adr_mult_pct", "util_mult_pct"]

configure_logging()
st.set_page_config(page_title="Fleet Cash Flow Planner", page_icon="🚙", layout="wide")


def _money(val: float) -> str:
    sign = "-" if val < 0 else ""
    return f"{sign}${abs(val):,.2f}"


# ---------------------------------------------------------------------------
# Session state: plan loaded once per session, then edited in place
# ---------------------------------------------------------------------------
if "plan" not in st.session_state:
    st.session_state.plan = load_plan_or_default(PLAN_PATH)

plan: FleetPlan = st.session_state.plan

# ---------------------------------------------------------------------------
# Sidebar: global settings and break-even inputs
# ---------------------------------------------------------------------------
st.sidebar.header("Global Settings")
s = plan.settings
revenue_fee_pct = st.sidebar.number_input("Revenue fee (%)", 0.0, 100.0, float(s.revenue_fee_pct), 0.1)
overhead = st.sidebar.number_input("Company overhead / month ($)", value=float(s.company_overhead_monthly), step=500.0)
sales_tax_pct = st.sidebar.number_input("Sales tax (%)", 0.0, 100.0, float(s.sales_tax_pct), 0.01)
tax_enabled = st.sidebar.checkbox("Collect sales tax", value=s.tax_enabled)
tax_pass_through = st.sidebar.checkbox(
    "Tax is pass-through (exclude from cash flow)", value=s.tax_pass_through, disabled=not tax_enabled,
)

st.sidebar.header("Break-Even")
labels = [m.label or f"#{i + 1}" for i, m in enumerate(plan.months)]
month_index = st.sidebar.selectbox(
    "Month",
    options=list(range(len(labels))),
    index=min(max(plan.break_even_month_index, 0), max(len(labels) - 1, 0)),
    format_func=lambda i: labels[i],
    disabled=not labels,
)
target = st.sidebar.number_input(
    "Target monthly cash flow ($)", value=float(plan.target_monthly_cash_flow), step=1_000.0,
)

if st.sidebar.button("Reset (sample data)", use_container_width=True):
    st.session_state.plan = FleetPlan()
    for key in ("vehicle_editor", "month_editor", "imported_csv"):
        st.session_state.pop(key, None)
    st.rerun()

plan_upload = st.sidebar.file_uploader("Load plan (JSON / YAML)", type=["json", "yaml", "yml"])
if plan_upload is not None and st.session_state.get("loaded_plan") != (plan_upload.name, plan_upload.size):
    st.session_state.loaded_plan = (plan_upload.name, plan_upload.size)
    try:
        loaded = plan_from_text(plan_upload.getvalue().decode("utf-8-sig"), plan_upload.name)
    except FleetCashflowError as exc:
        st.sidebar.error(str(exc))
    else:
        st.session_state.plan = loaded
        for key in ("vehicle_editor", "month_editor", "imported_csv"):
            st.session_state.pop(key, None)
        st.rerun()

# ---------------------------------------------------------------------------
# Editable tables
# ---------------------------------------------------------------------------
st.title("Fleet Cash Flow Planner")
st.caption(f"Up to {MAX_VEHICLES} vehicles · 12-month forecast · autosaved to {PLAN_PATH}")

tab_vehicles, tab_months = st.tabs(["Vehicles", "Seasonality"])

with tab_vehicles:
    uploaded = st.file_uploader("Import CSV", type=["csv"])
    if uploaded is not None and st.session_state.get("imported_csv") != (uploaded.name, uploaded.size):
        st.session_state.imported_csv = (uploaded.name, uploaded.size)
        try:
            roster = import_vehicles_csv(uploaded.getvalue().decode("utf-8-sig"))
        except FleetCashflowError as exc:
            st.error(str(exc))
        else:
            plan = plan.model_copy(update={"vehicles": roster})
            st.session_state.pop("vehicle_editor", None)
            st.success(f"Imported {len(roster)} vehicles.")

    vehicle_df = pd.DataFrame(
        [v.model_dump() for v in plan.vehicles], columns=_VEHICLE_COLUMNS,
    )
    edited_vehicles = st.data_editor(
        vehicle_df,
        num_rows="dynamic",
        hide_index=True,
        disabled=["id"],
        use_container_width=True,
        key="vehicle_editor",
    )
    c1, c2 = st.columns(2)
    if c1.button("+ Add vehicle", disabled=len(plan.vehicles) >= MAX_VEHICLES):
        st.session_state.plan = plan.model_copy(update={"vehicles": add_vehicle(plan.vehicles)})
        st.session_state.pop("vehicle_editor", None)
        st.rerun()
    c2.download_button(
        "Export CSV", vehicles_to_csv(plan.vehicles), file_name="fleet_vehicles.csv", mime="text/csv",
    )

with tab_months:
    month_df = pd.DataFrame([m.model_dump() for m in plan.months], columns=_MONTH_COLUMNS)
    edited_months = st.data_editor(
        month_df, hide_index=True, disabled=["label"], use_container_width=True, key="month_editor",
    )

# Rows added in the editor have no id yet; Vehicle assigns a fresh one.
vehicles = [
    Vehicle.model_validate({k: v for k, v in row.items() if not pd.isna(v)})
    for row in edited_vehicles.to_dict("records")
]
if len(vehicles) > MAX_VEHICLES:
    vehicles = replace_roster(vehicles)
months = [SeasonMonth.model_validate(row) for row in edited_months.to_dict("records")]

plan = FleetPlan(
    vehicles=vehicles,
    months=months,
    settings=GlobalSettings(
        revenue_fee_pct=revenue_fee_pct,
        company_overhead_monthly=overhead,
        sales_tax_pct=sales_tax_pct,
        tax_enabled=tax_enabled,
        tax_pass_through=tax_pass_through,
    ),
    target_monthly_cash_flow=target,
    break_even_month_index=month_index or 0,
)
st.session_state.plan = plan
save_plan(plan, PLAN_PATH)

# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------
report = run_plan(plan)
annual = report.forecast.annual
best, worst = report.extremes.best, report.extremes.worst
be = report.break_even

m1, m2, m3, m4 = st.columns(4)
m1.metric("Annual revenue", _money(annual.revenue))
m2.metric("Annual cash flow", _money(annual.cash_flow))
m3.metric(
    "Best / worst month",
    f"{best.label} / {worst.label}" if best and worst else "—",
    help=f"{_money(best.cash_flow)} / {_money(worst.cash_flow)}" if best and worst else None,
)
m4.metric(
    "Break-even utilization",
    f"{be.implied_avg_util_pct:.1f}%",
    delta=f"scale {be.scale:.3f}× · {'solved' if be.solved else 'not reachable'}",
    delta_color="normal" if be.solved else "inverse",
)

rows = report.forecast.months
fig = go.Figure()
fig.add_bar(
    x=[r.label for r in rows],
    y=[r.cash_flow for r in rows],
    marker_color=["#2ecc71" if r.cash_flow >= 0 else "#e74c3c" for r in rows],
    name="Cash flow",
)
fig.add_scatter(
    x=[r.label for r in rows], y=[r.total_revenue for r in rows], name="Revenue", mode="lines+markers",
)
fig.add_hline(y=target, line_dash="dot", annotation_text="Target")
fig.update_layout(height=380, margin=dict(l=10, r=10, t=30, b=10), legend=dict(orientation="h"))
st.plotly_chart(fig, use_container_width=True)

st.subheader("Monthly breakdown")
st.dataframe(
    pd.DataFrame([
        {
            "Month": r.label,
            "Days": r.days,
            "Utilization %": round(r.weighted_util_pct, 1),
            "Revenue": round(r.total_revenue, 2),
            "Fees": round(r.total_fees, 2),
            "Variable": round(r.total_variable, 2),
            "Vehicle fixed": round(r.total_vehicle_fixed, 2),
            "Contribution": round(r.total_contribution, 2),
            "Overhead": round(r.overhead, 2),
            "Tax collected": round(r.tax_collected, 2),
            "Cash flow": round(r.cash_flow, 2),
        }
        for r in rows
    ]),
    hide_index=True,
    use_container_width=True,
)

st.download_button(
    "Download plan (JSON)",
    json.dumps(plan.model_dump(mode="json"), indent=2),
    file_name="fleet_plan.json",
    mime="application/json",
)
