"""ROU Lease Accounting — Streamlit dashboard.

Layout: sidebar contract form + calculation history → main area with
three tabs (Schedule | Journal | Classification).
Run with:  streamlit run src/rou_lease/dashboard/app.py
"""

from __future__ import annotations

from datetime import date

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from rou_lease.config.contract import LeaseContract
from rou_lease.config.settings import AppSettings
from rou_lease.engine.classifier import current_portion_as_of
from rou_lease.engine.dates import group_key
from rou_lease.engine.orchestrator import run_calculation
from rou_lease.exceptions import ComputationError, ExportError, InputError
from rou_lease.logging_config import configure_logging
from rou_lease.models.results import CalculationResult
from rou_lease.reporting.export import (
    XLSX_MEDIA_TYPE,
    build_workbook,
    export_filename,
    journal_frame,
    schedule_frame,
)
from rou_lease.reporting.summary import build_summary
from rou_lease.storage.history import CalculationHistory, DraftRepository
from rou_lease.storage.store import JsonFileStore

# ---------------------------------------------------------------------------
# Settings, store, page config
# ---------------------------------------------------------------------------
SETTINGS = AppSettings.from_env()
configure_logging(level=SETTINGS.log_level)
st.set_page_config(page_title="ROU Lease Accounting", page_icon="📄", layout="wide")


@st.cache_resource
def _store() -> JsonFileStore:
    return JsonFileStore(SETTINGS.storage_path)


drafts = DraftRepository(_store())
history = CalculationHistory(_store(), limit=SETTINGS.history_limit)


# ---------------------------------------------------------------------------
# Sidebar: contract form (prefilled from the saved draft)
# ---------------------------------------------------------------------------
_draft = drafts.load_draft() or {}
_DEF = LeaseContract.model_validate(_draft) if _draft else LeaseContract(
    start_date=date.today().replace(day=1),
    end_date=date.today().replace(day=1).replace(year=date.today().year + 2),
    annual_rate_pct=5.0,
    monthly_payment=1_000_000,
)

st.sidebar.header("Lease Contract")

with st.sidebar.expander("Terms", expanded=True):
    start_date = st.date_input("Start date", value=_DEF.start_date)
    end_date = st.date_input("End date", value=_DEF.end_date)
    monthly_payment = st.number_input(
        "Monthly payment", min_value=0, value=_DEF.monthly_payment, step=10_000,
    )
    annual_rate_pct = st.number_input(
        "Annual rate (%)", min_value=0.0, value=_DEF.annual_rate_pct, step=0.1, format="%.2f",
    )
    frequency = st.radio(
        "Reporting frequency", ["monthly", "quarterly"],
        index=0 if _DEF.frequency == "monthly" else 1, horizontal=True,
    )

with st.sidebar.expander("Early termination", expanded=_DEF.termination_date is not None):
    terminate = st.checkbox("Terminate early", value=_DEF.termination_date is not None)
    termination_date = st.date_input(
        "Termination date", value=_DEF.termination_date or _DEF.end_date, disabled=not terminate,
    )

contract = LeaseContract(
    start_date=start_date,
    end_date=end_date,
    annual_rate_pct=annual_rate_pct,
    monthly_payment=int(monthly_payment),
    frequency=frequency,
    termination_date=termination_date if terminate else None,
)
drafts.save_draft(contract.model_dump(mode="json"))

run_clicked = st.sidebar.button("Calculate", type="primary", use_container_width=True)

# ---------------------------------------------------------------------------
# Sidebar: history
# ---------------------------------------------------------------------------
st.sidebar.divider()
st.sidebar.subheader("History")
past = history.entries()
if not past:
    st.sidebar.caption("No calculations yet.")
for entry in past:
    s = entry.summary
    cols = st.sidebar.columns([4, 1])
    cols[0].caption(
        f"{s['start_date']} → {s['end_date']} · {s['monthly_payment']:,} · "
        f"{s['annual_rate_pct']}% · {s['total_months']} months"
    )
    if cols[1].button("✕", key=f"del_{entry.id}"):
        history.delete(entry.id)
        st.rerun()
if past and st.sidebar.button("Clear history"):
    history.clear()
    st.rerun()

# ---------------------------------------------------------------------------
# Calculation
# ---------------------------------------------------------------------------
if run_clicked:
    try:
        result = run_calculation(contract)
    except InputError as exc:
        for message in exc.errors:
            st.error(message)
        st.stop()
    except ComputationError as exc:
        st.error(str(exc))
        st.stop()
    history.record(contract, result)
    st.session_state["result"] = result

result: CalculationResult | None = st.session_state.get("result")
if result is None:
    st.title("ROU Lease Accounting")
    st.info("Enter the lease terms in the sidebar and press **Calculate**.")
    st.stop()

summary = build_summary(result.contract, result.schedule, SETTINGS.currency_label)

st.title("ROU Lease Accounting")
m = st.columns(4)
m[0].metric("Lease term", summary.duration)
m[1].metric("Initial liability", summary.initial_liability)
m[2].metric("Total payments", summary.total_payments)
m[3].metric("Total interest", summary.total_interest)

try:
    workbook = build_workbook(result.contract, result.schedule, result.journal, summary)
    st.download_button(
        "📥  Download Excel",
        data=workbook,
        file_name=export_filename(result.contract),
        mime=XLSX_MEDIA_TYPE,
    )
except ExportError as exc:
    st.warning(f"{exc}. The results below are still available.")

tab_schedule, tab_journal, tab_class = st.tabs(["Schedule", "Journal", "Classification"])

with tab_schedule:
    df = schedule_frame(result.schedule)
    fig = go.Figure()
    fig.add_trace(go.Scatter(x=df["Payment date"], y=df["Closing liability"], name="Lease liability"))
    fig.add_trace(go.Scatter(
        x=df["Payment date"],
        y=result.present_value - df["Depreciation"].cumsum(),
        name="ROU asset (net)",
    ))
    fig.update_layout(height=340, margin=dict(l=10, r=10, t=30, b=10), legend=dict(orientation="h"))
    st.plotly_chart(fig, use_container_width=True)
    st.dataframe(df, hide_index=True, use_container_width=True)

with tab_journal:
    st.dataframe(journal_frame(result.journal), hide_index=True, use_container_width=True)

with tab_class:
    c = st.columns(2)
    c[0].metric("Current at inception", f"{result.initial_current_portion:,}")
    c[1].metric("Non-current at inception", f"{result.initial_non_current_portion:,}")

    period_ends = sorted({group_key(e.payment_date, result.contract.frequency) for e in result.schedule})
    rows = [
        {
            "Reporting date": d,
            "Reclassified to current": current_portion_as_of(
                result.schedule, d, result.contract.start_date, result.contract.frequency,
            ),
        }
        for d in period_ends
    ]
    st.dataframe(pd.DataFrame(rows), hide_index=True, use_container_width=True)
