"""Streamlit front end: bill calculator and admin configuration pages.

Run with ``utility-billing-ui`` or ``streamlit run src/utility_billing/ui/app.py``.

Page state lives in ``st.session_state``, which is scoped to one browser
tab and dropped on reload, so the admin PIN and authenticated flag never
outlive the page.  Every button press opens a short-lived
:class:`BillingClient`, runs one flow action through :func:`run_sync`, and
closes it again.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, TypeVar

import streamlit as st
import structlog

from utility_billing.admin.panel import AdminPanel
from utility_billing.admin.state import AdminState
from utility_billing.billing.calculator import BillCalculator, CalculatorState
from utility_billing.core.client import BillingClient
from utility_billing.core.config import ClientConfig
from utility_billing.core.exceptions import UtilityBillingError
from utility_billing.core.types import BillResponse
from utility_billing.export.pdf import bill_pdf_filename, render_bill_pdf
from utility_billing.gateway.base import Gateway
from utility_billing.utils.async_helpers import run_sync
from utility_billing.utils.formatting import (
    format_currency,
    format_percentage,
    format_percentage_fixed,
    format_rate,
    format_timestamp,
    format_units,
)
from utility_billing.utils.logging import configure_logging

logger = structlog.get_logger(__name__)

T = TypeVar("T")

PAGES = ("Calculate Bill", "Admin")


@st.cache_resource
def _client_config() -> ClientConfig:
    config = ClientConfig.from_env()
    configure_logging(config.log_level, json=config.log_json)
    return config


def _run(action: Callable[[Gateway], Awaitable[T]]) -> T | None:
    config = _client_config()

    async def _go() -> T:
        async with await BillingClient.connect(config) as client:
            return await action(client.gateway)

    try:
        # unlock and submit each make two requests
        return run_sync(_go(), timeout=config.timeout * 2)
    except UtilityBillingError as exc:
        logger.error("ui_action_failed", error=str(exc))
        st.error(str(exc))
        return None


def _session(key: str, factory: Callable[[], Any]) -> Any:
    if key not in st.session_state:
        st.session_state[key] = factory()
    return st.session_state[key]


# ---------------------------------------------------------------------------
# Calculator page
# ---------------------------------------------------------------------------


def _render_bill(bill: BillResponse) -> None:
    with st.container(border=True):
        st.subheader("📄 Bill Calculation Result")
        st.caption(f"Calculated on: {format_timestamp(bill.calculated_at)}")

        st.markdown("**Consumption Details**")
        left, right = st.columns(2)
        left.write("Units Consumed:")
        right.write(f"**{format_units(bill.units_consumed)}**")
        left.write("Rate per Unit:")
        right.write(f"**{format_rate(bill.rate_per_unit)}**")

        st.markdown("**Charges Breakdown**")
        left, right = st.columns(2)
        left.write("Subtotal (Units × Rate):")
        right.write(f"**{format_currency(bill.subtotal)}**")
        left.write(f"VAT ({format_percentage(bill.vat_percentage)}):")
        right.write(f"**{format_currency(bill.vat_amount)}**")
        left.write("Fixed Service Charge:")
        right.write(f"**{format_currency(bill.fixed_service_charge)}**")

        st.metric("Total Amount Payable", format_currency(bill.total_amount))

        st.download_button(
            "📥 Download as PDF",
            data=render_bill_pdf(bill),
            file_name=bill_pdf_filename(),
            mime="application/pdf",
        )


def render_calculator_page() -> None:
    state: CalculatorState = _session("calculator", CalculatorState)

    st.title("⚡ Utility Bill Calculator")
    st.write("Enter your electricity consumption to calculate your bill")

    with st.form("calculate_form"):
        units = st.text_input(
            "Units Consumed (kWh)",
            value=state.units_input,
            placeholder="Enter units consumed",
            disabled=state.loading,
        )
        submitted = st.form_submit_button(
            "Calculating..." if state.loading else "Calculate Bill",
            disabled=state.loading,
            type="primary",
        )

    if submitted:
        _run(lambda gw: BillCalculator(gw, state).calculate(units))

    if state.error:
        st.error(state.error)

    if state.result is not None:
        if st.button("Reset"):
            state.clear()
            st.rerun()
        _render_bill(state.result)


# ---------------------------------------------------------------------------
# Admin page
# ---------------------------------------------------------------------------


def _render_pin_form(state: AdminState) -> None:
    st.title("🔐 Admin Access")
    st.write("Enter your admin PIN to continue")

    with st.form("pin_form"):
        pin = st.text_input(
            "Admin PIN",
            type="password",
            placeholder="Enter admin PIN",
            disabled=state.loading,
        )
        submitted = st.form_submit_button(
            "Verifying..." if state.loading else "Access Admin Panel",
            disabled=state.loading,
            type="primary",
        )

    if submitted:
        unlocked = _run(lambda gw: AdminPanel(gw, state).unlock(pin))
        if unlocked:
            st.rerun()

    if state.error:
        st.error(state.error)


def _render_admin_panel(state: AdminState) -> None:
    config = state.current_config
    if config is not None:
        with st.container(border=True):
            st.subheader("📊 Current Configuration")
            rate, vat, charge = st.columns(3)
            rate.metric("Rate per Unit", format_rate(config.rate_per_unit))
            vat.metric("VAT Percentage", format_percentage_fixed(config.vat_percentage))
            charge.metric("Service Charge", format_currency(config.fixed_service_charge))
            st.caption(f"Last updated: {format_timestamp(config.updated_at)}")
    elif st.button("Reload configuration"):
        _run(lambda gw: AdminPanel(gw, state).refresh())
        st.rerun()

    title, logout = st.columns([4, 1])
    title.title("🔐 Update Configuration")
    if logout.button("Logout"):
        state.clear()
        st.rerun()
    st.write("Update utility billing rates and charges")

    form = state.form
    with st.form("config_form"):
        rate_input = st.text_input(
            "Rate per Unit ($/kWh) *",
            value=form.rate_per_unit,
            placeholder="e.g., 0.50",
            disabled=state.loading,
        )
        vat_input = st.text_input(
            "VAT Percentage (%) *",
            value=form.vat_percentage,
            placeholder="e.g., 15",
            disabled=state.loading,
        )
        charge_input = st.text_input(
            "Fixed Service Charge ($) *",
            value=form.fixed_service_charge,
            placeholder="e.g., 5.00",
            disabled=state.loading,
        )
        submitted = st.form_submit_button(
            "Updating..." if state.loading else "Update Configuration",
            disabled=state.loading,
            type="primary",
        )

    if submitted:
        _run(lambda gw: AdminPanel(gw, state).submit(rate_input, vat_input, charge_input))
        st.rerun()

    if state.error:
        st.error(state.error)
    if state.success:
        st.success(state.success)


def render_admin_page() -> None:
    state: AdminState = _session("admin", AdminState)
    if not state.is_authenticated:
        _render_pin_form(state)
        return
    if state.config_loading:
        st.info("Loading configuration...")
        return
    _render_admin_panel(state)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    st.set_page_config(page_title="Utility Management", page_icon="⚡", layout="centered")
    _client_config()

    st.sidebar.header("⚡ Utility Management")
    page = st.sidebar.radio("Navigation", PAGES, label_visibility="collapsed")

    if page == "Admin":
        render_admin_page()
    else:
        render_calculator_page()

    st.divider()
    st.caption("© 2025 Utility Management System. All rights reserved.")


main()
