# greencart-simulation/app.py
"""
GreenCart Delivery Simulation - Manager Dashboard
=================================================

Dashboard for running "what-if" delivery simulations.

Features:
- KPI cards (profit, efficiency, deliveries, fuel cost)
- Fuel cost breakdown by traffic tier
- Per-driver assignment tables
- Saved simulation history
"""

import streamlit as st
import pandas as pd
import os
import sys
from typing import Any, Dict, Optional

# Ensure greencart is importable
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from greencart import config
from greencart.exceptions import InvalidSimulationInput, SimulationError
from greencart.simulation import Simulation
from greencart.store import EntityStore, ResultsStore
from greencart.validation import validate_simulation_inputs

# =============================================================================
# PAGE CONFIG
# =============================================================================

st.set_page_config(
    page_title="GreenCart Simulation",
    page_icon="🚚",
    layout="wide",
    initial_sidebar_state="expanded"
)

# =============================================================================
# CUSTOM STYLING
# =============================================================================

st.markdown("""
<style>
    .kpi-card {
        background: linear-gradient(135deg, #11998e 0%, #38ef7d 100%);
        border-radius: 16px;
        padding: 1.5rem;
        color: white;
        text-align: center;
        box-shadow: 0 10px 40px rgba(17, 153, 142, 0.3);
    }

    .kpi-card.blue {
        background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
        box-shadow: 0 10px 40px rgba(102, 126, 234, 0.3);
    }

    .kpi-card.orange {
        background: linear-gradient(135deg, #f093fb 0%, #f5576c 100%);
        box-shadow: 0 10px 40px rgba(245, 87, 108, 0.3);
    }

    .kpi-value {
        font-size: 2.2rem;
        font-weight: 800;
        margin: 0.5rem 0;
    }

    .kpi-label {
        font-size: 0.9rem;
        opacity: 0.9;
        text-transform: uppercase;
        letter-spacing: 1px;
    }

    .section-header {
        font-size: 1.5rem;
        font-weight: 700;
        color: #1a1a2e;
        margin: 2rem 0 1rem 0;
        padding-bottom: 0.5rem;
        border-bottom: 3px solid #11998e;
    }

    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}
</style>
""", unsafe_allow_html=True)

USER_ID = "dashboard"

# =============================================================================
# DATA LOADING
# =============================================================================


@st.cache_resource(show_spinner=False)
def load_store(data_dir: str) -> EntityStore:
    """Load and cache the CSV snapshot."""
    return EntityStore.from_csv(data_dir)


def get_results_store() -> ResultsStore:
    return ResultsStore(config.RESULTS_DIR)


# =============================================================================
# SIDEBAR
# =============================================================================

def render_sidebar(store: EntityStore) -> Optional[Dict[str, Any]]:
    """Render the simulation inputs. Returns the request when Run is clicked."""
    st.sidebar.markdown("## 🎛️ Simulation Inputs")
    st.sidebar.markdown("---")

    available = len(store.get_available_drivers())
    st.sidebar.caption(
        f"{available} available drivers, {len(store.get_pending_orders())} pending orders, "
        f"{len(store.routes)} routes"
    )

    number_of_drivers = st.sidebar.number_input(
        "Number of drivers",
        min_value=1,
        max_value=max(available, 1) + 5,
        value=min(config.DEFAULT_NUMBER_OF_DRIVERS, max(available, 1)),
        step=1,
        help="Drivers to put on shift (least fatigued are picked first)"
    )

    start_time = st.sidebar.text_input(
        "Shift start (HH:MM)",
        value=config.DEFAULT_START_TIME,
    )

    max_hours = st.sidebar.slider(
        "Max hours per driver",
        min_value=1.0,
        max_value=float(config.MAX_HOURS_LIMIT),
        value=float(config.DEFAULT_MAX_HOURS_PER_DRIVER),
        step=0.5,
    )

    st.sidebar.markdown("---")
    if st.sidebar.button("🚀 Run Simulation", use_container_width=True):
        return {
            "numberOfDrivers": int(number_of_drivers),
            "startTime": start_time.strip(),
            "maxHoursPerDriver": float(max_hours),
        }
    return None


# =============================================================================
# KPI DISPLAY
# =============================================================================

def render_kpi_row(results: Dict[str, Any]) -> None:
    """Render the top KPI cards."""
    col1, col2, col3, col4 = st.columns(4)

    cards = [
        (col1, "", "Total Profit", f"₹{results['totalProfit']:,}"),
        (col2, "blue", "Efficiency Score", f"{results['efficiencyScore']}%"),
        (col3, "", "On-time / Late", f"{results['onTimeDeliveries']} / {results['lateDeliveries']}"),
        (col4, "orange", "Fuel Cost", f"₹{results['totalFuelCost']:,}"),
    ]
    for col, css, label, value in cards:
        with col:
            st.markdown(f"""
            <div class="kpi-card {css}">
                <div class="kpi-label">{label}</div>
                <div class="kpi-value">{value}</div>
            </div>
            """, unsafe_allow_html=True)


def render_fuel_breakdown(results: Dict[str, Any]) -> None:
    """Bar chart of fuel cost per traffic tier."""
    st.markdown('<div class="section-header">⛽ Fuel Cost by Traffic</div>', unsafe_allow_html=True)
    breakdown = results["fuelCostBreakdown"]
    df = pd.DataFrame({
        "Traffic": ["Low", "Medium", "High"],
        "Fuel Cost (₹)": [breakdown["lowTraffic"], breakdown["mediumTraffic"], breakdown["highTraffic"]],
    }).set_index("Traffic")
    st.bar_chart(df)


def render_deliveries_chart(results: Dict[str, Any]) -> None:
    """On-time vs late deliveries."""
    st.markdown('<div class="section-header">⏱️ Delivery Performance</div>', unsafe_allow_html=True)
    df = pd.DataFrame({
        "Status": ["On time", "Late"],
        "Deliveries": [results["onTimeDeliveries"], results["lateDeliveries"]],
    }).set_index("Status")
    st.bar_chart(df)


def render_assignments(results: Dict[str, Any]) -> None:
    """Driver summary table plus an expander per driver with their orders."""
    st.markdown('<div class="section-header">🧑‍✈️ Driver Assignments</div>', unsafe_allow_html=True)

    summary = pd.DataFrame([
        {
            "Driver": a["driverName"],
            "Orders": a["assignedOrdersCount"],
            "Hours": a["totalHours"],
            "Late": sum(1 for o in a["assignedOrders"] if o["isLate"]),
            "Value (₹)": sum(o["valueRs"] for o in a["assignedOrders"]),
        }
        for a in results["assignments"]
    ])
    st.dataframe(summary, use_container_width=True, hide_index=True)

    for a in results["assignments"]:
        if not a["assignedOrders"]:
            continue
        with st.expander(f"{a['driverName']} - {a['assignedOrdersCount']} orders, {a['totalHours']}h"):
            orders_df = pd.DataFrame(a["assignedOrders"]).rename(columns={
                "orderId": "Order",
                "valueRs": "Value (₹)",
                "routeId": "Route",
                "deliveryTime": "Delivery Time",
                "estimatedTime": "Est. Minutes",
                "isLate": "Late",
            })
            st.dataframe(orders_df, use_container_width=True, hide_index=True)


def render_history(results_store: ResultsStore) -> None:
    """Saved runs and aggregate statistics."""
    st.markdown('<div class="section-header">📜 Simulation History</div>', unsafe_allow_html=True)

    stats = results_store.stats(USER_ID)
    if stats["totalSimulations"] == 0:
        st.info("No saved simulations yet.")
        return

    col1, col2, col3 = st.columns(3)
    col1.metric("Runs", stats["totalSimulations"])
    col2.metric("Average Profit", f"₹{stats['averageProfit']:,}")
    col3.metric("Average Efficiency", f"{stats['averageEfficiency']}%")

    history = results_store.history(USER_ID)
    df = pd.DataFrame([
        {
            "When": s["createdAt"][:19].replace("T", " "),
            "Drivers": s["inputs"]["numberOfDrivers"],
            "Start": s["inputs"]["startTime"],
            "Max Hours": s["inputs"]["maxHoursPerDriver"],
            "Profit (₹)": s["totalProfit"],
            "Efficiency (%)": s["efficiencyScore"],
        }
        for s in history["simulations"]
    ])
    st.dataframe(df, use_container_width=True, hide_index=True)


# =============================================================================
# MAIN APPLICATION
# =============================================================================

def main():
    """Main application entry point."""

    st.markdown("""
    <div style="text-align: center; padding: 1rem 0 2rem 0;">
        <h1 style="font-size: 3rem; font-weight: 800; color: #11998e; margin-bottom: 0.5rem;">
            GreenCart Delivery Simulation
        </h1>
        <p style="font-size: 1.2rem; color: #666; max-width: 700px; margin: 0 auto;">
            Driver allocation, delivery timing and profitability
        </p>
    </div>
    """, unsafe_allow_html=True)

    try:
        store = load_store(config.DATA_DIR)
    except (FileNotFoundError, ValueError) as e:
        st.error(f"Failed to load data: {e}")
        return

    results_store = get_results_store()
    request = render_sidebar(store)

    if request is not None:
        try:
            inputs = validate_simulation_inputs(request)
            with st.spinner("Running simulation..."):
                sim = Simulation(store, results_store)
                record = sim.run_and_save(USER_ID, inputs)
            st.session_state["latest_results"] = record.results
            st.success("Simulation complete!")
        except InvalidSimulationInput as e:
            for error in e.errors:
                st.sidebar.error(error)
        except SimulationError as e:
            st.error(str(e))

    results = st.session_state.get("latest_results")
    if results is None:
        st.info("👈 Set the inputs in the sidebar and click **Run Simulation**.")
    else:
        render_kpi_row(results)
        col1, col2 = st.columns(2)
        with col1:
            render_fuel_breakdown(results)
        with col2:
            render_deliveries_chart(results)
        render_assignments(results)

    render_history(results_store)

    st.markdown("---")
    st.markdown("""
    <div style="text-align: center; color: #888; padding: 1rem;">
        GreenCart Logistics | Delivery Simulation
    </div>
    """, unsafe_allow_html=True)


if __name__ == "__main__":
    main()
