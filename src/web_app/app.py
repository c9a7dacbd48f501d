import streamlit as st
import requests

from mrp_core.config import API_BASE
from web_app.views import allocation_table, buildable_frame, shortage_summary

st.set_page_config(
    page_title="Craftify MRP — Work Order Cockpit",
    layout="wide"
)

st.title("🏭 Work Order Cockpit")


def call_api(method: str, path: str, timeout: int = 30, **kwargs) -> dict:
    r = requests.request(method, f"{API_BASE}{path}", timeout=timeout, **kwargs)
    if r.status_code != 200:
        raise RuntimeError(f"API {path} failed ({r.status_code}): {r.text}")
    return r.json()


# -----------------------------
# Sidebar inputs
# -----------------------------
st.sidebar.header("Work Order")

parent_item_id = st.sidebar.text_input("Parent Item (BOM)", "ITM-006")
quantity = st.sidebar.number_input(
    "Quantity",
    min_value=0,
    value=20,
    step=1
)

run_check = st.sidebar.button("Check & Reserve")

# -----------------------------
# Buildable now
# -----------------------------
try:
    buildable = call_api("GET", f"/boms/{parent_item_id}/buildable")
except RuntimeError as e:
    st.error(str(e))
    st.stop()

col1, col2 = st.columns(2)
col1.metric("Buildable Now", buildable["max_units"])
col2.metric("Limiting", ", ".join(buildable["limiting_item_ids"]) or "-")

st.markdown("### Component availability")
st.dataframe(buildable_frame(buildable), use_container_width=True)

# -----------------------------
# FEFO availability
# -----------------------------
if run_check:

    with st.spinner("Allocating lots (FEFO)..."):
        availability = call_api(
            "POST",
            "/availability/check",
            json={"parent_item_id": parent_item_id, "quantity": quantity},
        )

    if availability["has_shortage"]:
        st.warning("Shortages remain — consider creating a PO.")
        st.table(shortage_summary(availability))
    else:
        st.success("All required components can be reserved.")

    st.markdown("### Allocations (FEFO)")
    st.dataframe(allocation_table(availability), use_container_width=True)

    st.caption("FEFO = First-Expired-First-Out. The earliest expiry lots are allocated first for each component.")
