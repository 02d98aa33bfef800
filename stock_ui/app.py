import streamlit as st

from stock_ui.config import get_settings
from stock_ui.controller import InventoryController
from stock_ui.log import configure_logging
from stock_ui.widgets import (
    finish_animations,
    render_footer,
    render_modals,
    render_table,
    render_toolbar,
)

configure_logging()
settings = get_settings()

st.set_page_config(
    page_title="Inventory Products",
    layout="wide"
)

st.title("Inventory Products")

# ---------------- Session ----------------
if "controller" not in st.session_state:
    controller = InventoryController()
    with st.spinner("Loading products..."):
        controller.fetch_all()
    st.session_state["controller"] = controller

controller = st.session_state["controller"]
controller.tick()

# ---------------- Page ----------------
render_toolbar(controller)
render_modals(controller)
render_table(controller, settings.currency_symbol)
render_footer()

finish_animations(controller)
