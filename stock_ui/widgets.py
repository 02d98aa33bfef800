import time
from datetime import date

import pandas as pd
import streamlit as st

from stock_ui.controller import InventoryController

FIELD_LABELS = {"id": "ID", "name": "Name", "price": "Price", "quantity": "Quantity"}


def _bind(key, value):
    # widget values mirror the draft buffers, which the controller may reset
    st.session_state[key] = value


def _from_widget(setter, key, *args):
    setter(*args, st.session_state[key])


def _loading(action, *args):
    """Run a controller action that re-fetches the product list."""
    with st.spinner("Loading products..."):
        action(*args)


# ---------------- Toolbar ----------------
def render_toolbar(controller: InventoryController):
    def _search():
        _loading(controller.search, st.session_state["search_term"])

    search_col, buttons_col = st.columns([3, 2])

    with search_col:
        with st.form("search_form", border=False):
            st.text_input(
                "Search",
                key="search_term",
                placeholder="Search by ID or name",
                label_visibility="collapsed",
            )
            st.form_submit_button("Search", type="primary", on_click=_search, width="stretch")

    with buttons_col:
        add_col, delete_col, update_col, order_col = st.columns(4)
        add_col.button("➕ Add", key="open_add", on_click=controller.open_modal, args=("add",), width="stretch")
        delete_col.button("🗑️ Delete", key="open_delete", on_click=controller.open_modal, args=("delete",), width="stretch")
        update_col.button("✏️ Update", key="open_update", on_click=controller.open_modal, args=("update",), width="stretch")
        order_label = "↕️ Unsort" if controller.view.ordered else "↕️ By quantity"
        order_col.button(order_label, key="toggle_order", on_click=_loading,
                         args=(controller.toggle_order,), width="stretch")


# ---------------- Product Table ----------------
def products_frame(products, currency_symbol: str) -> pd.DataFrame:
    df = pd.DataFrame(
        [p.model_dump() for p in products],
        columns=["id", "name", "price", "quantity"],
    )
    df["price"] = df["price"].map(lambda v: f"{currency_symbol} {v:.2f}")
    return df.rename(columns=FIELD_LABELS)


def render_table(controller: InventoryController, currency_symbol: str):
    store = controller.store

    if store.error:
        st.error(f"Error: {store.error}")
        return

    df = products_frame(store.products, currency_symbol)
    st.dataframe(df, width="stretch", hide_index=True)


# ---------------- Modals ----------------
def _modal_header(controller: InventoryController, name: str, title: str):
    modal = controller.view.modals[name]
    title_col, close_col = st.columns([6, 1])
    title_col.subheader(title)
    close_col.button("✖", key=f"{name}_close", on_click=controller.close_modal, args=(name,))
    if modal.closing:
        st.caption("Closing...")
    alert = controller.view.alert_in(name)
    if alert:
        st.error(alert)
    return modal.closing


def _product_card(product):
    for field, label in FIELD_LABELS.items():
        st.markdown(f"**{label}:** {getattr(product, field)}")


def render_add_modal(controller: InventoryController):
    draft = controller.view.add_draft
    with st.container(border=True):
        closing = _modal_header(controller, "add", "Add Product")
        st.write("Fill in the new product details.")

        for field, placeholder in (("name", "Name"), ("price", "Price"), ("quantity", "Quantity")):
            key = f"add_{field}"
            _bind(key, getattr(draft, field))
            st.text_input(
                placeholder,
                key=key,
                placeholder=placeholder,
                disabled=closing,
                on_change=_from_widget,
                args=(controller.set_add_value, key, field),
            )

        st.button("Confirm", key="add_confirm", type="primary", disabled=closing,
                  on_click=_loading, args=(controller.add_product,), width="stretch")


def render_delete_modal(controller: InventoryController):
    draft = controller.view.delete_draft
    with st.container(border=True):
        closing = _modal_header(controller, "delete", "Delete Product")
        st.write("Are you sure you want to delete a product?")

        _bind("delete_id", draft.product_id)
        st.text_input(
            "Product ID",
            key="delete_id",
            placeholder="Product ID",
            disabled=closing,
            on_change=_from_widget,
            args=(controller.set_delete_id, "delete_id"),
        )

        product, missing = controller.delete_preview()
        if product is not None:
            with st.container(border=True):
                _product_card(product)
        elif missing:
            st.error(missing)

        st.button("Confirm", key="delete_confirm", type="primary", disabled=closing,
                  on_click=_loading, args=(controller.delete_product,), width="stretch")


def render_update_modal(controller: InventoryController):
    draft = controller.view.update_draft
    with st.container(border=True):
        closing = _modal_header(controller, "update", "Update Product")
        st.write("What do you want to update?")

        id_col, *check_cols = st.columns([3, 1, 1, 1])
        with id_col:
            _bind("update_id", draft.product_id)
            st.text_input(
                "Product ID",
                key="update_id",
                placeholder="Product ID",
                disabled=closing,
                on_change=_from_widget,
                args=(controller.set_update_id, "update_id"),
            )
        for col, field in zip(check_cols, ("name", "price", "quantity")):
            key = f"update_check_{field}"
            _bind(key, draft.checked[field])
            col.checkbox(
                FIELD_LABELS[field],
                key=key,
                disabled=closing,
                on_change=controller.toggle_update_field,
                args=(field,),
            )

        for field in ("name", "price", "quantity"):
            if not draft.checked[field]:
                continue
            key = f"update_value_{field}"
            _bind(key, draft.values[field])
            st.text_input(
                f"New {FIELD_LABELS[field].lower()}",
                key=key,
                disabled=closing,
                on_change=_from_widget,
                args=(controller.set_update_value, key, field),
            )

        rows = controller.update_preview()
        if rows:
            current_col, pending_col = st.columns(2)
            current_col.markdown("###### Current")
            current_col.table(pd.DataFrame(
                {"": [FIELD_LABELS[f] for f, _, _ in rows], "value": [str(c) for _, c, _ in rows]}
            ).set_index(""))
            pending_col.markdown("###### Pending")
            pending_col.table(pd.DataFrame(
                {"": [FIELD_LABELS[f] for f, _, _ in rows], "value": [str(p) for _, _, p in rows]}
            ).set_index(""))

        st.button("Confirm", key="update_confirm", type="primary", disabled=closing,
                  on_click=_loading, args=(controller.update_product,), width="stretch")


MODAL_RENDERERS = {
    "add": render_add_modal,
    "delete": render_delete_modal,
    "update": render_update_modal,
}


def render_modals(controller: InventoryController):
    for name, render in MODAL_RENDERERS.items():
        if controller.view.modals[name].visible:
            render(controller)


def finish_animations(controller: InventoryController):
    """Let a closing modal fade, then rerun so it disappears."""
    now = controller.clock()
    pending = [m.remaining(now) for m in controller.view.modals.values() if m.closing]
    if not pending:
        return
    time.sleep(max(pending))
    controller.tick()
    st.rerun()


def render_footer():
    st.divider()
    st.caption(f"© {date.today().year} Inventory Management")
