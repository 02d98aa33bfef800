import logging
import re
import time
from typing import Callable, List, Optional, Tuple

import requests

from stock_ui.api import products as products_api
from stock_ui.config import get_settings
from stock_ui.models import Product
from stock_ui.state import (
    UPDATE_FIELDS,
    ProductStore,
    ViewState,
    find_product,
)

logger = logging.getLogger(__name__)

_PRODUCT_ID = re.compile(r"[0-9]+")

# Failures the controller turns into user-facing messages. JSON decoding and
# pydantic validation errors are both ValueError subclasses.
FAILURES = (requests.RequestException, ValueError)

NOT_FOUND = "Product not found"


class InventoryController:
    """
    Owns the product store and the view state and is the only code that
    writes to either. Widgets read state and call back into these methods.

    `api` is anything exposing the functions of stock_ui.api.products.
    """

    def __init__(self, api=products_api, clock: Callable[[], float] = time.monotonic, close_delay=None):
        self.api = api
        self.clock = clock
        if close_delay is None:
            close_delay = get_settings().close_delay
        self.store = ProductStore()
        self.view = ViewState(close_delay=close_delay)

    # ---------------- Queries ----------------

    def fetch_all(self) -> None:
        self._run_query(self.api.list_products, "Failed to fetch products")

    def search(self, term: Optional[str] = None) -> None:
        if term is not None:
            self.view.search_term = term
        term = (self.view.search_term or "").strip()

        if term == "":
            self.fetch_all()
            return

        if _PRODUCT_ID.fullmatch(term):
            self._run_query(lambda: self._by_id(term), "Failed to fetch product by ID")
            if not self.store.error and not self.store.products:
                self.store.error = NOT_FOUND
        else:
            self._run_query(
                lambda: self.api.search_products(term),
                "Failed to search products by name",
            )

    def toggle_order(self) -> None:
        self.view.ordered = not self.view.ordered
        if self.view.ordered:
            self._run_query(
                self.api.list_products_ordered_by_quantity,
                "Failed to fetch ordered products",
            )
        else:
            self.fetch_all()

    def _by_id(self, term: str) -> list:
        product = self.api.get_product(term)
        return [] if product is None else [product]

    def _run_query(self, fetch: Callable[[], list], failure: str) -> None:
        store = self.store
        store.loading = True
        store.error = None
        try:
            data = fetch()
            store.products = [Product.model_validate(item) for item in data]
        except FAILURES as e:
            logger.warning("%s: %s", failure, e)
            store.products = []
            store.error = failure
        finally:
            store.loading = False
        self._sync_update_draft()

    # ---------------- Mutations ----------------

    def add_product(self) -> bool:
        payload = self.view.add_draft.to_create().model_dump()
        logger.info("Adding product %s", payload)
        return self._run_mutation(
            "add", lambda: self.api.create_product(payload), "Failed to add product"
        )

    def delete_product(self) -> bool:
        product_id = self.view.delete_draft.product_id
        logger.info("Deleting product %s", product_id)
        return self._run_mutation(
            "delete", lambda: self.api.delete_product(product_id), "Failed to delete product"
        )

    def update_product(self) -> bool:
        draft = self.view.update_draft
        product_id = draft.product_id
        payload = draft.to_update().payload()
        logger.info("Updating product %s with %s", product_id, payload)
        return self._run_mutation(
            "update",
            lambda: self.api.update_product(product_id, payload),
            "Failed to update product",
        )

    def _run_mutation(self, modal: str, send: Callable[[], object], failure: str) -> bool:
        self.view.clear_alert()
        try:
            send()
        except FAILURES as e:
            logger.error("%s: %s", failure, e)
            self.view.raise_alert(modal, failure)
            return False
        self.fetch_all()
        self.close_modal(modal)
        return True

    # ---------------- Draft editing ----------------

    def set_add_value(self, field: str, value: str) -> None:
        setattr(self.view.add_draft, field, value)

    def set_delete_id(self, text: str) -> None:
        self.view.delete_draft.product_id = text.strip()

    def set_update_id(self, text: str) -> None:
        self.view.update_draft.product_id = text.strip()
        self._sync_update_draft()

    def set_update_value(self, field: str, value: str) -> None:
        self.view.update_draft.values[field] = value

    def toggle_update_field(self, field: str) -> None:
        if field not in UPDATE_FIELDS:
            raise KeyError(field)
        draft = self.view.update_draft
        draft.checked[field] = not draft.checked[field]
        product = self.product_to_update()
        if not draft.checked[field] and product is not None:
            draft.values[field] = draft.load_value(product, field)

    def _sync_update_draft(self) -> None:
        # reload draft values whenever the id starts pointing at a new snapshot
        draft = self.view.update_draft
        product = self.product_to_update()
        if product is None:
            draft.loaded_from = None
        elif product is not draft.loaded_from:
            draft.load(product)

    # ---------------- Previews ----------------

    def product_to_delete(self) -> Optional[Product]:
        return find_product(self.store.products, self.view.delete_draft.product_id)

    def product_to_update(self) -> Optional[Product]:
        return find_product(self.store.products, self.view.update_draft.product_id)

    def delete_preview(self) -> Tuple[Optional[Product], Optional[str]]:
        """The matching product, or a not-found message once an id is typed."""
        product = self.product_to_delete()
        if product is None and self.view.delete_draft.product_id != "":
            return None, NOT_FOUND
        return product, None

    def update_preview(self) -> Optional[List[Tuple[str, object, object]]]:
        """Rows of (field, current, pending), or None when no product matches."""
        product = self.product_to_update()
        if product is None:
            return None
        draft = self.view.update_draft
        rows = [("id", product.id, product.id)]
        for name in UPDATE_FIELDS:
            current = getattr(product, name)
            pending = draft.values[name] if draft.checked[name] else current
            rows.append((name, current, pending))
        return rows

    # ---------------- Modals ----------------

    def open_modal(self, name: str) -> None:
        self.view.reset_draft(name)
        self.view.clear_alert(name)
        self.view.modals[name].open(self.clock())

    def close_modal(self, name: str) -> None:
        self.view.clear_alert(name)
        self.view.modals[name].close(self.clock())

    def tick(self) -> None:
        now = self.clock()
        for modal in self.view.modals.values():
            modal.tick(now)
