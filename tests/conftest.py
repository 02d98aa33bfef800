import pytest
import requests

from stock_ui.config import get_settings
from stock_ui.controller import InventoryController


class FakeClock:
    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeApi:
    """In-memory stand-in for stock_ui.api.products."""

    def __init__(self, products=()):
        self.products = {p["id"]: dict(p) for p in products}
        self.next_id = max(self.products, default=0) + 1
        self.failing = set()
        self.calls = []

    def _call(self, name, *args):
        self.calls.append((name,) + args)
        if name in self.failing:
            raise requests.ConnectionError(f"{name} unavailable")

    def _sorted(self, key):
        return [dict(p) for p in sorted(self.products.values(), key=key)]

    def list_products(self):
        self._call("list_products")
        return self._sorted(lambda p: p["id"])

    def list_products_ordered_by_quantity(self):
        self._call("list_products_ordered_by_quantity")
        return self._sorted(lambda p: p["quantity"])

    def get_product(self, product_id):
        self._call("get_product", product_id)
        product = self.products.get(int(product_id))
        return dict(product) if product else None

    def search_products(self, name):
        self._call("search_products", name)
        return [dict(p) for p in self.products.values() if name.lower() in p["name"].lower()]

    def create_product(self, payload):
        self._call("create_product", payload)
        product = dict(payload, id=self.next_id)
        self.products[product["id"]] = product
        self.next_id += 1
        return dict(product)

    def update_product(self, product_id, payload):
        self._call("update_product", product_id, payload)
        product = self.products.get(int(product_id))
        if product is None:
            raise requests.HTTPError("404 Client Error: Not Found")
        product.update(payload)
        return dict(product)

    def delete_product(self, product_id):
        self._call("delete_product", product_id)
        if not product_id.isdigit() or int(product_id) not in self.products:
            raise requests.HTTPError("404 Client Error: Not Found")
        del self.products[int(product_id)]
        return "Product deleted"


WIDGET = {"id": 1, "name": "Widget", "price": 9.99, "quantity": 5}
GADGET = {"id": 2, "name": "Gadget", "price": 25.0, "quantity": 2}
SPROCKET = {"id": 3, "name": "Sprocket", "price": 0.5, "quantity": 40}


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def api():
    return FakeApi([WIDGET, GADGET, SPROCKET])


@pytest.fixture
def controller(api, clock):
    controller = InventoryController(api=api, clock=clock, close_delay=0.4)
    controller.fetch_all()
    return controller
