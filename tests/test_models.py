import math

import pytest

from stock_ui.models import Product, ProductUpdate, parse_price, parse_quantity


@pytest.mark.parametrize("text, expected", [
    ("9.99", 9.99),
    ("  12", 12.0),
    ("1e2", 100.0),
    ("12.5kg", 12.5),
    (".5", 0.5),
    ("-3", -3.0),
    ("", None),
    ("abc", None),
])
def test_parse_price(text, expected):
    assert parse_price(text) == expected


@pytest.mark.parametrize("text, expected", [
    ("5", 5),
    ("3.7", 3),
    (" -2", -2),
    ("", None),
    ("x1", None),
])
def test_parse_quantity(text, expected):
    assert parse_quantity(text) == expected


def test_parse_accepts_numbers_already_typed():
    assert parse_price(3) == 3.0
    assert parse_quantity(4.9) == 4


def test_update_payload_skips_unset_fields():
    assert ProductUpdate(price=1.5).payload() == {"price": 1.5}
    assert ProductUpdate().payload() == {}


def test_update_payload_keeps_explicit_none():
    # an unparseable number the user ticked is still sent
    assert ProductUpdate(quantity=None).payload() == {"quantity": None}


def test_product_coerces_backend_numbers():
    product = Product.model_validate({"id": 1, "name": "Widget", "price": 10, "quantity": 5})
    assert isinstance(product.price, float)
    assert not math.isnan(product.price)


@pytest.mark.parametrize("missing", ["price", "quantity"])
def test_product_requires_every_field(missing):
    data = {"id": 1, "name": "Widget", "price": 9.99, "quantity": 5}
    del data[missing]
    with pytest.raises(ValueError):
        Product.model_validate(data)
