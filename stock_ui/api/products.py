import logging

import requests

from stock_ui.config import get_settings

logger = logging.getLogger(__name__)


def _url(path: str) -> str:
    return f"{get_settings().api_base}/products{path}"


def _timeout():
    return get_settings().request_timeout


def list_products():
    logger.debug("GET /products")
    res = requests.get(_url(""), timeout=_timeout())
    res.raise_for_status()
    return res.json()


def list_products_ordered_by_quantity():
    logger.debug("GET /products/ordered-by-quantity")
    res = requests.get(_url("/ordered-by-quantity"), timeout=_timeout())
    res.raise_for_status()
    return res.json()


def get_product(product_id):
    """Return the product as a dict, or None when the backend answers 404."""
    logger.debug("GET /products/%s", product_id)
    res = requests.get(_url(f"/{product_id}"), timeout=_timeout())
    if res.status_code == 404:
        return None
    res.raise_for_status()
    return res.json()


def search_products(name: str):
    logger.debug("GET /products/search name=%r", name)
    res = requests.get(_url("/search"), params={"name": name}, timeout=_timeout())
    res.raise_for_status()
    return res.json()


def create_product(payload: dict):
    res = requests.post(_url(""), json=payload, timeout=_timeout())
    if not res.ok:
        logger.warning("POST /products failed: %s %s", res.status_code, res.text)
    res.raise_for_status()
    return res.json()


def update_product(product_id, payload: dict):
    res = requests.put(_url(f"/{product_id}"), json=payload, timeout=_timeout())
    if not res.ok:
        logger.warning("PUT /products/%s failed: %s %s", product_id, res.status_code, res.text)
    res.raise_for_status()
    return res.json()


def delete_product(product_id):
    res = requests.delete(_url(f"/{product_id}"), timeout=_timeout())
    if not res.ok:
        logger.warning("DELETE /products/%s failed: %s %s", product_id, res.status_code, res.text)
    res.raise_for_status()
    return res.text
