import re
from typing import Optional

from pydantic import BaseModel

_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")


class Product(BaseModel):
    id: int
    name: str
    price: float
    quantity: int


class ProductCreate(BaseModel):
    name: str = ""
    price: Optional[float] = None
    quantity: Optional[int] = None


class ProductUpdate(BaseModel):
    name: Optional[str] = None
    price: Optional[float] = None
    quantity: Optional[int] = None

    def payload(self) -> dict:
        # only the fields the user ticked were ever set
        return self.model_dump(exclude_unset=True)


def parse_price(text) -> Optional[float]:
    """
    Lenient float coercion for form input.

    Reads the longest numeric prefix ("12.5kg" -> 12.5) and returns None when
    there is none. No range checks: negative prices go to the backend as-is.
    """
    if isinstance(text, (int, float)):
        return float(text)
    match = _FLOAT_PREFIX.match(text or "")
    if not match:
        return None
    return float(match.group(1))


def parse_quantity(text) -> Optional[int]:
    """Integer counterpart of parse_price; "3.7" becomes 3."""
    if isinstance(text, int):
        return text
    if isinstance(text, float):
        return int(text)
    match = _INT_PREFIX.match(text or "")
    if not match:
        return None
    return int(match.group(1))
