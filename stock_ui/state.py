from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from stock_ui.models import Product, ProductCreate, ProductUpdate, parse_price, parse_quantity

UPDATE_FIELDS = ("name", "price", "quantity")
MODALS = ("add", "delete", "update")


# -------------------------------
# Modal animation
# -------------------------------
class ModalPhase(str, Enum):
    HIDDEN = "hidden"
    OPENING = "opening"
    OPEN = "open"
    CLOSING = "closing"


@dataclass
class Modal:
    """
    hidden -> opening -> open -> closing -> hidden

    Transitions out of OPENING and CLOSING are timed. The timer is a deadline
    checked by tick(), so opening a modal simply overwrites a pending close.
    """

    close_delay: float = 0.4
    open_delay: float = 0.0
    phase: ModalPhase = ModalPhase.HIDDEN
    deadline: Optional[float] = None

    @property
    def visible(self) -> bool:
        return self.phase != ModalPhase.HIDDEN

    @property
    def closing(self) -> bool:
        return self.phase == ModalPhase.CLOSING

    def open(self, now: float) -> None:
        if self.phase in (ModalPhase.OPENING, ModalPhase.OPEN):
            return
        self.phase = ModalPhase.OPENING
        self.deadline = now + self.open_delay

    def close(self, now: float) -> None:
        if self.phase in (ModalPhase.HIDDEN, ModalPhase.CLOSING):
            return
        self.phase = ModalPhase.CLOSING
        self.deadline = now + self.close_delay

    def tick(self, now: float) -> None:
        if self.deadline is None or now < self.deadline:
            return
        if self.phase == ModalPhase.OPENING:
            self.phase = ModalPhase.OPEN
        elif self.phase == ModalPhase.CLOSING:
            self.phase = ModalPhase.HIDDEN
        self.deadline = None

    def remaining(self, now: float) -> float:
        if self.deadline is None:
            return 0.0
        return max(0.0, self.deadline - now)


# -------------------------------
# Draft buffers
# -------------------------------
@dataclass
class AddDraft:
    name: str = ""
    price: str = ""
    quantity: str = ""

    def to_create(self) -> ProductCreate:
        return ProductCreate(
            name=self.name,
            price=parse_price(self.price),
            quantity=parse_quantity(self.quantity),
        )


@dataclass
class DeleteDraft:
    product_id: str = ""


@dataclass
class UpdateDraft:
    product_id: str = ""
    checked: Dict[str, bool] = field(default_factory=lambda: {f: False for f in UPDATE_FIELDS})
    values: Dict[str, str] = field(default_factory=lambda: {f: "" for f in UPDATE_FIELDS})
    # product instance the values were last loaded from
    loaded_from: Optional[Product] = None

    def load(self, product: Product) -> None:
        for name in UPDATE_FIELDS:
            self.values[name] = self.load_value(product, name)
        self.loaded_from = product

    @staticmethod
    def load_value(product: Product, name: str) -> str:
        return draft_text(getattr(product, name))

    def to_update(self) -> ProductUpdate:
        parsers = {"name": str, "price": parse_price, "quantity": parse_quantity}
        fields = {
            name: parsers[name](self.values[name])
            for name in UPDATE_FIELDS
            if self.checked[name]
        }
        return ProductUpdate(**fields)


def draft_text(value) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def find_product(products: List[Product], id_text: str) -> Optional[Product]:
    """Match on the id's string form, exactly as typed."""
    return next((p for p in products if str(p.id) == id_text), None)


# -------------------------------
# Stores
# -------------------------------
@dataclass
class ProductStore:
    """Domain data: the last fetched snapshot and the outcome of fetching it."""

    products: List[Product] = field(default_factory=list)
    error: Optional[str] = None
    loading: bool = False


@dataclass
class ViewState:
    close_delay: float = 0.4
    search_term: str = ""
    ordered: bool = False
    alert: Optional[str] = None
    alert_modal: Optional[str] = None
    modals: Dict[str, Modal] = field(default_factory=dict)
    add_draft: AddDraft = field(default_factory=AddDraft)
    delete_draft: DeleteDraft = field(default_factory=DeleteDraft)
    update_draft: UpdateDraft = field(default_factory=UpdateDraft)

    def __post_init__(self):
        for name in MODALS:
            self.modals.setdefault(name, Modal(close_delay=self.close_delay))

    def raise_alert(self, modal: str, message: str) -> None:
        self.alert = message
        self.alert_modal = modal

    def clear_alert(self, modal: Optional[str] = None) -> None:
        """Clear the alert, or only the one raised by `modal` when given."""
        if modal is not None and modal != self.alert_modal:
            return
        self.alert = None
        self.alert_modal = None

    def alert_in(self, modal: str) -> Optional[str]:
        return self.alert if self.alert_modal == modal else None

    @property
    def any_modal_visible(self) -> bool:
        return any(m.visible for m in self.modals.values())

    def reset_draft(self, name: str) -> None:
        if name == "add":
            self.add_draft = AddDraft()
        elif name == "delete":
            self.delete_draft = DeleteDraft()
        elif name == "update":
            self.update_draft = UpdateDraft()
        else:
            raise KeyError(name)
