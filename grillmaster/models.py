"""Domain models for grillmaster-pos."""

from __future__ import annotations

import time
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar

from grillmaster.constant import DEFAULT_PRODUCT_IMAGE, ORDER_TYPE_DINE_IN

EntityId = int | str


@dataclass(frozen=True)
class Product:
    """A sellable catalog item."""

    id: EntityId
    name: str
    price: float
    category: str
    image: str = DEFAULT_PRODUCT_IMAGE


@dataclass(frozen=True)
class Customer:
    """A customer record; id 0 is the permanent Guest."""

    id: EntityId
    name: str
    phone: str = ""
    email: str = ""


@dataclass(frozen=True)
class CartItem:
    """A product snapshot with the quantity being bought."""

    id: EntityId
    name: str
    price: float
    category: str
    image: str = DEFAULT_PRODUCT_IMAGE
    quantity: int = 1

    @classmethod
    def from_product(cls, product: Product, quantity: int = 1) -> CartItem:
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            category=product.category,
            image=product.image,
            quantity=quantity,
        )

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


@dataclass(frozen=True)
class Order:
    """Immutable snapshot of a checked-out cart."""

    id: EntityId
    items: tuple[CartItem, ...]
    customer: Customer | None
    order_type: str
    subtotal: float
    discount_value: float
    discount_type: str
    tax_rate: float
    tax_amount: float
    total: float
    amount_received: float
    change_due: float
    payment_method: str
    payment_status: str
    status: str
    timestamp: str


@dataclass(frozen=True, kw_only=True)
class HistoryEntry:
    """Base undo record; every variant carries the cart as it was before the change."""

    kind: ClassVar[str] = ""

    previous_cart: tuple[CartItem, ...]
    timestamp: float = field(default_factory=time.time)

    def restore(self) -> dict[str, Any]:
        """Return the state patch that reverses this entry."""
        return {"cart": list(self.previous_cart)}

    @property
    def label(self) -> str:
        return self.kind.replace("_", " ").title()


@dataclass(frozen=True, kw_only=True)
class AddedToCart(HistoryEntry):
    kind: ClassVar[str] = "ADD_TO_CART"

    product_id: EntityId
    product_name: str

    @property
    def label(self) -> str:
        return f"Add {self.product_name}"


@dataclass(frozen=True, kw_only=True)
class RemovedFromCart(HistoryEntry):
    kind: ClassVar[str] = "REMOVE_FROM_CART"

    product_id: EntityId
    product_name: str

    @property
    def label(self) -> str:
        return f"Remove {self.product_name}"


@dataclass(frozen=True, kw_only=True)
class QuantityChanged(HistoryEntry):
    kind: ClassVar[str] = "UPDATE_QUANTITY"

    product_id: EntityId
    product_name: str
    from_quantity: int
    to_quantity: int

    @property
    def label(self) -> str:
        return f"{self.product_name} x{self.from_quantity} -> x{self.to_quantity}"


@dataclass(frozen=True, kw_only=True)
class CartCleared(HistoryEntry):
    kind: ClassVar[str] = "CLEAR_CART"

    item_count: int

    @property
    def label(self) -> str:
        return f"Clear {self.item_count} item(s)"


@dataclass
class AppState:
    """Root aggregate held by the store."""

    products: list[Product] = field(default_factory=list)
    orders: list[Order] = field(default_factory=list)
    customers: list[Customer] = field(default_factory=list)
    cart: list[CartItem] = field(default_factory=list)
    current_customer: Customer | None = None
    current_order_type: str = ORDER_TYPE_DINE_IN
    action_history: list[HistoryEntry] = field(default_factory=list)
    last_action: str | None = None


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a domain action. Truthy when the action succeeded."""

    success: bool
    value: Any = None
    error: str | None = None

    @classmethod
    def ok(cls, value: Any = None) -> ActionResult:
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: str) -> ActionResult:
        return cls(success=False, error=error)

    def __bool__(self) -> bool:
        return self.success


def _pick(cls: type, updates: Mapping[str, Any]) -> dict[str, Any]:
    names = {f.name for f in fields(cls)}
    return {key: value for key, value in updates.items() if key in names}


@dataclass(frozen=True)
class CustomerUpdate:
    """
    Partial customer edit.

    ``name`` only applies when it is non-blank after trimming. ``phone`` and
    ``email`` apply whenever they are given, so passing "" clears them.
    ``None`` means "not given" for every field.
    """

    name: str | None = None
    phone: str | None = None
    email: str | None = None

    @classmethod
    def from_mapping(cls, updates: Mapping[str, Any]) -> CustomerUpdate:
        return cls(**_pick(cls, updates))


@dataclass(frozen=True)
class ProductUpdate:
    """
    Partial product edit.

    Text fields apply only when non-blank after trimming; ``price`` applies only
    when it parses to a finite, non-negative number.
    """

    name: str | None = None
    price: float | str | None = None
    category: str | None = None
    image: str | None = None

    @classmethod
    def from_mapping(cls, updates: Mapping[str, Any]) -> ProductUpdate:
        return cls(**_pick(cls, updates))
