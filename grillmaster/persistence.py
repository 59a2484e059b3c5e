"""Bridge between the store and key/value storage: save, load, reset and autosave."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable
from typing import Any, Protocol

from grillmaster.config import AUTOSAVE_DELAY_SECONDS, PERSIST_CART
from grillmaster.constant import ORDER_TYPE_DINE_IN, ORDER_TYPES, STORAGE_KEYS
from grillmaster.data import demo_customers, demo_orders, demo_products
from grillmaster.models import AppState, CartItem, Customer, Order, Product
from grillmaster.storage import KeyValueStorage
from grillmaster.store import Store

logger = logging.getLogger(__name__)

_SHAPE_ERRORS = (TypeError, KeyError, ValueError, AttributeError)


def _record_to_dict(record: Any) -> dict[str, Any]:
    return dataclasses.asdict(record)


def _fields_of(cls: type, raw: dict[str, Any]) -> dict[str, Any]:
    names = {f.name for f in dataclasses.fields(cls)}
    return {key: value for key, value in raw.items() if key in names}


def product_from_dict(raw: dict[str, Any]) -> Product:
    values = _fields_of(Product, raw)
    values["price"] = float(values["price"])
    return Product(**values)


def customer_from_dict(raw: dict[str, Any]) -> Customer:
    return Customer(**_fields_of(Customer, raw))


def cart_item_from_dict(raw: dict[str, Any]) -> CartItem:
    values = _fields_of(CartItem, raw)
    values["price"] = float(values["price"])
    values["quantity"] = int(values.get("quantity", 1))
    return CartItem(**values)


def order_from_dict(raw: dict[str, Any]) -> Order:
    values = _fields_of(Order, raw)
    values["items"] = tuple(cart_item_from_dict(item) for item in values["items"])
    customer = values.get("customer")
    values["customer"] = customer_from_dict(customer) if customer else None
    return Order(**values)


def _load_records(storage: KeyValueStorage, key: str, parse: Callable[[dict[str, Any]], Any]) -> list[Any]:
    raw = storage.load(STORAGE_KEYS[key], [])
    if not isinstance(raw, list):
        logger.error("Ignoring persisted %s: expected a list, got %s", key, type(raw).__name__)
        return []
    try:
        return [parse(item) for item in raw]
    except _SHAPE_ERRORS as exc:
        logger.error("Ignoring persisted %s: %s", key, exc)
        return []


def save_state(storage: KeyValueStorage, state: AppState) -> bool:
    """
    Write each persisted collection under its own key.

    Undo history and the last-action label are session-only and never written.
    The cart is written only when ``PERSIST_CART`` is on.
    """
    results = [
        storage.save(STORAGE_KEYS["products"], [_record_to_dict(p) for p in state.products]),
        storage.save(STORAGE_KEYS["orders"], [_record_to_dict(o) for o in state.orders]),
        storage.save(STORAGE_KEYS["customers"], [_record_to_dict(c) for c in state.customers]),
        storage.save(
            STORAGE_KEYS["current_customer"],
            _record_to_dict(state.current_customer) if state.current_customer is not None else None,
        ),
        storage.save(STORAGE_KEYS["current_order_type"], state.current_order_type),
    ]
    if PERSIST_CART:
        results.append(storage.save(STORAGE_KEYS["cart"], [_record_to_dict(item) for item in state.cart]))
    return all(results)


def load_state(storage: KeyValueStorage) -> AppState:
    """Read persisted state, falling back to demo data for empty collections."""
    products = _load_records(storage, "products", product_from_dict)
    orders = _load_records(storage, "orders", order_from_dict)
    customers = _load_records(storage, "customers", customer_from_dict)
    cart = _load_records(storage, "cart", cart_item_from_dict) if PERSIST_CART else []

    current_customer = None
    raw_customer = storage.load(STORAGE_KEYS["current_customer"], None)
    if isinstance(raw_customer, dict):
        try:
            current_customer = customer_from_dict(raw_customer)
        except _SHAPE_ERRORS as exc:
            logger.error("Ignoring persisted current customer: %s", exc)

    order_type = storage.load(STORAGE_KEYS["current_order_type"], ORDER_TYPE_DINE_IN)
    if order_type not in ORDER_TYPES:
        order_type = ORDER_TYPE_DINE_IN

    return AppState(
        products=products or demo_products(),
        orders=orders or demo_orders(),
        customers=customers or demo_customers(),
        cart=cart,
        current_customer=current_customer,
        current_order_type=order_type,
    )


def reset_to_demo() -> AppState:
    return AppState(
        products=demo_products(),
        orders=demo_orders(),
        customers=demo_customers(),
    )


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


Scheduler = Callable[[float, Callable[[], None]], TimerHandle]


class DebouncedSaver:
    """
    Store subscriber that writes state out after a quiet period.

    Every notification cancels the pending write and schedules a new one, so a
    burst of changes produces one save. Without a scheduler every notification
    saves immediately.
    """

    def __init__(
        self,
        store: Store,
        storage: KeyValueStorage,
        schedule: Scheduler | None = None,
        delay: float = AUTOSAVE_DELAY_SECONDS,
    ) -> None:
        self.store = store
        self.storage = storage
        self.delay = delay
        self._schedule = schedule
        self._pending: TimerHandle | None = None
        self._unsubscribe = store.subscribe(self._on_change)

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def _on_change(self, state: AppState) -> None:
        if self._schedule is None:
            save_state(self.storage, state)
            return
        if self._pending is not None:
            self._pending.cancel()
        self._pending = self._schedule(self.delay, self.flush)

    def flush(self) -> bool:
        """Save now and drop any pending write."""
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        logger.debug("autosave flush")
        return save_state(self.storage, self.store.get_state())

    def close(self) -> None:
        if self._pending is not None:
            self.flush()
        self._unsubscribe()


def reset_data(store: Store, storage: KeyValueStorage) -> bool:
    """Replace everything with fresh demo data and save it straight away."""
    store.replace_state(state_patch(reset_to_demo()))
    return save_state(storage, store.get_state())


def state_patch(state: AppState) -> dict[str, Any]:
    """Every field of ``state`` as a patch, for wholesale replacement."""
    return {f.name: getattr(state, f.name) for f in dataclasses.fields(state)}
