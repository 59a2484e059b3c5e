"""Order placement and order history updates."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from grillmaster.constant import (
    DISCOUNT_NONE,
    ORDER_STATUSES,
    ORDER_TYPES,
    PAYMENT_CASH,
    PAYMENT_METHODS,
    PAYMENT_STATUS_PAID,
    PAYMENT_STATUS_UNPAID,
    PAYMENT_STATUSES,
    STATUS_PREPARING,
)
from grillmaster.helpers import generate_id, utc_now_iso
from grillmaster.models import ActionResult, EntityId, Order
from grillmaster.store import Store
from grillmaster.validators import first_error, validate_order

logger = logging.getLogger(__name__)

# Fields an existing order may still change after checkout. Cash amounts are
# derived by mark_order_paid only.
UPDATABLE_ORDER_FIELDS = frozenset({"status", "payment_status", "payment_method"})


def set_order_type(store: Store, order_type: str) -> ActionResult:
    if order_type not in ORDER_TYPES:
        return ActionResult.fail(f"Unknown order type: {order_type}")
    store.replace_state({"current_order_type": order_type})
    return ActionResult.ok(order_type)


def place_order(
    store: Store,
    payment_method: str = PAYMENT_CASH,
    *,
    subtotal: float = 0.0,
    discount_type: str = DISCOUNT_NONE,
    discount_value: float = 0.0,
    tax_rate: float = 0.0,
    tax_amount: float = 0.0,
    total: float | None = None,
    amount_received: float = 0.0,
    change_due: float = 0.0,
    payment_status: str = PAYMENT_STATUS_UNPAID,
    status: str = STATUS_PREPARING,
) -> ActionResult:
    """
    Snapshot the cart, active customer and order type into a new order.

    Amounts come from the caller, normally the checkout engine. When ``total``
    is not given it is derived as ``subtotal - discount_value + tax_amount``,
    floored at zero. The new order is appended and the cart emptied in a single
    state write.
    """
    state = store.get_state()
    if not state.cart:
        logger.warning("Cannot place order: cart is empty")
        return ActionResult.fail("Cart is empty")

    if total is None:
        total = max(0.0, subtotal - discount_value + tax_amount)

    order = Order(
        id=generate_id(),
        items=tuple(state.cart),
        customer=state.current_customer,
        order_type=state.current_order_type,
        subtotal=subtotal,
        discount_value=discount_value,
        discount_type=discount_type,
        tax_rate=tax_rate,
        tax_amount=tax_amount,
        total=total,
        amount_received=amount_received,
        change_due=change_due,
        payment_method=str(payment_method),
        payment_status=payment_status,
        status=status,
        timestamp=utc_now_iso(),
    )
    errors = validate_order(order)
    if errors:
        message = first_error(errors, "Invalid order data")
        logger.warning("Order rejected: %s", message)
        return ActionResult.fail(message)

    store.replace_state({"orders": [*state.orders, order], "cart": []})
    logger.info("Order %s placed: %d line(s), total %.2f", order.id, len(order.items), order.total)
    return ActionResult.ok(order)


def update_order(store: Store, order_id: EntityId, updates: Mapping[str, Any]) -> ActionResult:
    """Shallow-merge status/payment ``updates`` into an existing order."""
    unknown = set(updates) - UPDATABLE_ORDER_FIELDS
    if unknown:
        return ActionResult.fail(f"Cannot update order field(s): {', '.join(sorted(unknown))}")
    if "status" in updates and updates["status"] not in ORDER_STATUSES:
        return ActionResult.fail(f"Unknown order status: {updates['status']}")
    if "payment_status" in updates and updates["payment_status"] not in PAYMENT_STATUSES:
        return ActionResult.fail(f"Unknown payment status: {updates['payment_status']}")
    if "payment_method" in updates and updates["payment_method"] not in PAYMENT_METHODS:
        return ActionResult.fail(f"Unknown payment method: {updates['payment_method']}")

    return _merge_order(store, order_id, updates)


def _merge_order(store: Store, order_id: EntityId, changes: Mapping[str, Any]) -> ActionResult:
    state = store.get_state()
    index = next((i for i, order in enumerate(state.orders) if order.id == order_id), None)
    if index is None:
        return ActionResult.fail("Order not found")

    orders = list(state.orders)
    orders[index] = replace(orders[index], **changes)
    store.replace_state({"orders": orders})
    return ActionResult.ok(orders[index])


def delete_order(store: Store, order_id: EntityId) -> ActionResult:
    state = store.get_state()
    orders = [order for order in state.orders if order.id != order_id]
    if len(orders) == len(state.orders):
        return ActionResult.fail("Order not found")
    store.replace_state({"orders": orders})
    return ActionResult.ok()


def mark_order_paid(store: Store, order_id: EntityId, amount: float | None = None) -> ActionResult:
    """
    Record a payment; a missing or non-finite ``amount`` means the exact total.

    ``change_due`` and ``payment_status`` are derived from the amount, never
    taken from the caller. Negative amounts are rejected.
    """
    order = next((o for o in store.get_state().orders if o.id == order_id), None)
    if order is None:
        return ActionResult.fail("Order not found")

    if isinstance(amount, (int, float)) and not isinstance(amount, bool) and math.isfinite(amount):
        received = float(amount)
    else:
        received = order.total
    if received < 0:
        return ActionResult.fail("Invalid payment amount")

    return _merge_order(
        store,
        order_id,
        {
            "amount_received": received,
            "change_due": max(0.0, received - order.total),
            "payment_status": PAYMENT_STATUS_PAID if received >= order.total else PAYMENT_STATUS_UNPAID,
        },
    )
