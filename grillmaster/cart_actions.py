"""Cart operations with a bounded undo history."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from grillmaster.config import MAX_HISTORY
from grillmaster.models import (
    ActionResult,
    AddedToCart,
    AppState,
    CartCleared,
    CartItem,
    EntityId,
    HistoryEntry,
    Product,
    QuantityChanged,
    RemovedFromCart,
)
from grillmaster.store import Store

logger = logging.getLogger(__name__)


def _with_history(state: AppState, entry: HistoryEntry) -> dict[str, Any]:
    # Newest first; anything past MAX_HISTORY falls off the end.
    history = [entry, *state.action_history][:MAX_HISTORY]
    return {"action_history": history, "last_action": entry.kind}


def _find(cart: list[CartItem], product_id: EntityId) -> CartItem | None:
    return next((item for item in cart if item.id == product_id), None)


def add_to_cart(store: Store, product: Product | CartItem | None) -> ActionResult:
    """Add one unit of ``product``; an existing line has its quantity bumped instead."""
    if product is None or product.id is None or product.id == "":
        return ActionResult.fail("Product has no id")

    state = store.get_state()
    previous_cart = tuple(state.cart)
    existing = _find(state.cart, product.id)

    if existing is not None:
        cart = [
            replace(item, quantity=item.quantity + 1) if item.id == product.id else item
            for item in state.cart
        ]
    elif isinstance(product, CartItem):
        cart = [*state.cart, replace(product, quantity=1)]
    else:
        cart = [*state.cart, CartItem.from_product(product)]

    entry = AddedToCart(previous_cart=previous_cart, product_id=product.id, product_name=product.name)
    store.replace_state({"cart": cart, **_with_history(state, entry)})
    return ActionResult.ok(_find(cart, product.id))


def remove_from_cart(store: Store, product_id: EntityId) -> ActionResult:
    """Drop every unit of ``product_id`` from the cart."""
    state = store.get_state()
    item = _find(state.cart, product_id)
    if item is None:
        return ActionResult.fail("Item not in cart")

    cart = [line for line in state.cart if line.id != product_id]
    entry = RemovedFromCart(previous_cart=tuple(state.cart), product_id=product_id, product_name=item.name)
    store.replace_state({"cart": cart, **_with_history(state, entry)})
    return ActionResult.ok(item)


def update_cart_quantity(store: Store, product_id: EntityId, quantity: int) -> ActionResult:
    """Set a line's quantity exactly; zero or less removes the line."""
    if quantity <= 0:
        return remove_from_cart(store, product_id)

    state = store.get_state()
    item = _find(state.cart, product_id)
    if item is None:
        return ActionResult.fail("Item not in cart")

    cart = [replace(line, quantity=quantity) if line.id == product_id else line for line in state.cart]
    entry = QuantityChanged(
        previous_cart=tuple(state.cart),
        product_id=product_id,
        product_name=item.name,
        from_quantity=item.quantity,
        to_quantity=quantity,
    )
    store.replace_state({"cart": cart, **_with_history(state, entry)})
    return ActionResult.ok(_find(cart, product_id))


def clear_cart(store: Store) -> ActionResult:
    state = store.get_state()
    entry = CartCleared(previous_cart=tuple(state.cart), item_count=len(state.cart))
    store.replace_state({"cart": [], **_with_history(state, entry)})
    return ActionResult.ok()


def undo_last_action(store: Store) -> ActionResult:
    """Reverse the newest history entry. Repeated calls walk further back."""
    state = store.get_state()
    if not state.action_history:
        return ActionResult.fail("Nothing to undo")

    entry, *remaining = state.action_history
    store.replace_state(
        {
            **entry.restore(),
            "action_history": remaining,
            "last_action": remaining[0].kind if remaining else None,
        }
    )
    logger.debug("undo %s", entry.kind)
    return ActionResult.ok(entry)
