"""Catalog operations."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from grillmaster.constant import DEFAULT_PRODUCT_IMAGE
from grillmaster.helpers import clean_text, generate_id, parse_number
from grillmaster.models import ActionResult, EntityId, Product, ProductUpdate
from grillmaster.store import Store
from grillmaster.validators import first_error, validate_product

logger = logging.getLogger(__name__)


def _valid_price(value: object) -> float | None:
    price = parse_number(value)
    if price is None or price < 0:
        return None
    return price


def add_product(
    store: Store, name: str, price: float | str, category: str, image: str = DEFAULT_PRODUCT_IMAGE
) -> ActionResult:
    """Create a product; ``price`` may arrive as form text."""
    trimmed_name = clean_text(name)
    trimmed_category = clean_text(category)
    parsed_price = _valid_price(price)
    if not trimmed_name or not trimmed_category or parsed_price is None:
        logger.warning("Invalid product data: name=%r price=%r category=%r", name, price, category)
        return ActionResult.fail("Invalid product data")

    product = Product(
        id=generate_id(),
        name=trimmed_name,
        price=parsed_price,
        category=trimmed_category,
        image=clean_text(image) or DEFAULT_PRODUCT_IMAGE,
    )
    errors = validate_product(product)
    if errors:
        return ActionResult.fail(first_error(errors, "Invalid product data"))

    state = store.get_state()
    store.replace_state({"products": [*state.products, product]})
    return ActionResult.ok(product)


def update_product(
    store: Store, product_id: EntityId, updates: ProductUpdate | Mapping[str, Any]
) -> ActionResult:
    """Merge the valid parts of ``updates``; invalid fields are left as they were."""
    if not isinstance(updates, ProductUpdate):
        updates = ProductUpdate.from_mapping(updates)

    state = store.get_state()
    index = next((i for i, product in enumerate(state.products) if product.id == product_id), None)
    if index is None:
        return ActionResult.fail("Product not found")

    changes: dict[str, Any] = {}
    if clean_text(updates.name):
        changes["name"] = clean_text(updates.name)
    price = _valid_price(updates.price)
    if price is not None:
        changes["price"] = price
    if clean_text(updates.category):
        changes["category"] = clean_text(updates.category)
    if clean_text(updates.image):
        changes["image"] = clean_text(updates.image)

    product = replace(state.products[index], **changes)
    products = list(state.products)
    products[index] = product
    store.replace_state({"products": products})
    return ActionResult.ok(product)


def delete_product(store: Store, product_id: EntityId) -> ActionResult:
    """Remove a product. Past orders keep their own copies, so nothing blocks this."""
    state = store.get_state()
    products = [product for product in state.products if product.id != product_id]
    if len(products) == len(state.products):
        return ActionResult.fail("Product not found")
    store.replace_state({"products": products})
    return ActionResult.ok()
