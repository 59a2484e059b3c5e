"""Customer directory operations and the active customer selection."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from grillmaster.constant import GUEST_CUSTOMER_IDS, GUEST_NAME
from grillmaster.helpers import clean_text, generate_id
from grillmaster.models import ActionResult, Customer, CustomerUpdate, EntityId
from grillmaster.store import Store
from grillmaster.validators import first_error, validate_customer

logger = logging.getLogger(__name__)


def is_guest_id(customer_id: EntityId) -> bool:
    return not isinstance(customer_id, bool) and customer_id in GUEST_CUSTOMER_IDS


def _find_guest(customers: list[Customer]) -> Customer | None:
    by_id = next((c for c in customers if is_guest_id(c.id)), None)
    return by_id or next((c for c in customers if c.name.lower() == GUEST_NAME.lower()), None)


def set_current_customer(store: Store, customer: Customer | None) -> ActionResult:
    """Select the customer for the next order; None means a walk-in guest."""
    store.replace_state({"current_customer": customer})
    return ActionResult.ok(customer)


def add_customer(store: Store, name: str, phone: str = "", email: str = "") -> ActionResult:
    trimmed_name = clean_text(name)
    trimmed_phone = clean_text(phone)
    if not trimmed_name:
        return ActionResult.fail("Name is required")

    state = store.get_state()
    if trimmed_phone and any(customer.phone == trimmed_phone for customer in state.customers):
        logger.warning("Duplicate customer phone %s", trimmed_phone)
        return ActionResult.fail("Phone number already exists")

    customer = Customer(id=generate_id(), name=trimmed_name, phone=trimmed_phone, email=clean_text(email))
    errors = validate_customer(customer)
    if errors:
        return ActionResult.fail(first_error(errors, "Invalid customer data"))

    store.replace_state({"customers": [*state.customers, customer]})
    return ActionResult.ok(customer)


def update_customer(
    store: Store, customer_id: EntityId, updates: CustomerUpdate | Mapping[str, Any]
) -> ActionResult:
    """Merge ``updates`` into a customer; see ``CustomerUpdate`` for which fields apply."""
    if not isinstance(updates, CustomerUpdate):
        updates = CustomerUpdate.from_mapping(updates)

    state = store.get_state()
    index = next((i for i, customer in enumerate(state.customers) if customer.id == customer_id), None)
    if index is None:
        return ActionResult.fail("Customer not found")

    changes: dict[str, str] = {}
    new_name = clean_text(updates.name)
    if new_name and is_guest_id(customer_id) and new_name != state.customers[index].name:
        return ActionResult.fail("Cannot rename Guest customer")
    if new_name:
        changes["name"] = new_name
    if updates.phone is not None:
        changes["phone"] = clean_text(updates.phone)
    if updates.email is not None:
        changes["email"] = clean_text(updates.email)

    customer = replace(state.customers[index], **changes)
    customers = list(state.customers)
    customers[index] = customer

    patch: dict[str, Any] = {"customers": customers}
    if state.current_customer is not None and state.current_customer.id == customer_id:
        patch["current_customer"] = customer
    store.replace_state(patch)
    return ActionResult.ok(customer)


def delete_customer(store: Store, customer_id: EntityId) -> ActionResult:
    """Remove a customer. The Guest record can never be removed."""
    if is_guest_id(customer_id):
        return ActionResult.fail("Cannot delete Guest customer")

    state = store.get_state()
    customers = [customer for customer in state.customers if customer.id != customer_id]
    if len(customers) == len(state.customers):
        return ActionResult.fail("Customer not found")

    patch: dict[str, Any] = {"customers": customers}
    if state.current_customer is not None and state.current_customer.id == customer_id:
        patch["current_customer"] = _find_guest(customers)
    store.replace_state(patch)
    return ActionResult.ok()
