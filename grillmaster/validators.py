"""Field validation for products, customers and orders."""

from __future__ import annotations

import re
from dataclasses import dataclass

from grillmaster.constant import PAYMENT_METHODS, VALIDATION_RULES
from grillmaster.models import Customer, Order, Product

_CUSTOMER_RULES = VALIDATION_RULES["customer"]
_PRODUCT_RULES = VALIDATION_RULES["product"]
_ORDER_RULES = VALIDATION_RULES["order"]

_PHONE_RE = re.compile(str(_CUSTOMER_RULES["phone_pattern"]))
_EMAIL_RE = re.compile(str(_CUSTOMER_RULES["email_pattern"]))


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


def first_error(errors: list[FieldError], fallback: str) -> str:
    return errors[0].message if errors else fallback


def validate_customer(customer: Customer) -> list[FieldError]:
    errors: list[FieldError] = []
    name = customer.name.strip()
    min_len = int(_CUSTOMER_RULES["name_min_length"])  # type: ignore[arg-type]
    max_len = int(_CUSTOMER_RULES["name_max_length"])  # type: ignore[arg-type]
    if not name:
        errors.append(FieldError("name", "Name is required"))
    elif len(name) < min_len:
        errors.append(FieldError("name", f"Name must be at least {min_len} characters"))
    elif len(name) > max_len:
        errors.append(FieldError("name", f"Name must be at most {max_len} characters"))

    if customer.phone and not _PHONE_RE.match(customer.phone):
        errors.append(FieldError("phone", "Invalid phone format (0XXXXXXXXX)"))

    if customer.email and not _EMAIL_RE.match(customer.email):
        errors.append(FieldError("email", "Invalid email format"))
    return errors


def validate_product(product: Product) -> list[FieldError]:
    errors: list[FieldError] = []
    name = product.name.strip()
    min_len = int(_PRODUCT_RULES["name_min_length"])  # type: ignore[arg-type]
    max_len = int(_PRODUCT_RULES["name_max_length"])  # type: ignore[arg-type]
    if not name:
        errors.append(FieldError("name", "Name is required"))
    elif len(name) < min_len:
        errors.append(FieldError("name", f"Name must be at least {min_len} characters"))
    elif len(name) > max_len:
        errors.append(FieldError("name", f"Name must be at most {max_len} characters"))

    price_min = float(_PRODUCT_RULES["price_min"])  # type: ignore[arg-type]
    price_max = float(_PRODUCT_RULES["price_max"])  # type: ignore[arg-type]
    if product.price < price_min:
        errors.append(FieldError("price", "Price cannot be negative"))
    elif product.price > price_max:
        errors.append(FieldError("price", f"Price cannot exceed {price_max:,.0f}"))

    if not product.category.strip():
        errors.append(FieldError("category", "Category is required"))
    return errors


def validate_order(order: Order) -> list[FieldError]:
    errors: list[FieldError] = []
    max_items = int(_ORDER_RULES["max_items"])  # type: ignore[arg-type]
    if not order.items:
        errors.append(FieldError("items", "Order must contain at least one item"))
    elif len(order.items) > max_items:
        errors.append(FieldError("items", f"Order cannot exceed {max_items} items"))

    if order.total < float(_ORDER_RULES["min_total"]):  # type: ignore[arg-type]
        errors.append(FieldError("total", "Invalid order total"))

    if order.payment_method not in PAYMENT_METHODS:
        errors.append(FieldError("payment_method", f"Unknown payment method: {order.payment_method}"))
    return errors
