"""Editable business constants: order flow values, presets and validation rules."""

from __future__ import annotations

ORDER_TYPE_DINE_IN = "dine-in"
ORDER_TYPE_TAKEAWAY = "takeaway"
ORDER_TYPE_DELIVERY = "delivery"
ORDER_TYPES: tuple[str, ...] = (ORDER_TYPE_DINE_IN, ORDER_TYPE_TAKEAWAY, ORDER_TYPE_DELIVERY)

PAYMENT_CASH = "cash"
PAYMENT_CARD = "card"
PAYMENT_DIGITAL = "digital"
PAYMENT_UNPAID = "unpaid"
PAYMENT_METHODS: tuple[str, ...] = (PAYMENT_CASH, PAYMENT_CARD, PAYMENT_DIGITAL, PAYMENT_UNPAID)

DISCOUNT_NONE = "none"
DISCOUNT_PERCENT = "percent"
DISCOUNT_FLAT = "flat"
DISCOUNT_TYPES: tuple[str, ...] = (DISCOUNT_NONE, DISCOUNT_PERCENT, DISCOUNT_FLAT)

STATUS_PREPARING = "preparing"
STATUS_COMPLETED = "completed"
STATUS_CANCELLED = "cancelled"
ORDER_STATUSES: tuple[str, ...] = (STATUS_PREPARING, STATUS_COMPLETED, STATUS_CANCELLED)

PAYMENT_STATUS_PAID = "paid"
PAYMENT_STATUS_UNPAID = "unpaid"
PAYMENT_STATUSES: tuple[str, ...] = (PAYMENT_STATUS_PAID, PAYMENT_STATUS_UNPAID)

QUICK_CASH_VALUES: tuple[int, ...] = (1000, 2000, 5000, 10000)
QUICK_PERCENT_VALUES: tuple[int, ...] = (5, 10, 15, 20)
QUICK_FLAT_VALUES: tuple[int, ...] = (100, 200, 500, 1000)

# 0 is the Guest record; 1 is the id older data sets used for it.
GUEST_CUSTOMER_IDS: tuple[int, ...] = (0, 1)
GUEST_NAME = "Guest"

DEFAULT_PRODUCT_IMAGE = "🍽️"

STORAGE_KEYS: dict[str, str] = {
    "products": "grillmaster_products",
    "orders": "grillmaster_orders",
    "customers": "grillmaster_customers",
    "cart": "grillmaster_cart",
    "current_customer": "grillmaster_current_customer",
    "current_order_type": "grillmaster_order_type",
}

VALIDATION_RULES: dict[str, dict[str, object]] = {
    "customer": {
        "name_min_length": 2,
        "name_max_length": 100,
        "phone_pattern": r"^0[0-9]{9}$",
        "email_pattern": r"^[^\s@]+@[^\s@]+\.[^\s@]+$",
    },
    "product": {
        "name_min_length": 3,
        "name_max_length": 100,
        "price_min": 0.0,
        "price_max": 1_000_000.0,
    },
    "order": {
        "max_items": 50,
        "min_total": 0.0,
    },
}
