"""Read-only derivations over application state."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from grillmaster.constant import GUEST_CUSTOMER_IDS, GUEST_NAME, PAYMENT_STATUS_UNPAID, STATUS_PREPARING
from grillmaster.models import AppState, CartItem, Customer, EntityId, Order, Product

ALL_CATEGORIES = "All"


def cart_total(state: AppState) -> float:
    return sum(item.price * item.quantity for item in state.cart)


def cart_count(state: AppState) -> int:
    return sum(item.quantity for item in state.cart)


def cart_item(state: AppState, product_id: EntityId) -> CartItem | None:
    return next((item for item in state.cart if item.id == product_id), None)


def can_undo(state: AppState) -> bool:
    return bool(state.action_history)


def undo_label(state: AppState) -> str | None:
    if not state.action_history:
        return None
    return state.action_history[0].label


def _order_date(order: Order) -> date | None:
    try:
        stamp = datetime.fromisoformat(order.timestamp)
    except ValueError:
        return None
    if stamp.tzinfo is not None:
        stamp = stamp.astimezone()
    return stamp.date()


def order_stats(state: AppState, today: date | None = None) -> dict[str, float | int]:
    """Order count and revenue, overall and for ``today`` (local date)."""
    today = today or date.today()
    todays = [order for order in state.orders if _order_date(order) == today]
    return {
        "total": len(state.orders),
        "today": len(todays),
        "revenue": sum(order.total or 0 for order in state.orders),
        "today_revenue": sum(order.total or 0 for order in todays),
    }


def products_by_category(state: AppState, category: str | None = None) -> list[Product]:
    if not category or category == ALL_CATEGORIES:
        return list(state.products)
    return [product for product in state.products if product.category == category]


def categories(state: AppState) -> list[str]:
    return sorted({product.category for product in state.products if product.category})


@dataclass
class ProductSales:
    id: EntityId
    name: str
    image: str
    sales: int = 0
    revenue: float = 0.0


def top_products(state: AppState, limit: int = 5) -> list[ProductSales]:
    """Best sellers by units across all order snapshots, with their revenue."""
    sales: dict[EntityId, ProductSales] = {}
    for order in state.orders:
        for item in order.items:
            row = sales.setdefault(item.id, ProductSales(id=item.id, name=item.name, image=item.image))
            row.sales += item.quantity
            row.revenue += item.price * item.quantity
    return sorted(sales.values(), key=lambda row: row.sales, reverse=True)[:limit]


def product_by_id(state: AppState, product_id: EntityId) -> Product | None:
    return next((product for product in state.products if product.id == product_id), None)


def order_by_id(state: AppState, order_id: EntityId) -> Order | None:
    return next((order for order in state.orders if order.id == order_id), None)


def customer_by_id(state: AppState, customer_id: EntityId) -> Customer | None:
    return next((customer for customer in state.customers if customer.id == customer_id), None)


def guest_customer(state: AppState) -> Customer | None:
    for customer in state.customers:
        if not isinstance(customer.id, bool) and customer.id in GUEST_CUSTOMER_IDS:
            return customer
    return next((c for c in state.customers if c.name.lower() == GUEST_NAME.lower()), None)


def filter_orders(
    state: AppState, status: str = "all", query: str = "", today_only: bool = False, today: date | None = None
) -> list[Order]:
    """
    Orders for the history view, newest first.

    ``status`` matches either the kitchen status or the payment status.
    ``query`` matches the order id or the customer name, case-insensitively.
    """
    orders = list(state.orders)
    if today_only:
        today = today or date.today()
        orders = [order for order in orders if _order_date(order) == today]
    if status != "all":
        orders = [order for order in orders if status in (order.status, order.payment_status)]
    needle = query.strip().lower()
    if needle:
        orders = [
            order
            for order in orders
            if needle in str(order.id).lower() or needle in (order.customer.name if order.customer else "").lower()
        ]
    return sorted(orders, key=lambda order: order.timestamp, reverse=True)


def summarize_orders(orders: list[Order]) -> dict[str, float | int]:
    return {
        "total": len(orders),
        "revenue": sum(order.total or order.subtotal for order in orders),
        "preparing": sum(1 for order in orders if order.status == STATUS_PREPARING),
        "unpaid": sum(1 for order in orders if order.payment_status == PAYMENT_STATUS_UNPAID),
    }


def search_customers(state: AppState, query: str = "") -> list[Customer]:
    needle = query.strip().lower()
    if not needle:
        return list(state.customers)
    return [
        customer
        for customer in state.customers
        if needle in customer.name.lower() or needle in customer.phone or needle in customer.email.lower()
    ]


def customer_stats(state: AppState) -> dict[str, int]:
    with_orders = {
        order.customer.id
        for order in state.orders
        if order.customer is not None and order.customer.id not in GUEST_CUSTOMER_IDS
    }
    return {"total": len(state.customers), "with_orders": len(with_orders)}
