"""Demo catalog, customers and orders loaded on first run and on reset."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from grillmaster.constant import (
    DISCOUNT_FLAT,
    DISCOUNT_NONE,
    GUEST_NAME,
    ORDER_TYPE_DINE_IN,
    ORDER_TYPE_TAKEAWAY,
    PAYMENT_CARD,
    PAYMENT_CASH,
    PAYMENT_STATUS_PAID,
    STATUS_COMPLETED,
)
from grillmaster.models import CartItem, Customer, Order, Product

# (id, name, price, category, image)
_MENU_ROWS: list[tuple[int, str, float, str, str]] = [
    (1, "Beef Whopper", 2050.85, "Beef Burgers", "🍔"),
    (2, "Classic Beef", 1650.00, "Beef Burgers", "🍔"),
    (3, "Double Beef", 2450.00, "Beef Burgers", "🍔"),
    (4, "Bacon Beef", 2250.00, "Beef Burgers", "🥓"),
    (5, "Crispy Chicken", 1850.00, "Chicken Burgers", "🍗"),
    (6, "Spicy Chicken", 1950.00, "Chicken Burgers", "🌶️"),
    (7, "Grilled Chicken", 2050.00, "Chicken Burgers", "🍗"),
    (8, "Veggie Burger", 913.56, "Veggie Burger", "🥬"),
    (9, "Mushroom Burger", 1150.00, "Veggie Burger", "🍄"),
    (10, "Thick Cut Fries", 559.32, "Sides", "🍟"),
    (11, "Onion Rings", 450.00, "Sides", "🧅"),
    (12, "Cheese Fries", 650.00, "Sides", "🧀"),
    (13, "Coleslaw", 350.00, "Sides", "🥗"),
    (14, "Iced Coffee", 593.00, "Beverages", "☕"),
    (15, "Coca Cola", 250.00, "Beverages", "🥤"),
    (16, "Orange Juice", 350.00, "Beverages", "🍊"),
    (17, "Milkshake", 550.00, "Beverages", "🥛"),
    (18, "Chocolate Brownie", 450.00, "Desserts", "🍫"),
    (19, "Ice Cream Sundae", 550.00, "Desserts", "🍨"),
    (20, "Apple Pie", 400.00, "Desserts", "🥧"),
]

# (id, name, phone, email)
_CUSTOMER_ROWS: list[tuple[int, str, str, str]] = [
    (0, GUEST_NAME, "", ""),
    (2, "Alice Demo", "0711234567", "alice@test.com"),
    (3, "Bob Demo", "0729876543", "bob@test.com"),
    (4, "Charlie Demo", "0735556789", ""),
    (5, "Diana Demo", "0744441234", ""),
    (6, "Ethan Demo", "0753335678", ""),
    (7, "Fiona Demo", "0762224321", ""),
    (8, "George Demo", "0771118765", ""),
    (9, "Hannah Demo", "0780003456", ""),
    (10, "Ian Demo", "0799996543", ""),
    (11, "Jane Demo", "0701237890", ""),
]


def demo_products() -> list[Product]:
    return [Product(id=pid, name=name, price=price, category=category, image=image) for pid, name, price, category, image in _MENU_ROWS]


def demo_customers() -> list[Customer]:
    return [Customer(id=cid, name=name, phone=phone, email=email) for cid, name, phone, email in _CUSTOMER_ROWS]


def demo_orders(now: datetime | None = None) -> list[Order]:
    """Two completed orders placed shortly before ``now``."""
    now = now or datetime.now(timezone.utc)
    products = {product.id: product for product in demo_products()}
    customers = {customer.id: customer for customer in demo_customers()}

    first_items = (
        CartItem.from_product(products[1], quantity=2),
        CartItem.from_product(products[10]),
    )
    second_items = (
        CartItem.from_product(products[8]),
        CartItem.from_product(products[14], quantity=2),
    )
    return [
        Order(
            id="demo-1",
            items=first_items,
            customer=customers[2],
            order_type=ORDER_TYPE_DINE_IN,
            subtotal=4661.02,
            discount_value=0.0,
            discount_type=DISCOUNT_NONE,
            tax_rate=0.0,
            tax_amount=0.0,
            total=4661.02,
            amount_received=5000.0,
            change_due=338.98,
            payment_method=PAYMENT_CASH,
            payment_status=PAYMENT_STATUS_PAID,
            status=STATUS_COMPLETED,
            timestamp=(now - timedelta(seconds=100)).isoformat(),
        ),
        Order(
            id="demo-2",
            items=second_items,
            customer=customers[3],
            order_type=ORDER_TYPE_TAKEAWAY,
            subtotal=2099.56,
            discount_value=100.0,
            discount_type=DISCOUNT_FLAT,
            tax_rate=0.0,
            tax_amount=0.0,
            total=1999.56,
            amount_received=0.0,
            change_due=0.0,
            payment_method=PAYMENT_CARD,
            payment_status=PAYMENT_STATUS_PAID,
            status=STATUS_COMPLETED,
            timestamp=(now - timedelta(seconds=50)).isoformat(),
        ),
    ]
