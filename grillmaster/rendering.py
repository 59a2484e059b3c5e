"""Rich text helpers for the terminal screens."""

from __future__ import annotations

from rich.text import Text

from grillmaster.checkout import CheckoutQuote
from grillmaster.constant import PAYMENT_STATUS_PAID, STATUS_CANCELLED, STATUS_COMPLETED
from grillmaster.helpers import format_currency
from grillmaster.models import CartItem, Order, Product

_CATEGORY_STYLES = (
    "bold #ffffff on #b23a48",
    "bold #0b1f0f on #5fbf72",
    "bold #ffffff on #2f6db5",
    "bold #1f1300 on #e0a93b",
    "bold #ffffff on #7a4bb3",
)


def badge_style(category: str) -> str:
    """Return a stable badge style for a category name."""
    # Sum of code points keeps the colour stable across runs, unlike hash().
    return _CATEGORY_STYLES[sum(map(ord, category)) % len(_CATEGORY_STYLES)]


def status_style(status: str) -> str:
    if status in (STATUS_COMPLETED, PAYMENT_STATUS_PAID):
        return "bold #0b1f0f on #5fbf72"
    if status == STATUS_CANCELLED:
        return "bold #ffffff on #6b7280"
    return "bold #1f1300 on #e0a93b"


def format_product_label(product: Product) -> Text:
    text = Text()
    text.append(product.category[:3].upper(), style=badge_style(product.category))
    text.append(f" {product.name}  ")
    text.append(format_currency(product.price), style="dim")
    return text


def format_cart_line(item: CartItem) -> Text:
    text = Text()
    text.append(f"{item.quantity} x ", style="bold")
    text.append(item.name)
    text.append(f"  {format_currency(item.line_total)}", style="dim")
    return text


def format_totals(quote: CheckoutQuote, tax_rate: float) -> Text:
    """Subtotal / discount / tax / total block; the discount row only shows when non-zero."""
    text = Text()
    text.append(f"Subtotal  {format_currency(quote.subtotal)}\n")
    if quote.discount_amount > 0:
        text.append(f"Discount  -{format_currency(quote.discount_amount)}\n", style="green")
    text.append(f"Tax ({tax_rate:g}%)  {format_currency(quote.tax_amount)}\n")
    text.append(f"Total  {format_currency(quote.grand_total)}", style="bold")
    return text


def format_order_summary(order: Order) -> Text:
    text = Text()
    text.append(f"#{order.id} ")
    text.append(order.status, style=status_style(order.status))
    text.append(" ")
    text.append(order.payment_status, style=status_style(order.payment_status))
    customer = order.customer.name if order.customer else "Guest"
    text.append(f"  {customer}  {format_currency(order.total)}")
    return text
