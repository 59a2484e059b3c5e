"""Checkout pricing: discount, tax, change and the payment confirm gate."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from grillmaster.config import DEFAULT_TAX_RATE
from grillmaster.constant import (
    DISCOUNT_FLAT,
    DISCOUNT_NONE,
    DISCOUNT_PERCENT,
    DISCOUNT_TYPES,
    PAYMENT_CASH,
    PAYMENT_METHODS,
    PAYMENT_STATUS_PAID,
    PAYMENT_STATUS_UNPAID,
    PAYMENT_UNPAID,
)
from grillmaster.helpers import to_number
from grillmaster.models import ActionResult
from grillmaster.order_actions import place_order
from grillmaster.selectors import cart_total
from grillmaster.store import Store

logger = logging.getLogger(__name__)

# Methods for which an entered cash amount is still meaningful.
_KEEPS_RECEIVED = (PAYMENT_CASH, PAYMENT_UNPAID)


@dataclass(frozen=True)
class CheckoutQuote:
    subtotal: float
    discount_amount: float
    sub_after_discount: float
    tax_amount: float
    grand_total: float
    received: float
    change_due: float
    amount_due: float
    can_confirm: bool


def calculate_discount(subtotal: float, discount_type: str, discount_value: float) -> float:
    """Percent of subtotal, or a flat amount capped at the subtotal."""
    if discount_type == DISCOUNT_PERCENT:
        return subtotal * discount_value / 100
    if discount_type == DISCOUNT_FLAT:
        return min(discount_value, subtotal)
    return 0.0


def calculate_totals(
    subtotal: float,
    discount_type: str = DISCOUNT_NONE,
    discount_value: float = 0.0,
    tax_rate: float = 0.0,
    received: float = 0.0,
    payment_method: str = PAYMENT_CASH,
) -> CheckoutQuote:
    discount_amount = calculate_discount(subtotal, discount_type, discount_value)
    sub_after_discount = max(0.0, subtotal - discount_amount)
    tax_amount = sub_after_discount * tax_rate / 100
    grand_total = max(0.0, sub_after_discount + tax_amount)
    return CheckoutQuote(
        subtotal=subtotal,
        discount_amount=discount_amount,
        sub_after_discount=sub_after_discount,
        tax_amount=tax_amount,
        grand_total=grand_total,
        received=received,
        change_due=max(0.0, received - grand_total),
        amount_due=max(0.0, grand_total - received),
        can_confirm=payment_method != PAYMENT_CASH or received >= grand_total,
    )


class CheckoutSession:
    """
    Transient checkout inputs for the cart currently in the store.

    Setters accept loosely-typed input (text from an entry field, None) and treat
    anything non-numeric as zero. Every read goes through ``quote``, so the quick
    helpers are plain shortcuts over the same calculation.
    """

    def __init__(self, store: Store, tax_rate: float = DEFAULT_TAX_RATE) -> None:
        self.store = store
        self.default_tax_rate = tax_rate
        self.reset()

    def reset(self) -> None:
        self.discount_type = DISCOUNT_NONE
        self.discount_value = 0.0
        self.tax_rate = self.default_tax_rate
        self.amount_received = 0.0
        self.payment_method = PAYMENT_CASH

    def set_discount_type(self, discount_type: str) -> None:
        if discount_type not in DISCOUNT_TYPES:
            raise ValueError(f"Unknown discount type: {discount_type}")
        self.discount_type = discount_type
        if discount_type == DISCOUNT_NONE:
            self.discount_value = 0.0

    def set_discount_value(self, value: object) -> None:
        self.discount_value = to_number(value)

    def set_tax_rate(self, rate: object) -> None:
        self.tax_rate = to_number(rate)

    def set_payment_method(self, method: str) -> None:
        if method not in PAYMENT_METHODS:
            raise ValueError(f"Unknown payment method: {method}")
        self.payment_method = method
        if method not in _KEEPS_RECEIVED:
            self.amount_received = 0.0

    def set_amount_received(self, amount: object) -> None:
        self.amount_received = to_number(amount)

    def apply_quick_percent(self, value: float) -> None:
        self.discount_type = DISCOUNT_PERCENT
        self.discount_value = to_number(value)

    def apply_quick_flat(self, value: float) -> None:
        self.discount_type = DISCOUNT_FLAT
        self.discount_value = to_number(value)

    def apply_exact(self) -> None:
        self.amount_received = max(0.0, self.quote().grand_total)

    def apply_quick_cash(self, value: float) -> None:
        self.amount_received = to_number(value)

    def subtotal(self) -> float:
        return cart_total(self.store.get_state())

    def quote(self) -> CheckoutQuote:
        return calculate_totals(
            self.subtotal(),
            discount_type=self.discount_type,
            discount_value=self.discount_value,
            tax_rate=self.tax_rate,
            received=self.amount_received,
            payment_method=self.payment_method,
        )

    def confirm(self) -> ActionResult:
        """Place the order if the gate allows it, then clear the inputs for the next sale."""
        quote = self.quote()
        if not quote.can_confirm:
            return ActionResult.fail("Insufficient cash received")

        is_cash = self.payment_method == PAYMENT_CASH
        result = place_order(
            self.store,
            self.payment_method,
            subtotal=quote.subtotal,
            discount_type=self.discount_type,
            discount_value=quote.discount_amount,
            tax_rate=self.tax_rate,
            tax_amount=quote.tax_amount,
            total=quote.grand_total,
            payment_status=PAYMENT_STATUS_UNPAID if self.payment_method == PAYMENT_UNPAID else PAYMENT_STATUS_PAID,
            amount_received=quote.received if is_cash else 0.0,
            change_due=quote.change_due if is_cash else 0.0,
        )
        if result:
            logger.info("Checkout confirmed via %s", self.payment_method)
            self.reset()
        return result
