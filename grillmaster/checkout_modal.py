"""Checkout modal screen."""

from __future__ import annotations

from typing import TypeVar

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from grillmaster.checkout import CheckoutSession
from grillmaster.constant import (
    DISCOUNT_FLAT,
    DISCOUNT_NONE,
    DISCOUNT_PERCENT,
    DISCOUNT_TYPES,
    PAYMENT_CASH,
    PAYMENT_METHODS,
    QUICK_CASH_VALUES,
    QUICK_FLAT_VALUES,
    QUICK_PERCENT_VALUES,
)
from grillmaster.helpers import format_currency
from grillmaster.models import Order
from grillmaster.rendering import format_totals

_FIELD_RECEIVED = "received"
_FIELD_DISCOUNT = "discount"
_FIELD_TAX = "tax"
_FIELDS = (_FIELD_RECEIVED, _FIELD_DISCOUNT, _FIELD_TAX)
_FIELD_LABELS = {_FIELD_RECEIVED: "Amount received", _FIELD_DISCOUNT: "Discount", _FIELD_TAX: "Tax rate (%)"}


T = TypeVar("T")


def _next(values: tuple[T, ...], current: object) -> T:
    if current not in values:
        return values[0]
    return values[(values.index(current) + 1) % len(values)]


class CheckoutModal(ModalScreen[Order | None]):
    """Collect discount, tax and payment for the current cart and place the order."""

    CSS = """
    CheckoutModal {
        align: center middle;
        background: $background 60%;
    }

    #checkout-dialog {
        width: 64;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #checkout-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #checkout-fields {
        color: white;
        margin-bottom: 1;
    }

    #checkout-totals {
        border: heavy $secondary;
        padding: 0 1;
        color: white;
        margin-bottom: 1;
    }

    #checkout-error {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #checkout-help {
        color: #dddddd;
    }
    """

    def __init__(self, session: CheckoutSession) -> None:
        super().__init__()
        self.session = session
        self.active_field = _FIELD_RECEIVED
        self.buffers = {_FIELD_RECEIVED: "", _FIELD_DISCOUNT: "", _FIELD_TAX: f"{session.tax_rate:g}"}
        self.error = ""

    def compose(self) -> ComposeResult:
        with Container(id="checkout-dialog"):
            yield Static("Checkout", id="checkout-title")
            yield Static(id="checkout-fields")
            yield Static(id="checkout-totals")
            yield Static(id="checkout-error")
            yield Static(
                "Tab field. P payment. T discount type. D/C presets. E exact. Enter confirm. Esc cancel.",
                id="checkout-help",
            )

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        key = event.key
        if key in {"escape", "ctrl+c"}:
            event.stop()
            self.dismiss(None)
            return
        if key == "enter":
            event.stop()
            self._confirm()
            return
        if key == "tab":
            self.active_field = _next(_FIELDS, self.active_field)
        elif key == "backspace":
            self._edit(self.buffers[self.active_field][:-1])
        elif key == "p":
            self.session.set_payment_method(_next(PAYMENT_METHODS, self.session.payment_method))
            if self.session.amount_received == 0:
                self.buffers[_FIELD_RECEIVED] = ""
        elif key == "t":
            self.session.set_discount_type(_next(DISCOUNT_TYPES, self.session.discount_type))
            if self.session.discount_type == DISCOUNT_NONE:
                self.buffers[_FIELD_DISCOUNT] = ""
        elif key == "d":
            self._cycle_discount_preset()
        elif key == "c":
            self.session.apply_quick_cash(_next(QUICK_CASH_VALUES, int(self.session.amount_received)))
            self.buffers[_FIELD_RECEIVED] = f"{self.session.amount_received:g}"
        elif key == "e":
            self.session.apply_exact()
            self.buffers[_FIELD_RECEIVED] = f"{self.session.amount_received:.2f}"
        elif event.is_printable and event.character and (event.character.isdigit() or event.character == "."):
            if len(self.buffers[self.active_field]) < 10:
                self._edit(self.buffers[self.active_field] + event.character)
        elif key != "ctrl+q":
            # Swallow everything else so app bindings do not act on the cart underneath.
            event.stop()
            return
        else:
            return
        self.error = ""
        self._refresh_content()
        event.stop()

    def _edit(self, value: str) -> None:
        self.buffers[self.active_field] = value
        if self.active_field == _FIELD_RECEIVED:
            self.session.set_amount_received(value)
        elif self.active_field == _FIELD_DISCOUNT:
            if self.session.discount_type == DISCOUNT_NONE:
                self.session.set_discount_type(DISCOUNT_PERCENT)
            self.session.set_discount_value(value)
        else:
            self.session.set_tax_rate(value)

    def _cycle_discount_preset(self) -> None:
        if self.session.discount_type == DISCOUNT_FLAT:
            value = _next(QUICK_FLAT_VALUES, int(self.session.discount_value))
            self.session.apply_quick_flat(value)
        else:
            value = _next(QUICK_PERCENT_VALUES, int(self.session.discount_value))
            self.session.apply_quick_percent(value)
        self.buffers[_FIELD_DISCOUNT] = f"{self.session.discount_value:g}"

    def _confirm(self) -> bool:
        result = self.session.confirm()
        if not result:
            self.error = result.error or "Could not place order."
            self._refresh_content()
            return False
        self.dismiss(result.value)
        return True

    def _refresh_content(self) -> None:
        quote = self.session.quote()
        fields = Text()
        fields.append(f"Payment: {self.session.payment_method}    Discount: {self.session.discount_type}\n")
        for name in _FIELDS:
            pointer = "➤ " if name == self.active_field else "  "
            fields.append(f"{pointer}{_FIELD_LABELS[name]}: {self.buffers[name]}")
            if name == self.active_field:
                fields.append("|", style="bold")
            fields.append("\n")

        totals = format_totals(quote, self.session.tax_rate)
        if self.session.payment_method == PAYMENT_CASH:
            if quote.amount_due > 0:
                totals.append(f"\nAmount due  {format_currency(quote.amount_due)}", style="#ffb3b3")
            else:
                totals.append(f"\nChange  {format_currency(quote.change_due)}", style="green")

        self.query_one("#checkout-fields", Static).update(fields)
        self.query_one("#checkout-totals", Static).update(totals)
        self.query_one("#checkout-error", Static).update(self.error)
