"""Main Textual app class."""

from __future__ import annotations

import logging
from collections.abc import Callable

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.reactive import reactive
from textual.timer import Timer
from textual.widgets import Header, Static

from grillmaster.cart_actions import add_to_cart, clear_cart, remove_from_cart, undo_last_action, update_cart_quantity
from grillmaster.checkout import CheckoutSession
from grillmaster.checkout_modal import CheckoutModal
from grillmaster.constant import ORDER_TYPES
from grillmaster.customer_modal import CustomerModal
from grillmaster.models import AppState, CartItem, Order, Product
from grillmaster.order_actions import set_order_type
from grillmaster.persistence import DebouncedSaver
from grillmaster.rendering import badge_style, format_cart_line, format_order_summary, format_product_label, format_totals
from grillmaster.selectors import ALL_CATEGORIES, cart_count, categories, products_by_category, undo_label
from grillmaster.storage import KeyValueStorage
from grillmaster.store import Store

logger = logging.getLogger(__name__)


class _TimerHandle:
    """Adapts a Textual timer to the cancel() handle the autosaver expects."""

    def __init__(self, timer: Timer) -> None:
        self._timer = timer

    def cancel(self) -> None:
        self._timer.stop()


class PosApp(App):
    """A Textual point-of-sale terminal: pick products, build the cart, check out."""

    TITLE = "GrillMaster POS"
    SUB_TITLE = "Counter"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #menu-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #cart-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #category-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 3;
    }

    #menu-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #cart-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #cart-totals {
        padding: 0 1;
        margin-top: 1;
    }

    #status-bar {
        padding: 0 1;
        margin-top: 1;
        color: $text-muted;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    category = reactive(ALL_CATEGORIES)
    menu_index = reactive(0)
    cart_index = reactive(None)

    BINDINGS = [
        ("up", "move_menu(-1)", "Previous product"),
        ("down", "move_menu(1)", "Next product"),
        ("j", "move_menu(1)", "Next product"),
        ("k", "move_menu(-1)", "Previous product"),
        ("left", "cycle_category(-1)", "Previous category"),
        ("right", "cycle_category(1)", "Next category"),
        ("enter", "add_selected", "Add to cart"),
        ("left_square_bracket", "move_cart(-1)", "Previous line"),
        ("right_square_bracket", "move_cart(1)", "Next line"),
        ("plus", "change_quantity(1)", "Qty +1"),
        ("equals_sign", "change_quantity(1)", "Qty +1"),
        ("minus", "change_quantity(-1)", "Qty -1"),
        ("d", "remove_line", "Remove line"),
        ("u", "undo", "Undo"),
        ("x", "clear_cart", "Clear cart"),
        ("o", "cycle_order_type", "Order type"),
        ("c", "pick_customer", "Customer"),
        Binding("ctrl+s", "checkout", "Checkout", priority=True),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, store: Store, storage: KeyValueStorage) -> None:
        super().__init__()
        self.store = store
        self.storage = storage
        self.checkout = CheckoutSession(store)
        self.system_status = ""
        self._saver: DebouncedSaver | None = None
        self._unsubscribe: Callable[[], None] | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="menu-pane"):
                yield Static(id="category-bar")
                yield Static(id="menu-list")
            with Vertical(id="cart-pane"):
                yield Static("Cart", classes="pane-title")
                yield Static("(cart is empty)", id="cart-list")
                yield Static(id="cart-totals")
                yield Static(id="status-bar")

    def on_mount(self) -> None:
        # Autosave subscribes first so it sees each change before the screen does.
        self._saver = DebouncedSaver(
            self.store,
            self.storage,
            schedule=lambda delay, callback: _TimerHandle(self.set_timer(delay, callback)),
        )
        self._unsubscribe = self.store.subscribe(self._on_state_change)
        logger.info("app mounted with %d products", len(self.store.get_state().products))
        self._refresh_all()

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
        if self._saver is not None:
            self._saver.close()
        logger.info("app closed")

    def _on_state_change(self, state: AppState) -> None:
        self._refresh_all(state)

    def _visible_products(self, state: AppState) -> list[Product]:
        return products_by_category(state, self.category)

    def action_move_menu(self, delta: int) -> None:
        if self._modal_open():
            return
        products = self._visible_products(self.store.get_state())
        if not products:
            return
        self.menu_index = (self.menu_index + delta) % len(products)
        self._refresh_all()

    def action_cycle_category(self, delta: int) -> None:
        if self._modal_open():
            return
        options = [ALL_CATEGORIES, *categories(self.store.get_state())]
        current = options.index(self.category) if self.category in options else 0
        self.category = options[(current + delta) % len(options)]
        self.menu_index = 0
        self._refresh_all()

    def action_add_selected(self) -> None:
        if self._modal_open():
            return
        products = self._visible_products(self.store.get_state())
        if not products:
            return
        product = products[min(self.menu_index, len(products) - 1)]
        add_to_cart(self.store, product)
        self.cart_index = next(
            (idx for idx, item in enumerate(self.store.get_state().cart) if item.id == product.id), None
        )
        self._refresh_all()

    def action_move_cart(self, delta: int) -> None:
        if self._modal_open():
            return
        cart = self.store.get_state().cart
        if not cart:
            return
        if self.cart_index is None:
            self.cart_index = 0 if delta > 0 else len(cart) - 1
        else:
            self.cart_index = (self.cart_index + delta) % len(cart)
        self._refresh_all()

    def action_change_quantity(self, delta: int) -> None:
        if self._modal_open():
            return
        item = self._selected_cart_item()
        if item is None:
            return
        update_cart_quantity(self.store, item.id, item.quantity + delta)

    def action_remove_line(self) -> None:
        if self._modal_open():
            return
        item = self._selected_cart_item()
        if item is None:
            return
        remove_from_cart(self.store, item.id)

    def action_undo(self) -> None:
        if self._modal_open():
            return
        result = undo_last_action(self.store)
        if not result:
            self._set_status(result.error or "Nothing to undo")

    def action_clear_cart(self) -> None:
        if self._modal_open():
            return
        if not self.store.get_state().cart:
            self._set_status("Cart is already empty")
            return
        clear_cart(self.store)
        self._set_status("Cart cleared (U to undo)")

    def action_cycle_order_type(self) -> None:
        if self._modal_open():
            return
        current = self.store.get_state().current_order_type
        index = ORDER_TYPES.index(current) if current in ORDER_TYPES else -1
        set_order_type(self.store, ORDER_TYPES[(index + 1) % len(ORDER_TYPES)])

    def action_pick_customer(self) -> None:
        if self._modal_open():
            return
        self.push_screen(CustomerModal(self.store), lambda _: self.call_after_refresh(self._refresh_all))

    def action_checkout(self) -> None:
        if self._modal_open():
            return
        if not self.store.get_state().cart:
            self._set_status("Nothing to check out")
            return
        self.checkout.reset()
        self.push_screen(CheckoutModal(self.checkout), self._on_checkout_closed)

    def _on_checkout_closed(self, order: Order | None) -> None:
        if order is None:
            self._set_status("Checkout cancelled")
            return
        logger.info("checkout complete order_id=%s", order.id)
        self.cart_index = None
        self.system_status = ""
        self.call_after_refresh(self._show_order_summary, order)

    def _show_order_summary(self, order: Order) -> None:
        self._refresh_all()
        self._set_status_text(format_order_summary(order))

    def _modal_open(self) -> bool:
        return isinstance(self.screen, (CheckoutModal, CustomerModal))

    def _selected_cart_item(self) -> CartItem | None:
        cart = self.store.get_state().cart
        if self.cart_index is None or not (0 <= self.cart_index < len(cart)):
            return cart[-1] if cart else None
        return cart[self.cart_index]

    def _set_status(self, message: str) -> None:
        self.system_status = message
        self._refresh_all()

    def _set_status_text(self, text: Text) -> None:
        try:
            self.query_one("#status-bar", Static).update(text)
        except NoMatches:
            return

    def _refresh_all(self, state: AppState | None = None) -> None:
        state = state or self.store.get_state()
        try:
            self._refresh_menu(state)
            self._refresh_cart(state)
        except NoMatches:
            return

    def _refresh_menu(self, state: AppState) -> None:
        bar = Text()
        bar.append(self.category, style=badge_style(self.category))
        bar.append("  ←/→ category, Enter add")
        self.query_one("#category-bar", Static).update(bar)

        products = self._visible_products(state)
        menu = self.query_one("#menu-list", Static)
        if not products:
            menu.update("No products")
            return
        if self.menu_index >= len(products):
            self.menu_index = 0

        lines = Text()
        for idx, product in enumerate(products):
            if idx > 0:
                lines.append("\n")
            lines.append("➤ " if idx == self.menu_index else "  ")
            lines.append_text(format_product_label(product))
        menu.update(lines)

    def _refresh_cart(self, state: AppState) -> None:
        cart_widget = self.query_one("#cart-list", Static)
        if not state.cart:
            self.cart_index = None
            cart_widget.update("(cart is empty)")
        else:
            if self.cart_index is not None and self.cart_index >= len(state.cart):
                self.cart_index = len(state.cart) - 1
            lines = Text()
            for idx, item in enumerate(state.cart):
                if idx > 0:
                    lines.append("\n")
                lines.append("➤ " if idx == self.cart_index else "  ")
                lines.append_text(format_cart_line(item))
            cart_widget.update(lines)

        self.query_one("#cart-totals", Static).update(format_totals(self.checkout.quote(), self.checkout.tax_rate))

        customer = state.current_customer.name if state.current_customer else "Guest"
        status = Text()
        status.append(f"{customer} · {state.current_order_type} · {cart_count(state)} item(s)")
        label = undo_label(state)
        if label:
            status.append(f"\nUndo: {label}")
        if self.system_status:
            status.append(f"\n{self.system_status}")
        self.query_one("#status-bar", Static).update(status)
