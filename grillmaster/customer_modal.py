"""Customer picker modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static

from grillmaster.customer_actions import set_current_customer
from grillmaster.models import Customer
from grillmaster.selectors import guest_customer, search_customers
from grillmaster.store import Store


class CustomerModal(ModalScreen[None]):
    """Centered modal to search customers and pick the one for the next order."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("ctrl+c", "close", "Close"),
        ("j", "move_cursor(1)", "Next"),
        ("k", "move_cursor(-1)", "Previous"),
        ("up", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("enter", "select_current", "Select"),
        ("slash", "start_search", "Search"),
    ]

    CSS = """
    CustomerModal {
        align: center middle;
        background: $background 60%;
    }

    #customer-dialog {
        width: 64;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #customer-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #customer-body {
        margin-bottom: 1;
        color: white;
    }

    #customer-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    cursor_index = reactive(0)

    def __init__(self, store: Store) -> None:
        super().__init__()
        self.store = store
        self.typing_query = False
        self.query_text = ""

    def compose(self) -> ComposeResult:
        with Container(id="customer-dialog"):
            yield Static("Customer", id="customer-title")
            yield Static(id="customer-body")
            yield Static(id="customer-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if not self.typing_query:
            return

        if event.key == "escape":
            self.typing_query = False
            self.query_text = ""
        elif event.key == "enter":
            self.typing_query = False
        elif event.key == "backspace":
            self.query_text = self.query_text[:-1]
        elif event.is_printable and event.character:
            self.query_text += event.character
        self.cursor_index = 0
        self._refresh_content()
        # Ignore all other keys while typing.
        event.stop()

    def action_close(self) -> None:
        self.dismiss()

    def action_start_search(self) -> None:
        self.typing_query = True
        self._refresh_content()

    def action_move_cursor(self, delta: int) -> None:
        rows = self._rows()
        if not rows:
            return
        self.cursor_index = (self.cursor_index + delta) % len(rows)
        self._refresh_content()

    def action_select_current(self) -> None:
        rows = self._rows()
        if not rows:
            return
        customer = rows[self.cursor_index]
        state = self.store.get_state()
        guest = guest_customer(state)
        set_current_customer(self.store, None if guest is not None and customer.id == guest.id else customer)
        self.dismiss()

    def _rows(self) -> list[Customer]:
        return search_customers(self.store.get_state(), self.query_text)

    def _refresh_content(self) -> None:
        body = self.query_one("#customer-body", Static)
        help_text = self.query_one("#customer-help", Static)

        rows = self._rows()
        if self.cursor_index >= len(rows):
            self.cursor_index = max(0, len(rows) - 1)

        current = self.store.get_state().current_customer
        content = Text(style="white")
        content.append(f"Search: {self.query_text}", style="bold white" if self.typing_query else "white")
        if self.typing_query:
            content.append("|")
        content.append("\n\n")
        if not rows:
            content.append("No customers match")
        for idx, customer in enumerate(rows):
            if idx > 0:
                content.append("\n")
            pointer = "➤ " if idx == self.cursor_index else "  "
            selected = current is not None and current.id == customer.id
            content.append(f"{pointer}{customer.name}", style="bold white" if selected else "white")
            if customer.phone:
                content.append(f"  {customer.phone}", style="dim")

        if self.typing_query:
            help_text.update("Type to filter, Enter done, Esc clear")
        else:
            help_text.update("J/K/↑/↓ move, Enter select, / search, Esc close")
        body.update(content)
