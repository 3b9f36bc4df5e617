"""Terminal UI for SmartShop."""

from __future__ import annotations

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, DataTable, Footer, Header, Input, Label, Static

from .models import ViewFilter
from .session import ShoppingSession


class ConfirmScreen(ModalScreen[bool]):
    """Yes/no confirmation dialog."""

    DEFAULT_CSS = """
    ConfirmScreen {
        align: center middle;
    }

    #confirm-dialog {
        width: 50;
        height: auto;
        padding: 1 2;
        border: round $warning;
        background: $surface;
    }

    #confirm-actions {
        align-horizontal: right;
        height: auto;
        margin-top: 1;
    }
    """

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, question: str):
        super().__init__()
        self.question = question

    def compose(self) -> ComposeResult:
        with Vertical(id="confirm-dialog"):
            yield Label(self.question)
            with Horizontal(id="confirm-actions"):
                yield Button("Cancel", id="cancel")
                yield Button("Yes", id="confirm", variant="error")

    def action_cancel(self) -> None:
        self.dismiss(False)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "confirm")


class ItemTable(DataTable):
    """Shopping list table with per-item key bindings."""

    BINDINGS = [
        Binding("space,t", "app.toggle_selected", "Toggle Bought"),
        Binding("x,delete", "app.delete_selected", "Delete"),
        Binding("c", "app.clear_completed", "Clear Bought"),
        Binding("v", "app.toggle_view", "Pending/All"),
        Binding("R", "app.reset_list", "Reset List"),
    ]


class SmartShopTUI(App[None]):
    """Interactive terminal UI for the shopping list."""

    TITLE = "SmartShop"
    SUB_TITLE = "Shopping List"

    DEFAULT_CSS = """
    #status {
        dock: bottom;
        height: 1;
        padding: 0 1;
        background: $boost;
        color: $text;
    }

    #entry-row {
        height: auto;
    }

    #entry {
        width: 1fr;
    }

    ItemTable {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("ctrl+s", "smart_add", "Smart Add"),
        Binding("ctrl+r", "refresh", "Refresh"),
    ]

    def __init__(self, session: ShoppingSession, view_filter: ViewFilter = ViewFilter.ALL):
        super().__init__()
        self.session = session
        self.view_filter = view_filter
        self.status_message = ""
        self._row_ids: list[str] = []

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="entry-row"):
            yield Input(placeholder="Add item or recipe (e.g. 'Milk, Eggs, Bread')", id="entry")
            yield Button("✨ Smart", id="smart", variant="primary")
            yield Button("Add", id="simple")
        yield ItemTable(id="items")
        yield Static("", id="status")
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one(ItemTable)
        table.cursor_type = "row"
        table.add_columns("", "Item", "Category")
        self.query_one("#entry", Input).focus()
        self.action_refresh()

    # --- Input ---

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._add_simple()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "smart":
            self.action_smart_add()
        elif event.button.id == "simple":
            self._add_simple()

    def _take_input(self) -> str | None:
        entry = self.query_one("#entry", Input)
        text = entry.value
        if not text.strip() or self.session.is_processing:
            return None
        entry.value = ""
        return text

    def _add_simple(self) -> None:
        text = self._take_input()
        if text is None:
            return
        added = self.session.add_simple(text)
        self._refresh_table()
        self._set_status(f"Added {len(added)} item(s)")

    def action_smart_add(self) -> None:
        text = self._take_input()
        if text is None:
            return
        self._set_processing(True)
        self._set_status("Organizing your list...")
        self.run_worker(self._smart_add(text), exclusive=True, group="classify")

    async def _smart_add(self, text: str) -> None:
        try:
            added = await self.session.add_smart(text)
        finally:
            self._set_processing(False)

        self._refresh_table()
        message = f"Added {len(added)} item(s)"
        result = self.session.last_classification
        if result is not None and result.used_fallback:
            message += " (split locally)"
        self._set_status(message)

    def _set_processing(self, processing: bool) -> None:
        self.query_one("#entry", Input).disabled = processing
        self.query_one("#smart", Button).disabled = processing
        self.query_one("#simple", Button).disabled = processing

    # --- List actions ---

    def action_refresh(self) -> None:
        self._refresh_table()
        self._set_status(self._progress_text())

    def action_toggle_selected(self) -> None:
        item_id = self._selected_id()
        if item_id is None:
            self._set_status("No item selected")
            return
        item = self.session.toggle(item_id)
        self._refresh_table()
        if item is not None:
            self._set_status(f"{item.name}: {'bought' if item.is_bought else 'to buy'}")

    def action_delete_selected(self) -> None:
        item_id = self._selected_id()
        if item_id is None:
            self._set_status("No item selected")
            return
        item = self.session.delete(item_id)
        self._refresh_table()
        if item is not None:
            self._set_status(f"Removed {item.name}")

    def action_clear_completed(self) -> None:
        if self.session.view().bought_count == 0:
            self._set_status("No bought items to clear")
            return
        self.push_screen(ConfirmScreen("Remove all bought items?"), self._handle_clear)

    def action_reset_list(self) -> None:
        self.push_screen(ConfirmScreen("Delete entire list?"), self._handle_reset)

    def action_toggle_view(self) -> None:
        self.view_filter = (
            ViewFilter.ALL if self.view_filter == ViewFilter.PENDING else ViewFilter.PENDING
        )
        self.action_refresh()

    def _handle_clear(self, confirmed: bool | None) -> None:
        if not confirmed:
            self._set_status("Clear canceled")
            return
        removed_count = self.session.clear_completed()
        self._refresh_table()
        self._set_status(f"Cleared {removed_count} bought item(s)")

    def _handle_reset(self, confirmed: bool | None) -> None:
        if not confirmed:
            self._set_status("Reset canceled")
            return
        self.session.reset_all()
        self._refresh_table()
        self._set_status("List deleted")

    # --- Rendering ---

    def _refresh_table(self) -> None:
        table = self.query_one(ItemTable)
        table.clear(columns=False)
        self._row_ids = []

        projection = self.session.view(self.view_filter)
        for category, items in projection.groups.items():
            for index, item in enumerate(items):
                label = f"{category} ({len(items)})" if index == 0 else ""
                table.add_row(
                    "✓" if item.is_bought else "○",
                    item.name,
                    label,
                    key=item.id,
                )
                self._row_ids.append(item.id)

        self.sub_title = f"{projection.view_filter.value} · {self._progress_text()}"

    def _progress_text(self) -> str:
        projection = self.session.view(self.view_filter)
        if projection.total_count == 0:
            return "Your list is empty"
        return (
            f"{projection.bought_count} / {projection.total_count} items "
            f"({projection.progress_percent}%)"
        )

    def _selected_id(self) -> str | None:
        table = self.query_one(ItemTable)
        row = table.cursor_row
        if row is None or row < 0 or row >= len(self._row_ids):
            return None
        return self._row_ids[row]

    def _set_status(self, message: str) -> None:
        self.status_message = message
        self.query_one("#status", Static).update(message)
