"""Output formatting for CLI and programmatic use."""

import json
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table


class OutputFormatter:
    """Formats output for both Rich terminal and JSON modes."""

    def __init__(self, json_mode: bool = False, console: Console | None = None):
        """Initialize formatter.

        Args:
            json_mode: If True, output JSON instead of Rich formatting
            console: Rich console to print to. Defaults to stdout.
        """
        self.json_mode = json_mode
        self.console = console or Console()

    def output(self, data: dict[str, Any], message: str = "") -> None:
        """Output data in appropriate format.

        Args:
            data: Data to output
            message: Optional message for Rich mode
        """
        if self.json_mode:
            self._output_json(data)
        else:
            self._output_rich(data, message)

    def _output_json(self, data: dict[str, Any]) -> None:
        """Output as JSON to stdout."""
        print(json.dumps(data, indent=2))

    def _output_rich(self, data: dict[str, Any], message: str) -> None:
        """Output with Rich formatting."""
        if message:
            icon = "[green]✓[/green]" if data.get("success", True) else "[yellow]![/yellow]"
            self.console.print(f"{icon} {message}")

        payload = data.get("data", {})
        if "projection" in payload:
            self._render_projection(payload["projection"])
        elif "items" in payload:
            self._render_added(payload)
        elif "item" in payload and isinstance(payload["item"], dict):
            self._render_item(payload["item"])

    def _render_projection(self, projection: dict) -> None:
        """Render the grouped shopping list with Rich."""
        total = projection["total_count"]
        bought = projection["bought_count"]
        groups = projection["groups"]

        if total == 0:
            self.console.print(
                Panel(
                    "Add items manually or use smart-add to plan a recipe "
                    "or organize a messy list.",
                    title="Your list is empty",
                    border_style="dim",
                )
            )
            return

        self.console.print(
            f"[bold]Shopping progress:[/bold] {bought} / {total} items "
            f"([green]{projection['progress_percent']}%[/green])"
        )

        if not groups:
            self.console.print("[dim]Nothing left to buy[/dim]")
            return

        for category, items in groups.items():
            table = Table(
                title=f"{category} ({len(items)})",
                title_justify="left",
                show_header=True,
                header_style="bold cyan",
            )
            table.add_column("", width=1)
            table.add_column("Item", style="cyan", no_wrap=False)
            table.add_column("ID", style="dim")

            for item in items:
                if item["isBought"]:
                    table.add_row("[green]✓[/green]", f"[strike dim]{item['name']}[/strike dim]", item["id"])
                else:
                    table.add_row("○", item["name"], item["id"])

            self.console.print(table)

    def _render_added(self, payload: dict) -> None:
        """Render items created by an add command."""
        items = payload["items"]
        if not items:
            self.console.print("[dim]No items added[/dim]")
            return

        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Item", style="cyan")
        table.add_column("Category", style="yellow")
        table.add_column("ID", style="dim")
        for item in items:
            table.add_row(item["name"], item["category"], item["id"])
        self.console.print(table)

        outcome = payload.get("classification")
        if outcome == "not_configured":
            self.console.print("[dim]No API key configured; input was split locally.[/dim]")
        elif outcome == "remote_failed":
            self.console.print("[yellow]Smart categorization failed; input was split locally.[/yellow]")

    def _render_item(self, item: dict) -> None:
        """Render a single item with Rich."""
        status = "bought" if item["isBought"] else "to buy"
        self.console.print(
            Panel(
                f"[bold]{item['name']}[/bold]\n"
                f"Category: {item['category']}\n"
                f"Status: {status}\n"
                f"[dim]{item['id']}[/dim]",
                border_style="cyan",
            )
        )

    def error(self, message: str, error_code: str | None = None) -> None:
        """Output error message.

        Args:
            message: Error message
            error_code: Optional error code
        """
        if self.json_mode:
            output = {"success": False, "error": message}
            if error_code:
                output["error_code"] = error_code
            print(json.dumps(output))
        else:
            self.console.print(f"[red]✗ Error:[/red] {message}")

    def success(self, message: str, data: dict | None = None) -> None:
        """Output success message.

        Args:
            message: Success message
            data: Optional data to include
        """
        if self.json_mode:
            output: dict[str, Any] = {"success": True, "message": message}
            if data:
                output["data"] = data
            print(json.dumps(output, indent=2))
        else:
            self.console.print(f"[green]✓[/green] {message}")
