"""CLI entry point for SmartShop."""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.logging import RichHandler

from .classifier import TextClassifier
from .config import ConfigManager
from .data_store import BackendType, create_data_store
from .models import ShoppingItem, ViewFilter
from .output_formatter import OutputFormatter
from .persistence import PersistenceBridge
from .session import ShoppingSession

app = typer.Typer(
    name="smartshop",
    help="Smart shopping list with AI-assisted categorization",
    no_args_is_help=True,
)

# Global state for formatter and config (set by callback)
formatter: OutputFormatter = OutputFormatter()
config: ConfigManager | None = None
data_dir_override: Path | None = None


def setup_logging(verbose: bool = False) -> None:
    """Send package logs to stderr through Rich."""
    logger = logging.getLogger("smartshop")
    logger.handlers.clear()
    logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def get_config() -> ConfigManager:
    """Get or create ConfigManager instance."""
    global config
    if config is None:
        config = ConfigManager()
    return config


def get_session() -> ShoppingSession:
    """Build a session from config values. The caller opens it."""
    cfg = get_config()
    # CLI --data-dir overrides config, which overrides default
    data_dir = data_dir_override or cfg.data.storage_dir
    store = create_data_store(backend=BackendType(cfg.data.backend), data_dir=data_dir)
    return ShoppingSession(
        bridge=PersistenceBridge(store, slot=cfg.data.slot),
        classifier=TextClassifier.from_config(cfg.classifier),
    )


def _item_data(item: ShoppingItem) -> dict[str, Any]:
    return item.model_dump(mode="json", by_alias=True)


def _added_result(items: list[ShoppingItem], classification: str | None = None) -> dict[str, Any]:
    data: dict[str, Any] = {"items": [_item_data(item) for item in items]}
    if classification:
        data["classification"] = classification
    return {
        "success": True,
        "message": f"Added {len(items)} item(s) to the list",
        "data": data,
    }


def _no_match_result(item_id: str) -> dict[str, Any]:
    return {
        "success": False,
        "message": f"No item with ID '{item_id}'; nothing changed",
        "data": {"item": None},
    }


@app.callback()
def main(
    json_output: Annotated[
        bool, typer.Option("--json", help="Output as JSON for programmatic use")
    ] = False,
    data_dir: Annotated[Path | None, typer.Option("--data-dir", help="Data directory path")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logs")] = False,
) -> None:
    """SmartShop CLI - Organize your shopping list."""
    global formatter, config, data_dir_override

    formatter = OutputFormatter(json_mode=json_output)
    setup_logging(verbose)

    # Load config early
    config = ConfigManager()
    data_dir_override = data_dir


@app.command()
def add(
    text: Annotated[str, typer.Argument(help="Comma-separated item names")],
) -> None:
    """Add items to the list without categorization."""
    try:
        with get_session() as session:
            items = session.add_simple(text)
        result = _added_result(items)
        formatter.output(result, result["message"])
    except Exception as e:
        formatter.error(str(e))
        raise typer.Exit(code=1)


@app.command(name="smart-add")
def smart_add(
    text: Annotated[str, typer.Argument(help="Free text, a list, or a recipe name")],
) -> None:
    """Split and categorize free text, expanding recipes into ingredients."""
    try:
        with get_session() as session:
            items = asyncio.run(session.add_smart(text))
            classification = session.last_classification
        result = _added_result(
            items, classification.outcome.value if classification else None
        )
        formatter.output(result, result["message"])
    except Exception as e:
        formatter.error(str(e))
        raise typer.Exit(code=1)


@app.command(name="list")
def list_items(
    pending: Annotated[
        bool | None,
        typer.Option("--pending/--all", help="Hide bought items, or show everything"),
    ] = None,
) -> None:
    """View the list grouped by category."""
    try:
        if pending is None:
            view_filter = ViewFilter(get_config().defaults.view)
        else:
            view_filter = ViewFilter.PENDING if pending else ViewFilter.ALL

        with get_session() as session:
            projection = session.view(view_filter)

        formatter.output(
            {
                "success": True,
                "data": {"projection": projection.model_dump(mode="json", by_alias=True)},
            }
        )
    except Exception as e:
        formatter.error(str(e))
        raise typer.Exit(code=1)


@app.command()
def toggle(
    item_id: Annotated[str, typer.Argument(help="Item ID to mark bought or not bought")],
) -> None:
    """Flip an item between bought and not bought."""
    try:
        with get_session() as session:
            item = session.toggle(item_id)

        if item is None:
            result = _no_match_result(item_id)
        else:
            state = "bought" if item.is_bought else "not bought"
            result = {
                "success": True,
                "message": f"Marked {item.name} as {state}",
                "data": {"item": _item_data(item)},
            }
        formatter.output(result, result["message"])
    except Exception as e:
        formatter.error(str(e))
        raise typer.Exit(code=1)


@app.command()
def remove(
    item_id: Annotated[str, typer.Argument(help="Item ID to remove")],
) -> None:
    """Remove an item from the list."""
    try:
        with get_session() as session:
            item = session.delete(item_id)

        if item is None:
            result = _no_match_result(item_id)
        else:
            result = {
                "success": True,
                "message": f"Removed {item.name} from the list",
                "data": {"item": _item_data(item)},
            }
        formatter.output(result, result["message"])
    except Exception as e:
        formatter.error(str(e))
        raise typer.Exit(code=1)


@app.command()
def clear() -> None:
    """Remove all bought items."""
    try:
        with get_session() as session:
            removed_count = session.clear_completed()
        formatter.success(f"Cleared {removed_count} bought items", {"removed_count": removed_count})
    except Exception as e:
        formatter.error(str(e))
        raise typer.Exit(code=1)


@app.command()
def reset(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Delete the entire list."""
    if not yes and not typer.confirm("Delete entire list?"):
        formatter.error("Reset cancelled", error_code="CANCELLED")
        raise typer.Exit(code=1)

    try:
        with get_session() as session:
            removed_count = session.reset_all()
        formatter.success(f"Removed all {removed_count} items", {"removed_count": removed_count})
    except Exception as e:
        formatter.error(str(e))
        raise typer.Exit(code=1)


@app.command()
def ui() -> None:
    """Open the interactive terminal UI."""
    from .tui import SmartShopTUI

    session = get_session()
    with session:
        view_filter = ViewFilter(get_config().defaults.view)
        SmartShopTUI(session, view_filter=view_filter).run()


if __name__ == "__main__":
    app()
