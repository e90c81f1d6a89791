# smartlist/cli/runner.py

"""Headless CLI: product search and comparison plans."""

import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from smartlist.config.settings import Settings
from smartlist.engine.best_price import format_best_pick
from smartlist.models.comparison import AllocationGroup
from smartlist.models.product import Product
from smartlist.models.selection import Selection
from smartlist.services.plan_service import PlanResult, ShoppingPlanner
from smartlist.services.pricing_client import PricingApiError, ProductsApiClient
from smartlist.storage.file_manager import FileManager, plan_to_dict

logger = logging.getLogger("smartlist.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def selection_from_keys(keys: list[str]) -> Selection:
    """Build a selection snapshot from raw product keys."""
    selection = Selection()
    for key in keys:
        key = key.strip().lower()
        if key:
            selection = selection.add(Product(key=key, name=key))
    return selection


def _price_markup(text: str, best: bool, worst: bool) -> str:
    """Escape raw price text and colour it green (best) or red (worst)."""
    safe = escape(text)
    if best:
        return f"[green]{safe}[/green]"
    if worst:
        return f"[red]{safe}[/red]"
    return safe


def _print_comparison(
    result: PlanResult, console: Console | None = None
) -> None:
    """Render the product × store grid with best/worst colouring."""
    table = Table(
        title="Price comparison",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Product", max_width=40)
    for store in result.table.stores:
        table.add_column(escape(store), justify="right")
    table.add_column("Best", style="bold")

    for row, hl, pick in zip(
        result.table.rows, result.highlights, result.best_picks
    ):
        label = escape(row.name)
        if row.packaging_format:
            label = f"{label}\n[dim]{escape(row.packaging_format)}[/dim]"
        cells = [
            _price_markup(
                cell.price if cell else Settings.NO_PRICE_TEXT,
                hl.is_best(store),
                hl.is_worst(store),
            )
            for store, cell in (
                (s, row.prices_by_store.get(s)) for s in result.table.stores
            )
        ]
        table.add_row(label, *cells, escape(format_best_pick(pick)))

    (console or Console()).print(table)


def _print_groups(
    title: str,
    groups: list[AllocationGroup],
    console: Console | None = None,
) -> None:
    """Render one table per store for an allocation policy."""
    console = console or Console()
    console.print(f"\n[bold]{title}[/bold]")
    if not groups:
        console.print("[yellow]No priced products found.[/yellow]")
        return
    for group in groups:
        table = Table(
            title=f"{escape(group.store)} ({len(group.items)} items)",
            title_style="magenta",
        )
        table.add_column("Product", max_width=50)
        table.add_column("Price", justify="right", style="green")
        for item in group.items:
            table.add_row(escape(item.name), escape(item.price_text))
        console.print(table)


def _export(result: PlanResult) -> None:
    """Write the comparison grid as CSV next to the saved plans."""
    try:
        path = FileManager().export_csv(result)
        _err.print(f"[dim]Exported CSV → {escape(str(path))}[/dim]")
    except OSError as exc:
        logger.error("Export failed: %s", exc, exc_info=True)
        _err.print(f"[red]Export failed: {escape(str(exc))}[/red]")


async def cli_plan(
    keys: list[str],
    output_format: str,
    output_dir: str | None,
    save: bool = False,
    export: bool = False,
) -> int:
    """Compare prices for *keys* and print both splits (0=ok, 1=fail).

    *output_format* is ``json``, ``table`` or ``tsv`` (comparison grid
    only).  *export* additionally writes the grid to a CSV file.
    """
    selection = selection_from_keys(keys)
    if not len(selection):
        _err.print("[yellow]Your list is empty. Add product keys first.[/yellow]")
        return 1

    if output_dir is not None:
        Settings.RESULTS_DIR = Path(output_dir)

    planner = ShoppingPlanner()
    _err.print(f"[bold]Comparing[/bold] {len(selection)} products")
    try:
        result = await planner.plan(selection)
    finally:
        planner.client.close()

    if result is None:
        return 1
    for error_msg in result.errors:
        _err.print(f"[red]{escape(error_msg)}[/red]")
    if result.errors:
        return 1

    if result.table.missing_keys:
        _err.print(
            "[dim]No prices for: "
            f"{escape(', '.join(result.table.missing_keys))}[/dim]"
        )

    if save:
        try:
            path = FileManager().save_plan(result)
            _err.print(f"[dim]Saved plan → {escape(str(path))}[/dim]")
        except OSError as exc:
            logger.error("Save failed: %s", exc, exc_info=True)
            _err.print(f"[red]Save failed: {escape(str(exc))}[/red]")
    if export:
        _export(result)

    if output_format == "table":
        _print_comparison(result)
        _print_groups("Cheapest store per product", result.cheapest_groups)
        _print_groups("Fewest, best-stocked stores", result.availability_groups)
    elif output_format == "tsv":
        sys.stdout.write(FileManager.format_tsv(result) + "\n")
    else:
        json.dump(plan_to_dict(result), sys.stdout, ensure_ascii=False, indent=2)
        sys.stdout.write("\n")
    return 0


def cli_search(query: str, output_format: str) -> int:
    """Print product suggestions for *query* (0=ok, 1=fail)."""
    client = ProductsApiClient()
    try:
        suggestions = client.search(query)
    except PricingApiError as exc:
        _err.print(f"[red]{escape(str(exc))}[/red]")
        return 1
    finally:
        client.close()

    if not suggestions:
        _err.print("[yellow]No results.[/yellow]")
        return 1

    if output_format == "table":
        table = Table(
            title=f"Results for '{escape(query)}'", title_style="bold cyan"
        )
        table.add_column("Key", style="dim")
        table.add_column("Name")
        table.add_column("Packaging")
        for p in suggestions:
            table.add_row(
                escape(p.key), escape(p.name), escape(p.packaging_format or "")
            )
        Console().print(table)
    elif output_format == "tsv":
        for p in suggestions:
            sys.stdout.write(f"{p.key}\t{p.name}\t{p.packaging_format or ''}\n")
    else:
        json.dump(
            [
                {
                    "key": p.key,
                    "name": p.name,
                    "packaging_format": p.packaging_format,
                    "thumbnail": p.thumbnail,
                }
                for p in suggestions
            ],
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")
    return 0
