# jewelry_admin/cli/runner.py

"""Headless CLI commands, sharing the core services with the TUI."""

import json
import logging
import sys
from typing import Any

from rich.console import Console
from rich.table import Table

from jewelry_admin.client.cosmic_client import CosmicClient
from jewelry_admin.errors import CatalogError, ValidationError
from jewelry_admin.filters.record_filter import RecordFilter
from jewelry_admin.models.catalog import (
    CatalogRecord,
    Collection,
    DashboardStats,
    ObjectKind,
    Product,
)
from jewelry_admin.models.forms import CollectionForm, ProductForm
from jewelry_admin.services.catalog_service import CatalogService
from jewelry_admin.services.stats_aggregator import StatisticsAggregator

logger = logging.getLogger("jewelry_admin.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def _report(exc: CatalogError) -> int:
    """Print a surfaced core error and return the failure exit code."""
    if isinstance(exc, ValidationError):
        _err.print(f"[red]Invalid {exc.field}: {exc.message}[/red]")
    else:
        _err.print(f"[red]Error: {exc.message}[/red]")
    return 1


def record_to_dict(record: CatalogRecord) -> dict[str, Any]:
    """Serialise a record to a plain dict for JSON output."""
    base: dict[str, Any] = {
        "id": record.id,
        "title": record.title,
        "created_at": (
            record.created_at.isoformat() if record.created_at else None
        ),
    }
    if isinstance(record, Product):
        base.update(
            name=record.name,
            price=record.price,
            currency=record.currency.value,
            sku=record.sku,
            material=record.material.value if record.material else None,
            in_stock=record.in_stock,
            collection_id=record.collection_id,
        )
    elif isinstance(record, Collection):
        base.update(
            name=record.name,
            description=record.description,
            active=record.active,
        )
    else:
        base.update(
            customer_name=record.customer_name,
            rating=record.rating.stars if record.rating else None,
            review_text=record.review_text,
            product=record.product.name if record.product else None,
            verified_purchase=record.verified_purchase,
            review_date=(
                record.effective_date.isoformat()
                if record.effective_date
                else None
            ),
        )
    return base


def _table_for(kind: ObjectKind, records: list[Any]) -> Table:
    """Build a Rich table for one page's records."""
    table = Table(
        title=kind.value.capitalize(),
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    if kind is ObjectKind.PRODUCTS:
        table.add_column("Title", max_width=40)
        table.add_column("Price", justify="right", style="green")
        table.add_column("Material")
        table.add_column("Stock", justify="center")
        table.add_column("ID", style="dim")
        for idx, p in enumerate(records, 1):
            table.add_row(
                str(idx),
                p.title,
                f"{p.currency.value} {p.price:,.2f}",
                p.material.label if p.material else "—",
                "[green]In stock[/green]" if p.in_stock else "[red]Out[/red]",
                p.id,
            )
    elif kind is ObjectKind.COLLECTIONS:
        table.add_column("Name", max_width=40)
        table.add_column("Description", max_width=50)
        table.add_column("Active", justify="center")
        table.add_column("ID", style="dim")
        for idx, c in enumerate(records, 1):
            table.add_row(
                str(idx),
                c.name or c.title,
                c.description or "—",
                "✓" if c.active else "✗",
                c.id,
            )
    else:
        table.add_column("Customer")
        table.add_column("Rating", justify="center", style="yellow")
        table.add_column("Product", max_width=30)
        table.add_column("Date")
        table.add_column("Verified", justify="center")
        table.add_column("ID", style="dim")
        for idx, r in enumerate(records, 1):
            table.add_row(
                str(idx),
                r.customer_name,
                "★" * r.rating.stars if r.rating else "—",
                r.product.name if r.product else "—",
                (
                    r.effective_date.strftime("%b %d, %Y")
                    if r.effective_date
                    else "—"
                ),
                "✓" if r.verified_purchase else "",
                r.id,
            )
    return table


def _stats_table(stats: DashboardStats) -> Table:
    table = Table(
        title="Dashboard Overview",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Total Products", str(stats.total_products))
    table.add_row("Collections", str(stats.total_collections))
    table.add_row("Customer Reviews", str(stats.total_reviews))
    table.add_row("Average Rating", f"{stats.average_rating:.1f}")
    table.add_row("In Stock", f"[green]{stats.in_stock_products}[/green]")
    table.add_row(
        "Out of Stock", f"[red]{stats.out_of_stock_products}[/red]"
    )
    return table


def _dump_json(data: Any) -> None:
    json.dump(data, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")


async def run_stats(output_format: str) -> int:
    """Print dashboard statistics; exit code 0 on success, 1 on failure."""
    try:
        aggregator = StatisticsAggregator(CosmicClient())
        stats = await aggregator.compute_stats()
    except CatalogError as exc:
        return _report(exc)

    if output_format == "table":
        Console().print(_stats_table(stats))
    else:
        _dump_json(stats.to_dict())
    return 0


def run_list(kind: ObjectKind, query: str | None, output_format: str) -> int:
    """List one kind, optionally filtered by text."""
    try:
        service = CatalogService(CosmicClient())
        records: list[Any]
        if kind is ObjectKind.PRODUCTS:
            records = service.list_products()
        elif kind is ObjectKind.COLLECTIONS:
            records = service.list_collections()
        else:
            records = service.list_reviews()
    except CatalogError as exc:
        return _report(exc)

    total = len(records)
    if query:
        records = RecordFilter.filter_by_text(records, query)
        _err.print(
            f"[dim]{len(records)} of {total} {kind.value} match "
            f"'{query}'[/dim]"
        )

    if output_format == "table":
        Console().print(_table_for(kind, records))
    else:
        _dump_json([record_to_dict(r) for r in records])
    return 0


def run_delete(kind: ObjectKind, object_id: str) -> int:
    """Delete one object."""
    try:
        CatalogService(CosmicClient()).delete(kind, object_id)
    except CatalogError as exc:
        return _report(exc)
    _err.print(f"[green]✓ Deleted {kind.value} {object_id}[/green]")
    return 0


def run_save_product(form: ProductForm, product_id: str | None = None) -> int:
    """Create (or update) a product from CLI flags."""
    try:
        product = CatalogService(CosmicClient()).save_product(
            form, product_id
        )
    except CatalogError as exc:
        return _report(exc)
    _err.print(f"[green]✓ Saved product {product.id}[/green]")
    _dump_json(record_to_dict(product))
    return 0


def run_save_collection(
    form: CollectionForm,
    collection_id: str | None = None,
) -> int:
    """Create (or update) a collection from CLI flags."""
    try:
        collection = CatalogService(CosmicClient()).save_collection(
            form, collection_id
        )
    except CatalogError as exc:
        return _report(exc)
    _err.print(f"[green]✓ Saved collection {collection.id}[/green]")
    _dump_json(record_to_dict(collection))
    return 0

