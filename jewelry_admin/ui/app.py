# jewelry_admin/ui/app.py

"""Terminal UI for the jewelry catalog admin console."""

import asyncio
import logging
from typing import Any, cast

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.widgets import (
    DataTable,
    Footer,
    Header,
    Input,
    Static,
    TabbedContent,
    TabPane,
)

from jewelry_admin.client.cosmic_client import CosmicClient
from jewelry_admin.config.settings import Settings
from jewelry_admin.errors import CatalogError
from jewelry_admin.filters.record_filter import RecordFilter
from jewelry_admin.models.catalog import (
    Collection,
    DashboardStats,
    ObjectKind,
    Product,
    Review,
)
from jewelry_admin.models.forms import (
    CollectionForm,
    ProductForm,
    collection_form_from_record,
    product_form_from_record,
)
from jewelry_admin.services.catalog_service import CatalogService
from jewelry_admin.services.stats_aggregator import StatisticsAggregator
from jewelry_admin.ui.forms import (
    CollectionFormScreen,
    ConfirmScreen,
    ProductFormScreen,
)

logger = logging.getLogger("jewelry_admin.ui")

_COLUMNS: dict[ObjectKind, tuple[str, ...]] = {
    ObjectKind.PRODUCTS: ("Title", "Price", "Material", "Stock", "Collection"),
    ObjectKind.COLLECTIONS: ("Name", "Description", "Active"),
    ObjectKind.REVIEWS: ("Customer", "Rating", "Product", "Date", "Verified"),
}


def format_stats(stats: DashboardStats) -> str:
    """Render the six dashboard cards as console markup."""
    return (
        f"[b]Total Products[/b]     {stats.total_products}\n"
        f"[b]Collections[/b]        {stats.total_collections}\n"
        f"[b]Customer Reviews[/b]   {stats.total_reviews}\n"
        f"[b]Average Rating[/b]     [yellow]{stats.average_rating:.1f}[/yellow]\n"
        f"[b]In Stock[/b]           [green]{stats.in_stock_products}[/green]\n"
        f"[b]Out of Stock[/b]       [red]{stats.out_of_stock_products}[/red]"
    )


class JewelryAdminApp(App[object]):
    """Dashboard, Products, Collections and Reviews pages as tabs."""

    TITLE = "Jewelry Store Admin"

    CSS = """
    .modal {
        width: 70;
        height: auto;
        border: thick $primary;
        background: $surface;
        padding: 1 2;
    }
    ProductFormScreen, CollectionFormScreen, ConfirmScreen {
        align: center middle;
    }
    .form_buttons {
        height: auto;
        margin-top: 1;
    }
    #stats_panel {
        padding: 1 2;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("r", "refresh", "Refresh"),
        Binding("n", "new", "New"),
        Binding("e", "edit", "Edit"),
        Binding("d", "delete", "Delete"),
    ]

    def __init__(self, client: CosmicClient | None = None) -> None:
        super().__init__()
        self.settings = Settings()
        self.startup_error: str | None = None
        self.service: CatalogService | None = None
        self.aggregator: StatisticsAggregator | None = None
        try:
            cosmic = client or CosmicClient()
        except CatalogError as exc:
            self.startup_error = exc.message
        else:
            self.service = CatalogService(cosmic)
            self.aggregator = StatisticsAggregator(cosmic)

        self.products: list[Product] = []
        self.collections: list[Collection] = []
        self.reviews: list[Review] = []
        self._visible: dict[ObjectKind, list[Any]] = {
            kind: [] for kind in ObjectKind
        }

    def compose(self) -> ComposeResult:
        """Build the widget tree: one tab per page."""
        yield Header()
        with TabbedContent(initial="dashboard", id="pages"):
            with TabPane("Dashboard", id="dashboard"):
                yield Static("Loading...", id="stats_panel")
            for entry in self.settings.OBJECT_KINDS:
                kind_id = entry["id"]
                with TabPane(entry["label"], id=kind_id):
                    yield Container(
                        Input(
                            placeholder=f"Filter {entry['label'].lower()}...",
                            id=f"filter_{kind_id}",
                        ),
                        Static("", id=f"status_{kind_id}"),
                        DataTable(
                            id=f"table_{kind_id}",
                            zebra_stripes=True,
                            cursor_type="row",
                        ),
                    )
        yield Footer()

    async def on_mount(self) -> None:
        """Configure table columns and load every page."""
        for kind, columns in _COLUMNS.items():
            self._table(kind).add_columns(*columns)

        if self.startup_error:
            self.query_one("#stats_panel", Static).update(
                f"[red]{self.startup_error}[/red]"
            )
            self.notify(self.startup_error, severity="error")
            return

        await asyncio.gather(
            self.refresh_dashboard(),
            *(self.refresh_page(kind) for kind in ObjectKind),
        )

    # ── Helpers ──────────────────────────────────────────

    def _table(self, kind: ObjectKind) -> DataTable[str | Text]:
        return cast(
            DataTable[str | Text],
            self.query_one(f"#table_{kind.value}", DataTable),
        )

    def _active_kind(self) -> ObjectKind | None:
        active = self.query_one("#pages", TabbedContent).active
        try:
            return ObjectKind(active)
        except ValueError:
            return None

    def _records(self, kind: ObjectKind) -> list[Any]:
        if kind is ObjectKind.PRODUCTS:
            return self.products
        if kind is ObjectKind.COLLECTIONS:
            return self.collections
        return self.reviews

    def _set_records(self, kind: ObjectKind, records: list[Any]) -> None:
        if kind is ObjectKind.PRODUCTS:
            self.products = records
        elif kind is ObjectKind.COLLECTIONS:
            self.collections = records
        else:
            self.reviews = records

    def _selected(self, kind: ObjectKind) -> Any | None:
        row = self._table(kind).cursor_row
        visible = self._visible[kind]
        if 0 <= row < len(visible):
            return visible[row]
        return None

    # ── Loading ──────────────────────────────────────────

    async def refresh_dashboard(self) -> DashboardStats | None:
        """Recompute dashboard statistics from fresh fetches and render them.

        Nothing is kept between calls: every dashboard view re-fetches.
        """
        if self.aggregator is None:
            return None
        panel = self.query_one("#stats_panel", Static)
        try:
            stats = await self.aggregator.compute_stats()
        except CatalogError as exc:
            panel.update(f"[red]{exc.message}[/red]")
            self.notify(exc.message, severity="error")
            return None
        panel.update(format_stats(stats))
        return stats

    async def refresh_page(self, kind: ObjectKind) -> None:
        """Re-fetch one page's list and redraw it."""
        if self.service is None:
            return
        loaders = {
            ObjectKind.PRODUCTS: self.service.list_products,
            ObjectKind.COLLECTIONS: self.service.list_collections,
            ObjectKind.REVIEWS: self.service.list_reviews,
        }
        status = self.query_one(f"#status_{kind.value}", Static)
        status.update(f"Loading {kind.value}...")
        try:
            records: list[Any] = await asyncio.to_thread(loaders[kind])
        except CatalogError as exc:
            logger.error("Loading %s failed: %s", kind.value, exc)
            status.update(f"[red]{exc.message}[/red]")
            self.notify(exc.message, severity="error")
            return
        self._set_records(kind, records)
        self.populate_table(kind)

    def populate_table(self, kind: ObjectKind) -> None:
        """Fill a page's DataTable with its filtered records."""
        table = self._table(kind)
        table.clear()
        query = self.query_one(f"#filter_{kind.value}", Input).value
        records = self._records(kind)
        visible = RecordFilter.filter_by_text(records, query)
        self._visible[kind] = visible

        for record in visible:
            table.add_row(*self._row(record))

        status = self.query_one(f"#status_{kind.value}", Static)
        if query.strip():
            status.update(f"{len(visible)} of {len(records)} {kind.value}")
        else:
            status.update(f"{len(records)} {kind.value}")

    @staticmethod
    def _row(record: Any) -> tuple[str | Text, ...]:
        if isinstance(record, Product):
            return (
                record.title[:50],
                Text(
                    f"{record.currency.value} {record.price:,.2f}",
                    style="green",
                ),
                record.material.label if record.material else "",
                (
                    Text("In stock", style="green")
                    if record.in_stock
                    else Text("Out of stock", style="red")
                ),
                record.collection.name if record.collection else "",
            )
        if isinstance(record, Collection):
            return (
                record.name or record.title,
                record.description[:60],
                "✓" if record.active else "✗",
            )
        return (
            record.customer_name,
            Text("★" * record.rating.stars, style="yellow")
            if record.rating
            else "",
            record.product.name if record.product else "",
            (
                record.effective_date.strftime("%b %d, %Y")
                if record.effective_date
                else ""
            ),
            "✓" if record.verified_purchase else "",
        )

    def on_tabbed_content_tab_activated(
        self, event: TabbedContent.TabActivated
    ) -> None:
        """Recompute the statistics each time the dashboard is shown."""
        if event.pane.id == "dashboard":
            self.run_worker(
                self.refresh_dashboard(),
                group="dashboard",
                exclusive=True,
            )

    def on_input_changed(self, event: Input.Changed) -> None:
        """Re-filter a page as its search box changes."""
        input_id = event.input.id or ""
        if input_id.startswith("filter_"):
            self.populate_table(ObjectKind(input_id.removeprefix("filter_")))

    # ── Actions ──────────────────────────────────────────

    async def action_refresh(self) -> None:
        """Reload the active page."""
        kind = self._active_kind()
        if kind is None:
            await self.refresh_dashboard()
        else:
            await self.refresh_page(kind)

    def action_new(self) -> None:
        """Open an empty form for the active page."""
        kind = self._active_kind()
        if kind is ObjectKind.PRODUCTS:
            self.push_screen(
                ProductFormScreen(collections=self.collections),
                lambda form: self._on_product_form(form, None),
            )
        elif kind is ObjectKind.COLLECTIONS:
            self.push_screen(
                CollectionFormScreen(),
                lambda form: self._on_collection_form(form, None),
            )
        else:
            self.notify(
                "Open the Products or Collections page to add items",
                severity="warning",
            )

    def action_edit(self) -> None:
        """Open the selected record in its form."""
        kind = self._active_kind()
        if kind not in (ObjectKind.PRODUCTS, ObjectKind.COLLECTIONS):
            self.notify("Reviews are read-only", severity="warning")
            return
        record = self._selected(kind)
        if record is None:
            self.notify("Select a row first", severity="warning")
            return
        if isinstance(record, Product):
            self.push_screen(
                ProductFormScreen(
                    product_form_from_record(record),
                    collections=self.collections,
                ),
                lambda form: self._on_product_form(form, record.id),
            )
        else:
            self.push_screen(
                CollectionFormScreen(collection_form_from_record(record)),
                lambda form: self._on_collection_form(form, record.id),
            )

    def action_delete(self) -> None:
        """Ask for confirmation, then delete the selected record."""
        kind = self._active_kind()
        if kind is None:
            return
        record = self._selected(kind)
        if record is None:
            self.notify("Select a row first", severity="warning")
            return
        singular = kind.value.rstrip("s")
        self.push_screen(
            ConfirmScreen(f"Are you sure you want to delete this {singular}?"),
            lambda confirmed: self._on_delete_confirmed(
                confirmed, kind, record.id
            ),
        )

    # ── Modal callbacks ──────────────────────────────────

    def _on_product_form(
        self, form: ProductForm | None, product_id: str | None
    ) -> None:
        if form is not None:
            self.run_worker(self.save_product(form, product_id))

    def _on_collection_form(
        self, form: CollectionForm | None, collection_id: str | None
    ) -> None:
        if form is not None:
            self.run_worker(self.save_collection(form, collection_id))

    def _on_delete_confirmed(
        self, confirmed: bool | None, kind: ObjectKind, object_id: str
    ) -> None:
        if confirmed:
            self.run_worker(self.delete_record(kind, object_id))

    async def save_product(
        self, form: ProductForm, product_id: str | None
    ) -> None:
        """Write a product, then refresh the page and dashboard."""
        if self.service is None:
            return
        try:
            saved = await asyncio.to_thread(
                self.service.save_product, form, product_id
            )
        except CatalogError as exc:
            logger.error("Saving product failed: %s", exc)
            self.notify(exc.message, severity="error")
            return
        self.notify(f"Saved {saved.title}")
        await self.refresh_page(ObjectKind.PRODUCTS)
        await self.refresh_dashboard()

    async def save_collection(
        self, form: CollectionForm, collection_id: str | None
    ) -> None:
        """Write a collection, then refresh the page and dashboard."""
        if self.service is None:
            return
        try:
            saved = await asyncio.to_thread(
                self.service.save_collection, form, collection_id
            )
        except CatalogError as exc:
            logger.error("Saving collection failed: %s", exc)
            self.notify(exc.message, severity="error")
            return
        self.notify(f"Saved {saved.title}")
        await self.refresh_page(ObjectKind.COLLECTIONS)
        await self.refresh_dashboard()

    async def delete_record(self, kind: ObjectKind, object_id: str) -> None:
        """Delete remotely, drop the row locally, then recount the dashboard.

        The page list is not re-fetched; the statistics always are.
        """
        if self.service is None:
            return
        try:
            await asyncio.to_thread(self.service.delete, kind, object_id)
        except CatalogError as exc:
            logger.error("Deleting %s %s failed: %s", kind.value, object_id, exc)
            self.notify(exc.message, severity="error")
            return
        self._set_records(
            kind, RecordFilter.remove_by_id(self._records(kind), object_id)
        )
        self.populate_table(kind)
        self.notify(f"Deleted {kind.value.rstrip('s')}")
        await self.refresh_dashboard()
