# tests/test_app.py

"""Smoke tests for the TUI application using Textual's Pilot."""

import unittest
from typing import Any
from unittest.mock import patch

from textual.widgets import Button, DataTable, Input, Static, TabbedContent

from jewelry_admin.errors import ConfigurationError, FetchError
from jewelry_admin.models.catalog import ObjectKind
from jewelry_admin.models.forms import CollectionForm, ProductForm
from jewelry_admin.ui.app import JewelryAdminApp, format_stats
from jewelry_admin.ui.forms import CollectionFormScreen, ProductFormScreen


def _objects() -> dict[ObjectKind, list[dict[str, Any]]]:
    return {
        ObjectKind.PRODUCTS: [
            {"id": "p1", "title": "Solitaire Ring", "type": "products",
             "metadata": {"name": "Solitaire", "price": 1299.99,
                          "in_stock": True}},
            {"id": "p2", "title": "Pearl Necklace", "type": "products",
             "metadata": {"name": "Pearls", "price": 450,
                          "in_stock": False}},
        ],
        ObjectKind.COLLECTIONS: [
            {"id": "c1", "title": "Bridal", "type": "collections",
             "metadata": {"name": "Bridal"}},
        ],
        ObjectKind.REVIEWS: [
            {"id": "r1", "title": "Lovely", "type": "reviews",
             "metadata": {"customer_name": "Ana", "rating": {"key": "4"}}},
        ],
    }


class FakeClient:
    """In-memory stand-in for CosmicClient."""

    def __init__(self, failing: bool = False) -> None:
        self.objects = _objects()
        self.failing = failing
        self.deleted: list[tuple[ObjectKind, str]] = []
        self.list_calls: dict[ObjectKind, int] = {kind: 0 for kind in ObjectKind}

    def list(self, kind: ObjectKind) -> list[dict[str, Any]]:
        self.list_calls[kind] += 1
        if self.failing:
            raise FetchError("list", kind.value)
        return self.objects[kind]

    def delete(self, kind: ObjectKind, object_id: str) -> None:
        self.deleted.append((kind, object_id))
        self.objects[kind] = [
            o for o in self.objects[kind] if o["id"] != object_id
        ]


class TestJewelryAdminApp(unittest.IsolatedAsyncioTestCase):
    """Smoke tests for the Textual TUI."""

    async def test_app_composes_without_crash(self) -> None:
        """The app starts and renders every page."""
        app = JewelryAdminApp(client=FakeClient())  # type: ignore[arg-type]
        async with app.run_test() as pilot:
            app.query_one("#pages", TabbedContent)
            app.query_one("#stats_panel", Static)
            for kind in ObjectKind:
                app.query_one(f"#table_{kind.value}", DataTable)
                app.query_one(f"#filter_{kind.value}", Input)
            await pilot.pause()

    async def test_pages_populate(self) -> None:
        """Each table holds one row per fetched record."""
        app = JewelryAdminApp(client=FakeClient())  # type: ignore[arg-type]
        async with app.run_test() as pilot:
            for kind in ObjectKind:
                await app.refresh_page(kind)
            await pilot.pause()

            self.assertEqual(app._table(ObjectKind.PRODUCTS).row_count, 2)
            self.assertEqual(app._table(ObjectKind.COLLECTIONS).row_count, 1)
            self.assertEqual(app._table(ObjectKind.REVIEWS).row_count, 1)

    async def test_dashboard_stats(self) -> None:
        """The dashboard reflects the fetched catalog."""
        app = JewelryAdminApp(client=FakeClient())  # type: ignore[arg-type]
        async with app.run_test() as pilot:
            stats = await app.refresh_dashboard()
            await pilot.pause()

            assert stats is not None
            self.assertEqual(stats.total_products, 2)
            self.assertEqual(stats.in_stock_products, 1)
            self.assertEqual(stats.average_rating, 4.0)
            self.assertFalse(hasattr(app, "stats"))

    async def test_fetch_failure_keeps_app_running(self) -> None:
        """A failed fetch leaves empty pages and no statistics."""
        app = JewelryAdminApp(  # type: ignore[arg-type]
            client=FakeClient(failing=True)
        )
        async with app.run_test(notifications=True) as pilot:
            stats = await app.refresh_dashboard()
            await app.refresh_page(ObjectKind.PRODUCTS)
            await pilot.pause()

            self.assertIsNone(stats)
            self.assertEqual(app.products, [])

    async def test_unconfigured_client(self) -> None:
        """Missing configuration is reported instead of crashing."""
        with patch(
            "jewelry_admin.ui.app.CosmicClient",
            side_effect=ConfigurationError("COSMIC_BUCKET_SLUG missing"),
        ):
            app = JewelryAdminApp()
        async with app.run_test(notifications=True) as pilot:
            await pilot.pause()
            self.assertEqual(app.startup_error, "COSMIC_BUCKET_SLUG missing")
            self.assertIsNone(app.service)

    async def test_filter_narrows_table(self) -> None:
        """Typing in a page's filter box re-filters locally."""
        app = JewelryAdminApp(client=FakeClient())  # type: ignore[arg-type]
        async with app.run_test() as pilot:
            await app.refresh_page(ObjectKind.PRODUCTS)
            app.query_one("#filter_products", Input).value = "pearl"
            await pilot.pause()

            self.assertEqual(app._table(ObjectKind.PRODUCTS).row_count, 1)
            self.assertEqual(len(app.products), 2)

    async def test_delete_removes_row_locally(self) -> None:
        """A successful delete drops the row without a re-fetch."""
        client = FakeClient()
        app = JewelryAdminApp(client=client)  # type: ignore[arg-type]
        async with app.run_test() as pilot:
            await app.refresh_page(ObjectKind.PRODUCTS)
            await app.delete_record(ObjectKind.PRODUCTS, "p1")
            await pilot.pause()

            self.assertEqual(client.deleted, [(ObjectKind.PRODUCTS, "p1")])
            self.assertEqual([p.id for p in app.products], ["p2"])
            self.assertEqual(app._table(ObjectKind.PRODUCTS).row_count, 1)

    async def test_dashboard_recounts_after_delete_and_tab_switch(self) -> None:
        """Deleting a product lowers the dashboard total on the next view."""
        client = FakeClient()
        app = JewelryAdminApp(client=client)  # type: ignore[arg-type]
        with patch(
            "jewelry_admin.ui.app.format_stats", wraps=format_stats
        ) as render:
            async with app.run_test() as pilot:
                await app.refresh_page(ObjectKind.PRODUCTS)
                await app.delete_record(ObjectKind.PRODUCTS, "p1")
                await app.workers.wait_for_complete()
                await pilot.pause()
                self.assertEqual(render.call_args.args[0].total_products, 1)

                fetches_before = client.list_calls[ObjectKind.PRODUCTS]
                pages = app.query_one("#pages", TabbedContent)
                pages.active = "products"
                await pilot.pause()
                pages.active = "dashboard"
                await pilot.pause()
                await app.workers.wait_for_complete()
                await pilot.pause()

                self.assertGreater(
                    client.list_calls[ObjectKind.PRODUCTS], fetches_before
                )
                self.assertEqual(render.call_args.args[0].total_products, 1)


class TestFormScreens(unittest.IsolatedAsyncioTestCase):
    """Modal form behaviour."""

    async def test_invalid_product_stays_open(self) -> None:
        """Saving an invalid product shows the error and does not dismiss."""
        results: list[ProductForm | None] = []
        app = JewelryAdminApp(client=FakeClient())  # type: ignore[arg-type]
        async with app.run_test(size=(120, 60)) as pilot:
            screen = ProductFormScreen(
                ProductForm(title="Ring", name="Ring", price="abc")
            )
            app.push_screen(screen, results.append)
            await pilot.pause()
            screen.query_one("#form_save", Button).press()
            await pilot.pause()

            self.assertEqual(results, [])
            self.assertIs(app.screen, screen)

    async def test_valid_product_dismisses_with_form(self) -> None:
        """A valid form is handed back to the caller."""
        results: list[ProductForm | None] = []
        app = JewelryAdminApp(client=FakeClient())  # type: ignore[arg-type]
        async with app.run_test(size=(120, 60)) as pilot:
            screen = ProductFormScreen(
                ProductForm(title="Ring", name="Ring", price="99.5",
                            currency="GBP", material="silver")
            )
            app.push_screen(screen, results.append)
            await pilot.pause()
            screen.query_one("#form_save", Button).press()
            await pilot.pause()

            self.assertEqual(len(results), 1)
            form = results[0]
            assert form is not None
            self.assertEqual(form.price, "99.5")
            self.assertEqual(form.currency, "GBP")
            self.assertEqual(form.material, "silver")

    async def test_collection_title_defaults_to_name(self) -> None:
        """A blank collection title is filled from the name."""
        results: list[CollectionForm | None] = []
        app = JewelryAdminApp(client=FakeClient())  # type: ignore[arg-type]
        async with app.run_test(size=(120, 60)) as pilot:
            screen = CollectionFormScreen()
            app.push_screen(screen, results.append)
            await pilot.pause()
            screen.query_one("#collection_name", Input).value = "Vintage"
            screen.query_one("#form_save", Button).press()
            await pilot.pause()

            self.assertEqual(len(results), 1)
            form = results[0]
            assert form is not None
            self.assertEqual(form.title, "Vintage")
            self.assertEqual(form.name, "Vintage")

    async def test_cancel_dismisses_with_none(self) -> None:
        """Cancel hands back None."""
        results: list[CollectionForm | None] = []
        app = JewelryAdminApp(client=FakeClient())  # type: ignore[arg-type]
        async with app.run_test(size=(120, 60)) as pilot:
            screen = CollectionFormScreen()
            app.push_screen(screen, results.append)
            await pilot.pause()
            screen.query_one("#form_cancel", Button).press()
            await pilot.pause()

            self.assertEqual(results, [None])


if __name__ == "__main__":
    unittest.main()
