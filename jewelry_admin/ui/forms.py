# jewelry_admin/ui/forms.py

"""Modal screens: product/collection forms and delete confirmation."""

import logging
from typing import Any

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Checkbox, Input, Label, Select, Static

from jewelry_admin.errors import ValidationError
from jewelry_admin.filters.form_validator import FormValidator
from jewelry_admin.models.catalog import Collection
from jewelry_admin.models.forms import CollectionForm, ProductForm
from jewelry_admin.models.options import Currency, Material

logger = logging.getLogger("jewelry_admin.ui")


def _select_kwargs(value: str) -> dict[str, Any]:
    """Only pass ``value`` to a Select when something is chosen."""
    return {"value": value} if value else {}


class ConfirmScreen(ModalScreen[bool]):
    """Yes/no confirmation, dismissed with the answer."""

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, message: str) -> None:
        super().__init__()
        self.message = message

    def compose(self) -> ComposeResult:
        yield Vertical(
            Static(self.message, id="confirm_message"),
            Horizontal(
                Button("Delete", variant="error", id="confirm_yes"),
                Button("Cancel", id="confirm_no"),
                classes="form_buttons",
            ),
            classes="modal",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "confirm_yes")

    def action_cancel(self) -> None:
        self.dismiss(False)


class ProductFormScreen(ModalScreen[ProductForm | None]):
    """Add/edit product form; dismisses with a validated form or None."""

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(
        self,
        form: ProductForm | None = None,
        collections: list[Collection] | None = None,
    ) -> None:
        super().__init__()
        self.form = form or ProductForm()
        self.editing = form is not None
        self.collections = collections or []

    def compose(self) -> ComposeResult:
        f = self.form
        collection_options = [
            (c.name or c.title, c.id) for c in self.collections
        ]
        yield Vertical(
            Label("Edit Product" if self.editing else "Add New Product"),
            Static("", id="form_error"),
            Input(f.title, placeholder="Product title *", id="product_title"),
            Input(f.name, placeholder="Display name *", id="product_name"),
            Input(
                f.description,
                placeholder="Description",
                id="product_description",
            ),
            Horizontal(
                Input(f.price, placeholder="Price *", id="product_price"),
                Select(
                    Currency.choices(),
                    allow_blank=False,
                    value=f.currency or Currency.USD.value,
                    id="product_currency",
                ),
            ),
            Input(f.sku, placeholder="SKU", id="product_sku"),
            Select(
                Material.choices(),
                prompt="Material",
                id="product_material",
                **_select_kwargs(f.material),
            ),
            Select(
                collection_options,
                prompt="Collection",
                id="product_collection",
                **_select_kwargs(
                    f.collection_id
                    if any(cid == f.collection_id for _, cid in collection_options)
                    else ""
                ),
            ),
            Checkbox("In stock", value=f.in_stock, id="product_in_stock"),
            Horizontal(
                Button("Save", variant="primary", id="form_save"),
                Button("Cancel", id="form_cancel"),
                classes="form_buttons",
            ),
            classes="modal",
        )

    def _selected(self, selector: str) -> str:
        value = self.query_one(selector, Select).value
        return value if isinstance(value, str) else ""

    def collect(self) -> ProductForm:
        """Read the widgets into a ProductForm."""
        return ProductForm(
            title=self.query_one("#product_title", Input).value,
            name=self.query_one("#product_name", Input).value,
            description=self.query_one("#product_description", Input).value,
            price=self.query_one("#product_price", Input).value,
            currency=self._selected("#product_currency"),
            sku=self.query_one("#product_sku", Input).value,
            material=self._selected("#product_material"),
            in_stock=self.query_one("#product_in_stock", Checkbox).value,
            collection_id=self._selected("#product_collection"),
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "form_cancel":
            self.dismiss(None)
            return
        form = self.collect()
        try:
            FormValidator.validate_product(form)
        except ValidationError as exc:
            self.query_one("#form_error", Static).update(
                f"[red]{exc.message}[/red]"
            )
            return
        self.dismiss(form)

    def action_cancel(self) -> None:
        self.dismiss(None)


class CollectionFormScreen(ModalScreen[CollectionForm | None]):
    """Add/edit collection form; dismisses with a validated form or None."""

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, form: CollectionForm | None = None) -> None:
        super().__init__()
        self.form = form or CollectionForm()
        self.editing = form is not None

    def compose(self) -> ComposeResult:
        f = self.form
        yield Vertical(
            Label("Edit Collection" if self.editing else "Add New Collection"),
            Static("", id="form_error"),
            Input(f.name, placeholder="Collection name *", id="collection_name"),
            Input(
                f.title,
                placeholder="Title (defaults to name)",
                id="collection_title",
            ),
            Input(
                f.description,
                placeholder="Description",
                id="collection_description",
            ),
            Checkbox(
                "Collection is active and visible",
                value=f.active,
                id="collection_active",
            ),
            Horizontal(
                Button("Save", variant="primary", id="form_save"),
                Button("Cancel", id="form_cancel"),
                classes="form_buttons",
            ),
            classes="modal",
        )

    def collect(self) -> CollectionForm:
        """Read the widgets into a CollectionForm."""
        name = self.query_one("#collection_name", Input).value
        title = self.query_one("#collection_title", Input).value
        return CollectionForm(
            title=title if title.strip() else name,
            name=name,
            description=self.query_one(
                "#collection_description", Input
            ).value,
            active=self.query_one("#collection_active", Checkbox).value,
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "form_cancel":
            self.dismiss(None)
            return
        form = self.collect()
        try:
            FormValidator.validate_collection(form)
        except ValidationError as exc:
            self.query_one("#form_error", Static).update(
                f"[red]{exc.message}[/red]"
            )
            return
        self.dismiss(form)

    def action_cancel(self) -> None:
        self.dismiss(None)
