# jewelry_admin/models/forms.py

"""Flat form field sets as the create/edit views collect them."""

from dataclasses import dataclass

from jewelry_admin.models.catalog import Collection, Product


@dataclass
class ProductForm:
    """Raw product form input; price stays text until validated."""

    title: str = ""
    name: str = ""
    description: str = ""
    price: str = ""
    currency: str = "USD"
    sku: str = ""
    material: str = ""
    in_stock: bool = True
    collection_id: str = ""


@dataclass
class CollectionForm:
    """Raw collection form input."""

    title: str = ""
    name: str = ""
    description: str = ""
    active: bool = True


def _price_text(price: float) -> str:
    """Render a stored price back into an editable string (250.0 -> '250')."""
    text = str(price)
    return text[:-2] if text.endswith(".0") else text


def product_form_from_record(product: Product) -> ProductForm:
    """Pre-fill a product form for editing."""
    return ProductForm(
        title=product.title,
        name=product.name,
        description=product.description,
        price=_price_text(product.price),
        currency=product.currency.value,
        sku=product.sku,
        material=product.material.value if product.material else "",
        in_stock=product.in_stock,
        collection_id=product.collection_id or "",
    )


def collection_form_from_record(collection: Collection) -> CollectionForm:
    """Pre-fill a collection form for editing."""
    return CollectionForm(
        title=collection.title,
        name=collection.name,
        description=collection.description,
        active=collection.active,
    )
