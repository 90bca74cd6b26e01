# jewelry_admin/services/catalog_service.py

"""Page-level catalog actions: validate, normalise, call Cosmic, parse."""

import logging
from typing import cast

from jewelry_admin.client.cosmic_client import CosmicClient
from jewelry_admin.models.catalog import (
    Collection,
    ObjectKind,
    Product,
    Review,
)
from jewelry_admin.models.forms import CollectionForm, ProductForm
from jewelry_admin.services.normalizer import DomainNormalizer

logger = logging.getLogger("jewelry_admin.service")


class CatalogService:
    """What the Products, Collections and Reviews pages call."""

    def __init__(self, client: CosmicClient) -> None:
        self.client = client

    # ── Lists ────────────────────────────────────────────

    def list_products(self) -> list[Product]:
        """All products, newest first."""
        raws = self.client.list(ObjectKind.PRODUCTS)
        return cast(
            list[Product],
            DomainNormalizer.from_remote_list(ObjectKind.PRODUCTS, raws),
        )

    def list_collections(self) -> list[Collection]:
        """All collections in store order."""
        raws = self.client.list(ObjectKind.COLLECTIONS)
        return cast(
            list[Collection],
            DomainNormalizer.from_remote_list(ObjectKind.COLLECTIONS, raws),
        )

    def list_reviews(self) -> list[Review]:
        """All reviews, newest review date first."""
        raws = self.client.list(ObjectKind.REVIEWS)
        return cast(
            list[Review],
            DomainNormalizer.from_remote_list(ObjectKind.REVIEWS, raws),
        )

    def get_product(self, product_id: str) -> Product | None:
        """One product, or ``None`` if it no longer exists."""
        raw = self.client.get(ObjectKind.PRODUCTS, product_id)
        if raw is None:
            return None
        return cast(
            Product, DomainNormalizer.from_remote(ObjectKind.PRODUCTS, raw)
        )

    # ── Writes ───────────────────────────────────────────

    def save_product(
        self,
        form: ProductForm,
        product_id: str | None = None,
    ) -> Product:
        """Create a product, or update *product_id* when given.

        Raises ValidationError before any request when the form is invalid.
        """
        payload = DomainNormalizer.to_write_payload(ObjectKind.PRODUCTS, form)
        if product_id:
            raw = self.client.update(ObjectKind.PRODUCTS, product_id, payload)
        else:
            raw = self.client.insert(ObjectKind.PRODUCTS, payload)
        return cast(
            Product, DomainNormalizer.from_remote(ObjectKind.PRODUCTS, raw)
        )

    def save_collection(
        self,
        form: CollectionForm,
        collection_id: str | None = None,
    ) -> Collection:
        """Create a collection, or update *collection_id* when given."""
        payload = DomainNormalizer.to_write_payload(
            ObjectKind.COLLECTIONS, form
        )
        if collection_id:
            raw = self.client.update(
                ObjectKind.COLLECTIONS, collection_id, payload
            )
        else:
            raw = self.client.insert(ObjectKind.COLLECTIONS, payload)
        return cast(
            Collection,
            DomainNormalizer.from_remote(ObjectKind.COLLECTIONS, raw),
        )

    def delete(self, kind: ObjectKind, object_id: str) -> None:
        """Delete one object of any kind."""
        logger.info("Deleting %s %s", kind.value, object_id)
        self.client.delete(kind, object_id)
