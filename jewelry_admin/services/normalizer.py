# jewelry_admin/services/normalizer.py

"""Translation between raw Cosmic objects and typed catalog records.

Cosmic keeps every kind's domain fields in an untyped ``metadata`` bag.
This module is the only place that reads or writes that bag: views work
with :mod:`jewelry_admin.models.catalog` records and
:mod:`jewelry_admin.models.forms` field sets, never with raw dicts.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from jewelry_admin.config.settings import Settings
from jewelry_admin.filters.form_validator import FormValidator
from jewelry_admin.models.catalog import (
    CatalogRecord,
    Collection,
    ImageRef,
    ObjectKind,
    Product,
    Review,
)
from jewelry_admin.models.forms import CollectionForm, ProductForm
from jewelry_admin.models.options import Currency, Material, Rating

logger = logging.getLogger("jewelry_admin.normalizer")

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)

# US month-first order, matching how the storefront displays dates
_TEXT_DATE_FORMATS = (
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
    "%d %B %Y",
    "%d %b %Y",
    "%m/%d/%Y",
    "%Y/%m/%d",
)


def _parse_text_date(text: str) -> datetime | None:
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    for fmt in _TEXT_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a stored date or datetime; naive values are taken as UTC.

    ISO 8601 is the normal form.  Dates typed by hand in the CMS
    ("June 1, 2024", "06/01/2024") are also accepted.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text_date = _parse_text_date(value.strip())
        if text_date is None:
            logger.warning("Unparsable timestamp %r, ignoring it", value)
            return None
        parsed = text_date
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _as_bool(value: Any, default: bool) -> bool:
    if value is None or value == "":
        return default
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return bool(value)


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def _as_price(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _image(raw: Any) -> ImageRef | None:
    if isinstance(raw, dict) and raw.get("url"):
        return ImageRef(
            url=str(raw["url"]),
            imgix_url=_as_text(raw.get("imgix_url")),
        )
    return None


def _reference(raw: Any) -> tuple[str | None, dict[str, Any] | None]:
    """Split an object reference into ``(id, embedded object)``."""
    if isinstance(raw, dict):
        ref_id = raw.get("id")
        return (str(ref_id) if ref_id else None), raw
    if isinstance(raw, str) and raw.strip():
        return raw.strip(), None
    return None, None


class DomainNormalizer:
    """Builds write payloads and parses remote objects, per object kind."""

    # ── Write side ───────────────────────────────────────

    @staticmethod
    def to_write_payload(
        kind: ObjectKind,
        form: ProductForm | CollectionForm,
    ) -> dict[str, Any]:
        """Validate *form* and build the insertOne/updateOne body.

        Raises:
            ValidationError: when a field is rejected; nothing is built.
        """
        FormValidator.validate(kind, form)

        if isinstance(form, ProductForm):
            return DomainNormalizer._product_payload(form)
        return DomainNormalizer._collection_payload(form)

    @staticmethod
    def _product_payload(form: ProductForm) -> dict[str, Any]:
        currency = Currency(form.currency)
        metadata: dict[str, Any] = {
            "name": form.name.strip(),
            "description": form.description.strip(),
            "price": FormValidator.parse_price(form.price),
            "currency": currency.to_option().to_dict(),
            "sku": form.sku.strip(),
            "in_stock": form.in_stock,
        }

        material = Material.from_key(form.material)
        if material is not None:
            metadata["material"] = material.to_option().to_dict()

        # An empty reference is rejected by Cosmic; omit the key instead
        collection_id = form.collection_id.strip()
        if collection_id:
            metadata["collection"] = collection_id

        return {
            "title": form.title.strip(),
            "type": ObjectKind.PRODUCTS.value,
            "status": Settings.PUBLISH_STATUS,
            "metadata": metadata,
        }

    @staticmethod
    def _collection_payload(form: CollectionForm) -> dict[str, Any]:
        return {
            "title": form.title.strip(),
            "type": ObjectKind.COLLECTIONS.value,
            "status": Settings.PUBLISH_STATUS,
            "metadata": {
                "name": form.name.strip(),
                "description": form.description.strip(),
                "active": form.active,
            },
        }

    # ── Read side ────────────────────────────────────────

    @staticmethod
    def from_remote(kind: ObjectKind, raw: dict[str, Any]) -> CatalogRecord:
        """Parse one raw Cosmic object into the record type for *kind*.

        Missing optional metadata falls back to defaults (``in_stock`` and
        ``active`` to True, text fields to ``""``).

        Raises:
            ValueError: if the object's ``type`` is not *kind*.
        """
        raw_type = raw.get("type")
        if raw_type and raw_type != kind.value:
            msg = f"Expected a {kind.value} object, got {raw_type!r}"
            raise ValueError(msg)

        if kind is ObjectKind.PRODUCTS:
            return DomainNormalizer._product(raw)
        if kind is ObjectKind.COLLECTIONS:
            return DomainNormalizer._collection(raw)
        return DomainNormalizer._review(raw)

    @staticmethod
    def from_remote_list(
        kind: ObjectKind,
        raws: list[dict[str, Any]],
    ) -> list[CatalogRecord]:
        """Parse a list response and apply the sort policy for *kind*."""
        records = [DomainNormalizer.from_remote(kind, raw) for raw in raws]
        return DomainNormalizer.sort_records(kind, records)

    @staticmethod
    def _product(raw: dict[str, Any]) -> Product:
        meta: dict[str, Any] = raw.get("metadata") or {}
        collection_id, embedded = _reference(meta.get("collection"))
        collection = (
            DomainNormalizer._collection(embedded) if embedded else None
        )
        images = tuple(
            image
            for image in (_image(i) for i in meta.get("product_images") or [])
            if image is not None
        )
        return Product(
            id=_as_text(raw.get("id")),
            slug=_as_text(raw.get("slug")),
            title=_as_text(raw.get("title")),
            name=_as_text(meta.get("name")),
            description=_as_text(meta.get("description")),
            price=_as_price(meta.get("price")),
            currency=Currency.from_key(meta.get("currency")) or Currency.USD,
            sku=_as_text(meta.get("sku")),
            material=Material.from_key(meta.get("material")),
            images=images,
            in_stock=_as_bool(meta.get("in_stock"), default=True),
            collection_id=collection_id,
            collection=collection,
            created_at=parse_timestamp(raw.get("created_at")),
            modified_at=parse_timestamp(raw.get("modified_at")),
        )

    @staticmethod
    def _collection(raw: dict[str, Any]) -> Collection:
        meta: dict[str, Any] = raw.get("metadata") or {}
        return Collection(
            id=_as_text(raw.get("id")),
            slug=_as_text(raw.get("slug")),
            title=_as_text(raw.get("title")),
            name=_as_text(meta.get("name")),
            description=_as_text(meta.get("description")),
            featured_image=_image(meta.get("featured_image")),
            active=_as_bool(meta.get("active"), default=True),
            created_at=parse_timestamp(raw.get("created_at")),
            modified_at=parse_timestamp(raw.get("modified_at")),
        )

    @staticmethod
    def _review(raw: dict[str, Any]) -> Review:
        meta: dict[str, Any] = raw.get("metadata") or {}
        product_id, embedded = _reference(meta.get("product"))
        product = DomainNormalizer._product(embedded) if embedded else None
        return Review(
            id=_as_text(raw.get("id")),
            slug=_as_text(raw.get("slug")),
            title=_as_text(raw.get("title")),
            customer_name=_as_text(meta.get("customer_name")),
            email=_as_text(meta.get("email")),
            rating=Rating.from_key(meta.get("rating")),
            review_text=_as_text(meta.get("review_text")),
            product_id=product_id,
            product=product,
            verified_purchase=_as_bool(
                meta.get("verified_purchase"), default=False
            ),
            review_date=parse_timestamp(meta.get("review_date")),
            created_at=parse_timestamp(raw.get("created_at")),
            modified_at=parse_timestamp(raw.get("modified_at")),
        )

    # ── Sort policy ──────────────────────────────────────

    @staticmethod
    def sort_records(
        kind: ObjectKind,
        records: list[CatalogRecord],
    ) -> list[CatalogRecord]:
        """Newest first for products and reviews; collections unchanged.

        Products sort on ``created_at``, reviews on ``review_date`` with a
        fallback to ``created_at``.  Undated records go last.
        """
        if kind is ObjectKind.COLLECTIONS:
            return list(records)

        def sort_key(record: CatalogRecord) -> datetime:
            if isinstance(record, Review):
                return record.effective_date or _OLDEST
            return record.created_at or _OLDEST

        return sorted(records, key=sort_key, reverse=True)
