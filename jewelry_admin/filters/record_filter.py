# jewelry_admin/filters/record_filter.py

"""Client-side filtering of the per-page record lists."""

import logging
from typing import TypeVar

from jewelry_admin.models.catalog import (
    CatalogRecord,
    Collection,
    Product,
    Review,
)

logger = logging.getLogger("jewelry_admin.filters")

RecordT = TypeVar("RecordT", Product, Collection, Review)


def _searchable_text(record: CatalogRecord) -> str:
    """Concatenate the fields a page search box matches against."""
    parts: list[str] = [record.title]
    if isinstance(record, Product):
        parts += [record.name, record.sku, record.description]
        if record.material is not None:
            parts.append(record.material.label)
        if record.collection is not None:
            parts.append(record.collection.name)
    elif isinstance(record, Collection):
        parts += [record.name, record.description]
    else:
        parts += [record.customer_name, record.email, record.review_text]
        if record.product is not None:
            parts.append(record.product.name)
    return " ".join(p for p in parts if p).lower()


class RecordFilter:
    """Filter locally held records without re-fetching."""

    @staticmethod
    def filter_by_text(
        records: list[RecordT],
        text: str,
    ) -> list[RecordT]:
        """Keep records whose searchable fields contain *text*.

        Matching is case-insensitive; a blank query returns every record.
        """
        needle = text.strip().lower()
        if not needle:
            return list(records)

        kept = [r for r in records if needle in _searchable_text(r)]
        logger.debug(
            "Text filter %r kept %d of %d records",
            needle,
            len(kept),
            len(records),
        )
        return kept

    @staticmethod
    def remove_by_id(
        records: list[RecordT],
        record_id: str,
    ) -> list[RecordT]:
        """Drop the record with *record_id* (used after a delete)."""
        return [r for r in records if r.id != record_id]
