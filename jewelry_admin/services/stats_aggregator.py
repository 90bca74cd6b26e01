# jewelry_admin/services/stats_aggregator.py

"""Dashboard statistics folded from three independent list fetches."""

import asyncio
import logging
import math
from typing import Any

from jewelry_admin.client.cosmic_client import CosmicClient
from jewelry_admin.errors import CatalogError, FetchError
from jewelry_admin.models.catalog import (
    Collection,
    DashboardStats,
    ObjectKind,
    Product,
    Review,
)
from jewelry_admin.services.normalizer import DomainNormalizer

logger = logging.getLogger("jewelry_admin.stats")


def round_half_up(value: float, digits: int = 1) -> float:
    """Round like the dashboard cards do (4.25 -> 4.3, not 4.2)."""
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def summarize(
    products: list[Product],
    collections: list[Collection],
    reviews: list[Review],
) -> DashboardStats:
    """Compute the six dashboard figures from already-fetched records.

    Reviews without a parsable rating count towards ``total_reviews`` but
    not towards the average; with no ratings at all the average is 0.
    """
    in_stock = sum(1 for p in products if p.in_stock)
    ratings = [r.rating.stars for r in reviews if r.rating is not None]
    average = sum(ratings) / len(ratings) if ratings else 0.0

    return DashboardStats(
        total_products=len(products),
        total_collections=len(collections),
        total_reviews=len(reviews),
        average_rating=round_half_up(average),
        in_stock_products=in_stock,
        out_of_stock_products=len(products) - in_stock,
    )


class StatisticsAggregator:
    """Fans out the product, collection and review fetches concurrently."""

    def __init__(self, client: CosmicClient) -> None:
        self.client = client

    async def _fetch(self, kind: ObjectKind) -> list[Any]:
        raws = await asyncio.to_thread(self.client.list, kind)
        return [DomainNormalizer.from_remote(kind, raw) for raw in raws]

    async def compute_stats(self) -> DashboardStats:
        """Fetch all three kinds and summarise them.

        All-or-nothing: if any fetch fails the whole call raises a single
        :class:`FetchError` and no partial statistics are returned.
        """
        try:
            products, collections, reviews = await asyncio.gather(
                self._fetch(ObjectKind.PRODUCTS),
                self._fetch(ObjectKind.COLLECTIONS),
                self._fetch(ObjectKind.REVIEWS),
            )
        except (CatalogError, ValueError) as exc:
            logger.error(
                "Dashboard statistics failed: %s",
                exc,
                exc_info=True,
            )
            raise FetchError(
                "dashboard_stats",
                "catalog",
                "Failed to fetch dashboard statistics",
                status_code=getattr(exc, "status_code", None),
            ) from exc

        stats = summarize(products, collections, reviews)
        logger.info(
            "Dashboard stats: %d products, %d collections, %d reviews, "
            "avg rating %.1f",
            stats.total_products,
            stats.total_collections,
            stats.total_reviews,
            stats.average_rating,
        )
        return stats
