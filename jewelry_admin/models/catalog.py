# jewelry_admin/models/catalog.py

"""Typed read-models for the objects stored in the Cosmic bucket."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from jewelry_admin.models.options import Currency, Material, Rating


class ObjectKind(str, Enum):
    """Cosmic object types managed by the console."""

    PRODUCTS = "products"
    COLLECTIONS = "collections"
    REVIEWS = "reviews"


@dataclass(frozen=True)
class ImageRef:
    """A media reference: raw URL plus the imgix-transformed URL."""

    url: str
    imgix_url: str = ""


@dataclass(frozen=True)
class Collection:
    """A named group of products (rings, necklaces, ...)."""

    id: str
    title: str
    name: str
    slug: str = ""
    description: str = ""
    featured_image: ImageRef | None = None
    active: bool = True
    created_at: datetime | None = None
    modified_at: datetime | None = None

    kind = ObjectKind.COLLECTIONS


@dataclass(frozen=True)
class Product:
    """A jewelry product listing."""

    id: str
    title: str
    name: str
    price: float
    currency: Currency = Currency.USD
    slug: str = ""
    description: str = ""
    sku: str = ""
    material: Material | None = None
    images: tuple[ImageRef, ...] = field(default_factory=tuple)
    in_stock: bool = True
    collection_id: str | None = None
    collection: Collection | None = None
    created_at: datetime | None = None
    modified_at: datetime | None = None

    kind = ObjectKind.PRODUCTS


@dataclass(frozen=True)
class Review:
    """A customer review of one product."""

    id: str
    title: str
    customer_name: str
    rating: Rating | None = None
    slug: str = ""
    email: str = ""
    review_text: str = ""
    product_id: str | None = None
    product: Product | None = None
    verified_purchase: bool = False
    review_date: datetime | None = None
    created_at: datetime | None = None
    modified_at: datetime | None = None

    kind = ObjectKind.REVIEWS

    @property
    def effective_date(self) -> datetime | None:
        """Review date, falling back to the object's creation time."""
        return self.review_date or self.created_at


CatalogRecord = Product | Collection | Review


@dataclass(frozen=True)
class DashboardStats:
    """Summary figures shown on the dashboard overview."""

    total_products: int = 0
    total_collections: int = 0
    total_reviews: int = 0
    average_rating: float = 0.0
    in_stock_products: int = 0
    out_of_stock_products: int = 0

    def to_dict(self) -> dict[str, int | float]:
        """Serialise with the camelCase keys the dashboard cards use."""
        return {
            "totalProducts": self.total_products,
            "totalCollections": self.total_collections,
            "totalReviews": self.total_reviews,
            "averageRating": self.average_rating,
            "inStockProducts": self.in_stock_products,
            "outOfStockProducts": self.out_of_stock_products,
        }
