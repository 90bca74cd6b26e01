# jewelry_admin/config/settings.py

"""Central configuration for the jewelry catalog admin console."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the jewelry catalog admin console."""

    # --- Cosmic bucket ---
    COSMIC_API_URL: str = os.getenv(
        "COSMIC_API_URL", "https://api.cosmicjs.com/v3"
    )
    COSMIC_BUCKET_SLUG: str = os.getenv("COSMIC_BUCKET_SLUG", "")
    COSMIC_READ_KEY: str = os.getenv("COSMIC_READ_KEY", "")
    COSMIC_WRITE_KEY: str = os.getenv("COSMIC_WRITE_KEY", "")

    # --- Requests ---
    REQUEST_TIMEOUT: int = int(os.getenv("COSMIC_REQUEST_TIMEOUT", "15"))
    OBJECT_PROPS: list[str] = [
        "id",
        "slug",
        "title",
        "type",
        "metadata",
        "created_at",
        "modified_at",
    ]
    OBJECT_DEPTH: int = 1               # Resolve embedded object references
    PUBLISH_STATUS: str = "published"

    # --- Logging ---
    CONSOLE_LOG_LEVEL: str = os.getenv("JEWELRY_ADMIN_CONSOLE_LOG_LEVEL", "WARNING")
    LOG_LEVELS: dict[str, str] = {
        "jewelry_admin.cosmic": os.getenv("COSMIC_LOG_LEVEL", "DEBUG"),
        "jewelry_admin.filters": os.getenv("FILTER_LOG_LEVEL", "INFO"),
    }

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = BASE_DIR / "logs"

    # --- Pages (one per object kind) ---
    OBJECT_KINDS: list[dict[str, str]] = [
        {
            "id": "products",
            "label": "Products",
        },
        {
            "id": "collections",
            "label": "Collections",
        },
        {
            "id": "reviews",
            "label": "Reviews",
        },
    ]
