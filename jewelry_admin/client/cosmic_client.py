# jewelry_admin/client/cosmic_client.py

"""Thin CRUD adapter over the Cosmic v3 object API."""

import json
import logging
from typing import Any

from curl_cffi import requests as curl_requests

from jewelry_admin.config.settings import Settings
from jewelry_admin.errors import (
    ConfigurationError,
    FetchError,
    RemoteError,
    WriteError,
)
from jewelry_admin.models.catalog import ObjectKind


class CosmicClient:
    """Pass-through CRUD for one Cosmic bucket.

    Every call is a single request: there are no retries and no caching.
    Not-found on ``list`` is an empty result and on ``get`` is ``None``;
    any other failure is raised as :class:`FetchError` (reads) or
    :class:`WriteError` (writes) naming the operation that failed.
    """

    def __init__(
        self,
        bucket_slug: str | None = None,
        read_key: str | None = None,
        write_key: str | None = None,
        api_url: str | None = None,
    ) -> None:
        self.settings = Settings()
        self.bucket_slug = bucket_slug or self.settings.COSMIC_BUCKET_SLUG
        self.read_key = read_key or self.settings.COSMIC_READ_KEY
        self.write_key = write_key or self.settings.COSMIC_WRITE_KEY
        self.api_url = (api_url or self.settings.COSMIC_API_URL).rstrip("/")
        self.logger = logging.getLogger("jewelry_admin.cosmic")

        if not self.bucket_slug or not self.read_key:
            self.logger.error("Cosmic bucket slug or read key is not set")
            raise ConfigurationError(
                "COSMIC_BUCKET_SLUG and COSMIC_READ_KEY are required"
            )

        self.session = curl_requests.Session()
        self._request_timeout: int = self.settings.REQUEST_TIMEOUT

    # ── Private helpers ──────────────────────────────────

    @property
    def _objects_url(self) -> str:
        return f"{self.api_url}/buckets/{self.bucket_slug}/objects"

    def _read_params(self) -> dict[str, str]:
        return {
            "read_key": self.read_key,
            "props": ",".join(self.settings.OBJECT_PROPS),
            "depth": str(self.settings.OBJECT_DEPTH),
        }

    def _write_headers(self, operation: str, kind: ObjectKind) -> dict[str, str]:
        if not self.write_key:
            self.logger.error(
                "Refusing to %s %s: COSMIC_WRITE_KEY is not set",
                operation,
                kind.value,
            )
            raise ConfigurationError(
                f"COSMIC_WRITE_KEY is required to {operation} {kind.value}"
            )
        return {
            "Authorization": f"Bearer {self.write_key}",
            "Content-Type": "application/json",
        }

    def _send(
        self,
        method: str,
        url: str,
        operation: str,
        kind: ObjectKind,
        error_cls: type[RemoteError],
        **kwargs: Any,
    ) -> curl_requests.Response:
        """Issue one request, wrapping transport errors in *error_cls*."""
        try:
            return self.session.request(
                method,
                url,
                timeout=self._request_timeout,
                **kwargs,
            )
        except Exception as exc:
            self.logger.error(
                "[%s %s] Request error: %s",
                operation,
                kind.value,
                exc,
                exc_info=True,
            )
            raise error_cls(operation, kind.value) from exc

    def _decode(
        self,
        resp: curl_requests.Response,
        operation: str,
        kind: ObjectKind,
        error_cls: type[RemoteError],
    ) -> dict[str, Any]:
        """Check the status and decode the JSON body."""
        if not 200 <= resp.status_code < 300:
            self.logger.warning(
                "[%s %s] HTTP %d: %s",
                operation,
                kind.value,
                resp.status_code,
                resp.text[:200],
            )
            raise error_cls(
                operation, kind.value, status_code=resp.status_code
            )
        if not resp.text.strip():
            return {}
        try:
            body: Any = resp.json()
        except (json.JSONDecodeError, ValueError) as exc:
            self.logger.error(
                "[%s %s] Undecodable response body",
                operation,
                kind.value,
                exc_info=True,
            )
            raise error_cls(
                operation, kind.value, status_code=resp.status_code
            ) from exc
        return body if isinstance(body, dict) else {}

    # ── Reads ────────────────────────────────────────────

    def list(self, kind: ObjectKind) -> list[dict[str, Any]]:
        """Return every raw object of *kind* (empty when none exist)."""
        params = {
            **self._read_params(),
            "query": json.dumps({"type": kind.value}),
        }
        resp = self._send(
            "GET", self._objects_url, "list", kind, FetchError, params=params
        )
        if resp.status_code == 404:
            self.logger.info("No %s found in bucket", kind.value)
            return []
        body = self._decode(resp, "list", kind, FetchError)
        objects: list[dict[str, Any]] = body.get("objects") or []
        self.logger.info("Fetched %d %s", len(objects), kind.value)
        return objects

    def get(self, kind: ObjectKind, object_id: str) -> dict[str, Any] | None:
        """Return one raw object, or ``None`` if it does not exist."""
        resp = self._send(
            "GET",
            f"{self._objects_url}/{object_id}",
            "get",
            kind,
            FetchError,
            params=self._read_params(),
        )
        if resp.status_code == 404:
            self.logger.info("%s %s not found", kind.value, object_id)
            return None
        body = self._decode(resp, "get", kind, FetchError)
        obj: dict[str, Any] | None = body.get("object")
        return obj

    # ── Writes ───────────────────────────────────────────

    def insert(
        self,
        kind: ObjectKind,
        payload: dict[str, Any],
    ) -> dict[str, Any]:
        """Create an object and return it as stored."""
        headers = self._write_headers("insert", kind)
        resp = self._send(
            "POST",
            self._objects_url,
            "insert",
            kind,
            WriteError,
            headers=headers,
            json=payload,
        )
        body = self._decode(resp, "insert", kind, WriteError)
        created = body.get("object")
        if not isinstance(created, dict):
            raise WriteError("insert", kind.value, "Cosmic returned no object")
        self.logger.info("Created %s %s", kind.value, created.get("id"))
        return created

    def update(
        self,
        kind: ObjectKind,
        object_id: str,
        payload: dict[str, Any],
    ) -> dict[str, Any]:
        """Patch an object and return it as stored."""
        headers = self._write_headers("update", kind)
        resp = self._send(
            "PATCH",
            f"{self._objects_url}/{object_id}",
            "update",
            kind,
            WriteError,
            headers=headers,
            json=payload,
        )
        body = self._decode(resp, "update", kind, WriteError)
        updated = body.get("object")
        if not isinstance(updated, dict):
            raise WriteError("update", kind.value, "Cosmic returned no object")
        self.logger.info("Updated %s %s", kind.value, object_id)
        return updated

    def delete(self, kind: ObjectKind, object_id: str) -> None:
        """Delete an object."""
        headers = self._write_headers("delete", kind)
        resp = self._send(
            "DELETE",
            f"{self._objects_url}/{object_id}",
            "delete",
            kind,
            WriteError,
            headers=headers,
        )
        self._decode(resp, "delete", kind, WriteError)
        self.logger.info("Deleted %s %s", kind.value, object_id)
