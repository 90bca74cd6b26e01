# tests/test_cosmic_client.py

"""Tests for CosmicClient request building and error mapping."""

import json
import unittest
from typing import Any
from unittest.mock import MagicMock, patch

from jewelry_admin.client.cosmic_client import CosmicClient
from jewelry_admin.errors import ConfigurationError, FetchError, WriteError
from jewelry_admin.models.catalog import ObjectKind


def _resp(status: int, body: Any = None) -> MagicMock:
    """Build a fake curl_cffi response."""
    resp = MagicMock()
    resp.status_code = status
    resp.text = "" if body is None else json.dumps(body)
    resp.json.return_value = body
    return resp


@patch("jewelry_admin.client.cosmic_client.curl_requests.Session")
class TestCosmicClientReads(unittest.TestCase):
    """list/get behaviour."""

    def _client(self, mock_session_cls: MagicMock) -> tuple[CosmicClient, MagicMock]:
        session = MagicMock()
        mock_session_cls.return_value = session
        client = CosmicClient(
            bucket_slug="jewels",
            read_key="read",
            write_key="write",
            api_url="https://api.example.com/v3/",
        )
        return client, session

    def test_list_returns_objects(self, mock_session_cls: MagicMock) -> None:
        """A 200 list response yields the raw objects array."""
        client, session = self._client(mock_session_cls)
        session.request.return_value = _resp(
            200, {"objects": [{"id": "1"}, {"id": "2"}], "total": 2}
        )
        self.assertEqual(
            client.list(ObjectKind.PRODUCTS), [{"id": "1"}, {"id": "2"}]
        )

    def test_list_request_shape(self, mock_session_cls: MagicMock) -> None:
        """The list call filters by type and asks for depth 1."""
        client, session = self._client(mock_session_cls)
        session.request.return_value = _resp(200, {"objects": []})
        client.list(ObjectKind.REVIEWS)

        args, kwargs = session.request.call_args
        self.assertEqual(args[0], "GET")
        self.assertEqual(
            args[1], "https://api.example.com/v3/buckets/jewels/objects"
        )
        params = kwargs["params"]
        self.assertEqual(json.loads(params["query"]), {"type": "reviews"})
        self.assertEqual(params["read_key"], "read")
        self.assertEqual(params["depth"], "1")
        self.assertIn("created_at", params["props"].split(","))

    def test_list_404_is_empty(self, mock_session_cls: MagicMock) -> None:
        """Not-found on list is an empty result, not an error."""
        client, session = self._client(mock_session_cls)
        session.request.return_value = _resp(404, {"message": "No objects found"})
        self.assertEqual(client.list(ObjectKind.COLLECTIONS), [])

    def test_list_500_raises_fetch_error(self, mock_session_cls: MagicMock) -> None:
        """Other HTTP failures raise FetchError carrying the operation."""
        client, session = self._client(mock_session_cls)
        session.request.return_value = _resp(500, {"message": "boom"})
        with self.assertRaises(FetchError) as ctx:
            client.list(ObjectKind.PRODUCTS)
        self.assertEqual(ctx.exception.operation, "list")
        self.assertEqual(ctx.exception.kind, "products")
        self.assertEqual(ctx.exception.status_code, 500)
        self.assertEqual(ctx.exception.message, "Failed to list products")

    def test_transport_error_raises_fetch_error(
        self, mock_session_cls: MagicMock,
    ) -> None:
        """A connection failure is wrapped, with the cause chained."""
        client, session = self._client(mock_session_cls)
        session.request.side_effect = ConnectionError("down")
        with self.assertRaises(FetchError) as ctx:
            client.list(ObjectKind.PRODUCTS)
        self.assertIsInstance(ctx.exception.__cause__, ConnectionError)
        self.assertIsNone(ctx.exception.status_code)

    def test_undecodable_body_raises(self, mock_session_cls: MagicMock) -> None:
        """A 200 with a non-JSON body is a FetchError."""
        client, session = self._client(mock_session_cls)
        resp = _resp(200)
        resp.text = "<html>oops</html>"
        resp.json.side_effect = json.JSONDecodeError("bad", "x", 0)
        session.request.return_value = resp
        with self.assertRaises(FetchError):
            client.list(ObjectKind.PRODUCTS)

    def test_get_returns_object(self, mock_session_cls: MagicMock) -> None:
        """get() unwraps the `object` field."""
        client, session = self._client(mock_session_cls)
        session.request.return_value = _resp(200, {"object": {"id": "p1"}})
        self.assertEqual(client.get(ObjectKind.PRODUCTS, "p1"), {"id": "p1"})
        args, _kwargs = session.request.call_args
        self.assertTrue(args[1].endswith("/objects/p1"))

    def test_get_404_is_none(self, mock_session_cls: MagicMock) -> None:
        """A missing object is None."""
        client, session = self._client(mock_session_cls)
        session.request.return_value = _resp(404, {})
        self.assertIsNone(client.get(ObjectKind.PRODUCTS, "gone"))


@patch("jewelry_admin.client.cosmic_client.curl_requests.Session")
class TestCosmicClientWrites(unittest.TestCase):
    """insert/update/delete behaviour."""

    def _client(
        self, mock_session_cls: MagicMock, write_key: str = "write",
    ) -> tuple[CosmicClient, MagicMock]:
        session = MagicMock()
        mock_session_cls.return_value = session
        client = CosmicClient(
            bucket_slug="jewels",
            read_key="read",
            write_key=write_key,
            api_url="https://api.example.com/v3",
        )
        if not write_key:
            client.write_key = ""
        return client, session

    def test_insert_posts_payload(self, mock_session_cls: MagicMock) -> None:
        """insert() POSTs the payload with the write key."""
        client, session = self._client(mock_session_cls)
        session.request.return_value = _resp(201, {"object": {"id": "new"}})
        created = client.insert(ObjectKind.PRODUCTS, {"title": "Ring"})

        self.assertEqual(created, {"id": "new"})
        args, kwargs = session.request.call_args
        self.assertEqual(args[0], "POST")
        self.assertEqual(kwargs["json"], {"title": "Ring"})
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer write")

    def test_update_patches_object(self, mock_session_cls: MagicMock) -> None:
        """update() PATCHes the object URL."""
        client, session = self._client(mock_session_cls)
        session.request.return_value = _resp(200, {"object": {"id": "p1"}})
        client.update(ObjectKind.PRODUCTS, "p1", {"title": "Ring"})
        args, _kwargs = session.request.call_args
        self.assertEqual(args[0], "PATCH")
        self.assertTrue(args[1].endswith("/objects/p1"))

    def test_delete_sends_delete(self, mock_session_cls: MagicMock) -> None:
        """delete() issues DELETE and returns None."""
        client, session = self._client(mock_session_cls)
        session.request.return_value = _resp(200, {"message": "deleted"})
        self.assertIsNone(client.delete(ObjectKind.REVIEWS, "r1"))
        args, _kwargs = session.request.call_args
        self.assertEqual(args[0], "DELETE")

    def test_write_failure_raises_write_error(
        self, mock_session_cls: MagicMock,
    ) -> None:
        """A failed write raises WriteError naming the operation."""
        client, session = self._client(mock_session_cls)
        session.request.return_value = _resp(400, {"message": "bad"})
        with self.assertRaises(WriteError) as ctx:
            client.update(ObjectKind.COLLECTIONS, "c1", {})
        self.assertEqual(ctx.exception.operation, "update")
        self.assertEqual(ctx.exception.status_code, 400)

    def test_delete_404_is_write_error(self, mock_session_cls: MagicMock) -> None:
        """Not-found is only tolerated on reads."""
        client, session = self._client(mock_session_cls)
        session.request.return_value = _resp(404, {})
        with self.assertRaises(WriteError):
            client.delete(ObjectKind.PRODUCTS, "gone")

    def test_insert_without_object_raises(
        self, mock_session_cls: MagicMock,
    ) -> None:
        """A 2xx without the created object is still a failure."""
        client, session = self._client(mock_session_cls)
        session.request.return_value = _resp(200, {})
        with self.assertRaises(WriteError):
            client.insert(ObjectKind.PRODUCTS, {"title": "Ring"})

    def test_missing_write_key(self, mock_session_cls: MagicMock) -> None:
        """Writes without a write key fail before any request."""
        client, session = self._client(mock_session_cls, write_key="")
        with self.assertRaises(ConfigurationError):
            client.delete(ObjectKind.PRODUCTS, "p1")
        session.request.assert_not_called()


class TestCosmicClientConfig(unittest.TestCase):
    """Construction requirements."""

    @patch("jewelry_admin.client.cosmic_client.Settings.COSMIC_READ_KEY", "")
    @patch("jewelry_admin.client.cosmic_client.Settings.COSMIC_BUCKET_SLUG", "")
    def test_missing_bucket_raises(self) -> None:
        """No bucket slug or read key means no client."""
        with self.assertRaises(ConfigurationError):
            CosmicClient()


if __name__ == "__main__":
    unittest.main()
