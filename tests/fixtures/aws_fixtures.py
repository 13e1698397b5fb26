"""In-memory stand-ins for aioboto3 sessions and clients."""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from botocore.exceptions import ClientError


def make_client_error(code: str, operation: str, status: int = 400, message: str = "") -> ClientError:
    return ClientError(
        {
            "Error": {"Code": code, "Message": message or code},
            "ResponseMetadata": {"HTTPStatusCode": status},
        },
        operation,
    )


class _FakePaginator:
    def __init__(self, pages: list[dict[str, Any]]) -> None:
        self._pages = pages

    def paginate(self, **kwargs):
        pages = self._pages

        async def _iter():
            for page in pages:
                yield page

        return _iter()


class _ClientContext:
    def __init__(self, client: Any) -> None:
        self._client = client

    async def __aenter__(self):
        return self._client

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """Hands out one shared fake client per service name."""

    def __init__(self) -> None:
        self.clients: dict[str, MagicMock] = {}
        self.client_calls: list[tuple[str, str | None]] = []

    def get_client(self, service_name: str) -> MagicMock:
        if service_name not in self.clients:
            client = MagicMock()
            for name in (
                "create_channel",
                "get_channel",
                "get_stream",
                "delete_channel",
                "create_room",
                "create_chat_token",
                "delete_room",
                "put_item",
                "get_item",
            ):
                setattr(client, name, AsyncMock())
            self.clients[service_name] = client
        return self.clients[service_name]

    def set_pages(self, service_name: str, pages: list[dict[str, Any]]) -> None:
        self.get_client(service_name).get_paginator.return_value = _FakePaginator(pages)

    def client(self, service_name: str, region_name: str | None = None, **kwargs):
        self.client_calls.append((service_name, region_name))
        return _ClientContext(self.get_client(service_name))


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()
