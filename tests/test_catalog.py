"""Catalog accessors over HTTP and over the database."""

from __future__ import annotations

from types import SimpleNamespace

import httpx
import pytest
import pytest_mock
from sqlalchemy.exc import OperationalError

from conftest import create_test_sessionmaker
from vyom.crud.clothes import create_item
from vyom.errors import CatalogError, CatalogNotAuthorized, DownstreamUnavailable
from vyom.outfits.catalog import DatabaseCatalogAccessor, HttpCatalogAccessor
from vyom.schemas.clothes import ClothingItemCreate

WARDROBE_URL = "http://wardrobe.test"


def _item_doc(item_id: str, category: str, user_id: str = "user-1") -> dict:
    return {
        "id": item_id,
        "user_id": user_id,
        "name": f"Item {item_id}",
        "category": category,
        "colors": ["Blue"],
        "seasons": "summer",
        "occasions": ["casual"],
    }


def _accessor(handler, authorization="Bearer token-123") -> HttpCatalogAccessor:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpCatalogAccessor(client, authorization, base_url=WARDROBE_URL, timeout=1)


@pytest.mark.asyncio
async def test_http_accessor_returns_items_and_forwards_token() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["authorization"] = request.headers.get("authorization")
        return httpx.Response(200, json={"success": True, "items": [_item_doc("a", "top"), _item_doc("b", "jeans")]})

    items = await _accessor(handler).fetch_items("user-1")

    assert [item.id for item in items] == ["a", "b"]
    assert items[0].colors == ["blue"]
    assert items[0].seasons == ["summer"]
    assert seen == {"url": f"{WARDROBE_URL}/items", "authorization": "Bearer token-123"}


@pytest.mark.asyncio
async def test_http_accessor_skips_invalid_and_foreign_items() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        docs = [_item_doc("a", "top"), {"id": "broken"}, _item_doc("c", "jeans", user_id="user-2")]
        return httpx.Response(200, json={"success": True, "items": docs})

    items = await _accessor(handler).fetch_items("user-1")

    assert [item.id for item in items] == ["a"]


@pytest.mark.asyncio
async def test_http_accessor_connection_refused_is_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    with pytest.raises(DownstreamUnavailable):
        await _accessor(handler).fetch_items("user-1")


@pytest.mark.asyncio
async def test_http_accessor_timeout_is_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(DownstreamUnavailable):
        await _accessor(handler).fetch_items("user-1")


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [502, 503, 504])
async def test_http_accessor_gateway_errors_are_unavailable(status_code: int) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json={"error": "down"})

    with pytest.raises(DownstreamUnavailable):
        await _accessor(handler).fetch_items("user-1")


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [401, 403])
async def test_http_accessor_rejected_token(status_code: int) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json={"error": "Invalid or expired token"})

    with pytest.raises(CatalogNotAuthorized):
        await _accessor(handler).fetch_items("user-1")


@pytest.mark.asyncio
async def test_http_accessor_unexpected_answers_are_catalog_errors() -> None:
    def server_error(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "Failed to retrieve items"})

    def unsuccessful(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"success": False})

    def not_json(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>")

    for handler in (server_error, unsuccessful, not_json):
        with pytest.raises(CatalogError) as excinfo:
            await _accessor(handler).fetch_items("user-1")
        assert not isinstance(excinfo.value, DownstreamUnavailable)


@pytest.mark.asyncio
async def test_database_accessor_reads_only_the_owners_items(tmp_path) -> None:
    engine, factory = await create_test_sessionmaker(tmp_path / "catalog.db")
    try:
        async with factory() as session:
            await create_item(session, ClothingItemCreate(name="Tee", category="Top"), "user-1")
            await create_item(session, ClothingItemCreate(name="Jeans", category="jeans"), "user-1")
            await create_item(session, ClothingItemCreate(name="Skirt", category="skirt"), "user-2")

            items = await DatabaseCatalogAccessor(session).fetch_items("user-1")
    finally:
        await engine.dispose()

    assert sorted(item.name for item in items) == ["Jeans", "Tee"]
    assert {item.user_id for item in items} == {"user-1"}
    assert {item.category for item in items} == {"top", "jeans"}


@pytest.mark.asyncio
async def test_database_accessor_unreachable_store(mocker: pytest_mock.MockerFixture) -> None:
    mocker.patch(
        "vyom.outfits.catalog.get_user_items",
        side_effect=OperationalError("SELECT 1", {}, Exception("connection refused")),
    )

    with pytest.raises(DownstreamUnavailable):
        await DatabaseCatalogAccessor(mocker.Mock()).fetch_items("user-1")


@pytest.mark.asyncio
async def test_database_accessor_skips_invalid_rows(mocker: pytest_mock.MockerFixture) -> None:
    rows = [
        SimpleNamespace(id="good", user_id="user-1", name="Tee", category="top"),
        SimpleNamespace(id="bad", user_id="user-1", name="", category="top"),
        SimpleNamespace(id="worse", user_id="user-1", name="Jeans", category="jeans", purchase_price=-3),
    ]
    mocker.patch("vyom.outfits.catalog.get_user_items", return_value=rows)

    items = await DatabaseCatalogAccessor(mocker.Mock()).fetch_items("user-1")

    assert [item.id for item in items] == ["good"]
