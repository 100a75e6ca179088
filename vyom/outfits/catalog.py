"""Item catalog accessors: where the outfit service reads a wardrobe from.

Both accessors expose ``async fetch_items(user_id)`` and raise the errors in
:mod:`vyom.errors`. Timeouts are enforced here, never by the caller, and no
accessor retries.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Protocol

import httpx
from pydantic import ValidationError
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from vyom.config import config
from vyom.crud.clothes import get_user_items
from vyom.errors import CatalogError, CatalogNotAuthorized, DownstreamUnavailable
from vyom.schemas.clothes import ClothingItem

logger = logging.getLogger(__name__)

UNAVAILABLE_STATUSES = {502, 503, 504}
UNAUTHORIZED_STATUSES = {401, 403}


class ItemCatalogAccessor(Protocol):
    async def fetch_items(self, user_id: str) -> List[ClothingItem]:
        ...


def coerce_items(raw_items: Iterable[Any]) -> List[ClothingItem]:
    items = []
    for raw in raw_items:
        try:
            items.append(ClothingItem.model_validate(raw))
        except ValidationError as exc:
            logger.warning("Skipping wardrobe entry due to validation error: %s", exc)
    return items


class HttpCatalogAccessor:
    """Reads the caller's wardrobe from the wardrobe service over HTTP.

    The wardrobe service scopes items by the bearer token, so the token is
    forwarded and ``user_id`` only serves to check the answer.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        authorization: Optional[str],
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self._client = client
        self._authorization = authorization
        self._base_url = (base_url or config.WARDROBE_SERVICE_URL).rstrip("/")
        self._timeout = timeout if timeout is not None else config.DOWNSTREAM_TIMEOUT

    async def fetch_items(self, user_id: str) -> List[ClothingItem]:
        headers = {}
        if self._authorization:
            headers["Authorization"] = self._authorization
        url = f"{self._base_url}/items"

        try:
            response = await self._client.get(url, headers=headers, timeout=self._timeout)
        except httpx.TransportError as exc:
            logger.error("Wardrobe service unreachable at %s: %s", url, exc)
            raise DownstreamUnavailable(retry_after=config.RETRY_AFTER_SECONDS) from exc

        if response.status_code in UNAVAILABLE_STATUSES:
            logger.error("Wardrobe service answered %s", response.status_code)
            raise DownstreamUnavailable(retry_after=config.RETRY_AFTER_SECONDS)
        if response.status_code in UNAUTHORIZED_STATUSES:
            raise CatalogNotAuthorized("Wardrobe service rejected the access token")
        if response.is_error:
            raise CatalogError(f"Wardrobe service answered {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise CatalogError("Wardrobe service returned a non-JSON body") from exc
        if not isinstance(payload, dict) or not payload.get("success"):
            raise CatalogError("Failed to fetch wardrobe items")

        items = coerce_items(payload.get("items") or [])
        foreign = [item.id for item in items if item.user_id != user_id]
        if foreign:
            logger.warning("Dropping %s items not owned by user=%s", len(foreign), user_id)
            items = [item for item in items if item.user_id == user_id]
        return items


class DatabaseCatalogAccessor:
    """Reads a wardrobe straight from the shared database."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def fetch_items(self, user_id: str) -> List[ClothingItem]:
        try:
            rows = await get_user_items(self._db, user_id)
        except OperationalError as exc:
            logger.error("Wardrobe database unreachable: %s", exc)
            raise DownstreamUnavailable(retry_after=config.RETRY_AFTER_SECONDS) from exc
        return coerce_items(rows)


__all__ = [
    "ItemCatalogAccessor",
    "HttpCatalogAccessor",
    "DatabaseCatalogAccessor",
    "coerce_items",
]
