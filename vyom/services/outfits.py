"""Outfit service: outfit generation and styling suggestions."""

import logging
import random
from typing import Optional

import httpx
from fastapi import Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from vyom.config import config
from vyom.database.connection import get_db
from vyom.errors import CatalogError, CatalogNotAuthorized, DownstreamUnavailable
from vyom.outfits.catalog import DatabaseCatalogAccessor, HttpCatalogAccessor, ItemCatalogAccessor
from vyom.outfits.generation import GenerationStatus, generate_for_user
from vyom.outfits.suggestions import get_suggestions
from vyom.schemas.outfits import GenerateRequest
from vyom.schemas.users import TokenUser
from vyom.security import get_current_user
from vyom.services.common import create_service_app, get_http_client, health_payload

logger = logging.getLogger(__name__)

SERVICE_NAME = "outfit-service"

app = create_service_app(
    SERVICE_NAME,
    "Outfit Service",
    with_database=config.CATALOG_BACKEND == "database",
)


def get_rng() -> random.Random:
    """A fresh generator per request; tests override this with a seeded one"""
    return random.Random()


async def get_catalog_accessor(
        request: Request,
        db: AsyncSession = Depends(get_db),
        client: httpx.AsyncClient = Depends(get_http_client)
) -> ItemCatalogAccessor:
    if config.CATALOG_BACKEND == "database":
        return DatabaseCatalogAccessor(db)
    return HttpCatalogAccessor(client, request.headers.get("authorization"))


@app.post("/generate")
async def generate(
        request_data: Optional[GenerateRequest] = None,
        current_user: TokenUser = Depends(get_current_user),
        accessor: ItemCatalogAccessor = Depends(get_catalog_accessor),
        rng: random.Random = Depends(get_rng)
):
    request_data = request_data or GenerateRequest()
    preferences = request_data.preferences

    try:
        result = await generate_for_user(
            current_user.uuid,
            preferences,
            accessor,
            count=request_data.count,
            rng=rng,
            dedupe=request_data.dedupe,
        )
    except DownstreamUnavailable as e:
        retry_after = e.retry_after or config.RETRY_AFTER_SECONDS
        logger.warning("Outfit generation for user=%s skipped: %s", current_user.uuid, e)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "success": False,
                "error": "Wardrobe service temporarily unavailable",
                "fallback": True,
                "retry_after": retry_after,
            },
            headers={"Retry-After": str(retry_after)},
        )
    except CatalogNotAuthorized as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except CatalogError as e:
        logger.error("Outfit generation for user=%s failed: %s", current_user.uuid, e)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to fetch wardrobe items")

    response = {
        "success": True,
        "status": result.status.value,
        "count": len(result.outfits),
        "outfits": [outfit.model_dump(mode="json") for outfit in result.outfits],
        "preferences": preferences.model_dump(mode="json"),
        "wardrobe_items_count": result.wardrobe_items_count,
    }
    if result.status is not GenerationStatus.OK:
        response["message"] = result.message
    return response


@app.get("/suggestions")
async def suggestions(
        weather: Optional[str] = None,
        event: Optional[str] = None,
        current_user: TokenUser = Depends(get_current_user)
):
    return {"success": True, "suggestions": get_suggestions(weather, event)}


@app.get("/health")
async def health():
    return health_payload(
        SERVICE_NAME,
        dependencies={"wardrobeService": config.WARDROBE_SERVICE_URL},
        catalog_backend=config.CATALOG_BACKEND,
    )
