"""Wardrobe service: clothing item CRUD and wardrobe analytics."""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from vyom.crud.clothes import (
    create_item,
    delete_item,
    get_analytics,
    get_user_items,
    record_wear,
    toggle_favorite,
    update_item,
)
from vyom.database.connection import get_db
from vyom.schemas.clothes import ClothingItem, ClothingItemCreate, ClothingItemUpdate, WardrobeAnalytics
from vyom.schemas.users import TokenUser
from vyom.security import get_current_user
from vyom.services.common import create_service_app, health_payload

logger = logging.getLogger(__name__)

SERVICE_NAME = "wardrobe-service"

app = create_service_app(SERVICE_NAME, "Wardrobe Service")


def _serialize(item) -> dict:
    return ClothingItem.model_validate(item).model_dump(mode="json")


@app.get("/items")
async def list_items(
        category: Optional[str] = None,
        color: Optional[str] = None,
        season: Optional[str] = None,
        db: AsyncSession = Depends(get_db),
        current_user: TokenUser = Depends(get_current_user)
):
    items = await get_user_items(db, current_user.uuid, category=category, color=color, season=season)
    return {
        "success": True,
        "count": len(items),
        "items": [_serialize(item) for item in items],
    }


@app.post("/items")
async def add_item(
        item_data: ClothingItemCreate,
        db: AsyncSession = Depends(get_db),
        current_user: TokenUser = Depends(get_current_user)
):
    item = await create_item(db, item_data, current_user.uuid)
    logger.info("Added item %s for user=%s", item.id, current_user.uuid)
    return {"success": True, "item": _serialize(item)}


@app.put("/items/{item_id}")
async def edit_item(
        item_id: str,
        item_data: ClothingItemUpdate,
        db: AsyncSession = Depends(get_db),
        current_user: TokenUser = Depends(get_current_user)
):
    try:
        item = await update_item(db, item_id, current_user.uuid, item_data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return {"success": True, "item": _serialize(item)}


@app.post("/items/{item_id}/wear")
async def wear_item(
        item_id: str,
        db: AsyncSession = Depends(get_db),
        current_user: TokenUser = Depends(get_current_user)
):
    try:
        item = await record_wear(db, item_id, current_user.uuid)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return {"success": True, "item": _serialize(item)}


@app.post("/items/{item_id}/favorite")
async def favorite_item(
        item_id: str,
        db: AsyncSession = Depends(get_db),
        current_user: TokenUser = Depends(get_current_user)
):
    try:
        item = await toggle_favorite(db, item_id, current_user.uuid)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return {"success": True, "item": _serialize(item)}


@app.delete("/items/{item_id}")
async def remove_item(
        item_id: str,
        db: AsyncSession = Depends(get_db),
        current_user: TokenUser = Depends(get_current_user)
):
    deleted = await delete_item(db, item_id, current_user.uuid)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    return {"success": True, "message": "Item deleted successfully"}


@app.get("/analytics")
async def analytics(
        db: AsyncSession = Depends(get_db),
        current_user: TokenUser = Depends(get_current_user)
):
    stats = await get_analytics(db, current_user.uuid)
    return {"success": True, "analytics": WardrobeAnalytics(**stats).model_dump()}


@app.get("/health")
async def health():
    return health_payload(SERVICE_NAME)
