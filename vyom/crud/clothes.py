from collections import Counter
from typing import List, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from vyom.database.models import ClothingItem
from vyom.schemas.clothes import ClothingItemCreate, ClothingItemUpdate, normalize_tag


async def get_user_items(
        db: AsyncSession,
        user_id: str,
        category: Optional[str] = None,
        color: Optional[str] = None,
        season: Optional[str] = None,
) -> List[ClothingItem]:
    """Get a user's clothing items, newest first"""
    stmt = select(ClothingItem).where(ClothingItem.user_id == user_id)
    if category:
        stmt = stmt.where(ClothingItem.category == normalize_tag(category))
    stmt = stmt.order_by(ClothingItem.created_at.desc())
    result = await db.execute(stmt)
    items = list(result.scalars().all())

    # Tag lists are JSON columns, so membership is checked here for every backend
    if color:
        color = normalize_tag(color)
        items = [item for item in items if color in (item.colors or [])]
    if season:
        season = normalize_tag(season)
        items = [item for item in items if season in (item.seasons or [])]
    return items


async def get_item_by_id(db: AsyncSession, item_id: str, user_id: str) -> Optional[ClothingItem]:
    """Get a specific item by ID for its owner"""
    stmt = select(ClothingItem).where(
        (ClothingItem.id == item_id) & (ClothingItem.user_id == user_id)
    )
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def create_item(db: AsyncSession, item_data: ClothingItemCreate, user_id: str) -> ClothingItem:
    item = ClothingItem(user_id=user_id, **item_data.model_dump())
    db.add(item)
    await db.commit()
    await db.refresh(item)
    return item


async def update_item(
        db: AsyncSession,
        item_id: str,
        user_id: str,
        item_data: ClothingItemUpdate
) -> ClothingItem:
    """Apply the fields present in item_data to an existing item"""
    item = await get_item_by_id(db, item_id, user_id)
    if not item:
        raise ValueError("Item not found")

    for field, value in item_data.model_dump(exclude_unset=True).items():
        if value is None and field in ("name", "category", "colors", "seasons", "occasions",
                                       "purchase_price", "wear_count", "favorite"):
            # Required columns cannot be cleared
            continue
        setattr(item, field, value)

    await db.commit()
    await db.refresh(item)
    return item


async def record_wear(db: AsyncSession, item_id: str, user_id: str) -> ClothingItem:
    item = await get_item_by_id(db, item_id, user_id)
    if not item:
        raise ValueError("Item not found")
    item.wear_count = (item.wear_count or 0) + 1
    await db.commit()
    await db.refresh(item)
    return item


async def toggle_favorite(db: AsyncSession, item_id: str, user_id: str) -> ClothingItem:
    item = await get_item_by_id(db, item_id, user_id)
    if not item:
        raise ValueError("Item not found")
    item.favorite = not item.favorite
    await db.commit()
    await db.refresh(item)
    return item


async def delete_item(db: AsyncSession, item_id: str, user_id: str) -> bool:
    """Delete an item"""
    item = await get_item_by_id(db, item_id, user_id)
    if not item:
        return False

    await db.delete(item)
    await db.commit()
    return True


async def get_analytics(db: AsyncSession, user_id: str) -> dict:
    """Item counts and total purchase value for a user's wardrobe"""
    stmt = select(
        func.count(ClothingItem.id),
        func.coalesce(func.sum(ClothingItem.purchase_price), 0),
    ).where(ClothingItem.user_id == user_id)
    total_items, total_value = (await db.execute(stmt)).one()

    stmt = (
        select(ClothingItem.category, func.count(ClothingItem.id).label("count"))
        .where(ClothingItem.user_id == user_id)
        .group_by(ClothingItem.category)
        .order_by(func.count(ClothingItem.id).desc(), ClothingItem.category)
    )
    categories = [
        {"category": category, "count": count}
        for category, count in (await db.execute(stmt)).all()
    ]

    stmt = select(ClothingItem.colors).where(ClothingItem.user_id == user_id)
    color_counts = Counter(
        color
        for colors in (await db.execute(stmt)).scalars().all()
        for color in (colors or [])
    )
    colors = [
        {"color": color, "count": count}
        for color, count in sorted(color_counts.items(), key=lambda pair: (-pair[1], pair[0]))
    ]

    return {
        "total_items": total_items,
        "total_value": float(total_value or 0),
        "categories": categories,
        "colors": colors,
    }
