import math
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def normalize_tag(value: Any) -> str:
    return str(value).strip().lower()


def is_non_finite(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return False
    try:
        return not math.isfinite(float(value))
    except OverflowError:
        return True
    except ValueError:
        return False


def normalize_tags(value: Any) -> List[str]:
    """Coerce a scalar or iterable into a de-duplicated list of lower-case tags"""
    if value is None:
        return []
    if not isinstance(value, (list, tuple, set)):
        value = [value]
    tags = []
    for raw in value:
        if raw is None:
            continue
        tag = normalize_tag(raw)
        if tag and tag not in tags:
            tags.append(tag)
    return tags


class ClothingItemBase(BaseModel):
    # Mobile clients send camelCase keys such as purchasePrice and imageUri
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=255)
    category: str = "other"
    colors: List[str] = []
    seasons: List[str] = []
    occasions: List[str] = []
    brand: Optional[str] = None
    size: Optional[str] = None
    purchase_price: float = Field(0.0, ge=0)
    image_uri: Optional[str] = None

    @field_validator("category", mode="before")
    @classmethod
    def _normalize_category(cls, value: Any) -> str:
        if value is None:
            return "other"
        return normalize_tag(value) or "other"

    @field_validator("colors", "seasons", "occasions", mode="before")
    @classmethod
    def _normalize_tags(cls, value: Any) -> List[str]:
        return normalize_tags(value)

    @field_validator("purchase_price", mode="before")
    @classmethod
    def _default_price(cls, value: Any) -> Any:
        # Missing, blank or non-finite prices count as free
        if value is None or value == "" or is_non_finite(value):
            return 0.0
        return value


class ClothingItemCreate(ClothingItemBase):
    pass


class ClothingItemUpdate(BaseModel):
    """Partial update; only fields present in the request are applied"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[str] = None
    colors: Optional[List[str]] = None
    seasons: Optional[List[str]] = None
    occasions: Optional[List[str]] = None
    brand: Optional[str] = None
    size: Optional[str] = None
    purchase_price: Optional[float] = Field(None, ge=0)
    image_uri: Optional[str] = None
    wear_count: Optional[int] = Field(None, ge=0)
    favorite: Optional[bool] = None

    @field_validator("category", mode="before")
    @classmethod
    def _normalize_category(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        return normalize_tag(value) or "other"

    @field_validator("purchase_price", mode="before")
    @classmethod
    def _drop_non_finite_price(cls, value: Any) -> Any:
        if is_non_finite(value):
            return None
        return value

    @field_validator("colors", "seasons", "occasions", mode="before")
    @classmethod
    def _normalize_tags(cls, value: Any) -> Optional[List[str]]:
        if value is None:
            return None
        return normalize_tags(value)


class ClothingItem(ClothingItemBase):
    id: str
    user_id: str
    wear_count: int = Field(0, ge=0)
    favorite: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> str:
        return str(value)


class CategoryCount(BaseModel):
    category: str
    count: int


class ColorCount(BaseModel):
    color: str
    count: int


class WardrobeAnalytics(BaseModel):
    total_items: int
    total_value: float
    categories: List[CategoryCount] = []
    colors: List[ColorCount] = []
