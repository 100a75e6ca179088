"""Request and response models for outfit generation.

Preference fields are normalised rather than rejected: anything malformed
falls back to its default so a sloppy client still gets outfits.
"""

import math
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

DEFAULT_OCCASION = "casual"
DEFAULT_SEASON = "all-year"
DEFAULT_STYLE = "comfortable"

DEFAULT_OUTFIT_COUNT = 3
MAX_OUTFIT_COUNT = 10


def _normalize_tag(value: Any, default: str) -> str:
    # An explicit empty string is kept: it switches the matching filter off
    if not isinstance(value, str):
        return default
    return value.strip().lower()


class Weather(BaseModel):
    temperature: Optional[float] = None
    condition: Optional[str] = None
    unit: str = "F"

    @field_validator("temperature", mode="before")
    @classmethod
    def _coerce_temperature(cls, value: Any) -> Optional[float]:
        if isinstance(value, bool):
            return None
        try:
            temperature = float(value)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(temperature):
            return None
        return temperature

    @field_validator("condition", mode="before")
    @classmethod
    def _coerce_condition(cls, value: Any) -> Optional[str]:
        if not isinstance(value, str) or not value.strip():
            return None
        return value.strip().lower()

    @field_validator("unit", mode="before")
    @classmethod
    def _coerce_unit(cls, value: Any) -> str:
        if isinstance(value, str) and value.strip().upper() in ("F", "C"):
            return value.strip().upper()
        return "F"

    @property
    def temperature_f(self) -> Optional[float]:
        if self.temperature is None:
            return None
        if self.unit == "C":
            return self.temperature * 9 / 5 + 32
        return self.temperature


class OutfitPreference(BaseModel):
    occasion: str = DEFAULT_OCCASION
    season: str = DEFAULT_SEASON
    style: str = DEFAULT_STYLE
    weather: Optional[Weather] = None

    @field_validator("occasion", mode="before")
    @classmethod
    def _coerce_occasion(cls, value: Any) -> str:
        return _normalize_tag(value, DEFAULT_OCCASION)

    @field_validator("season", mode="before")
    @classmethod
    def _coerce_season(cls, value: Any) -> str:
        return _normalize_tag(value, DEFAULT_SEASON)

    @field_validator("style", mode="before")
    @classmethod
    def _coerce_style(cls, value: Any) -> str:
        return _normalize_tag(value, DEFAULT_STYLE) or DEFAULT_STYLE

    @field_validator("weather", mode="before")
    @classmethod
    def _coerce_weather(cls, value: Any) -> Any:
        if isinstance(value, (dict, Weather)):
            return value
        return None


def normalize_count(value: Any) -> int:
    if isinstance(value, bool):
        return DEFAULT_OUTFIT_COUNT
    try:
        count = int(value)
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_OUTFIT_COUNT
    if count < 1:
        return DEFAULT_OUTFIT_COUNT
    return min(count, MAX_OUTFIT_COUNT)


class GenerateRequest(BaseModel):
    preferences: OutfitPreference = Field(default_factory=OutfitPreference)
    count: int = DEFAULT_OUTFIT_COUNT
    dedupe: bool = False

    @field_validator("preferences", mode="before")
    @classmethod
    def _coerce_preferences(cls, value: Any) -> Any:
        if isinstance(value, (dict, OutfitPreference)):
            return value
        return {}

    @field_validator("count", mode="before")
    @classmethod
    def _coerce_count(cls, value: Any) -> int:
        return normalize_count(value)

    @field_validator("dedupe", mode="before")
    @classmethod
    def _coerce_dedupe(cls, value: Any) -> bool:
        return value is True


class OutfitCandidate(BaseModel):
    id: str
    occasion: str
    season: str
    style: str
    weather: Optional[Weather] = None
    items: List[str]
    confidence: float = Field(..., ge=0, le=1)
    description: str
