"""Randomised outfit assembly from a user's wardrobe.

``compose`` is a pure function of its arguments and the ``random.Random``
it is handed: the same items, preference and seeded generator always give
the same candidates, ids included.
"""
from __future__ import annotations

import logging
import random
import uuid
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence

from vyom.schemas.clothes import ClothingItem
from vyom.schemas.outfits import (
    DEFAULT_OUTFIT_COUNT,
    OutfitCandidate,
    OutfitPreference,
    normalize_count,
)

logger = logging.getLogger(__name__)

ALL_YEAR = "all-year"

CONFIDENCE_FLOOR = 0.85
CONFIDENCE_SPREAD = 0.10

OUTERWEAR_PROBABILITY = 0.5
ACCESSORY_PROBABILITY = 0.7
COLD_WEATHER_THRESHOLD_F = 70.0


class Slot(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"
    OUTERWEAR = "outerwear"
    FOOTWEAR = "footwear"
    ACCESSORY = "accessory"


# Order in which slots are filled and listed in a candidate
SLOT_ORDER = (Slot.TOP, Slot.BOTTOM, Slot.OUTERWEAR, Slot.FOOTWEAR, Slot.ACCESSORY)

CATEGORY_SLOTS: Dict[str, Slot] = {
    "top": Slot.TOP,
    "shirt": Slot.TOP,
    "t-shirt": Slot.TOP,
    "blouse": Slot.TOP,
    "bottom": Slot.BOTTOM,
    "pants": Slot.BOTTOM,
    "jeans": Slot.BOTTOM,
    "skirt": Slot.BOTTOM,
    "shorts": Slot.BOTTOM,
    "outerwear": Slot.OUTERWEAR,
    "jacket": Slot.OUTERWEAR,
    "coat": Slot.OUTERWEAR,
    "blazer": Slot.OUTERWEAR,
    "footwear": Slot.FOOTWEAR,
    "shoes": Slot.FOOTWEAR,
    "boots": Slot.FOOTWEAR,
    "sneakers": Slot.FOOTWEAR,
    "accessory": Slot.ACCESSORY,
    "accessories": Slot.ACCESSORY,
    "belt": Slot.ACCESSORY,
    "bag": Slot.ACCESSORY,
    "jewelry": Slot.ACCESSORY,
}


def slot_for(category: Optional[str]) -> Optional[Slot]:
    """Map a raw item category to its slot, or ``None`` for uncategorised items."""

    if not category:
        return None
    return CATEGORY_SLOTS.get(category.strip().lower())


def is_eligible(item: ClothingItem, preference: OutfitPreference) -> bool:
    matches_occasion = not preference.occasion or preference.occasion in item.occasions
    matches_season = (
        not preference.season
        or preference.season == ALL_YEAR
        or preference.season in item.seasons
    )
    return matches_occasion and matches_season


def partition(items: Iterable[ClothingItem]) -> Dict[Slot, List[ClothingItem]]:
    slots: Dict[Slot, List[ClothingItem]] = {slot: [] for slot in SLOT_ORDER}
    for item in items:
        slot = slot_for(item.category)
        if slot is not None:
            slots[slot].append(item)
    return slots


def is_cold(preference: OutfitPreference) -> bool:
    if preference.weather is None:
        return False
    temperature = preference.weather.temperature_f
    return temperature is not None and temperature < COLD_WEATHER_THRESHOLD_F


def _describe(items: Sequence[ClothingItem], preference: OutfitPreference) -> str:
    names = ", ".join(item.name for item in items)
    occasion = preference.occasion or "any"
    season = preference.season or "any season"
    return f"Perfect {occasion} outfit for {season}: {names}"


def _pick(
    slots: Dict[Slot, List[ClothingItem]],
    rng: random.Random,
    cold: bool,
) -> Dict[Slot, ClothingItem]:
    picked: Dict[Slot, ClothingItem] = {}
    if slots[Slot.TOP]:
        picked[Slot.TOP] = rng.choice(slots[Slot.TOP])
    if slots[Slot.BOTTOM]:
        picked[Slot.BOTTOM] = rng.choice(slots[Slot.BOTTOM])
    if slots[Slot.OUTERWEAR] and (cold or rng.random() < OUTERWEAR_PROBABILITY):
        picked[Slot.OUTERWEAR] = rng.choice(slots[Slot.OUTERWEAR])
    if slots[Slot.FOOTWEAR]:
        picked[Slot.FOOTWEAR] = rng.choice(slots[Slot.FOOTWEAR])
    if slots[Slot.ACCESSORY] and rng.random() < ACCESSORY_PROBABILITY:
        picked[Slot.ACCESSORY] = rng.choice(slots[Slot.ACCESSORY])
    return picked


def dedupe_candidates(candidates: Sequence[OutfitCandidate]) -> List[OutfitCandidate]:
    """Drop candidates whose item set repeats an earlier one."""

    seen = set()
    unique = []
    for candidate in candidates:
        key = frozenset(candidate.items)
        if key in seen:
            continue
        seen.add(key)
        unique.append(candidate)
    return unique


def compose(
    items: Sequence[ClothingItem],
    preference: Optional[OutfitPreference] = None,
    count: int = DEFAULT_OUTFIT_COUNT,
    rng: Optional[random.Random] = None,
    dedupe: bool = False,
) -> List[OutfitCandidate]:
    """Generate up to ``count`` outfit candidates from ``items``.

    Every returned candidate holds exactly one top and one bottom; draws that
    miss either are dropped, so fewer than ``count`` may come back.
    """

    if not items:
        return []
    preference = preference or OutfitPreference()
    count = normalize_count(count)
    rng = rng or random.Random()

    eligible = [item for item in items if is_eligible(item, preference)]
    slots = partition(eligible)
    cold = is_cold(preference)
    logger.debug(
        "Composing %s outfits from %s eligible of %s items (cold=%s)",
        count, len(eligible), len(items), cold,
    )

    candidates: List[OutfitCandidate] = []
    for _ in range(count):
        candidate_id = f"outfit_{uuid.UUID(int=rng.getrandbits(128)).hex[:12]}"
        confidence = round(CONFIDENCE_FLOOR + rng.random() * CONFIDENCE_SPREAD, 4)
        picked = _pick(slots, rng, cold)
        if Slot.TOP not in picked or Slot.BOTTOM not in picked:
            continue
        chosen = [picked[slot] for slot in SLOT_ORDER if slot in picked]
        candidates.append(
            OutfitCandidate(
                id=candidate_id,
                occasion=preference.occasion,
                season=preference.season,
                style=preference.style,
                weather=preference.weather,
                items=[item.id for item in chosen],
                confidence=confidence,
                description=_describe(chosen, preference),
            )
        )

    if dedupe:
        candidates = dedupe_candidates(candidates)
    return candidates


__all__ = [
    "Slot",
    "SLOT_ORDER",
    "CATEGORY_SLOTS",
    "COLD_WEATHER_THRESHOLD_F",
    "slot_for",
    "is_eligible",
    "partition",
    "is_cold",
    "dedupe_candidates",
    "compose",
]
