"""Fetch a user's wardrobe and turn it into outfit candidates."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from vyom.outfits.catalog import ItemCatalogAccessor
from vyom.outfits.composer import compose
from vyom.schemas.outfits import DEFAULT_OUTFIT_COUNT, OutfitCandidate, OutfitPreference

logger = logging.getLogger(__name__)

NO_ITEMS_MESSAGE = "No clothing items found. Add some items to your wardrobe first!"
NO_VALID_CANDIDATES_MESSAGE = (
    "Couldn't put an outfit together for these preferences. "
    "Each outfit needs at least one matching top and one matching bottom."
)


class GenerationStatus(str, Enum):
    OK = "ok"
    NO_ITEMS = "no_items"
    NO_VALID_CANDIDATES = "no_valid_candidates"


@dataclass(frozen=True)
class GenerationResult:
    status: GenerationStatus
    outfits: List[OutfitCandidate] = field(default_factory=list)
    wardrobe_items_count: int = 0

    @property
    def message(self) -> Optional[str]:
        if self.status is GenerationStatus.NO_ITEMS:
            return NO_ITEMS_MESSAGE
        if self.status is GenerationStatus.NO_VALID_CANDIDATES:
            return NO_VALID_CANDIDATES_MESSAGE
        return None


async def generate_for_user(
    user_id: str,
    preference: OutfitPreference,
    accessor: ItemCatalogAccessor,
    count: int = DEFAULT_OUTFIT_COUNT,
    rng: Optional[random.Random] = None,
    dedupe: bool = False,
) -> GenerationResult:
    """Compose outfits from a fresh read of the user's catalog.

    Accessor errors, including cancellation of the fetch, propagate
    unchanged; nothing is composed from an incomplete read.
    """

    items = await accessor.fetch_items(user_id)
    if not items:
        logger.info("No wardrobe items for user=%s", user_id)
        return GenerationResult(status=GenerationStatus.NO_ITEMS)

    outfits = compose(items, preference, count=count, rng=rng, dedupe=dedupe)
    logger.info("Generated %s outfits from %s items for user=%s", len(outfits), len(items), user_id)
    if not outfits:
        return GenerationResult(
            status=GenerationStatus.NO_VALID_CANDIDATES,
            wardrobe_items_count=len(items),
        )
    return GenerationResult(
        status=GenerationStatus.OK,
        outfits=outfits,
        wardrobe_items_count=len(items),
    )


__all__ = [
    "GenerationStatus",
    "GenerationResult",
    "generate_for_user",
    "NO_ITEMS_MESSAGE",
    "NO_VALID_CANDIDATES_MESSAGE",
]
