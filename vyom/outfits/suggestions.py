"""Static styling tips keyed by weather and event."""

from typing import Dict, List, Optional

WEATHER_SUGGESTIONS: Dict[str, List[str]] = {
    "sunny": ["light colors", "breathable fabrics", "sun hat", "sandals"],
    "rainy": ["waterproof jacket", "boots", "umbrella", "quick-dry clothes"],
    "cold": ["layers", "warm coat", "boots", "scarf"],
    "hot": ["lightweight fabrics", "shorts", "t-shirt", "sunglasses"],
}

EVENT_SUGGESTIONS: Dict[str, List[str]] = {
    "meeting": ["business casual", "blazer", "dress shoes", "minimal accessories"],
    "date": ["smart casual", "nice top", "good shoes", "subtle jewelry"],
    "workout": ["activewear", "sneakers", "moisture-wicking fabric"],
    "party": ["dressy outfit", "statement piece", "dress shoes", "accessories"],
}

GENERAL_SUGGESTIONS = [
    "Match colors well",
    "Consider the occasion",
    "Comfort is key",
    "Express your personality",
]


def get_suggestions(weather: Optional[str] = None, event: Optional[str] = None) -> dict:
    weather_key = (weather or "").strip().lower()
    event_key = (event or "").strip().lower()
    return {
        "weather": list(WEATHER_SUGGESTIONS.get(weather_key, [])),
        "event": list(EVENT_SUGGESTIONS.get(event_key, [])),
        "general": list(GENERAL_SUGGESTIONS),
    }
