"""Static registry of spending categories.

The default catalog is built once at import time and is read-only. Callers
that need different keywords construct their own :class:`CategoryCatalog`
and pass it explicitly; nothing registers categories at runtime.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Iterator

from src.models.schemas import CategoryDefinition

FALLBACK_KEY = "other"


class CategoryCatalog:
    """Ordered, immutable mapping of category key -> definition."""

    def __init__(self, definitions: Iterable[CategoryDefinition], fallback_key: str = FALLBACK_KEY):
        by_key: dict[str, CategoryDefinition] = {}
        for d in definitions:
            if d.key in by_key:
                raise ValueError(f"Duplicate category key '{d.key}'")
            by_key[d.key] = d
        if fallback_key not in by_key:
            raise ValueError(f"Fallback category '{fallback_key}' is not defined")
        self._by_key = MappingProxyType(by_key)
        self._fallback_key = fallback_key

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def __iter__(self) -> Iterator[CategoryDefinition]:
        return iter(self._by_key.values())

    def __len__(self) -> int:
        return len(self._by_key)

    @property
    def fallback(self) -> CategoryDefinition:
        return self._by_key[self._fallback_key]

    def keys(self) -> list[str]:
        return list(self._by_key)

    def get(self, key: str | None) -> CategoryDefinition:
        """Return the definition for *key*, or the fallback for unknown keys."""
        if key is None:
            return self.fallback
        return self._by_key.get(key, self.fallback)

    def scoring_categories(self) -> list[CategoryDefinition]:
        """All categories that take part in keyword scoring, in order."""
        return [d for d in self._by_key.values() if d.key != self._fallback_key]


def _define(key: str, label: str, glyph: str, keywords: list[str]) -> CategoryDefinition:
    return CategoryDefinition(key=key, label=label, glyph=glyph, keywords=tuple(keywords))


DEFAULT_CATALOG = CategoryCatalog([
    _define("food", "Food & Dining", "🍔", [
        "food", "eat", "lunch", "dinner", "breakfast", "restaurant", "cafe", "coffee",
        "pizza", "burger", "sushi", "grocery", "groceries", "supermarket", "walmart",
        "kroger", "target", "snack", "drink", "bar", "pub", "drink", "chipotle",
        "mcdonald", "starbucks", "doordash", "ubereats", "grubhub", "takeout",
        "takeaway", "cook", "meal", "diet", "bread", "milk", "fruit", "vegetable",
        "wine", "beer",
    ]),
    _define("transport", "Transport", "🚗", [
        "uber", "lyft", "taxi", "bus", "train", "metro", "subway", "fare", "fuel",
        "gas", "petrol", "parking", "toll", "vehicle", "car", "ride", "transport",
        "commute", "flight", "ticket", "amtrak", "greyhound", "bike", "scooter",
        "tram", "ferry", "oil", "maintenance", "repair",
    ]),
    _define("shopping", "Shopping", "🛍️", [
        "amazon", "shop", "store", "mall", "clothes", "clothing", "fashion", "shoes",
        "dress", "shirt", "pants", "jacket", "bag", "accessories", "electronics",
        "gadget", "appliance", "furniture", "home", "decor", "ebay", "etsy",
        "purchase", "order", "buy", "product", "item",
    ]),
    _define("health", "Health", "💊", [
        "doctor", "hospital", "clinic", "medicine", "pharmacy", "drug", "prescription",
        "dental", "dentist", "eye", "vision", "health", "medical", "therapy",
        "therapist", "insurance", "lab", "test", "emergency", "vet", "pet", "vaccine",
        "vitamin", "supplement",
    ]),
    _define("entertainment", "Entertainment", "🎬", [
        "netflix", "spotify", "movie", "cinema", "theatre", "game", "gaming", "steam",
        "playstation", "xbox", "concert", "event", "ticket", "show", "museum", "park",
        "amusement", "sport", "streaming", "hulu", "disney", "prime", "hbo",
        "apple tv", "youtube", "twitch", "music", "book", "magazine",
    ]),
    _define("bills", "Bills & Utilities", "📄", [
        "electric", "electricity", "water", "gas", "internet", "wifi", "phone",
        "mobile", "cable", "tv", "rent", "mortgage", "insurance", "loan", "credit",
        "subscription", "monthly", "bill", "utility", "service", "payment", "due", "fee",
    ]),
    _define("education", "Education", "📚", [
        "school", "college", "university", "tuition", "course", "class", "lesson",
        "book", "textbook", "study", "learn", "training", "workshop", "seminar",
        "udemy", "coursera", "tutorial", "degree", "exam", "test", "certificate", "skill",
    ]),
    _define("travel", "Travel", "✈️", [
        "hotel", "airbnb", "flight", "airline", "airport", "vacation", "holiday",
        "trip", "tour", "travel", "cruise", "resort", "booking", "expedia", "kayak",
        "passport", "visa", "luggage", "baggage", "sightseeing", "tour",
    ]),
    _define("fitness", "Fitness", "💪", [
        "gym", "fitness", "workout", "exercise", "sport", "yoga", "pilates", "run",
        "marathon", "swim", "cycling", "bike", "trainer", "supplement", "protein",
        "membership", "class", "crossfit", "zumba",
    ]),
    _define("personal", "Personal Care", "👤", [
        "salon", "barber", "haircut", "hair", "beauty", "spa", "massage", "cosmetics",
        "makeup", "skincare", "lotion", "perfume", "grooming", "nail", "facial",
        "wax", "shave", "toiletry", "soap", "shampoo",
    ]),
    _define("investments", "Investments", "📈", [
        "invest", "stock", "crypto", "bitcoin", "etf", "fund", "bond", "savings",
        "portfolio", "brokerage", "robinhood", "coinbase", "401k", "ira", "dividend",
        "trading", "forex", "gold", "silver",
    ]),
    _define(FALLBACK_KEY, "Other", "📦", []),
])
