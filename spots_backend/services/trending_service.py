"""
Trending City Service - scheduled refresh of the trending-destination cache

The refresh is triggered once a day by an external scheduler through
GET /api/cron/refresh-trending. Each refresh:

1. Fetches a ranked list of trending cities
   - live: one buffered Gemini call (spots_backend/agents/trending/prompts.py)
   - degraded: a built-in seed list, no network call
2. Parses "N. City, Country - reason" lines into TrendingCity rows
3. Writes the full snapshot to the TrendingStore (full replace)
4. Swaps the in-memory snapshot

Concurrency: refreshes run one at a time under an asyncio.Lock and the new
snapshot replaces the old one in a single assignment, so concurrent or
repeated calls never leave a mixed snapshot behind. A failed refresh keeps
the previous snapshot.

refresh() never raises: every outcome, including failures, is reported as a
RefreshOutcome.
"""

import asyncio
import logging
import re
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from spots_backend.agents.trending.prompts import build_trending_cities_prompt
from spots_backend.config import settings
from spots_backend.db.client import get_service_client
from spots_backend.schemas.cities import TrendingCity
from spots_backend.schemas.refresh import RefreshOutcome
from spots_backend.services.degraded_mode import is_degraded_mode
from spots_backend.services.generation_transport import (
    BufferedGeminiTransport,
    GenerationTransport,
    collect_text,
)

logger = logging.getLogger(__name__)


# =============================================================================
# REFERENCE DATA
# =============================================================================

CITY_EMOJIS: Dict[str, str] = {
    "San Francisco": "🌉",
    "New York": "🗽",
    "Los Angeles": "🌴",
    "Chicago": "🌆",
    "Seattle": "☕",
    "London": "🏛️",
    "Paris": "🗼",
    "Tokyo": "🏯",
    "Berlin": "🧸",
    "Sydney": "🏄",
    "Toronto": "🍁",
    "Barcelona": "⛪",
    "Amsterdam": "🚲",
    "Rome": "🏛️",
    "Miami": "🏖️",
    "Austin": "🎸",
    "Nashville": "🎵",
    "New Orleans": "🎺",
    "Mexico City": "🌮",
    "Copenhagen": "🧜‍♀️",
    "Lisbon": "🚋",
    "Kyoto": "⛩️",
    "Seoul": "🎤",
}

# (longitude, latitude)
CITY_COORDINATES: Dict[str, Tuple[float, float]] = {
    "San Francisco": (-122.4194, 37.7749),
    "New York": (-74.0060, 40.7128),
    "Los Angeles": (-118.2437, 34.0522),
    "Chicago": (-87.6298, 41.8781),
    "Seattle": (-122.3321, 47.6062),
    "London": (-0.1278, 51.5074),
    "Paris": (2.3522, 48.8566),
    "Tokyo": (139.6917, 35.6895),
    "Berlin": (13.4050, 52.5200),
    "Sydney": (151.2093, -33.8688),
    "Toronto": (-79.3832, 43.6532),
    "Barcelona": (2.1734, 41.3851),
    "Amsterdam": (4.9041, 52.3676),
    "Rome": (12.4964, 41.9028),
    "Miami": (-80.1918, 25.7617),
    "Austin": (-97.7431, 30.2672),
    "Mexico City": (-99.1332, 19.4326),
    "Lisbon": (-9.1393, 38.7223),
    "Kyoto": (135.7681, 35.0116),
    "Seoul": (126.9780, 37.5665),
    "Copenhagen": (12.5683, 55.6761),
}

DEFAULT_TRENDING_CITIES = ("Los Angeles", "San Francisco", "New York", "Chicago", "Miami", "Austin")

# Served by the degraded-mode refresh.
SEED_TRENDING_TEXT = """
1. Kyoto, Japan - Cherry blossom season is attracting visitors worldwide
2. Barcelona, Spain - Several major music festivals and improving weather
3. Mexico City, Mexico - Growing digital nomad scene and cultural events
4. Charleston, USA - Spring events and growing foodie reputation
5. Lisbon, Portugal - Continued growth as remote work destination with ideal spring weather
6. Seoul, South Korea - K-pop events and spring festivals
7. Copenhagen, Denmark - New culinary destinations and sustainability initiatives
8. Melbourne, Australia - Major sporting events and comfortable autumn weather
9. Marrakech, Morocco - Ideal spring temperatures and growing interest in North African travel
10. Cartagena, Colombia - Increasing attention from travelers seeking less crowded destinations
"""

_TRENDING_LINE = re.compile(r"^\s*(\d+)[.)]\s+([^,]+?),\s+(.+?)\s+[-–—]\s+(.+?)\s*$")


def city_slug(name: str) -> str:
    """Lowercase, hyphen-separated id for a city name (Mexico City -> mexico-city)."""
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def build_city(
    name: str,
    country: Optional[str] = None,
    rank: Optional[int] = None,
    reason: Optional[str] = None,
    last_updated: Optional[str] = None,
) -> TrendingCity:
    """Create a TrendingCity, filling emoji and coordinates from reference data."""
    return TrendingCity(
        id=city_slug(name),
        name=name,
        country=country,
        rank=rank,
        reason=reason,
        emoji=CITY_EMOJIS.get(name, "🏙️"),
        coordinates=CITY_COORDINATES.get(name, (0.0, 0.0)),
        last_updated=last_updated,
    )


def parse_trending_cities(text: str, timestamp: str) -> List[TrendingCity]:
    """
    Parse "N. City, Country - reason" lines; other lines are ignored.

    Markdown emphasis is stripped and duplicate cities keep their first
    (best) rank.
    """
    cities: List[TrendingCity] = []
    seen = set()
    for line in text.splitlines():
        match = _TRENDING_LINE.match(line.replace("**", ""))
        if not match:
            continue
        rank_str, name, country, reason = match.groups()
        name = name.strip()
        slug = city_slug(name)
        if not slug or slug in seen:
            continue
        seen.add(slug)
        cities.append(build_city(
            name=name,
            country=country.strip(),
            rank=int(rank_str),
            reason=reason.strip(),
            last_updated=timestamp,
        ))
    cities.sort(key=lambda city: city.rank or 0)
    return cities


# =============================================================================
# STORAGE
# =============================================================================

class TrendingStore(ABC):
    """Persistence capability for the trending-city snapshot."""

    @abstractmethod
    async def replace_all(self, cities: List[TrendingCity]) -> None:
        """Make `cities` the complete stored snapshot."""

    @abstractmethod
    async def load(self) -> List[TrendingCity]:
        """Return the stored snapshot ordered by rank."""


class InMemoryTrendingStore(TrendingStore):
    def __init__(self):
        self._cities: List[TrendingCity] = []

    async def replace_all(self, cities: List[TrendingCity]) -> None:
        self._cities = list(cities)

    async def load(self) -> List[TrendingCity]:
        return list(self._cities)


class SupabaseTrendingStore(TrendingStore):
    """
    Snapshot stored in a Supabase table keyed by city slug.

    replace_all upserts every row, then deletes rows missing from the new
    snapshot, so repeating a refresh with the same data is a no-op.
    """

    def __init__(self, client, table: str):
        self._client = client
        self._table = table

    async def replace_all(self, cities: List[TrendingCity]) -> None:
        rows = [city.model_dump(mode="json") for city in cities]
        self._client.table(self._table).upsert(rows, on_conflict="id").execute()
        ids = [city.id for city in cities]
        self._client.table(self._table).delete().not_.in_("id", ids).execute()
        logger.info(f"Stored {len(rows)} trending cities in table={self._table}")

    async def load(self) -> List[TrendingCity]:
        response = self._client.table(self._table).select("*").order("rank").execute()
        return [TrendingCity(**row) for row in (response.data or [])]


# =============================================================================
# CACHE
# =============================================================================

class TrendingCityCache:
    """Owner of the trending-city snapshot."""

    def __init__(self, store: TrendingStore, transport: Optional[GenerationTransport] = None):
        self._store = store
        self._transport = transport
        self._snapshot: List[TrendingCity] = []
        self._lock = asyncio.Lock()

    async def _fetch_trending_text(self) -> str:
        if is_degraded_mode() or self._transport is None:
            logger.info("Degraded mode: using seed trending cities")
            return SEED_TRENDING_TEXT
        return await collect_text(self._transport, build_trending_cities_prompt())

    async def refresh(self) -> RefreshOutcome:
        """Rebuild the snapshot. Safe to call repeatedly and concurrently."""
        async with self._lock:
            timestamp = datetime.now(timezone.utc).isoformat()
            logger.info("Refreshing trending cities")
            try:
                text = await self._fetch_trending_text()
                cities = parse_trending_cities(text, timestamp)
                if not cities:
                    logger.error("Trending refresh produced no parsable cities; keeping previous snapshot")
                    return RefreshOutcome(
                        success=False,
                        timestamp=timestamp,
                        error="No trending cities could be parsed from the provider response",
                    )

                await self._store.replace_all(cities)
                self._snapshot = cities
            except Exception as e:
                logger.error(f"Error refreshing trending cities: {e}")
                return RefreshOutcome(success=False, timestamp=timestamp, error=str(e))

            logger.info(f"Successfully refreshed trending cities (count={len(cities)})")
            return RefreshOutcome(success=True, count=len(cities), timestamp=timestamp)

    async def get_trending(self, limit: int = 5) -> List[TrendingCity]:
        """Current snapshot, falling back to the store, then to defaults."""
        cities = self._snapshot
        if not cities:
            try:
                cities = await self._store.load()
            except Exception as e:
                logger.error(f"Error loading trending cities: {e}")
                cities = []
        if not cities:
            cities = [build_city(name) for name in DEFAULT_TRENDING_CITIES]
        return cities[:limit]


_trending_cache: Optional[TrendingCityCache] = None


def get_trending_cache() -> TrendingCityCache:
    """
    FastAPI dependency: the process-wide trending cache (lazy initialization).
    """
    global _trending_cache

    if _trending_cache is None:
        client = get_service_client()
        store: TrendingStore
        if client is not None:
            store = SupabaseTrendingStore(client, settings.TRENDING_TABLE)
        else:
            store = InMemoryTrendingStore()
        _trending_cache = TrendingCityCache(store=store, transport=BufferedGeminiTransport())

    return _trending_cache
