#!/usr/bin/env python3
"""
Recommendation Pipeline Runner

Runs the AI pipeline locally without starting the API server. Without a
GOOGLE_API_KEY in the environment (or .env) the mock data is printed.

Usage:
    python scripts/try_pipeline.py --interests hiking photography
    python scripts/try_pipeline.py --query "quiet cafe to work from" --lat 34.05 --lon -118.24 --radius 2
    python scripts/try_pipeline.py --query "quiet cafe" --stream
    python scripts/try_pipeline.py --expand hiking --count 3
    python scripts/try_pipeline.py --trending
"""

import argparse
import asyncio
import logging
import os
import sys

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

load_dotenv()

from spots_backend.services.degraded_mode import is_degraded_mode  # noqa: E402
from spots_backend.services.generation_transport import (  # noqa: E402
    BufferedGeminiTransport,
    StreamingGeminiTransport,
)
from spots_backend.services.query_normalizer import (  # noqa: E402
    normalize_interest_request,
    normalize_recommendation_request,
)
from spots_backend.services.recommendation_service import (  # noqa: E402
    expand_interests,
    generate_recommendations,
    stream_recommendations,
)
from spots_backend.services.trending_service import (  # noqa: E402
    InMemoryTrendingStore,
    TrendingCityCache,
)
from spots_backend.utils.errors import PipelineError  # noqa: E402

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def build_body(args) -> dict:
    body = {"limit": args.count}
    if args.query:
        body["query"] = args.query
    if args.interests:
        body["interests"] = args.interests
    if args.lat is not None and args.lon is not None:
        body["location"] = {"latitude": args.lat, "longitude": args.lon}
        if args.radius:
            body["radius"] = args.radius
    if args.type:
        body["type"] = args.type
    return body


async def run_recommendations(args):
    descriptor = normalize_recommendation_request(build_body(args))

    if args.stream:
        print("\n--- streaming ---\n")
        async for chunk in stream_recommendations(descriptor, StreamingGeminiTransport()):
            print(chunk, end="", flush=True)
        print("\n")
        return

    result = await generate_recommendations(descriptor, BufferedGeminiTransport())
    print("\n" + "=" * 60)
    print(f"KIND: {result.kind}")
    print("=" * 60)
    if result.kind == "narrative":
        print(f"\n{result.narrative}\n")
        return
    for i, place in enumerate(result.items, 1):
        print(f"\n--- Place #{i} ---")
        print(f"  Name:     {place.name}")
        print(f"  Address:  {place.address}")
        print(f"  Rating:   {place.rating}")
        print(f"  Tags:     {', '.join(place.tags)}")
        print(f"  About:    {place.description}")
    print()


async def run_expand(args):
    body = {"interests": args.expand, "count": args.count}
    if args.location_name:
        body["location"] = args.location_name
    interests = await expand_interests(normalize_interest_request(body), BufferedGeminiTransport())
    print("\nRelated interests:")
    for interest in interests:
        print(f"  - {interest}")
    print()


async def run_trending(args):
    cache = TrendingCityCache(store=InMemoryTrendingStore(), transport=BufferedGeminiTransport())
    outcome = await cache.refresh()
    if not outcome.success:
        print(f"\n❌ Refresh failed: {outcome.error}\n")
        return
    print(f"\n✅ Refreshed {outcome.count} cities at {outcome.timestamp}\n")
    for city in await cache.get_trending(args.count):
        print(f"  {city.rank:>2}. {city.emoji} {city.name}, {city.country} - {city.reason}")
    print()


def main():
    parser = argparse.ArgumentParser(
        description="Run the recommendation pipeline locally",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--query", "-q", type=str, help="Free-text request")
    parser.add_argument("--interests", "-i", nargs="+", help="Interests (space separated)")
    parser.add_argument("--lat", type=float, help="Latitude")
    parser.add_argument("--lon", type=float, help="Longitude")
    parser.add_argument("--radius", "-r", type=float, help="Radius in km (needs --lat/--lon)")
    parser.add_argument("--type", "-t", type=str, help="Place type filter (e.g. cafe)")
    parser.add_argument("--count", "-n", type=int, default=5, help="Maximum results (default: 5)")
    parser.add_argument("--stream", action="store_true", help="Stream recommendation text")
    parser.add_argument("--expand", nargs="+", help="Expand these interests instead")
    parser.add_argument("--location-name", type=str, help="City for --expand (e.g. 'Los Angeles')")
    parser.add_argument("--trending", action="store_true", help="Refresh and print trending cities")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    if is_degraded_mode():
        print("\n⚠️  GOOGLE_API_KEY not set: printing mock data.")
        print("   export GOOGLE_API_KEY=your-gemini-api-key to call Gemini.")

    if args.trending:
        runner = run_trending
    elif args.expand:
        runner = run_expand
    elif args.query or args.interests:
        runner = run_recommendations
    else:
        parser.print_help()
        return

    try:
        asyncio.run(runner(args))
    except PipelineError as e:
        print(f"\n❌ {e.error}: {e.details}\n")
        sys.exit(1)


if __name__ == "__main__":
    main()
