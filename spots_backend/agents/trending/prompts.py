"""
Trending Cities Prompt Templates

The refresh job asks the model for a ranked list of travel destinations in a
line-oriented format that the trending service parses with a regex:

    1. Kyoto, Japan - Cherry blossom season is attracting visitors worldwide
"""

from spots_backend.agents.recommendation.types import PromptPair

TRENDING_CITY_COUNT = 10

TRENDING_CITIES_SYSTEM_PROMPT = """You are a travel trends analyst for Spots.

<role>
You know which cities are currently popular with travelers and why: seasonal events, festivals, cultural moments and travel trends.
</role>

<output_format>
Return a numbered list and nothing else. One city per line, exactly in this format:
<rank>. <City>, <Country> - <one sentence on why it is trending>
Do not use markdown, bold text or sub-bullets.
</output_format>"""


def build_trending_cities_prompt(count: int = TRENDING_CITY_COUNT) -> PromptPair:
    """Build the prompt pair for the trending-city refresh."""
    return PromptPair(
        system_prompt=TRENDING_CITIES_SYSTEM_PROMPT,
        user_prompt=(
            f"What are the {count} cities trending for travel this month? "
            "Consider seasonal events, recent cultural phenomena, and travel trends."
        ),
        result_limit=count,
    )
