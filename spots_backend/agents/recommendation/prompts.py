"""
Recommendation System Prompt Templates

Contains the system prompts and prompt builders for the AI endpoints:
- Place recommendations (prose plus bulleted list)
- Interest expansion (JSON array of strings only)
- Natural-language place questions

Every builder is a pure function of its QueryDescriptor: the same descriptor
always yields a byte-identical PromptPair. Do not add timestamps, random
examples or anything else that varies between calls.

Prompt Engineering Pattern:
- System prompt defines the role and the output format
- User prompt carries the request, in a fixed order:
  1. free-text query (quoted) or comma-joined interests
  2. location clause, when present
  3. place type filter, when present
"""

from typing import List

from spots_backend.agents.recommendation.types import GeoPoint, PromptPair, QueryDescriptor

# =============================================================================
# SYSTEM PROMPTS
# =============================================================================

RECOMMENDATION_SYSTEM_PROMPT = """You are an expert location and place recommendation assistant for Spots, an app that helps people discover places that match their interests.

<role>
You specialize in finding and suggesting places that match users' interests and preferences.
Always provide thoughtful, specific recommendations and explain why you are recommending them.
Your recommendations should be informative, highlighting the key features of each place.
</role>

<output_format>
Format your response as a short conversational paragraph followed by a bulleted list of specific recommendations.
For each recommendation, include:
- Name of the place
- Brief description
- Why it matches the request
- Location details when available
- Any special features
</output_format>

<limits>
Limit your response to {limit} recommendations.
</limits>"""


INTEREST_EXPANSION_SYSTEM_PROMPT = """You are a helpful assistant that suggests related interests based on the interests a user already has.

<output_format>
Respond ONLY with a JSON array of strings, for example ["street photography", "jazz bars"].
No markdown code blocks, no explanation, no text before or after the array.
Return at most {limit} items.
</output_format>"""


QUERY_SYSTEM_PROMPT = """You are an expert location and place recommendation assistant for Spots.

<role>
You interpret what the user is looking for and answer their question about places directly and conversationally.
</role>

<output_format>
Answer the question first, then add specific place recommendations when appropriate.
For each recommendation, include the name of the place, a brief description, why it is relevant and location details when available.
Limit your recommendations to {limit} places unless the user asks for a different number.
</output_format>"""


# =============================================================================
# CLAUSE HELPERS
# =============================================================================

def format_number(value: float) -> str:
    """Render a coordinate or distance without float noise (max 6 decimals)."""
    text = f"{float(value):.6f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def _location_clause(location: GeoPoint, radius_km=None) -> str:
    clause = (
        f"near latitude {format_number(location.latitude)}, "
        f"longitude {format_number(location.longitude)}"
    )
    if radius_km is not None:
        clause += f", within {format_number(radius_km)} km"
    return clause


# =============================================================================
# USER PROMPT BUILDERS
# =============================================================================

def build_recommendation_prompt(descriptor: QueryDescriptor) -> PromptPair:
    """
    Build the prompt pair for place recommendations.

    Example user prompt:
        Find places matching this request: "quiet cafe to work from"
        Location: near latitude 34.0522, longitude -118.2437, within 5 km
        Filter to this type of place: cafe
    """
    lines: List[str] = []

    if descriptor.free_text_query:
        lines.append(f'Find places matching this request: "{descriptor.free_text_query}"')
    else:
        lines.append(f"Find places matching these interests: {', '.join(descriptor.interests)}")

    if descriptor.location is not None:
        lines.append(f"Location: {_location_clause(descriptor.location, descriptor.radius_km)}")

    if descriptor.place_type:
        lines.append(f"Filter to this type of place: {descriptor.place_type}")

    return PromptPair(
        system_prompt=RECOMMENDATION_SYSTEM_PROMPT.format(limit=descriptor.result_limit),
        user_prompt="\n".join(lines),
        result_limit=descriptor.result_limit,
    )


def build_interest_expansion_prompt(descriptor: QueryDescriptor) -> PromptPair:
    """
    Build the prompt pair for interest expansion.

    The model is told to answer with a bare JSON array; the response
    resolver still copes with prose or comma-separated output.
    """
    lines = [f"I have the following interests: {', '.join(descriptor.interests)}."]

    if descriptor.location_name:
        lines.append(f"I am visiting {descriptor.location_name}.")
    elif descriptor.location is not None:
        lines.append(f"I am {_location_clause(descriptor.location, descriptor.radius_km)}.")

    lines.append(
        f"Suggest {descriptor.result_limit} more related interests that I might enjoy exploring."
    )
    lines.append("Give me ONLY a JSON array of strings with no explanation.")

    return PromptPair(
        system_prompt=INTEREST_EXPANSION_SYSTEM_PROMPT.format(limit=descriptor.result_limit),
        user_prompt="\n".join(lines),
        result_limit=descriptor.result_limit,
    )


def build_query_prompt(descriptor: QueryDescriptor) -> PromptPair:
    """Build the prompt pair for a natural-language place question."""
    lines = [f'Question: "{descriptor.free_text_query}"']

    if descriptor.location is not None:
        lines.append(f"Context: I'm currently {_location_clause(descriptor.location, descriptor.radius_km)}.")

    if descriptor.interests:
        lines.append(f"My interests include: {', '.join(descriptor.interests)}.")

    return PromptPair(
        system_prompt=QUERY_SYSTEM_PROMPT.format(limit=descriptor.result_limit),
        user_prompt="\n".join(lines),
        result_limit=descriptor.result_limit,
    )
