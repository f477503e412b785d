"""
Tests for the response resolver.

The model is told to emit a JSON array for interests but does not always
comply; the resolver must degrade to a comma split instead of failing.
"""

from spots_backend.services.response_resolver import (
    EMPTY_NARRATIVE_FALLBACK,
    resolve_interest_list,
    resolve_query_answer,
    resolve_recommendation_set,
)


class TestResolveInterestList:
    """Tests for resolve_interest_list."""

    def test_json_array_is_truncated(self):
        assert resolve_interest_list('["a","b","c"]', 2) == ["a", "b"]

    def test_comma_fallback_for_plain_text(self):
        assert resolve_interest_list("coffee, tea, museums", 2) == ["coffee", "tea"]

    def test_never_pads(self):
        assert resolve_interest_list('["jazz bars"]', 5) == ["jazz bars"]

    def test_json_object_falls_back_to_comma_split(self):
        """Valid JSON that is not an array is treated as text."""
        result = resolve_interest_list('{"interests": "x"}', 5)
        assert result == ['{"interests": "x"}']

    def test_markdown_code_fence_is_stripped(self):
        raw = '```json\n["street art", "galleries", "murals"]\n```'
        assert resolve_interest_list(raw, 5) == ["street art", "galleries", "murals"]

    def test_prose_is_comma_split(self):
        raw = "Sure! street food, night markets,  rooftop bars "
        assert resolve_interest_list(raw, 3) == ["Sure! street food", "night markets", "rooftop bars"]

    def test_blank_entries_dropped(self):
        assert resolve_interest_list('["a", "", "  ", "b"]', 5) == ["a", "b"]
        assert resolve_interest_list("a,, ,b", 5) == ["a", "b"]

    def test_non_string_items_are_stringified(self):
        assert resolve_interest_list('["top 10", 42]', 5) == ["top 10", "42"]

    def test_json_string_literal_is_split_on_its_value(self):
        assert resolve_interest_list('"hiking, biking"', 5) == ["hiking", "biking"]

    def test_empty_output_is_empty_list(self):
        assert resolve_interest_list("   ", 5) == []
        assert resolve_interest_list("", 5) == []


class TestResolveNarratives:
    """Tests for recommendation and query resolution."""

    def test_recommendation_text_is_verbatim(self):
        raw = "\n  Here are a few places:\n- Blue Bottle: great pour-over\n  "
        result = resolve_recommendation_set(raw)
        assert result.kind == "narrative"
        assert result.items == []
        assert result.narrative == "Here are a few places:\n- Blue Bottle: great pour-over"

    def test_recommendation_json_is_not_parsed(self):
        result = resolve_recommendation_set('[{"name": "x"}]')
        assert result.narrative == '[{"name": "x"}]'

    def test_empty_recommendation_uses_fallback(self):
        result = resolve_recommendation_set("  \n ")
        assert result.kind == "narrative"
        assert result.narrative == "Sorry, I couldn't generate any recommendations."

    def test_empty_answer_uses_fallback(self):
        assert resolve_query_answer("") == EMPTY_NARRATIVE_FALLBACK

    def test_query_answer_trimmed(self):
        assert resolve_query_answer("  Try the pier.  ") == "Try the pier."
