"""
Tests for the degraded-mode gate and mock generators.
"""

from spots_backend.agents.recommendation.types import QueryDescriptor
from spots_backend.config import settings
from spots_backend.services.degraded_mode import (
    is_degraded_mode,
    is_live_provider_configured,
    mock_interest_list,
    mock_query_answer,
    mock_recommendation_chunks,
    mock_recommendation_set,
)


class TestGate:
    """Tests for is_live_provider_configured."""

    def test_no_key_is_degraded(self):
        assert is_live_provider_configured() is False
        assert is_degraded_mode() is True

    def test_placeholder_key_is_degraded(self, monkeypatch):
        monkeypatch.setattr(settings, "GOOGLE_API_KEY", "placeholder-key-for-build-process")
        assert is_degraded_mode() is True

    def test_blank_key_is_degraded(self, monkeypatch):
        monkeypatch.setattr(settings, "GOOGLE_API_KEY", "   ")
        assert is_degraded_mode() is True

    def test_real_key_is_live(self, live_mode):
        assert is_live_provider_configured() is True


class TestMockInterests:
    """Tests for mock_interest_list."""

    def test_hiking_adjacent_entries(self):
        result = mock_interest_list(QueryDescriptor(interests=("hiking",), result_limit=3))
        assert result == ["hiking", "nature trails", "mountain views"]

    def test_unknown_interest_uses_generic_entries(self):
        result = mock_interest_list(QueryDescriptor(interests=("origami",), result_limit=3))
        assert result == ["origami", "coffee shops", "hiking trails"]

    def test_no_duplicates_and_limit(self):
        result = mock_interest_list(QueryDescriptor(interests=("Museums", "art"), result_limit=20))
        lowered = [item.lower() for item in result]
        assert len(lowered) == len(set(lowered))
        assert len(result) <= 20

    def test_deterministic(self):
        descriptor = QueryDescriptor(interests=("coffee", "music"), result_limit=6)
        assert mock_interest_list(descriptor) == mock_interest_list(descriptor)


class TestMockRecommendations:
    """Tests for mock_recommendation_set and friends."""

    def test_echoes_first_interest_as_tag(self):
        result = mock_recommendation_set(QueryDescriptor(interests=("coffee", "books")))
        assert result.kind == "structured"
        assert result.narrative is None
        assert all("coffee" in item.tags for item in result.items)

    def test_query_only_uses_general_tag(self):
        result = mock_recommendation_set(QueryDescriptor(free_text_query="tacos"))
        assert all("general" in item.tags for item in result.items)

    def test_respects_limit_and_type(self):
        result = mock_recommendation_set(QueryDescriptor(interests=("art",), place_type="museum", result_limit=1))
        assert len(result.items) == 1
        assert "museum" in result.items[0].tags

    def test_chunks_render_every_item(self):
        descriptor = QueryDescriptor(interests=("art",), result_limit=2)
        chunks = list(mock_recommendation_chunks(descriptor))
        assert len(chunks) == 3
        assert chunks[1].startswith("- Example Place 1")

    def test_query_answer_quotes_query(self):
        answer = mock_query_answer(QueryDescriptor(free_text_query="best tacos?"))
        assert '"best tacos?"' in answer
