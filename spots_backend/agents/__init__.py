"""
AI components for the Spots backend.

Contains the prompt templates and value types of the LLM workflows:

1. Recommendation System (single-shot LLM)
   - Place recommendations, interest expansion, place questions
   - Pipeline located in: spots_backend/services/recommendation_service.py

2. Trending Cities (single-shot LLM, scheduled)
   - Ranked list of trending travel destinations
   - Refresh located in: spots_backend/services/trending_service.py

Both use the Google Gen AI SDK directly; no agent framework is involved.
"""
