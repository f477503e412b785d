"""
Quick demo script to run the Spots API locally.

This script starts a local server and shows how to make requests to the endpoints.
"""

import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting Spots Backend Demo")
    print("=" * 60)
    print()
    print("📌 API Endpoints:")
    print("   - Health Check:      GET  http://localhost:8000/health")
    print("   - Recommendations:   POST http://localhost:8000/api/ai/recommendations")
    print("   - Streamed:          POST http://localhost:8000/api/ai/recommendations/stream")
    print("   - Expand Interests:  POST http://localhost:8000/api/ai/expand-interests")
    print("   - Query:             POST http://localhost:8000/api/ai/query")
    print("   - Trending Cities:   GET  http://localhost:8000/api/cities/trending")
    print("   - API Docs:               http://localhost:8000/docs")
    print()
    print("🔐 Scheduler endpoints (/api/cron/*) require:")
    print("   Authorization: Bearer <CRON_SECRET>")
    print()
    print("📝 Test with curl:")
    print('   curl -X POST "http://localhost:8000/api/ai/expand-interests" \\')
    print('     -H "Content-Type: application/json" \\')
    print('     -d \'{"interests": ["hiking"], "count": 3}\'')
    print()
    print("   Without GOOGLE_API_KEY every AI endpoint serves mock data.")
    print()
    print("=" * 60)
    print("Starting server on http://localhost:8000")
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "spots_backend.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
