"""Integration tests for components working together.

Coverage:
    - API endpoints with real HTTP requests over ASGITransport
    - Session controller driving the real HTTP client against the app

The answer agent is replaced through FastAPI dependency overrides, so no
API key is needed.
"""
