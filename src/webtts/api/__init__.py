"""
FastAPI REST API Layer for webtts.

This package defines all HTTP endpoints:
    - routes.py: Synthesis proxy and capability queries (/v1/*, /health)
    - schemas.py: Request/response Pydantic models
    - dependencies.py: FastAPI dependency injection
"""
