"""
Shared dependencies for API routes.
"""

from fastapi import Request

from tracklink.config import Settings


def get_settings(request: Request) -> Settings:
    """Settings constructed at startup and attached to the application state."""
    return request.app.state.settings
