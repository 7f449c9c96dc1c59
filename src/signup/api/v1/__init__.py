"""
API v1 package.

Contains versioned API routes for user signup and activation.
"""

from signup.api.v1.routes import router

__all__ = ["router"]
