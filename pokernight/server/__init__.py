"""
Poker Night Server - FastAPI Server Layer
"""

from pokernight.server.app import app, create_app

__all__ = ["app", "create_app"]
