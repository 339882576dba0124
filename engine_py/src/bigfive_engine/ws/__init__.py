"""
WebSocket gateway and event models for the Big Five game.
"""

from .events import *
from .server import app, create_app

__all__ = ["app", "create_app"]
