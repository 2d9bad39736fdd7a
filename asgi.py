"""
asgi.py -- Application assembly for Thingful.

Run with:  uvicorn asgi:app --reload
"""

from api.main import app

__all__ = ["app"]
