"""
Inkfeed Backend

A FastAPI backend for the Inkfeed mobile web app.
Provides accounts, article publishing with hashtag tagging, image uploads,
and per-user draft storage, plus a client package that keeps a device-local
draft in sync with the server.
"""

__version__ = "1.0.0"
