"""ASGI application factory and dependencies for the campmeals server."""

from campmeals.server.app import app, create_app

__all__ = ["app", "create_app"]
