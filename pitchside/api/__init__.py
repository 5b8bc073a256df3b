"""
FastAPI application exposing the player statistics service.
"""

__all__ = ["app"]


def __getattr__(name):
    if name == "app":
        from .app import app as _app

        return _app
    raise AttributeError(f"module 'pitchside.api' has no attribute '{name}'")
