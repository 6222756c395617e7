"""Routers module - FastAPI route handlers"""

from . import config, diff

__all__ = ["config", "diff"]
