"""Template engine adapters for the secure filters."""

from .template_engine import configure

__all__ = ["configure"]
