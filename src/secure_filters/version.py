"""Single source of truth for the secure-filters version."""

__version__ = "1.0.0"
