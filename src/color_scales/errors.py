from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when a scale, palette or legend is built from invalid settings."""


__all__ = ["ConfigurationError"]
