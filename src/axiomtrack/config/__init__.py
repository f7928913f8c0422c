"""Configuration module for AxiomTrack.

Usage:
    from axiomtrack.config import get_settings

    settings = get_settings()  # Cached singleton
    print(settings.axiom_api_base_url)
"""

from axiomtrack.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
