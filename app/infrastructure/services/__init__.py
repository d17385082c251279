"""
Service providers.

Provides application-scoped provider functions for shared infrastructure.
"""

from infrastructure.services.providers import get_settings

__all__ = [
    "get_settings",
]
