"""
Core utilities module.

Provides shared utility functions used across all layers.
"""

from keepalive.core.utils.time import utc_now

__all__ = ["utc_now"]
