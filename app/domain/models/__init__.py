"""
Domain models for business entities.

These models represent the records exchanged with the Poynt order API.
"""

from .cloud_order import DEFAULT_CLOUD_ORDER_TTL, CloudOrder

__all__ = ["CloudOrder", "DEFAULT_CLOUD_ORDER_TTL"]
