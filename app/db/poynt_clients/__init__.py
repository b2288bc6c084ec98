"""
Poynt REST clients organized by responsibility.

The executor owns the transport; resource clients only build request
descriptors and delegate to it.
"""

from .base_client import PoyntRequestExecutor, RequestDescriptor, RequestExecutor
from .order_client import ORDER_QUERY_KEYS, OrderClient

__all__ = [
    "PoyntRequestExecutor",
    "RequestDescriptor",
    "RequestExecutor",
    "OrderClient",
    "ORDER_QUERY_KEYS",
]
