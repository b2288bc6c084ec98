"""
Order client for the Poynt REST API.

This module formats the order endpoints (list, fetch, cloud order submission
and force completion) into request descriptors and hands them to an injected
executor. Validation only checks that identifying fields are present.
"""

import logging
from typing import Any, Mapping

from app.domain.models import CloudOrder
from app.utils.poynt_utils import build_query_string, pick_keys, quote_path_segment, require_keys

from .base_client import RequestDescriptor, RequestExecutor

logger = logging.getLogger(__name__)

# Filtros aceptados por GET /businesses/{businessId}/orders
ORDER_QUERY_KEYS = (
    "startAt",
    "startOffset",
    "endAt",
    "limit",
    "cardNumberFirst6",
    "cardNumberLast4",
    "cardExpirationMonth",
    "cardExpirationYear",
    "cardHolderFirstName",
    "cardHolderLastName",
    "storeId",
    "includeStaysAll",
)


class OrderClient:
    """
    Client for Poynt order operations.

    Each operation builds a fresh RequestDescriptor and awaits the injected
    `request` coroutine, returning its result unchanged. Missing identifying
    fields raise MissingFieldException before the executor is called.
    """

    def __init__(self, request: RequestExecutor):
        """
        Initialize the order client.

        Args:
            request: Coroutine function performing the HTTP call for a descriptor
        """
        self.request = request

    async def _send(self, descriptor: RequestDescriptor) -> Any:
        logger.debug(f"Order request: {descriptor.method} {descriptor.url}")
        return await self.request(descriptor)

    async def list_orders(self, options: Mapping[str, Any]) -> Any:
        """
        Get all orders at a business.

        Args:
            options: Must contain businessId; optional filters are startAt,
                startOffset, endAt, limit, cardNumberFirst6, cardNumberLast4,
                cardExpirationMonth, cardExpirationYear, cardHolderFirstName,
                cardHolderLastName, storeId and includeStaysAll

        Returns:
            Order list as returned by the executor

        Raises:
            MissingFieldException: If businessId is missing
        """
        require_keys(options, ["businessId"], operation="list_orders")

        query = build_query_string(pick_keys(options, ORDER_QUERY_KEYS))
        url = f"/businesses/{quote_path_segment(options['businessId'])}/orders?{query}"

        return await self._send(RequestDescriptor(url=url, method="GET"))

    async def get_order(self, options: Mapping[str, Any]) -> Any:
        """
        Get a single order at a business.

        Raises:
            MissingFieldException: Naming every missing field among businessId and orderId
        """
        require_keys(options, ["businessId", "orderId"], operation="get_order")

        url = (
            f"/businesses/{quote_path_segment(options['businessId'])}"
            f"/orders/{quote_path_segment(options['orderId'])}"
        )
        return await self._send(RequestDescriptor(url=url, method="GET"))

    async def send_raw_cloud_order(self, order: Mapping[str, Any]) -> Any:
        """
        Send a cloud order by specifying the entire order object.

        The business id comes from order["context"]["businessId"] and is used
        as-is in the path. The order is sent as the body verbatim.
        """
        context = order.get("context") or {}
        url = f"/businesses/{context.get('businessId')}/orders"
        return await self._send(RequestDescriptor(url=url, method="POST", body=order))

    async def send_cloud_order(self, options: Mapping[str, Any]) -> Any:
        """
        Send a cloud order to an application running at a Poynt terminal.

        Options are normalized into a CloudOrder (ttl defaults to 900 seconds,
        collections default to empty, timestamps to now, serialNumber is sent
        as serialNum) and forwarded to send_raw_cloud_order. businessId,
        storeId and deviceId are not enforced here.
        """
        order = CloudOrder.from_options(options)
        return await self.send_raw_cloud_order(order.to_dict())

    async def send_raw_cloud_order_complete(self, order: Mapping[str, Any]) -> Any:
        """
        Force-complete an order.

        businessId and orderId are interpolated as-is; the body is always empty.
        """
        url = f"/businesses/{order.get('businessId')}/orders/{order.get('orderId')}/forceComplete"
        return await self._send(RequestDescriptor(url=url, method="POST", body={}))

    async def send_cloud_order_complete(self, options: Mapping[str, Any]) -> Any:
        """
        Force-complete an order from caller options.

        serialNumber and collapseKey are accepted but not sent.
        """
        if options.get("serialNumber") or options.get("collapseKey"):
            logger.debug("serialNumber/collapseKey are ignored by forceComplete")
        return await self.send_raw_cloud_order_complete(options)

    # Alias camelCase
    getOrders = list_orders
    listOrders = list_orders
    getOrder = get_order
    sendRawCloudOrder = send_raw_cloud_order
    sendCloudOrder = send_cloud_order
    sendRawCloudOrderComplete = send_raw_cloud_order_complete
    sendCloudOrderComplete = send_cloud_order_complete

    def __repr__(self):
        return f"OrderClient(request={self.request!r})"
