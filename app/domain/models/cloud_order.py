"""
Cloud order domain model.

A cloud order is an order pushed from the Poynt cloud down to an application
running at a terminal. This model normalizes loosely-typed caller options into
the record the order API expects.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping

from app.utils.poynt_utils import utc_now_iso

DEFAULT_CLOUD_ORDER_TTL = 900  # 15 min


@dataclass
class CloudOrder:
    """
    Normalized cloud order record.

    Base fields are always populated; `multi_tender`, `serial_num` and
    `collapse_key` are only serialized when set.

    Attributes:
        business_id: Business that owns the order
        store_id: Store inside the business
        device_id: Target terminal device
        ttl: Seconds the order stays deliverable
        items: Ordered line items
        amounts: Order amounts
        context: Order context (the API routes on context.businessId)
        statuses: Order statuses
        customer_user_id: Customer user id, if any
        created_at: ISO-8601 creation timestamp
        updated_at: ISO-8601 update timestamp
    """

    business_id: Any = None
    store_id: Any = None
    device_id: Any = None
    ttl: int = DEFAULT_CLOUD_ORDER_TTL
    items: list = field(default_factory=list)
    amounts: dict = field(default_factory=dict)
    context: dict = field(default_factory=dict)
    statuses: dict = field(default_factory=dict)
    customer_user_id: str | None = None
    created_at: str = field(default_factory=utc_now_iso)
    updated_at: str = field(default_factory=utc_now_iso)
    multi_tender: Any = None
    serial_num: str | None = None
    collapse_key: str | None = None

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "CloudOrder":
        """
        Build a cloud order from caller options.

        Falsy option values fall back to the field default, and
        `serialNumber` is stored as `serial_num`.
        """
        options = options or {}
        now = utc_now_iso()

        return cls(
            business_id=options.get("businessId"),
            store_id=options.get("storeId"),
            device_id=options.get("deviceId"),
            ttl=options.get("ttl") or DEFAULT_CLOUD_ORDER_TTL,
            items=options.get("items") or [],
            amounts=options.get("amounts") or {},
            context=options.get("context") or {},
            statuses=options.get("statuses") or {},
            customer_user_id=options.get("customerUserId") or None,
            created_at=options.get("createdAt") or now,
            updated_at=options.get("updatedAt") or now,
            multi_tender=options.get("multiTender") or None,
            serial_num=options.get("serialNumber") or None,
            collapse_key=options.get("collapseKey") or None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire representation sent as the request body."""
        data = {
            "businessId": self.business_id,
            "storeId": self.store_id,
            "deviceId": self.device_id,
            "ttl": self.ttl,
            "items": self.items,
            "amounts": self.amounts,
            "context": self.context,
            "statuses": self.statuses,
            "customerUserId": self.customer_user_id,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

        if self.multi_tender:
            data["multiTender"] = self.multi_tender
        if self.serial_num:
            data["serialNum"] = self.serial_num
        if self.collapse_key:
            data["collapseKey"] = self.collapse_key

        return data
