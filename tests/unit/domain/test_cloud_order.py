"""Tests unitarios para el modelo CloudOrder."""

from app.domain.models import DEFAULT_CLOUD_ORDER_TTL, CloudOrder


class TestCloudOrderFromOptions:
    """Tests para la normalización de opciones."""

    def test_defaults(self):
        """Sin opciones todos los campos base quedan con su default."""
        order = CloudOrder.from_options({})

        assert order.business_id is None
        assert order.ttl == DEFAULT_CLOUD_ORDER_TTL == 900
        assert order.items == []
        assert order.amounts == {}
        assert order.context == {}
        assert order.statuses == {}
        assert order.customer_user_id is None
        assert order.created_at
        assert order.updated_at

    def test_caller_values_are_kept(self):
        options = {
            "businessId": "B",
            "storeId": "S",
            "deviceId": "urn:tid:D",
            "ttl": 60,
            "items": [{"name": "latte", "quantity": 1}],
            "amounts": {"orderTotal": 450, "currency": "USD"},
            "context": {"businessId": "B", "source": "CLOUD"},
            "statuses": {"status": "OPENED"},
            "customerUserId": "42",
            "createdAt": "2025-01-15T10:30:00Z",
            "updatedAt": "2025-01-15T10:31:00Z",
        }

        order = CloudOrder.from_options(options)

        assert order.device_id == "urn:tid:D"
        assert order.ttl == 60
        assert order.items == [{"name": "latte", "quantity": 1}]
        assert order.context["businessId"] == "B"
        assert order.customer_user_id == "42"
        assert order.created_at == "2025-01-15T10:30:00Z"
        assert order.updated_at == "2025-01-15T10:31:00Z"

    def test_falsy_values_fall_back_to_defaults(self):
        """ttl=0 e items vacíos usan el valor por defecto."""
        order = CloudOrder.from_options({"ttl": 0, "items": None, "customerUserId": ""})

        assert order.ttl == 900
        assert order.items == []
        assert order.customer_user_id is None

    def test_defaults_are_not_shared(self):
        first = CloudOrder.from_options({})
        second = CloudOrder.from_options({})

        first.items.append({"name": "x"})

        assert second.items == []


class TestCloudOrderToDict:
    """Tests para la representación enviada como body."""

    def test_base_fields(self):
        body = CloudOrder.from_options({"businessId": "B"}).to_dict()

        assert set(body) == {
            "businessId",
            "storeId",
            "deviceId",
            "ttl",
            "items",
            "amounts",
            "context",
            "statuses",
            "customerUserId",
            "createdAt",
            "updatedAt",
        }

    def test_optional_fields(self):
        body = CloudOrder.from_options(
            {"multiTender": True, "serialNumber": "4242", "collapseKey": "k1"}
        ).to_dict()

        assert body["multiTender"] is True
        assert body["serialNum"] == "4242"
        assert body["collapseKey"] == "k1"
        assert "serialNumber" not in body
