"""Tests unitarios para el cliente de órdenes de Poynt."""

from datetime import datetime
from unittest.mock import AsyncMock

import pytest

from app.db.poynt_clients import OrderClient, RequestDescriptor
from app.utils.error_handler import ErrorCode, MissingFieldException


@pytest.fixture
def executor():
    """Executor simulado que devuelve una respuesta fija."""
    return AsyncMock(return_value={"ok": True})


@pytest.fixture
def client(executor):
    return OrderClient(executor)


def sent_descriptor(executor) -> RequestDescriptor:
    """Devuelve el único descriptor enviado al executor."""
    executor.assert_awaited_once()
    (descriptor,), _ = executor.await_args
    return descriptor


class TestListOrders:
    """Tests para list_orders."""

    @pytest.mark.asyncio
    async def test_list_orders_without_filters(self, client, executor):
        """Sin filtros debe hacer GET a /businesses/{id}/orders? con query vacía."""
        result = await client.list_orders({"businessId": "B"})

        assert result == {"ok": True}
        assert sent_descriptor(executor) == RequestDescriptor(url="/businesses/B/orders?", method="GET")

    @pytest.mark.asyncio
    async def test_list_orders_encodes_business_id(self, client, executor):
        """Debe codificar el businessId como segmento de path."""
        await client.list_orders({"businessId": "a b"})

        assert sent_descriptor(executor).url == "/businesses/a%20b/orders?"

    @pytest.mark.asyncio
    async def test_list_orders_only_allow_listed_filters(self, client, executor):
        """Sólo debe enviar los filtros permitidos presentes en las opciones."""
        await client.list_orders(
            {
                "businessId": "B",
                "limit": 10,
                "storeId": "store 1",
                "cardHolderLastName": None,
                "orderId": "ignored",
                "unknown": "x",
            }
        )

        assert sent_descriptor(executor).url == "/businesses/B/orders?limit=10&storeId=store%201"

    @pytest.mark.asyncio
    async def test_list_orders_all_filters_in_order(self, client, executor):
        """Debe serializar todos los filtros en el orden de la lista permitida."""
        await client.list_orders(
            {
                "businessId": "B",
                "includeStaysAll": True,
                "storeId": "S",
                "cardHolderLastName": "Doe",
                "cardHolderFirstName": "John",
                "cardExpirationYear": 2027,
                "cardExpirationMonth": 4,
                "cardNumberLast4": "4242",
                "cardNumberFirst6": "411111",
                "limit": 5,
                "endAt": "2025-01-31T00:00:00Z",
                "startOffset": 0,
                "startAt": "2025-01-01T00:00:00Z",
            }
        )

        assert sent_descriptor(executor).url == (
            "/businesses/B/orders?"
            "startAt=2025-01-01T00%3A00%3A00Z"
            "&startOffset=0"
            "&endAt=2025-01-31T00%3A00%3A00Z"
            "&limit=5"
            "&cardNumberFirst6=411111"
            "&cardNumberLast4=4242"
            "&cardExpirationMonth=4"
            "&cardExpirationYear=2027"
            "&cardHolderFirstName=John"
            "&cardHolderLastName=Doe"
            "&storeId=S"
            "&includeStaysAll=true"
        )

    @pytest.mark.asyncio
    async def test_list_orders_missing_business_id(self, client, executor):
        """Sin businessId debe fallar sin llamar al executor."""
        with pytest.raises(MissingFieldException) as exc_info:
            await client.list_orders({})

        assert exc_info.value.fields == ["businessId"]
        assert exc_info.value.error_code == ErrorCode.MISSING_REQUIRED_FIELD
        executor.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_list_orders_empty_business_id(self, client, executor):
        """Un businessId vacío cuenta como faltante."""
        with pytest.raises(MissingFieldException):
            await client.list_orders({"businessId": ""})

        executor.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_list_orders_whitespace_business_id_is_sent(self, client, executor):
        """Un businessId con sólo espacios no está vacío y se codifica."""
        await client.list_orders({"businessId": " "})

        assert sent_descriptor(executor).url == "/businesses/%20/orders?"

    @pytest.mark.asyncio
    async def test_list_orders_normalizes_filter_values(self, client, executor):
        """Floats enteros van sin decimales y booleanos en minúsculas."""
        await client.list_orders({"businessId": "B", "limit": 10.0, "includeStaysAll": False})

        assert sent_descriptor(executor).url == "/businesses/B/orders?limit=10&includeStaysAll=false"

    @pytest.mark.asyncio
    async def test_list_orders_is_idempotent(self, client, executor):
        """Dos llamadas iguales deben producir descriptores idénticos."""
        options = {"businessId": "B", "limit": 10, "startAt": "2025-01-01"}

        await client.list_orders(options)
        await client.list_orders(options)

        first, second = [call.args[0] for call in executor.await_args_list]
        assert first == second
        assert first is not second

    @pytest.mark.asyncio
    async def test_camel_case_alias(self, client, executor):
        """El alias listOrders debe comportarse igual que list_orders."""
        await client.listOrders({"businessId": "B"})

        assert sent_descriptor(executor).url == "/businesses/B/orders?"


class TestGetOrder:
    """Tests para get_order."""

    @pytest.mark.asyncio
    async def test_get_order(self, client, executor):
        """Debe hacer GET a /businesses/B/orders/O."""
        await client.get_order({"businessId": "B", "orderId": "O"})

        assert sent_descriptor(executor) == RequestDescriptor(url="/businesses/B/orders/O", method="GET")

    @pytest.mark.asyncio
    async def test_get_order_encodes_segments(self, client, executor):
        """Debe codificar ambos segmentos del path."""
        await client.get_order({"businessId": "a/b", "orderId": "o 1"})

        assert sent_descriptor(executor).url == "/businesses/a%2Fb/orders/o%201"

    @pytest.mark.asyncio
    async def test_get_order_normalizes_segment_values(self, client, executor):
        """Booleanos y floats enteros se escriben igual que en la query string."""
        await client.get_order({"businessId": True, "orderId": 1.0})

        assert sent_descriptor(executor).url == "/businesses/true/orders/1"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "options,missing",
        [
            ({"businessId": "B"}, ["orderId"]),
            ({"orderId": "O"}, ["businessId"]),
            ({}, ["businessId", "orderId"]),
        ],
    )
    async def test_get_order_missing_fields(self, client, executor, options, missing):
        """Debe reportar todos los campos faltantes sin llamar al executor."""
        with pytest.raises(MissingFieldException) as exc_info:
            await client.get_order(options)

        assert exc_info.value.fields == missing
        assert exc_info.value.field == missing[0]
        executor.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_order_is_idempotent(self, client, executor):
        """Dos llamadas iguales deben producir descriptores idénticos."""
        options = {"businessId": "B", "orderId": "O"}

        await client.get_order(options)
        await client.get_order(options)

        first, second = [call.args[0] for call in executor.await_args_list]
        assert first == second


class TestCloudOrders:
    """Tests para envío de cloud orders."""

    @pytest.mark.asyncio
    async def test_send_raw_cloud_order_uses_context_business_id(self, client, executor):
        """La URL debe salir de context.businessId y el body ser la orden tal cual."""
        order = {"businessId": "TOP", "context": {"businessId": "CTX"}, "items": [{"name": "coffee"}]}

        await client.send_raw_cloud_order(order)

        descriptor = sent_descriptor(executor)
        assert descriptor.url == "/businesses/CTX/orders"
        assert descriptor.method == "POST"
        assert descriptor.body is order

    @pytest.mark.asyncio
    async def test_send_raw_cloud_order_does_not_encode(self, client, executor):
        """El businessId de context se interpola sin codificar."""
        await client.send_raw_cloud_order({"context": {"businessId": "a b"}})

        assert sent_descriptor(executor).url == "/businesses/a b/orders"

    @pytest.mark.asyncio
    async def test_send_cloud_order_applies_defaults(self, client, executor):
        """Debe completar todos los campos base con sus valores por defecto."""
        await client.send_cloud_order({"businessId": "B", "storeId": "S", "deviceId": "D"})

        descriptor = sent_descriptor(executor)
        body = descriptor.body

        assert descriptor.method == "POST"
        assert body["businessId"] == "B"
        assert body["storeId"] == "S"
        assert body["deviceId"] == "D"
        assert body["ttl"] == 900
        assert body["items"] == []
        assert body["amounts"] == {}
        assert body["context"] == {}
        assert body["statuses"] == {}
        assert body["customerUserId"] is None
        datetime.fromisoformat(body["createdAt"].replace("Z", "+00:00"))
        datetime.fromisoformat(body["updatedAt"].replace("Z", "+00:00"))
        assert "serialNum" not in body
        assert "multiTender" not in body
        assert "collapseKey" not in body

    @pytest.mark.asyncio
    async def test_send_cloud_order_url_comes_from_context(self, client, executor):
        """Sin context.businessId la URL no usa el businessId de primer nivel."""
        await client.send_cloud_order({"businessId": "B", "storeId": "S", "deviceId": "D"})

        url = sent_descriptor(executor).url
        assert url == "/businesses/None/orders"
        assert "/businesses/B/" not in url

    @pytest.mark.asyncio
    async def test_send_cloud_order_with_context(self, client, executor):
        """Con context.businessId la URL apunta a ese negocio."""
        await client.send_cloud_order({"businessId": "B", "context": {"businessId": "B", "source": "CLOUD"}})

        assert sent_descriptor(executor).url == "/businesses/B/orders"

    @pytest.mark.asyncio
    async def test_send_cloud_order_renames_serial_number(self, client, executor):
        """serialNumber debe enviarse como serialNum."""
        await client.send_cloud_order(
            {"businessId": "B", "storeId": "S", "deviceId": "D", "serialNumber": "4242", "collapseKey": "k1"}
        )

        body = sent_descriptor(executor).body
        assert body["serialNum"] == "4242"
        assert "serialNumber" not in body
        assert body["collapseKey"] == "k1"

    @pytest.mark.asyncio
    async def test_send_cloud_order_without_options(self, client, executor):
        """Sin opciones no debe quedar ningún campo base indefinido."""
        await client.send_cloud_order({})

        body = sent_descriptor(executor).body
        for key in [
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
        ]:
            assert key in body

    @pytest.mark.asyncio
    async def test_send_cloud_order_passes_result_through(self, client, executor):
        """El resultado del executor se devuelve sin cambios."""
        executor.return_value = {"id": "order-1"}

        result = await client.sendCloudOrder({"context": {"businessId": "B"}})

        assert result == {"id": "order-1"}


class TestForceComplete:
    """Tests para forceComplete."""

    @pytest.mark.asyncio
    async def test_send_raw_cloud_order_complete(self, client, executor):
        """Debe hacer POST a forceComplete con body vacío."""
        await client.send_raw_cloud_order_complete({"businessId": "B", "orderId": "O"})

        assert sent_descriptor(executor) == RequestDescriptor(
            url="/businesses/B/orders/O/forceComplete", method="POST", body={}
        )

    @pytest.mark.asyncio
    async def test_send_raw_cloud_order_complete_does_not_encode(self, client, executor):
        """Los segmentos se interpolan sin codificar aunque tengan caracteres reservados."""
        await client.send_raw_cloud_order_complete({"businessId": "a b", "orderId": "x/y"})

        assert sent_descriptor(executor).url == "/businesses/a b/orders/x/y/forceComplete"

    @pytest.mark.asyncio
    async def test_send_cloud_order_complete_ignores_extra_fields(self, client, executor):
        """serialNumber y collapseKey no se envían."""
        await client.send_cloud_order_complete(
            {"businessId": "B", "orderId": "O", "serialNumber": "4242", "collapseKey": "k1"}
        )

        descriptor = sent_descriptor(executor)
        assert descriptor.url == "/businesses/B/orders/O/forceComplete"
        assert descriptor.body == {}


class TestTransportErrors:
    """Tests para propagación de errores del executor."""

    @pytest.mark.asyncio
    async def test_executor_error_is_passed_through(self, executor):
        """Los errores del executor deben llegar sin transformar."""
        boom = RuntimeError("connection reset")
        executor.side_effect = boom
        client = OrderClient(executor)

        with pytest.raises(RuntimeError) as exc_info:
            await client.get_order({"businessId": "B", "orderId": "O"})

        assert exc_info.value is boom
        executor.assert_awaited_once()
