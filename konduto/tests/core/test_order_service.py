"""Tests for OrderService, the core implementation of OrderPort."""

import httpx
import pytest

from konduto.core.exceptions import (
    InvalidOrder,
    KondutoHTTPError,
    OrderNotFound,
    SDKProtocolError,
)
from konduto.core.models import Order, Recommendation
from konduto.core.order_service import OrderService
from konduto.tests.fakes import FakeApiPort, order_payload


@pytest.fixture
def service(api: FakeApiPort) -> OrderService:
    """Create an OrderService on top of the fake API port."""
    return OrderService(api)


class TestGetOrder:
    def test_returns_order_from_response(self, service: OrderService, api: FakeApiPort) -> None:
        api.queue_response(
            {"status": "ok", "order": order_payload(recommendation="APPROVE", score=0.1)}
        )

        order = service.get_order("Order-90125")

        assert api.last_request.method == "GET"
        assert api.last_request.path == "/orders/Order-90125"
        assert api.last_request.body is None
        assert order.id == "Order-90125"
        assert order.recommendation is Recommendation.APPROVE
        assert order.customer is not None and order.customer.id == "28372"

    @pytest.mark.parametrize("order_id", ["", "bad id", None, "x" * 101])
    def test_invalid_id_fails_before_io(
        self, service: OrderService, api: FakeApiPort, order_id: object
    ) -> None:
        with pytest.raises(InvalidOrder) as exc_info:
            service.get_order(order_id)  # type: ignore[arg-type]
        assert exc_info.value.field == "id"
        assert api.call_count == 0

    def test_not_found(self, service: OrderService, api: FakeApiPort) -> None:
        api.queue_response(
            {"status": "error", "message": {"why": "Order not found"}}, http_status=404
        )
        with pytest.raises(OrderNotFound) as exc_info:
            service.get_order("404-order")
        assert exc_info.value.order_id == "404-order"

    def test_missing_order_key(self, service: OrderService, api: FakeApiPort) -> None:
        api.queue_response({"status": "ok"})
        with pytest.raises(SDKProtocolError):
            service.get_order("123")

    @pytest.mark.parametrize(
        "overrides", [{"customer": "bob"}, {"shopping_cart": ["x"]}]
    )
    def test_malformed_order_data(
        self, service: OrderService, api: FakeApiPort, overrides: dict
    ) -> None:
        api.queue_response({"status": "ok", "order": order_payload(**overrides)})
        with pytest.raises(SDKProtocolError) as exc_info:
            service.get_order("Order-90125")
        assert exc_info.value.response is not None
        assert isinstance(exc_info.value.__cause__, TypeError)

    def test_round_trip_preserves_fields(
        self, service: OrderService, api: FakeApiPort, valid_order: Order
    ) -> None:
        """An order sent by POST and read back from a mirroring service is unchanged."""
        api.queue_response({"status": "ok", "order": {"id": valid_order.id}})
        service.send_order(valid_order)
        sent = dict(api.last_request.body or {})
        sent.pop("analyze")

        api.queue_response({"status": "ok", "order": sent})
        fetched = service.get_order(valid_order.id)  # type: ignore[arg-type]

        assert fetched.id == valid_order.id
        assert fetched.to_dict() == valid_order.to_dict()


class TestAnalyze:
    def test_populates_order_in_place(
        self, service: OrderService, api: FakeApiPort, valid_order: Order
    ) -> None:
        api.queue_response(
            {
                "status": "ok",
                "order": {
                    "id": "Order-90125",
                    "score": 0.02,
                    "recommendation": "APPROVE",
                    "status": "approved",
                    "geolocation": {"city": "São Paulo", "country": "BR"},
                },
            }
        )

        assert service.analyze(valid_order) is True

        request = api.last_request
        assert request.method == "POST"
        assert request.path == "/orders"
        assert "analyze" not in (request.body or {})
        assert valid_order.recommendation is Recommendation.APPROVE
        assert valid_order.score == 0.02
        assert valid_order.status == "approved"
        assert valid_order.geolocation == {"city": "São Paulo", "country": "BR"}

    def test_invalid_order_never_sent(self, service: OrderService, api: FakeApiPort) -> None:
        order = Order.from_dict(order_payload(customer={"id": "c1"}, total_amount=None))

        with pytest.raises(InvalidOrder) as exc_info:
            service.analyze(order)

        assert api.call_count == 0
        assert list(exc_info.value.errors) == order.get_errors()
        assert exc_info.value.field is None

    def test_recoverable_error_still_returns_true(
        self, service: OrderService, api: FakeApiPort, valid_order: Order
    ) -> None:
        api.queue_response(
            {"status": "error", "message": {"why": "Order already analyzed"}},
            http_status=409,
        )

        assert service.analyze(valid_order) is True
        assert valid_order.recommendation is None

    def test_other_order_id_does_not_populate(
        self, service: OrderService, api: FakeApiPort, valid_order: Order
    ) -> None:
        api.queue_response(
            {"status": "ok", "order": {"id": "someone-else", "recommendation": "DECLINE"}}
        )

        assert service.analyze(valid_order) is True
        assert valid_order.recommendation is None

    @pytest.mark.parametrize(
        "overrides", [{"customer": "bob"}, {"shopping_cart": ["x"]}]
    )
    def test_malformed_analysis_data(
        self,
        service: OrderService,
        api: FakeApiPort,
        valid_order: Order,
        overrides: dict,
    ) -> None:
        api.queue_response(
            {
                "status": "ok",
                "order": {"id": "Order-90125", "recommendation": "APPROVE", **overrides},
            }
        )

        with pytest.raises(SDKProtocolError):
            service.analyze(valid_order)

        assert valid_order.recommendation is None

    def test_transport_errors_propagate(
        self, service: OrderService, api: FakeApiPort, valid_order: Order
    ) -> None:
        api.set_error(httpx.ConnectError("connection refused"))
        with pytest.raises(httpx.ConnectError):
            service.analyze(valid_order)


class TestSendOrder:
    def test_equivalent_to_analyze_false(
        self, service: OrderService, api: FakeApiPort, valid_order: Order
    ) -> None:
        response = {"status": "ok", "order": {"id": "Order-90125", "recommendation": "DECLINE"}}
        api.queue_response(response)
        api.queue_response(response)

        assert service.send_order(valid_order) is True
        via_alias = api.requests[-1]
        assert service.analyze(valid_order, False) is True
        via_flag = api.requests[-1]

        assert via_alias == via_flag
        assert via_alias.body == {**valid_order.to_dict(), "analyze": False}
        assert valid_order.recommendation is None

    def test_invalid_order_rejected(self, service: OrderService, api: FakeApiPort) -> None:
        with pytest.raises(InvalidOrder):
            service.send_order(Order())
        assert api.call_count == 0


class TestUpdateOrderStatus:
    def test_updates_existing_order(self, service: OrderService, api: FakeApiPort) -> None:
        api.queue_response({"status": "ok", "order": {"id": "123", "old_status": "review"}})

        assert service.update_order_status("123", "fraud", "confirmed by cardholder") is True

        request = api.last_request
        assert request.method == "PUT"
        assert request.path == "/orders/123"
        assert request.body == {"status": "fraud", "comments": "confirmed by cardholder"}

    def test_bogus_status(self, service: OrderService, api: FakeApiPort) -> None:
        with pytest.raises(InvalidOrder) as exc_info:
            service.update_order_status("123", "bogus")
        assert exc_info.value.field == "status"
        assert api.call_count == 0

    def test_status_checked_before_id(self, service: OrderService, api: FakeApiPort) -> None:
        with pytest.raises(InvalidOrder) as exc_info:
            service.update_order_status("bad id", "bogus")
        assert exc_info.value.field == "status"

    def test_invalid_id(self, service: OrderService, api: FakeApiPort) -> None:
        with pytest.raises(InvalidOrder) as exc_info:
            service.update_order_status("bad id", "approved")
        assert exc_info.value.field == "id"
        assert api.call_count == 0

    def test_comments_coerced_to_string(self, service: OrderService, api: FakeApiPort) -> None:
        service.update_order_status(42, "declined", 7)
        assert api.last_request.body == {"status": "declined", "comments": "7"}
        assert api.last_request.path == "/orders/42"

    def test_default_comments_empty(self, service: OrderService, api: FakeApiPort) -> None:
        service.update_order_status("123", "canceled")
        assert api.last_request.body == {"status": "canceled", "comments": ""}

    def test_order_not_found(self, service: OrderService, api: FakeApiPort) -> None:
        api.queue_response({"status": "error", "message": "Order not found"}, http_status=404)
        with pytest.raises(OrderNotFound):
            service.update_order_status("123", "approved")

    def test_rejected_update_raises(
        self, service: OrderService, api: FakeApiPort, caplog: pytest.LogCaptureFixture
    ) -> None:
        api.queue_response(
            {"status": "error", "message": {"why": "Invalid status transition"}},
            http_status=400,
        )

        with caplog.at_level("INFO", logger="konduto.core.order_service"):
            with pytest.raises(KondutoHTTPError) as exc_info:
                service.update_order_status("123", "approved")

        assert exc_info.value.status_code == 400
        assert "Invalid status transition" in str(exc_info.value)
        assert not any("status updated" in r.getMessage() for r in caplog.records)
