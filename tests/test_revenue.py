# ==============================================================================
# Tests for Revenue Reporting — core/translator.py
# ==============================================================================
"""
Unit tests for the revenue branch of track translation.

Tests cover:
- Legacy logRevenue arguments and defaults (revenue and total)
- logRevenueV2 price/quantity resolution with and without an explicit price
- Optional product id, revenue type and receipt pair handling
- Presence (not truthiness) of revenue keys
- Unreadable revenue fields fall back to their defaults
"""

import logging
from unittest.mock import call

import pytest

from amplitude_adapter.core import Revenue, RevenueProperties, TrackEvent
from amplitude_adapter.core.translator import build_revenue

RECEIPT_PROPERTIES = {
    "productId": "bar",
    "quantity": 10,
    "receipt": "baz",
    "receiptSignature": "qux",
}


def _logged_revenue(client) -> Revenue:
    client.log_revenue_v2.assert_called_once()
    return client.log_revenue_v2.call_args.args[0]


# ==============================================================================
# Legacy logRevenue
# ==============================================================================


class TestLegacyRevenue:
    """Tests for logRevenue (useLogRevenueV2 off)."""

    def test_revenue(self, translator, client):
        properties = {"revenue": 20, **RECEIPT_PROPERTIES}
        translator.handle(TrackEvent(event="foo", properties=properties))

        assert client.mock_calls == [
            call.log_event("foo", properties, None, False),
            call.log_revenue("bar", 10, 20, "baz", "qux"),
        ]

    def test_total(self, translator, client):
        properties = {"total": 15, **RECEIPT_PROPERTIES}
        translator.handle(TrackEvent(event="foo", properties=properties))

        client.log_revenue.assert_called_once_with("bar", 10, 15, "baz", "qux")

    def test_revenue_preferred_over_total(self, translator, client):
        translator.handle(TrackEvent(event="foo", properties={"revenue": 20, "total": 99}))
        client.log_revenue.assert_called_once_with(None, 0, 20, None, None)

    def test_defaults(self, translator, client):
        """Quantity defaults to 0, missing optional fields are None."""
        translator.handle(TrackEvent(event="foo", properties={"revenue": 3.5}))
        client.log_revenue.assert_called_once_with(None, 0, 3.5, None, None)

    @pytest.mark.parametrize("amount", [0, -12.5])
    def test_zero_and_negative_revenue_reported(self, translator, client, amount):
        translator.handle(TrackEvent(event="refund", properties={"revenue": amount}))
        client.log_revenue.assert_called_once_with(None, 0, amount, None, None)

    def test_no_revenue_no_call(self, translator, client):
        translator.handle(TrackEvent(event="foo", properties={"price": 2.0, "quantity": 3}))

        assert client.mock_calls == [
            call.log_event("foo", {"price": 2.0, "quantity": 3}, None, False)
        ]


# ==============================================================================
# logRevenueV2
# ==============================================================================


class TestRevenueV2:
    """Tests for logRevenueV2 (useLogRevenueV2 on)."""

    @pytest.fixture()
    def translator(self, make_translator):
        return make_translator(useLogRevenueV2=True)

    def test_revenue_without_price(self, translator, client):
        """Without a price the revenue is one unit, whatever the quantity says."""
        properties = {"revenue": 20, **RECEIPT_PROPERTIES}
        translator.handle(TrackEvent(event="foo", properties=properties))

        client.log_event.assert_called_once_with("foo", properties, None, False)
        assert _logged_revenue(client) == Revenue(
            price=20,
            quantity=1,
            product_id="bar",
            receipt="baz",
            receipt_signature="qux",
            event_properties=properties,
        )
        client.log_revenue.assert_not_called()

    def test_price_and_quantity(self, translator, client):
        properties = {"revenue": 20, "price": 2.0, **RECEIPT_PROPERTIES}
        translator.handle(TrackEvent(event="foo", properties=properties))

        assert _logged_revenue(client) == Revenue(
            price=2.0,
            quantity=10,
            product_id="bar",
            receipt="baz",
            receipt_signature="qux",
            event_properties=properties,
        )

    def test_total_without_price(self, translator, client):
        properties = {"total": 20, **RECEIPT_PROPERTIES}
        translator.handle(TrackEvent(event="foo", properties=properties))

        revenue = _logged_revenue(client)
        assert revenue.price == 20
        assert revenue.quantity == 1

    def test_price_without_quantity_defaults_to_one(self, translator, client):
        translator.handle(TrackEvent(event="foo", properties={"revenue": 9, "price": 3}))

        revenue = _logged_revenue(client)
        assert revenue.price == 3
        assert revenue.quantity == 1

    def test_price_without_revenue_no_call(self, translator, client):
        properties = {"price": 2.0, **RECEIPT_PROPERTIES}
        translator.handle(TrackEvent(event="foo", properties=properties))

        assert client.mock_calls == [call.log_event("foo", properties, None, False)]

    def test_partial_receipt_is_dropped(self, translator, client):
        translator.handle(TrackEvent(event="foo", properties={"revenue": 5, "receipt": "baz"}))

        revenue = _logged_revenue(client)
        assert revenue.receipt is None
        assert revenue.receipt_signature is None

    def test_optional_fields_only_when_present(self, translator, client):
        translator.handle(TrackEvent(event="foo", properties={"revenue": 5}))

        revenue = _logged_revenue(client)
        assert revenue.product_id is None
        assert revenue.revenue_type is None
        assert revenue.event_properties == {"revenue": 5}

    def test_revenue_type(self, translator, client):
        translator.handle(
            TrackEvent(event="foo", properties={"revenue": -5, "revenueType": "refund"})
        )

        revenue = _logged_revenue(client)
        assert revenue.revenue_type == "refund"
        assert revenue.price == -5

    def test_numeric_product_id_is_stringified(self, translator, client):
        translator.handle(TrackEvent(event="foo", properties={"revenue": 5, "productId": 42}))
        assert _logged_revenue(client).product_id == "42"


# ==============================================================================
# Unreadable revenue fields
# ==============================================================================


class TestUnreadableRevenueFields:
    """One unreadable key falls back to its default without hiding the others."""

    @pytest.mark.parametrize(
        "extra",
        [{"price": "free"}, {"quantity": 1.5}, {"quantity": "two"}, {"quantity": None}],
    )
    def test_legacy_still_reports(self, translator, client, extra):
        properties = {"revenue": 10.0, **extra}
        calls = translator.handle(TrackEvent(event="Purchase", properties=properties))

        assert [c.method for c in calls] == ["log_event", "log_revenue"]
        client.log_revenue.assert_called_once_with(None, 0, 10.0, None, None)

    @pytest.mark.parametrize("quantity", [1.5, "two"])
    def test_v2_quantity_defaults_to_one(self, make_translator, client, quantity):
        translator = make_translator(useLogRevenueV2=True)
        translator.handle(
            TrackEvent(event="foo", properties={"revenue": 9, "price": 3, "quantity": quantity})
        )

        revenue = _logged_revenue(client)
        assert revenue.price == 3
        assert revenue.quantity == 1

    def test_v2_price_falls_back_to_amount(self, make_translator, client, caplog):
        translator = make_translator(useLogRevenueV2=True)
        properties = {"revenue": 5, "price": "not a number", "quantity": 4}

        with caplog.at_level(logging.WARNING):
            calls = translator.handle(TrackEvent(event="foo", properties=properties))

        assert [c.method for c in calls] == ["log_event", "log_revenue_v2"]
        revenue = _logged_revenue(client)
        assert revenue.price == 5
        assert revenue.quantity == 1
        assert "price" in caplog.text

    def test_unreadable_revenue_uses_total(self, translator, client):
        translator.handle(TrackEvent(event="foo", properties={"revenue": "n/a", "total": 7}))
        client.log_revenue.assert_called_once_with(None, 0, 7, None, None)

    @pytest.mark.parametrize("use_v2", [False, True])
    def test_unreadable_amount_skips_revenue(self, make_translator, client, caplog, use_v2):
        translator = make_translator(useLogRevenueV2=use_v2)

        with caplog.at_level(logging.ERROR):
            calls = translator.handle(TrackEvent(event="foo", properties={"revenue": "lots"}))

        assert [c.method for c in calls] == ["log_event"]
        client.log_revenue.assert_not_called()
        client.log_revenue_v2.assert_not_called()
        assert "revenue amount" in caplog.text


# ==============================================================================
# build_revenue / RevenueProperties
# ==============================================================================


class TestBuildRevenue:
    def test_presence_not_truthiness(self):
        fields = RevenueProperties.from_properties({"revenue": 0})
        assert fields.has_revenue
        assert fields.amount == 0

    def test_no_revenue_keys(self):
        fields = RevenueProperties.from_properties({"price": 1})
        assert not fields.has_revenue
        assert fields.amount is None

    def test_unreadable_numbers_resolve_to_none(self):
        fields = RevenueProperties.from_properties(
            {"revenue": 2, "price": "free", "quantity": 1.5, "productId": 7}
        )
        assert fields.has("price")
        assert fields.price is None
        assert fields.quantity is None
        assert fields.product_id == "7"

    def test_event_properties_copied(self):
        properties = {"revenue": 1}
        revenue = build_revenue(RevenueProperties.from_properties(properties), properties)

        properties["extra"] = True
        assert revenue.event_properties == {"revenue": 1}
