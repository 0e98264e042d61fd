"""
发货状态机测试
"""

import pytest

from storefront.core.exceptions import (
    InvalidFulfillmentStatus,
    InvalidFulfillmentTransition,
    InvalidPaymentStatus,
    ShipmentRequiresPaidOrder,
    TrackingNumberRequired,
)
from storefront.models.order_models import FulfillmentStatus, PaymentStatus
from storefront.schemas.order_schemas import OrderUpdate
from storefront.services.fulfillment_service import can_transition, plan_order_update
from tests.conftest import make_order


def update(**body) -> OrderUpdate:
    return OrderUpdate.model_validate(body)


def test_packing_with_tracking_on_paid_order():
    order = make_order(payment_status=PaymentStatus.PAID)
    fields = plan_order_update(order, update(trackingNumber="1234567890", fulfillmentStatus="PACKING"))
    assert fields == {"tracking_number": "1234567890", "fulfillment_status": "PACKING"}


def test_ship_unpaid_order_rejected():
    order = make_order(payment_status=PaymentStatus.CREATED, fulfillment_status=FulfillmentStatus.PACKING,
                       tracking_number="1234567890")
    with pytest.raises(ShipmentRequiresPaidOrder):
        plan_order_update(order, update(fulfillmentStatus="SHIPPED"))


@pytest.mark.parametrize(
    "payment",
    [PaymentStatus.CREATED, PaymentStatus.VIRTUAL_ACCOUNT_ISSUED, PaymentStatus.CANCELLED, PaymentStatus.FAILED],
)
def test_ship_requires_paid_for_every_other_payment_status(payment):
    order = make_order(payment_status=payment, fulfillment_status=FulfillmentStatus.PACKING,
                       tracking_number="1234567890")
    with pytest.raises(ShipmentRequiresPaidOrder):
        plan_order_update(order, update(fulfillmentStatus="SHIPPED"))


def test_payment_in_same_request_counts():
    order = make_order(payment_status=PaymentStatus.CREATED, fulfillment_status=FulfillmentStatus.PACKING,
                       tracking_number="1234567890")
    fields = plan_order_update(order, update(paymentStatus="PAID", fulfillmentStatus="SHIPPED"))
    assert fields == {"payment_status": "PAID", "fulfillment_status": "SHIPPED"}


def test_unpaying_in_same_request_blocks_shipment():
    order = make_order(payment_status=PaymentStatus.PAID, fulfillment_status=FulfillmentStatus.PACKING,
                       tracking_number="1234567890")
    with pytest.raises(ShipmentRequiresPaidOrder):
        plan_order_update(order, update(paymentStatus="CANCELLED", fulfillmentStatus="SHIPPED"))


def test_invalid_payment_status():
    with pytest.raises(InvalidPaymentStatus):
        plan_order_update(make_order(), update(paymentStatus="REFUNDED"))


def test_invalid_fulfillment_status():
    with pytest.raises(InvalidFulfillmentStatus):
        plan_order_update(make_order(), update(fulfillmentStatus="DELIVERED"))


@pytest.mark.parametrize("value", [None, 3, True, ["PAID"]])
def test_present_non_string_payment_status_rejected(value):
    with pytest.raises(InvalidPaymentStatus):
        plan_order_update(make_order(), update(paymentStatus=value))


@pytest.mark.parametrize("value", [None, 0, {"status": "PACKING"}])
def test_present_non_string_fulfillment_status_rejected(value):
    with pytest.raises(InvalidFulfillmentStatus):
        plan_order_update(make_order(), update(fulfillmentStatus=value))


def test_enum_values_are_case_sensitive():
    with pytest.raises(InvalidPaymentStatus):
        plan_order_update(make_order(), update(paymentStatus="paid"))


def test_ship_requires_tracking_number():
    order = make_order(payment_status=PaymentStatus.PAID, fulfillment_status=FulfillmentStatus.PACKING)
    with pytest.raises(TrackingNumberRequired):
        plan_order_update(order, update(fulfillmentStatus="SHIPPED"))


def test_ship_with_tracking_in_same_request():
    order = make_order(payment_status=PaymentStatus.PAID, fulfillment_status=FulfillmentStatus.PACKING)
    fields = plan_order_update(order, update(trackingNumber="555", fulfillmentStatus="SHIPPED"))
    assert fields["fulfillment_status"] == "SHIPPED"


def test_clearing_tracking_on_shipped_order_requires_reversal():
    order = make_order(payment_status=PaymentStatus.PAID, fulfillment_status=FulfillmentStatus.SHIPPED,
                       tracking_number="555", shipping_carrier="CJ")
    with pytest.raises(TrackingNumberRequired):
        plan_order_update(order, update(trackingNumber=None))


def test_cancel_shipment():
    order = make_order(payment_status=PaymentStatus.PAID, fulfillment_status=FulfillmentStatus.SHIPPED,
                       tracking_number="555", shipping_carrier="CJ")
    fields = plan_order_update(
        order, update(shippingCarrier=None, trackingNumber=None, fulfillmentStatus="PACKING")
    )
    assert fields == {"shipping_carrier": None, "tracking_number": None, "fulfillment_status": "PACKING"}


def test_empty_strings_clear_fields():
    order = make_order(shipping_carrier="CJ", tracking_number="555")
    fields = plan_order_update(order, update(shippingCarrier="", trackingNumber="  "))
    assert fields == {"shipping_carrier": None, "tracking_number": None}


def test_values_written_verbatim():
    fields = plan_order_update(make_order(), update(shippingCarrier=" CJ대한통운 "))
    assert fields == {"shipping_carrier": " CJ대한통운 "}


def test_absent_fields_untouched():
    assert plan_order_update(make_order(), update()) == {}


def test_new_cannot_jump_to_shipped():
    order = make_order(payment_status=PaymentStatus.PAID, tracking_number="555")
    with pytest.raises(InvalidFulfillmentTransition):
        plan_order_update(order, update(fulfillmentStatus="SHIPPED"))


def test_refunded_is_terminal():
    order = make_order(fulfillment_status=FulfillmentStatus.REFUNDED)
    with pytest.raises(InvalidFulfillmentTransition):
        plan_order_update(order, update(fulfillmentStatus="PACKING"))


@pytest.mark.parametrize("current", [FulfillmentStatus.NEW, FulfillmentStatus.PACKING, FulfillmentStatus.SHIPPED])
def test_refund_reachable_from_any_state(current):
    order = make_order(payment_status=PaymentStatus.PAID, fulfillment_status=current, tracking_number="555")
    fields = plan_order_update(order, update(fulfillmentStatus="REFUNDED", paymentStatus="CANCELLED"))
    assert fields["fulfillment_status"] == "REFUNDED"


def test_same_state_is_noop_transition():
    for status in FulfillmentStatus:
        assert can_transition(status, status)


@pytest.mark.parametrize(
    "current, target, allowed",
    [
        (FulfillmentStatus.NEW, FulfillmentStatus.PACKING, True),
        (FulfillmentStatus.PACKING, FulfillmentStatus.NEW, True),
        (FulfillmentStatus.PACKING, FulfillmentStatus.SHIPPED, True),
        (FulfillmentStatus.SHIPPED, FulfillmentStatus.PACKING, True),
        (FulfillmentStatus.SHIPPED, FulfillmentStatus.NEW, False),
        (FulfillmentStatus.REFUNDED, FulfillmentStatus.NEW, False),
    ],
)
def test_transition_table(current, target, allowed):
    assert can_transition(current, target) is allowed
