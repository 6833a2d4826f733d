"""Tests for the error hierarchy — codes, statuses and response envelope."""

from app.core.errors import (
    DatabaseError, DataIntegrityError, NotificationDeliveryError,
    ResourceNotFoundError, UnknownPhoneError,
)


def test_not_found_envelope():
    body = ResourceNotFoundError("Thread", "t1").to_response()
    assert body["error"]["code"] == "RESOURCE_NOT_FOUND"
    assert body["error"]["message"] == "Thread 't1' not found"
    assert body["error"]["category"] == "resource_not_found"


def test_status_codes():
    assert ResourceNotFoundError("User", "u").http_status == 404
    assert UnknownPhoneError("+1").http_status == 400
    assert DataIntegrityError("dup").http_status == 409
    assert DatabaseError("down", "execute").http_status == 503
    assert NotificationDeliveryError("email", "refused").http_status == 502


def test_unknown_phone_message_does_not_echo_the_number():
    err = UnknownPhoneError("+5511999990001")
    assert "+5511999990001" not in err.to_response()["error"]["message"]
    assert err.phone == "+5511999990001"


def test_delivery_error_records_channel_in_context():
    body = NotificationDeliveryError("whatsapp", "timeout").to_response()
    assert body["error"]["context"]["channel"] == "whatsapp"
