import logging

from eventstay.logging_middleware import REQUEST_ID_HEADER
from tests.factories import auth_header, create_eligible_user


def _audit_records(caplog, request_id):
    return [r for r in caplog.records if r.name == "audit.booking" and f"request_id={request_id}" in r.getMessage()]


def test_request_id_is_echoed(booking_client, caplog):
    caplog.set_level(logging.INFO, logger="audit.booking")

    response = booking_client.get("/health", headers={REQUEST_ID_HEADER: "abc"})

    assert response.headers[REQUEST_ID_HEADER] == "abc"
    [record] = _audit_records(caplog, "abc")
    assert record.levelno == logging.INFO
    assert "GET /health | status=200" in record.getMessage()


def test_request_id_is_generated_when_absent(booking_client):
    response = booking_client.get("/health")

    assert len(response.headers[REQUEST_ID_HEADER]) == 32


def test_refused_booking_is_logged_as_warning(booking_client, db_session, caplog):
    caplog.set_level(logging.INFO, logger="audit.booking")
    headers = auth_header(db_session, create_eligible_user(db_session))
    headers[REQUEST_ID_HEADER] = "refused-1"

    response = booking_client.post("/booking", json={"roomId": "asd"}, headers=headers)

    assert response.status_code == 403
    [record] = _audit_records(caplog, "refused-1")
    assert record.levelno == logging.WARNING
    assert "status=403" in record.getMessage()
