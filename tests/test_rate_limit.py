import pytest
from limits import parse

from eventstay.rate_limit import WRITE_LIMIT, limiter
from tests.factories import auth_header, create_eligible_user


@pytest.fixture()
def throttled():
    limiter.reset()
    limiter.enabled = True
    yield limiter
    limiter.enabled = False
    limiter.reset()


def test_writes_are_throttled_after_write_limit(booking_client, db_session, throttled):
    headers = auth_header(db_session, create_eligible_user(db_session))
    allowed = parse(WRITE_LIMIT).amount

    statuses = [booking_client.post("/booking", json={"roomId": 9999}, headers=headers).status_code for _ in range(allowed)]
    blocked = booking_client.post("/booking", json={"roomId": 9999}, headers=headers)

    assert statuses == [404] * allowed
    assert blocked.status_code == 429
    assert blocked.json()["detail"].startswith("Too many booking requests")


def test_reads_have_their_own_budget(booking_client, db_session, throttled):
    headers = auth_header(db_session, create_eligible_user(db_session))
    for _ in range(parse(WRITE_LIMIT).amount + 1):
        booking_client.put("/booking/9999", json={"roomId": 9999}, headers=headers)

    response = booking_client.get("/booking", headers=headers)

    assert response.status_code == 404


def test_limiter_is_off_by_default_in_tests(booking_client, db_session):
    headers = auth_header(db_session, create_eligible_user(db_session))
    allowed = parse(WRITE_LIMIT).amount

    statuses = {booking_client.post("/booking", json={"roomId": 9999}, headers=headers).status_code for _ in range(allowed + 1)}

    assert statuses == {404}
