import time
import uuid

import pytest

from services.common.core import request_context


def test_generate_request_id_creates_uuid():
    """Ensure generate_request_id() creates a UUIDv4 and sets it in context."""
    req_id = request_context.generate_request_id()

    try:
        uuid_obj = uuid.UUID(req_id)
        assert str(uuid_obj) == req_id
    except ValueError:
        pytest.fail(f"Generated ID is not a valid UUID: {req_id}")

    assert request_context.get_request_id() == req_id


def test_generate_request_id_is_unique():
    id1 = request_context.generate_request_id()
    id2 = request_context.generate_request_id()

    assert id1 != id2


def test_uid_roundtrip_and_clear():
    assert request_context.get_uid() is None

    request_context.set_uid("9b2e7c4e-3f0a-4f55-9d51-3c1f3f8a2b10")
    assert request_context.get_uid() == "9b2e7c4e-3f0a-4f55-9d51-3c1f3f8a2b10"

    request_context.clear_request_context()
    assert request_context.get_uid() is None


def test_remaining_timeout_without_deadline():
    assert request_context.remaining_timeout() is None


def test_remaining_timeout_counts_down():
    request_context.set_deadline(15.0)

    remaining = request_context.remaining_timeout()
    assert remaining is not None
    assert 0 < remaining <= 15.0


def test_remaining_timeout_never_negative(monkeypatch):
    request_context.set_deadline(1.0)
    now = time.monotonic()
    monkeypatch.setattr(time, "monotonic", lambda: now + 10)

    assert request_context.remaining_timeout() == 0.0
