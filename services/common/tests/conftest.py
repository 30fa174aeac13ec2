import pytest

from services.common.core import request_context


@pytest.fixture(autouse=True)
def _clean_request_context():
    request_context.clear_request_context()
    yield
    request_context.clear_request_context()
