import os
import uuid
from unittest.mock import AsyncMock

import pytest

# Config is read at import time, so the environment has to be set at module level.
os.environ["METRICS_ENABLED"] = "false"
os.environ["REGISTRY_URL"] = "http://registry.test"
os.environ["SERVICE_ADDRESS"] = "http://products.test:8000"
os.environ["LOG_LEVEL"] = "DEBUG"

from fastapi.testclient import TestClient  # noqa: E402

from services.catalog.main import app  # noqa: E402
from services.catalog.services.controller import CatalogController  # noqa: E402
from services.common.core import request_context  # noqa: E402

CALLER_UID = "5f0c6a7e-3b51-4d0e-9a55-0d8f4f0f2a11"


class FakeIdentity:
    """Stands in for IdentityClient; records every token it sees."""

    def __init__(self, uid: str = CALLER_UID):
        self.uid = uid
        # What resolve_token answers; follows `uid` unless set.
        self.resolved = None
        self.error = None
        self.tokens = []

    async def parse_claims(self, token: str) -> str:
        self.tokens.append(token)
        if self.error is not None:
            raise self.error
        return self.uid

    async def resolve_token(self, token: str) -> str:
        self.tokens.append(token)
        return self.uid if self.resolved is None else self.resolved


@pytest.fixture(autouse=True)
def _clean_request_context():
    request_context.clear_request_context()
    yield
    request_context.clear_request_context()


@pytest.fixture
def controller():
    return AsyncMock(spec=CatalogController)


@pytest.fixture
def identity():
    return FakeIdentity()


@pytest.fixture
def client(controller, identity):
    # No `with`: the lifespan (registry, tracing export) is not started.
    app.state.controller = controller
    app.state.identity = identity
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer valid"}


@pytest.fixture
def caller_uid():
    return uuid.UUID(CALLER_UID)
