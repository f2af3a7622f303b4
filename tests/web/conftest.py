"""Web test fixtures: TestClient with a stubbed dispatcher."""

from __future__ import annotations

import pytest
from starlette.testclient import TestClient

from pixcharge.services.charge_service import PixChargeService
from pixcharge.services.static_pix_service import StaticPixService
from pixcharge.tools import ToolDispatcher
from tests.conftest import SucceedingProvider, fake_renderer


@pytest.fixture()
def dispatcher():
    return ToolDispatcher(
        PixChargeService([SucceedingProvider("stub")]),
        StaticPixService(renderer=fake_renderer),
        mode="http",
        environment="sandbox",
    )


@pytest.fixture()
def client(dispatcher):
    from web.app import app

    app.state.dispatcher = dispatcher
    with TestClient(app) as test_client:
        yield test_client
    app.state.dispatcher = None
