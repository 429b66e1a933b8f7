from contextlib import ExitStack

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from configs.api_config import ApiConfig
from metrics.service import MetricsService


@pytest.fixture
def client_factory(runtime_factory, dummy_logger):
    with ExitStack() as stack:
        def _factory(api_overrides=None, config=None, **runtime_overrides):
            settings = {"username": "admin", "password": "s3cret", "rate_limit": None}
            settings.update(api_overrides or {})
            service = MetricsService(config=config, runtime=runtime_factory(**runtime_overrides), logger=dummy_logger)
            app = create_app(api_config=ApiConfig(**settings), service=service)
            return stack.enter_context(TestClient(app))

        yield _factory
