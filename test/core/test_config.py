import pytest

from configs.api_config import ApiConfig
from configs.env_config import Env
from configs.metrics_config import FailurePolicy, MetricsConfig
from utils.logger.config import LogLevel


def test_metrics_config_defaults():
    config = MetricsConfig()

    assert config.max_concurrency == 10
    assert config.name_sentinel == "N/A"
    assert config.failure_policy is FailurePolicy.ALL_OR_NOTHING
    assert config.query_timeout is None
    assert config.unit_multipliers["GIB"] == 1024**3


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_concurrency": 0},
        {"unit_multipliers": {}},
        {"unit_multipliers": {" ": 1}},
        {"query_timeout": 0},
        {"failure_policy": "best_effort"},
    ],
)
def test_metrics_config_rejects_invalid_values(kwargs):
    with pytest.raises(ValueError):
        MetricsConfig(**kwargs)


def test_metrics_config_from_env(monkeypatch):
    monkeypatch.setattr(Env, "MAX_CONCURRENCY", "4")
    monkeypatch.setattr(Env, "FAILURE_POLICY", "Partial")
    monkeypatch.setattr(Env, "QUERY_TIMEOUT", "2.5")
    monkeypatch.setattr(Env, "DOCKER_BINARY", "/usr/local/bin/docker")

    config = MetricsConfig.from_env()

    assert config.max_concurrency == 4
    assert config.failure_policy is FailurePolicy.PARTIAL
    assert config.query_timeout == 2.5
    assert config.docker_binary == "/usr/local/bin/docker"


def test_api_config_from_env(monkeypatch):
    monkeypatch.setattr(Env, "USERNAME", "admin")
    monkeypatch.setattr(Env, "PASSWORD", "s3cret")
    monkeypatch.setattr(Env, "ALLOWED_IPS", "127.0.0.1, 10.0.0.0/8,")
    monkeypatch.setattr(Env, "RATE_LIMIT", "")
    monkeypatch.setattr(Env, "LOG_LEVEL", "DEBUG")

    config = ApiConfig.from_env()

    assert config.allowed_ips == ("127.0.0.1", "10.0.0.0/8")
    assert config.rate_limit is None
    assert config.log_level is LogLevel.DEBUG


def test_env_validate_requires_credentials(monkeypatch):
    monkeypatch.setattr(Env, "USERNAME", None)
    monkeypatch.setattr(Env, "PASSWORD", "s3cret")

    with pytest.raises(ValueError, match="DM_USERNAME"):
        Env.validate()
