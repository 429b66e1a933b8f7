import asyncio
import pathlib
from typing import Any, Dict, Iterable, List, Optional, Tuple

import yaml
import pytest

from metrics.errors import RuntimeQueryError, StatsPayloadError
from model.metrics import RawStatsRecord
from runtime.base import ContainerRuntimeBase


class DummyLogger:
    """Stand-in for the async logger that remembers what was logged."""

    def __init__(self) -> None:
        self.records: List[Tuple[str, str]] = []
        self.started = False

    def _record(self, level: str, msg: Any) -> None:
        self.records.append((level, str(msg)))

    def debug(self, msg: Any) -> None:
        self._record("debug", msg)

    def info(self, msg: Any) -> None:
        self._record("info", msg)

    def warning(self, msg: Any) -> None:
        self._record("warning", msg)

    def error(self, msg: Any) -> None:
        self._record("error", msg)

    def critical(self, msg: Any) -> None:
        self._record("critical", msg)

    def messages(self, level: str) -> List[str]:
        return [msg for lvl, msg in self.records if lvl == level]

    async def start(self) -> None:
        self.started = True

    async def shutdown(self) -> None:
        self.started = False


@pytest.fixture(scope="session")
def docker_stats():
    fixture_path = pathlib.Path(__file__).parent / "fixtures" / "docker_stats.yaml"
    with fixture_path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


@pytest.fixture
def dummy_logger() -> DummyLogger:
    return DummyLogger()


class FakeRuntime(ContainerRuntimeBase):
    """In-memory runtime answering from the stats fixture."""

    def __init__(
        self,
        payloads: Dict[str, Dict[str, str]],
        names: Optional[Dict[str, str]] = None,
        running: Optional[List[str]] = None,
        failing_stats: Iterable[str] = (),
        failing_names: Iterable[str] = (),
        failing_payloads: Iterable[str] = (),
        list_error: Optional[Exception] = None,
        delay: float = 0.0,
    ) -> None:
        self.payloads = payloads
        self.names = names or {}
        self.running = list(payloads) if running is None else running
        self.failing_stats = set(failing_stats)
        self.failing_names = set(failing_names)
        self.failing_payloads = set(failing_payloads)
        self.list_error = list_error
        self.delay = delay
        self.in_flight = 0
        self.max_in_flight = 0
        self.stats_calls: List[str] = []

    async def list_running_containers(self) -> List[str]:
        if self.list_error is not None:
            raise self.list_error
        return list(self.running)

    async def inspect_name(self, identifier: str) -> str:
        if identifier in self.failing_names or identifier not in self.names:
            raise RuntimeQueryError(["docker", "inspect", identifier], 1, "No such object")
        return self.names[identifier]

    async def stats_once(self, identifier: str) -> RawStatsRecord:
        self.stats_calls.append(identifier)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            if identifier in self.failing_stats or identifier not in self.payloads:
                raise RuntimeQueryError(["docker", "stats", identifier], 1, "No such container")
            if identifier in self.failing_payloads:
                raise StatsPayloadError(f"Invalid stats JSON for {identifier}")
            return RawStatsRecord.from_payload(self.payloads[identifier])
        finally:
            self.in_flight -= 1

    async def find_by_name(self, name: str) -> Optional[str]:
        for identifier, known in self.names.items():
            if known == name:
                return identifier
        return None


@pytest.fixture
def runtime_factory(docker_stats):
    def _factory(**overrides: Any) -> FakeRuntime:
        params = {
            "payloads": docker_stats["payloads"],
            "names": docker_stats["names"],
        }
        params.update(overrides)
        return FakeRuntime(**params)

    return _factory
