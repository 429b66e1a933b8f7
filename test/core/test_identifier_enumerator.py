import pytest

from metrics.enumerator import ContainerEnumerator
from metrics.errors import EnumerationFailed, RuntimeQueryError
from metrics.identifier import ContainerIdentifier


@pytest.mark.asyncio
async def test_identifier_returns_display_name(runtime_factory, dummy_logger):
    identifier = ContainerIdentifier(runtime_factory(), dummy_logger)

    assert await identifier.resolve("f3f177b2b3b4") == "my-container"
    assert dummy_logger.messages("warning") == []


@pytest.mark.asyncio
async def test_identifier_falls_back_to_sentinel(runtime_factory, dummy_logger):
    runtime = runtime_factory(failing_names={"f3f177b2b3b4"})
    identifier = ContainerIdentifier(runtime, dummy_logger)

    assert await identifier.resolve("f3f177b2b3b4") == "N/A"
    assert await identifier.resolve("unknown") == "N/A"
    assert len(dummy_logger.messages("warning")) == 2


@pytest.mark.asyncio
async def test_identifier_custom_sentinel(runtime_factory, dummy_logger):
    identifier = ContainerIdentifier(runtime_factory(names={}), dummy_logger, sentinel="?")

    assert await identifier.resolve("f3f177b2b3b4") == "?"


@pytest.mark.asyncio
async def test_enumerator_lists_running(runtime_factory, dummy_logger):
    runtime = runtime_factory(running=["aaa", "bbb ccc", ""])
    enumerator = ContainerEnumerator(runtime, dummy_logger)

    assert await enumerator.list_running() == ["aaa", "bbb", "ccc"]


@pytest.mark.asyncio
async def test_enumerator_empty(runtime_factory, dummy_logger):
    enumerator = ContainerEnumerator(runtime_factory(running=[]), dummy_logger)

    assert await enumerator.list_running() == []


@pytest.mark.asyncio
async def test_enumerator_failure(runtime_factory, dummy_logger):
    runtime = runtime_factory(list_error=RuntimeQueryError(["docker", "ps", "-q"], 1, "daemon down"))
    enumerator = ContainerEnumerator(runtime, dummy_logger)

    with pytest.raises(EnumerationFailed, match="Failed to retrieve container list"):
        await enumerator.list_running()
    assert dummy_logger.messages("error")
