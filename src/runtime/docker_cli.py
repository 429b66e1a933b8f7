"""Container runtime backed by the ``docker`` command-line client."""

from __future__ import annotations

import asyncio
import json
import re
from typing import List, Optional, Sequence

from metrics.errors import RuntimeQueryError, StatsPayloadError
from model.metrics import RawStatsRecord
from runtime.base import ContainerRuntimeBase


class DockerCliRuntime(ContainerRuntimeBase):
    """Run ``docker ps`` / ``inspect`` / ``stats`` as asyncio subprocesses."""

    def __init__(self, binary: str = "docker", timeout: Optional[float] = None):
        """Remember how to reach the Docker CLI.

        :param binary: Executable name or path of the Docker client.
        :param timeout: Seconds allowed per invocation, ``None`` waits forever.
        """
        self.binary = binary
        self.timeout = timeout

    async def _run(self, *args: str) -> str:
        """Execute ``docker <args>`` and return its decoded stdout.

        :raises RuntimeQueryError: On a missing binary, non-zero exit or timeout.
        """
        command: Sequence[str] = (self.binary, *args)
        try:
            proc = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise RuntimeQueryError(command, None, str(exc)) from exc

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError as exc:
            proc.kill()
            await proc.wait()
            raise RuntimeQueryError(command, None, f"timed out after {self.timeout}s") from exc

        if proc.returncode != 0:
            raise RuntimeQueryError(command, proc.returncode, stderr.decode("utf-8", errors="replace"))
        return stdout.decode("utf-8", errors="replace")

    async def list_running_containers(self) -> List[str]:
        output = await self._run("ps", "-q")
        return output.split()

    async def inspect_name(self, identifier: str) -> str:
        output = await self._run("inspect", "--format={{.Name}}", identifier)
        return output.strip().removeprefix("/")

    async def stats_once(self, identifier: str) -> RawStatsRecord:
        output = await self._run("stats", identifier, "--no-stream", "--format", "{{json .}}")
        try:
            payload = json.loads(output)
        except json.JSONDecodeError as exc:
            raise StatsPayloadError(f"Invalid stats JSON for {identifier}: {exc}") from exc
        if not isinstance(payload, dict):
            raise StatsPayloadError(f"Expected a JSON object for {identifier}, got {type(payload).__name__}")
        return RawStatsRecord.from_payload(payload)

    async def find_by_name(self, name: str) -> Optional[str]:
        output = await self._run("ps", "--filter", f"name=^/?{re.escape(name)}$", "--format", "{{.ID}}")
        ids = output.split()
        return ids[0] if ids else None

    def describe(self) -> str:
        return f"docker-cli ({self.binary})"
