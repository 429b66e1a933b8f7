"""Discord webhook log handler used for error alerting."""

from __future__ import annotations

import asyncio
from typing import List, Optional

import httpx

from utils.logger.config import LogEvent, LogLevel
from utils.logger.handlers.base import BaseLogHandler


def fence_code(text: str, lang: str = "") -> str:
    """Wrap ``text`` in a fenced code block while escaping existing fences."""

    safe = text.replace("```", "```\u200b")
    return f"```{lang}\n{safe}\n```"


def chunk_lines(lines: List[str], limit: int) -> List[str]:
    """Join ``lines`` into posts of at most ``limit`` characters.

    Single lines longer than ``limit`` are cut into several posts.
    """
    posts: List[str] = []
    current: List[str] = []
    size = 0
    for line in lines:
        while len(line) > limit:
            if current:
                posts.append("\n".join(current))
                current, size = [], 0
            posts.append(line[:limit])
            line = line[limit:]
        if current and size + len(line) + 1 > limit:
            posts.append("\n".join(current))
            current, size = [], 0
        current.append(line)
        size += len(line) + 1
    if current:
        posts.append("\n".join(current))
    return posts


class DiscordHandler(BaseLogHandler):
    """Ship error-level log batches to a Discord webhook."""

    def __init__(
        self,
        webhook_url: str,
        *,
        min_level: LogLevel = LogLevel.ERROR,
        username: Optional[str] = "docker-metrics",
        max_chars_per_post: int = 1900,
        http_timeout: float = 5.0,
    ):
        """Persist webhook settings; the HTTP client is created in :meth:`start`.

        :param webhook_url: Discord webhook URL.
        :param min_level: Lowest level forwarded to Discord.
        :param username: Optional override for the message author name.
        :param max_chars_per_post: Character budget per post, fences excluded.
        :param http_timeout: HTTP client timeout in seconds.
        """
        super().__init__()
        self.url = webhook_url
        self.min_level = min_level
        self.username = username
        self.max_chars = max_chars_per_post
        self.http_timeout = http_timeout
        self._client: Optional[httpx.AsyncClient] = None

    async def start(self) -> None:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.http_timeout)

    async def shutdown(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def push(self, records: List[LogEvent]) -> None:
        lines = [ev.text for ev in records if ev.level >= self.min_level]
        if not lines or self._client is None:
            return
        for post in chunk_lines(lines, self.max_chars):
            await self._send(fence_code(post))

    async def _send(self, content: str) -> None:
        payload = {"content": content, "allowed_mentions": {"parse": []}}
        if self.username:
            payload["username"] = self.username
        for attempt in range(2):
            try:
                r = await self._client.post(self.url, json=payload)
            except httpx.RequestError:
                # Alerting must not feed back into the logger.
                return
            if r.status_code != 429 or attempt:
                return
            await asyncio.sleep(self._retry_after(r))

    @staticmethod
    def _retry_after(response: httpx.Response) -> float:
        """Seconds Discord asks us to wait before posting again."""
        try:
            retry = float(response.json().get("retry_after", 1))
        except ValueError:
            retry = float(response.headers.get("Retry-After", "1"))
        return max(0.0, retry)
