# src/taskline/connectors/tcp_client.py

from __future__ import annotations

import asyncio
import contextlib


class LineClient:
    """
    Minimal async client for the line protocol.

    One request line out, one response line back. Usable as an async context manager:

        async with LineClient(host, port) as client:
            await client.send("alice CREATE_TASK t1")
    """

    def __init__(self, host: str, port: int, *, timeout: float = 5.0) -> None:
        self.host = host
        self.port = port
        self.timeout = timeout
        self._reader: asyncio.StreamReader | None = None
        self._writer: asyncio.StreamWriter | None = None

    async def connect(self) -> None:
        self._reader, self._writer = await asyncio.wait_for(
            asyncio.open_connection(self.host, self.port), timeout=self.timeout
        )

    async def send(self, line: str) -> str:
        if self._reader is None or self._writer is None:
            raise RuntimeError("LineClient is not connected")

        self._writer.write(line.encode("utf-8") + b"\n")
        await self._writer.drain()
        raw = await asyncio.wait_for(self._reader.readline(), timeout=self.timeout)
        if not raw:
            raise ConnectionError("Server closed the connection without a response")
        return raw.decode("utf-8").rstrip("\r\n")

    async def close(self) -> None:
        writer, self._writer, self._reader = self._writer, None, None
        if writer is None:
            return
        writer.close()
        with contextlib.suppress(Exception):
            await writer.wait_closed()

    async def __aenter__(self) -> LineClient:
        await self.connect()
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()


async def send_command(host: str, port: int, line: str, *, timeout: float = 5.0) -> str:
    """Open a connection, send one line, return the response line."""
    async with LineClient(host, port, timeout=timeout) as client:
        return await client.send(line)
