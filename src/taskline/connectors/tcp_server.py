# src/taskline/connectors/tcp_server.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass

from ..core.ports import CommandHandler
from ..core.state import AppState
from ..protocol.responses import Response

logger = logging.getLogger(__name__)

Address = tuple[str, int]


async def _write_line(writer: asyncio.StreamWriter, text: str) -> None:
    writer.write(text.encode("utf-8") + b"\n")
    await writer.drain()


async def serve_client(
    interpreter: CommandHandler,
    reader: asyncio.StreamReader,
    writer: asyncio.StreamWriter,
    *,
    idle_timeout: float = 0.0,
) -> None:
    """
    Serve one connection: read line -> interpreter -> write response, until EOF.

    A line longer than the reader limit gets WRONG_FORMAT and closes the connection,
    because the rest of that line cannot be framed reliably.
    """
    peer = writer.get_extra_info("peername")
    logger.info("Client connected: %s", peer)

    try:
        while True:
            try:
                if idle_timeout > 0:
                    raw = await asyncio.wait_for(reader.readline(), timeout=idle_timeout)
                else:
                    raw = await reader.readline()
            except asyncio.TimeoutError:
                logger.info("Client %s idle for %.0fs, closing.", peer, idle_timeout)
                break
            except ValueError:
                logger.info("Client %s sent an oversized line, closing.", peer)
                await _write_line(writer, Response.WRONG_FORMAT.value)
                break

            if not raw:
                break

            line = raw.decode("utf-8", errors="replace").strip()
            try:
                response = interpreter.handle(line)
            except Exception:
                logger.exception("Interpreter crashed on line=%r", line)
                response = Response.ERROR.value

            logger.debug("%s %r -> %r", peer, line, response)
            await _write_line(writer, response)

    except (ConnectionError, asyncio.IncompleteReadError):
        logger.info("Client %s dropped the connection.", peer)
    except asyncio.CancelledError:
        logger.debug("Client %s handler cancelled.", peer)
        raise
    except Exception:
        logger.exception("Client %s handler crashed.", peer)
    finally:
        writer.close()
        with contextlib.suppress(Exception):
            await writer.wait_closed()
        logger.info("Client disconnected: %s", peer)


async def run_tcp_server(
    state: AppState,
    stop_event: asyncio.Event,
    *,
    on_started: Callable[[Address], None] | None = None,
) -> None:
    """
    TCP line server (async):

    bind -> accept loop -> wait for stop_event -> close

    `on_started` receives the bound (host, port); useful with port 0.
    """
    settings = state.settings
    host = str(getattr(settings, "host", "127.0.0.1"))
    port = int(getattr(settings, "port", 7070))
    max_line_bytes = int(getattr(settings, "max_line_bytes", 4096))
    idle_timeout = float(getattr(settings, "idle_timeout", 0.0))

    interpreter = state.interpreter
    clients: set[asyncio.StreamWriter] = set()

    async def on_client(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        clients.add(writer)
        try:
            await serve_client(interpreter, reader, writer, idle_timeout=idle_timeout)
        finally:
            clients.discard(writer)

    server = await asyncio.start_server(on_client, host, port, limit=max_line_bytes)
    sockname = server.sockets[0].getsockname()
    address: Address = (sockname[0], sockname[1])
    logger.info("TCP server listening on %s:%d", address[0], address[1])

    if on_started is not None:
        on_started(address)

    try:
        await stop_event.wait()
    finally:
        server.close()
        # Open connections would otherwise keep wait_closed() pending.
        for writer in list(clients):
            writer.close()
        with contextlib.suppress(Exception):
            await asyncio.wait_for(server.wait_closed(), timeout=5.0)
        logger.info("TCP server stopped.")


@dataclass
class ServerBackgroundRunner:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    stop_event: asyncio.Event
    address: Address

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.stop_event.set)
        except Exception:
            logger.debug("Failed to signal TCP server stop.", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


def start_server_in_background(state: AppState, *, timeout: float = 5.0) -> ServerBackgroundRunner | None:
    """
    Start the TCP server in a background thread with its own event loop,
    so the console REPL (blocking input()) can run in the main thread.

    Returns None if the server did not come up within `timeout`;
    the thread is told to stop in that case.
    """
    ready = threading.Event()
    holder: dict[str, Address] = {}

    # Created here so a timed-out start can still be stopped.
    loop = asyncio.new_event_loop()
    stop_event = asyncio.Event()

    def started(address: Address) -> None:
        holder["address"] = address
        ready.set()

    def runner() -> None:
        asyncio.set_event_loop(loop)
        try:
            loop.run_until_complete(run_tcp_server(state, stop_event, on_started=started))
        except Exception:
            logger.exception("TCP server crashed.")
        finally:
            ready.set()
            with contextlib.suppress(Exception):
                loop.close()

    t = threading.Thread(target=runner, name="taskline-tcp", daemon=True)
    t.start()

    ready.wait(timeout=timeout)
    address = holder.get("address")
    runner_handle = ServerBackgroundRunner(thread=t, loop=loop, stop_event=stop_event, address=("", 0))

    if address is None or not t.is_alive():
        logger.error("TCP server thread did not initialize properly.")
        runner_handle.stop()
        return None

    runner_handle.address = address
    logger.info("TCP server background thread started.")
    return runner_handle
