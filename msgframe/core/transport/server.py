import asyncio
import logging

from msgframe.core.errors import BindError
from msgframe.core.models.address import Address
from msgframe.core.models.config import ListenerConfig
from msgframe.core.models.state import ServerState
from msgframe.core.transport.codec import FrameCodec
from msgframe.core.transport.stream import Streamer


class Listener:
    """
    Owns the lifecycle of a TCP listener that accepts client connections,
    runs the configured application on each of them, and coordinates
    graceful shutdown.

    `start()` binds the listening socket and returns the concrete bound
    address, so a listener configured on port 0 reports the port the OS
    picked. Each accepted connection gets its own task and Streamer; tasks
    share nothing but the ServerState bookkeeping used for shutdown. An error
    on one connection is logged by its Streamer and never reaches the accept
    loop or the other connections.

    On shutdown, Listener closes the listening socket, asks all active
    connections to shut down, and waits for their tasks to complete. If the
    graceful shutdown timeout is exceeded, any remaining tasks are cancelled
    and an error is logged.
    """
    def __init__(self, config: ListenerConfig, codec: FrameCodec) -> None:
        self._config = config
        self._codec = codec
        self.state = ServerState()
        self.address: Address | None = None
        self._logger = logging.getLogger("core.transport.server")

        self._server: asyncio.AbstractServer | None = None

    async def start(self) -> Address:
        config = self._config

        try:
            self._server = await asyncio.start_server(
                self._handle_connection,
                host=config.host,
                port=config.port,
                backlog=config.backlog,
            )
        except OSError as exc:
            raise BindError(
                f"Unable to bind {config.host}:{config.port}: {exc}"
            ) from exc

        host, port = self._server.sockets[0].getsockname()[:2]
        self.address = Address(host=host, port=port)
        self._logger.info(f"Listening on {self.address}")
        return self.address

    async def serve(self, stop_event: asyncio.Event) -> None:
        """Accept connections until `stop_event` is set, then shut down."""
        if self._server is None:
            await self.start()

        try:
            await stop_event.wait()
        finally:
            await self.shutdown()

    async def shutdown(self) -> None:
        if self._server:
            self._server.close()

        for connection in self.state.connections.copy():
            connection.shutdown()

        try:
            await asyncio.wait_for(
                self._wait_task_complete(),
                timeout=self._config.timeout_graceful_shutdown
            )
        except asyncio.TimeoutError:
            self._logger.error(
                f"Cancel {len(self.state.tasks)} running task(s), "
                f"timeout graceful shutdown: {self.state.tasks}"
            )
            for task in self.state.tasks:
                task.cancel("Task cancelled, timeout graceful shutdown exceeded")

    async def _handle_connection(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
    ) -> None:
        streamer = Streamer(reader=reader, writer=writer, codec=self._codec)
        task = asyncio.current_task()

        self.state.connections.add(streamer)
        if task is not None:
            self.state.tasks.add(task)
        self._logger.debug(f"{streamer.who} - Connection made")

        try:
            await streamer.run_app(self._config.app)
        finally:
            self.state.connections.discard(streamer)
            if task is not None:
                self.state.tasks.discard(task)
            self._logger.debug(f"{streamer.who} - Connection closed")

    async def _wait_task_complete(self) -> None:
        if self.state.connections:
            self._logger.info("Waiting for client connections to close.")

        while self.state.connections:
            await asyncio.sleep(0.1)

        if self.state.tasks:
            self._logger.info("Waiting for connection tasks to complete.")

        while self.state.tasks:
            await asyncio.sleep(0.1)

        if self._server:
            await self._server.wait_closed()
