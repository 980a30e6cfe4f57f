import asyncio
import logging
from typing import Callable

from msgframe.bootstrap.config.settings import MsgFrameConfig
from msgframe.core.compliance import run_roundtrips
from msgframe.core.connections.client import Connector
from msgframe.core.echo import EchoApplication
from msgframe.core.models.address import Address
from msgframe.core.models.config import ListenerConfig
from msgframe.core.ports.serializer import Serializer
from msgframe.core.transport.codec import FrameCodec
from msgframe.core.transport.server import Listener


class ControlPlane:
    """
    Wires configuration, codec and roles together for one process.

    The bootstrap picks a role and calls either `serve()` (listener) or
    `probe()` / `roundtrip()` (connector) on the control plane's loop.
    """
    def __init__(
        self,
        config: MsgFrameConfig,
        serializer: Serializer,
    ) -> None:
        self._config = config
        self._loop = self._create_event_loop()
        self._codec = FrameCodec(
            serializer=serializer,
            max_buffer_size=config.server.max_buffer_size,
        )
        self._listener = Listener(
            config=self._build_listener_config(),
            codec=self._codec,
        )
        self._logger = logging.getLogger("msgframe.controlplane")

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    @property
    def listener(self) -> Listener:
        return self._listener

    async def serve(
        self,
        stop_event: asyncio.Event,
        on_bound: Callable[[Address], None],
    ) -> None:
        address = await self._listener.start()
        on_bound(address)
        await self._listener.serve(stop_event)

    async def probe(self, address: str) -> None:
        await self._build_connector(address).probe()

    async def roundtrip(self, address: str) -> int:
        session = await self._build_connector(address).connect()
        async with session:
            count = await run_roundtrips(session)
        self._logger.info(f"{count} round-trip(s) matched")
        return count

    def _build_connector(self, address: str) -> Connector:
        return Connector(
            address=address,
            codec=self._codec,
            connect_timeout=self._config.client.connect_timeout,
        )

    def _build_listener_config(self) -> ListenerConfig:
        server_config = self._config.server

        config = ListenerConfig(
            app=EchoApplication(self._codec),
            host=server_config.host,
            port=server_config.port,
            backlog=server_config.backlog,
            timeout_graceful_shutdown=server_config.timeout_graceful_shutdown,
        )

        return config

    @staticmethod
    def _create_event_loop() -> asyncio.AbstractEventLoop:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        return loop
