import asyncio
import logging
from typing import Any

from msgframe.core.errors import ConnectError, TransportError
from msgframe.core.models.address import Address
from msgframe.core.transport.codec import FrameCodec
from msgframe.core.transport.stream import Streamer


class ClientSession:
    """
    An established outbound connection speaking the length/payload protocol.

    `request()` writes one frame (length unit, then payload unit) and waits
    for the echoed frame, returning its payload. The echoed length unit is
    consumed but not checked, mirroring the listener.
    """
    def __init__(self, streamer: Streamer, address: Address) -> None:
        self._streamer = streamer
        self._address = address
        self._frames = streamer.receive()
        self._logger = logging.getLogger("core.connections.client")

    async def __aenter__(self) -> "ClientSession":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def send(self, value: Any) -> None:
        await self._streamer.send(value)

    async def receive(self) -> Any:
        length = await self._next()
        payload = await self._next()
        self._logger.debug(f"{self._address} - received {length!r} byte(s) announced")
        return payload

    async def request(self, value: Any) -> Any:
        await self.send(value)
        return await self.receive()

    async def close(self) -> None:
        await self._frames.aclose()
        await self._streamer.close()

    async def _next(self) -> Any:
        try:
            return await anext(self._frames)
        except StopAsyncIteration as exc:
            raise TransportError(f"{self._address} closed the connection") from exc


class Connector:
    """
    Active side of the protocol.

    The address is parsed on construction, so a malformed one fails with
    AddressParseError before any network I/O. Every failure to reach the
    target is reported as ConnectError chained to its original cause.

    `probe()` opens one connection and closes it immediately, which is enough
    to check that a listener is reachable. `connect()` keeps the connection
    open and returns a ClientSession for exchanging frames.
    """
    def __init__(
        self,
        address: str | Address,
        codec: FrameCodec,
        connect_timeout: float | None = None,
    ) -> None:
        if isinstance(address, Address):
            self._address = address
        else:
            self._address = Address.parse(address)
        self._codec = codec
        self._connect_timeout = connect_timeout
        self._logger = logging.getLogger("core.connections.client")

    @property
    def address(self) -> Address:
        return self._address

    async def probe(self) -> None:
        streamer = await self._open()
        self._logger.info(f"Connected to {self._address}")
        await streamer.close()

    async def connect(self) -> ClientSession:
        streamer = await self._open()
        self._logger.info(f"Connected to {self._address}")
        return ClientSession(streamer, self._address)

    async def _open(self) -> Streamer:
        try:
            reader, writer = await asyncio.wait_for(
                asyncio.open_connection(
                    host=self._address.host,
                    port=self._address.port,
                ),
                timeout=self._connect_timeout,
            )
        except (OSError, asyncio.TimeoutError) as exc:
            reason = str(exc) or type(exc).__name__
            raise ConnectError(
                f"Unable to connect to {self._address}: {reason}"
            ) from exc

        return Streamer(reader=reader, writer=writer, codec=self._codec)
