import asyncio
import logging
from typing import Any

from msgframe.core.errors import DecodeError, TransportError
from msgframe.core.models.frame import Frames
from msgframe.core.transport.addr import get_remote_addr
from msgframe.core.transport.application import Application
from msgframe.core.transport.codec import FrameCodec


class Streamer:
    """
    Manages the bidirectional flow of values for a single TCP connection.

    Incoming bytes are pulled from the StreamReader through the FrameCodec
    and exposed as a lazy sequence by `receive()`. When the Application
    sends a value, the Streamer frames it (length unit, then payload unit),
    writes it to the StreamWriter and waits for the write buffer to drain.

    The `run_app()` method executes the Application for the lifetime of the
    connection. Protocol failures (DecodeError, TransportError) are logged
    and end only this connection. When the Application returns or raises,
    the Streamer closes the writer and the connection is CLOSED.

    Streamer is used on both sides: by the Listener for accepted connections
    and by the ClientSession for outbound ones.
    """
    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        codec: FrameCodec,
    ) -> None:
        self._reader = reader
        self._writer = writer
        self._codec = codec
        self.peer = get_remote_addr(writer.transport)
        self._logger = logging.getLogger("core.transport.stream")

    @property
    def who(self) -> str:
        return "%s:%d" % self.peer if self.peer else "<unknown>"

    def receive(self) -> Frames:
        return self._codec.decode(self._reader)

    async def send(self, value: Any) -> None:
        frame = self._codec.encode_frame(value)

        try:
            self._writer.write(frame.to_bytes())
            await self._writer.drain()
        except OSError as exc:
            raise TransportError(f"Failed to send frame to {self.who}: {exc}") from exc

    async def run_app(self, app: Application) -> None:
        try:
            await app(self.receive(), self.send)
        except (DecodeError, TransportError) as exc:
            self._logger.warning(f"{self.who} - Dropping client connection: {exc}")
        except Exception as exc:
            self._logger.error("Exception in Application", exc_info=exc)
        finally:
            await self.close()

    def shutdown(self) -> None:
        """Close the writer; a pending read on the connection returns EOF."""
        self._writer.close()

    async def close(self) -> None:
        self._writer.close()
        try:
            await self._writer.wait_closed()
        except OSError as exc:
            self._logger.debug(f"{self.who} - Error while closing: {exc}")
