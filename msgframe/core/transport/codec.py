import asyncio
from typing import Any, AsyncIterator, Iterator

from msgframe.core.errors import DecodeError, TransportError
from msgframe.core.models.frame import Frame
from msgframe.core.ports.serializer import Serializer


class FrameCodec:
    """
    Converts application values to and from the length-prefixed wire format.

    Every frame is two serialized units: the payload's byte length, encoded
    as a plain integer with the same serializer, followed by the payload
    itself. There is no fixed-width header; the decoder relies on the
    serializer being self-delimiting and treats the stream as a flat
    sequence of units. Pairing lengths with payloads is left to the caller.

    Decoding is lazy: `decode()` reads from an asyncio stream and yields
    values as soon as enough bytes for a complete unit have arrived. A
    decoder is bound to a single stream; a new stream needs a new call.
    """
    def __init__(
        self,
        serializer: Serializer,
        max_buffer_size: int = 4 * 1024 * 1024,
        read_size: int = 64 * 1024,
    ) -> None:
        self._serializer = serializer
        self._max_buffer_size = max_buffer_size
        self._read_size = read_size

    def encode(self, value: Any) -> bytes:
        return self._serializer.serialize(value)

    def encode_length(self, byte_length: int) -> bytes:
        if isinstance(byte_length, bool) or not isinstance(byte_length, int):
            raise ValueError(f"Frame length must be an integer, got {byte_length!r}")
        if byte_length < 0:
            raise ValueError(f"Frame length must be non-negative, got {byte_length}")
        return self._serializer.serialize(byte_length)

    def encode_frame(self, value: Any) -> Frame:
        payload = self.encode(value)
        return Frame(length=self.encode_length(len(payload)), payload=payload)

    def iter_decode(self, data: bytes) -> Iterator[Any]:
        """
        Decode every unit contained in a complete buffer.

        Raises DecodeError if the buffer ends in the middle of a unit.
        """
        decoder = self._serializer.decoder(self._max_buffer_size)
        decoder.feed(data)
        yield from decoder

        if decoder.pending:
            raise DecodeError(
                f"Buffer ends with {decoder.pending} byte(s) of an incomplete frame"
            )

    async def decode(self, reader: asyncio.StreamReader) -> AsyncIterator[Any]:
        """
        Yield decoded units from `reader` in arrival order.

        The iteration ends cleanly when the peer closes the stream on a unit
        boundary. Malformed bytes, or a stream closed in the middle of a
        unit, raise DecodeError. Read failures raise TransportError.
        """
        decoder = self._serializer.decoder(self._max_buffer_size)

        while True:
            try:
                chunk = await reader.read(self._read_size)
            except OSError as exc:
                raise TransportError(f"Read failed: {exc}") from exc

            if not chunk:
                break

            decoder.feed(chunk)
            for value in decoder:
                yield value

        if decoder.pending:
            raise DecodeError(
                f"Stream closed with {decoder.pending} byte(s) of an incomplete frame"
            )
