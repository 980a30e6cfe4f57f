import msgpack
from typing import Any, Iterator

from msgframe.core.errors import DecodeError
from msgframe.core.ports.serializer import Serializer, StreamDecoder

# Besides UnpackException, msgpack reports bad input as ValueError (invalid
# UTF-8, bad extension data), OverflowError (out of range values) and
# TypeError (unhashable map keys).
_DECODE_ERRORS = (msgpack.UnpackException, ValueError, OverflowError, TypeError)


class MsgPackStreamDecoder(StreamDecoder):
    """
    Incremental MessagePack decoder backed by `msgpack.Unpacker`.

    Malformed input and buffer overflow are reported as DecodeError.
    """
    def __init__(self, max_buffer_size: int = 0) -> None:
        self._max_buffer_size = max_buffer_size
        self._unpacker = msgpack.Unpacker(
            raw=False,
            strict_map_key=False,
            timestamp=0,
            max_buffer_size=max_buffer_size,
        )
        self._fed = 0

    def feed(self, data: bytes) -> None:
        try:
            self._unpacker.feed(data)
        except msgpack.BufferFull as exc:
            raise DecodeError(
                f"Incomplete frame exceeds {self._max_buffer_size} bytes"
            ) from exc
        self._fed += len(data)

    def __iter__(self) -> Iterator[Any]:
        try:
            yield from self._unpacker
        except _DECODE_ERRORS as exc:
            raise DecodeError(f"Invalid frame format: {exc}") from exc

    @property
    def pending(self) -> int:
        return self._fed - self._unpacker.tell()


class MsgPackSerializer(Serializer):
    """
    MsgPack-based implementation of the Serializer interface.

    - deterministic binary encoding
    - compact
    - self-delimiting, so units can be streamed back to back
    - timestamps decode to `msgpack.Timestamp`, keeping nanoseconds, and
      re-encode to the same bytes; aware datetimes are accepted on encode
    """
    def serialize(self, value: Any) -> bytes:
        return msgpack.packb(value, use_bin_type=True, datetime=True)

    def deserialize(self, data: bytes) -> Any:
        try:
            return msgpack.unpackb(
                data, raw=False, strict_map_key=False, timestamp=0
            )
        except _DECODE_ERRORS as exc:
            raise DecodeError(f"Invalid frame format: {exc}") from exc

    def decoder(self, max_buffer_size: int = 0) -> MsgPackStreamDecoder:
        return MsgPackStreamDecoder(max_buffer_size=max_buffer_size)
