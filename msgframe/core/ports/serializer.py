from typing import Protocol, Any, Iterator


class StreamDecoder(Protocol):
    """
    Incremental decoder for a stream of back-to-back, self-delimiting units.

    Bytes are pushed with `feed()` as they arrive; iterating the decoder
    yields every unit that is complete so far and stops when the remaining
    bytes do not yet form a full unit. Iteration can be resumed after more
    bytes are fed.
    """

    def feed(self, data: bytes) -> None:
        """Append received bytes to the internal buffer."""

    def __iter__(self) -> Iterator[Any]:
        """Yield every complete unit currently buffered, in arrival order."""

    @property
    def pending(self) -> int:
        """Number of buffered bytes that belong to an incomplete unit."""


class Serializer(Protocol):
    """
    Defines the interface for encoding/decoding values exchanged
    over the TCP transport.

    Implementations must be:
    - deterministic
    - pure (no side effects)
    - safe against malformed input
    - self-delimiting: a stream of encoded units must be decodable
      without external length hints
    """

    def serialize(self, value: Any) -> bytes:
        """Encode a Python object into bytes suitable for network transport."""

    def deserialize(self, data: bytes) -> Any:
        """Decode a single complete unit received from the network."""

    def decoder(self, max_buffer_size: int = 0) -> StreamDecoder:
        """Return a fresh incremental decoder for one byte stream."""
