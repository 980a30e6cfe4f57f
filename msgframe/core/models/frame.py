import enum
from dataclasses import dataclass
from typing import Any, AsyncIterator, Awaitable, Callable


@dataclass(frozen=True)
class Frame:
    """
    One length-prefixed wire unit.

    Both parts are MessagePack units: ``length`` is the encoded integer size
    of ``payload``, and ``payload`` is the encoded application value.
    """
    length: bytes
    payload: bytes

    def to_bytes(self) -> bytes:
        return self.length + self.payload


class Phase(enum.Enum):
    """
    Per-connection exchange state.

    A connection starts in AWAIT_LENGTH and flips between the two await
    states after every decoded value, until it is CLOSED.
    """
    AWAIT_LENGTH = "await_length"
    AWAIT_PAYLOAD = "await_payload"
    CLOSED = "closed"

    def next(self) -> "Phase":
        if self is Phase.AWAIT_LENGTH:
            return Phase.AWAIT_PAYLOAD
        if self is Phase.AWAIT_PAYLOAD:
            return Phase.AWAIT_LENGTH
        raise ValueError("A closed connection has no next phase")


Frames = AsyncIterator[Any]
"""
Lazy sequence of decoded values handed to the application.
It ends when the peer closes the connection.
"""


SendValue = Callable[[Any], Awaitable[None]]
"""
Coroutine provided to the application for sending a value to the peer,
framed as a length unit followed by the payload unit.
"""
