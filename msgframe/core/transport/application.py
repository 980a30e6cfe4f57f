from msgframe.core.models.frame import Frames, SendValue
from typing import Protocol


class Application(Protocol):
    """
    This interface defines the per‑connection handler executed by the Streamer.

    An Application is an asynchronous callable that receives two arguments:
    `frames`, a lazy async iterator over every value decoded from the
    connection, and `send`, which frames and transmits a value to the remote
    peer. The Application implements the business logic for a single TCP
    connection by pulling values from `frames` and calling `send(value)` to
    produce responses.

    The Application runs until it returns or raises an exception. When it
    exits, the underlying connection is closed by the Streamer. DecodeError
    and TransportError raised from `frames` or `send` only end the current
    connection.

    The Application does not handle framing, serialization, or transport-level
    concerns. These responsibilities belong to the FrameCodec and the Streamer.
    """
    async def __call__(self, frames: Frames, send: SendValue) -> None:
        ...
