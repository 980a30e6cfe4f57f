import logging

from msgframe.core.models.frame import Frames, Phase, SendValue
from msgframe.core.transport.codec import FrameCodec


class EchoApplication:
    """
    Per-connection echo loop run by the Listener.

    Decoded values alternate between length announcements and payloads,
    starting with a length. Every payload is sent back re-encoded and
    re-framed, so the reply's length unit is the size of the re-encoded
    payload rather than the announced one.

    The announced length is never checked against the payload that follows
    it; peers rely on that. A mismatch is only reported at debug level.
    """
    def __init__(self, codec: FrameCodec) -> None:
        self._codec = codec
        self._logger = logging.getLogger("core.echo")

    async def __call__(self, frames: Frames, send: SendValue) -> None:
        phase = Phase.AWAIT_LENGTH
        announced = None
        echoed = 0

        try:
            async for value in frames:
                if phase is Phase.AWAIT_PAYLOAD:
                    self._logger.debug(f"received: {value!r}")
                    self._report_mismatch(announced, value)
                    await send(value)
                    echoed += 1
                else:
                    announced = value

                phase = phase.next()
        finally:
            if phase is Phase.AWAIT_PAYLOAD:
                self._logger.debug(f"Length {announced!r} was never followed by a payload")
            phase = Phase.CLOSED
            self._logger.debug(f"Connection {phase.value} after {echoed} payload(s)")

    def _report_mismatch(self, announced: object, value: object) -> None:
        if not self._logger.isEnabledFor(logging.DEBUG):
            return

        actual = len(self._codec.encode(value))
        if announced != actual:
            self._logger.debug(
                f"Announced length {announced!r} differs from re-encoded "
                f"payload size {actual}"
            )
