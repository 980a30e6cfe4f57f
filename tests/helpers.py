import asyncio
from typing import Any

from msgframe.core.echo import EchoApplication
from msgframe.core.models.config import ListenerConfig
from msgframe.core.transport.codec import FrameCodec
from msgframe.core.transport.server import Listener


async def start_echo_listener(codec: FrameCodec, **overrides: Any) -> Listener:
    params: dict[str, Any] = {
        "app": EchoApplication(codec),
        "host": "127.0.0.1",
        "port": 0,
        "backlog": 10,
        "timeout_graceful_shutdown": 1.0,
    }
    params.update(overrides)

    listener = Listener(config=ListenerConfig(**params), codec=codec)
    await listener.start()
    return listener


async def read_values(
    reader: asyncio.StreamReader,
    codec: FrameCodec,
    count: int,
    timeout: float = 2.0,
) -> list[Any]:
    """Read exactly `count` decoded units from a raw client stream."""
    values: list[Any] = []

    async def collect() -> None:
        async for value in codec.decode(reader):
            values.append(value)
            if len(values) == count:
                return

    await asyncio.wait_for(collect(), timeout=timeout)
    return values
