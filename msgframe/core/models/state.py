import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from msgframe.core.transport.stream import Streamer


@dataclass
class ServerState:
    """
    Shared runtime state for a Listener.

    This object is mutated by:
    - Listener: adds/removes active connections and their tasks
    - Listener.shutdown(): waits for connections and tasks to complete
    """
    connections: set["Streamer"] = field(default_factory=set)
    """
    Set of active Streamer instances. Each TCP connection corresponds
    to one Streamer.
    """

    tasks: set[asyncio.Task[None]] = field(default_factory=set)
    """
    Set of per-connection tasks. A task is registered when its connection
    is accepted and discarded when the connection reaches CLOSED.
    """
