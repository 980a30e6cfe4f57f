from dataclasses import dataclass

from msgframe.core.transport.application import Application


@dataclass
class ListenerConfig:
    """
    Static configuration for a msgframe Listener.

    This structure defines all parameters required to start a listener:
    networking, backlog, and graceful shutdown behavior. Decoding limits
    belong to the FrameCodec.
    """
    app: Application
    """
    The per-connection application coroutine with the signature:
        async def app(frames, send)
    It receives decoded values and may send responses.
    """

    host: str = "127.0.0.1"
    """
    IP address or hostname on which the listener binds.
    """

    port: int = 0
    """
    TCP port to bind. If set to 0, the OS selects an available port.
    """

    backlog: int = 128
    """
    Maximum number of pending TCP connections waiting for accept().
    """

    timeout_graceful_shutdown: float = 5.0
    """
    Maximum time (in seconds) allowed for graceful shutdown:
    - active connections must close
    - per-connection tasks registered in ServerState.tasks must complete
    After this timeout, remaining tasks are cancelled.
    """
