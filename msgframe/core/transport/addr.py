import asyncio


def get_remote_addr(transport: asyncio.BaseTransport) -> tuple[str, int] | None:
    """
    Return the (host, port) of the peer behind `transport`, or None when the
    transport does not expose a usable address.
    """
    sock = transport.get_extra_info("socket")
    if sock is not None:
        try:
            info = sock.getpeername()
        except OSError:
            return None
    else:
        info = transport.get_extra_info("peername")

    if isinstance(info, (list, tuple)) and len(info) >= 2:
        return str(info[0]), int(info[1])
    return None
