class MsgFrameError(Exception):
    """Base class for every error raised by msgframe."""


class ConnectError(MsgFrameError):
    """
    The connector could not reach its target.

    The original cause (refused connection, DNS failure, timeout) is
    available as ``__cause__``.
    """


class AddressParseError(ConnectError, ValueError):
    """
    A ``host:port`` string is malformed.

    Raised before any network I/O takes place. It is a ConnectError so that
    callers handling "cannot reach the target" also cover addresses that can
    never be reached, such as port 0.
    """


class BindError(MsgFrameError):
    """The listening socket cannot be bound. Fatal for the listener."""


class DecodeError(MsgFrameError):
    """Malformed or truncated MessagePack on a connection."""


class TransportError(MsgFrameError):
    """Read or write failure on an established connection."""


class ComplianceError(MsgFrameError):
    """A value echoed by the peer differs from the value that was sent."""
