from dataclasses import dataclass

from msgframe.core.errors import AddressParseError


@dataclass(frozen=True)
class Address:
    """
    A resolved network endpoint.

    Addresses are exchanged as a single ``host:port`` string: the listener
    prints its bound address in that form and the connector parses it back.
    IPv6 literals must be bracketed (``[::1]:9000``).
    """
    host: str
    """
    Hostname or IP literal, without brackets.
    """

    port: int
    """
    TCP port. Parsed addresses always carry a port in [1, 65535].
    """

    @classmethod
    def parse(cls, text: str) -> "Address":
        host, sep, raw_port = text.strip().rpartition(":")
        if not sep:
            raise AddressParseError(f"invalid address {text!r}: missing port")

        if host.startswith("[") and host.endswith("]"):
            host = host[1:-1]
        elif ":" in host:
            raise AddressParseError(
                f"invalid address {text!r}: IPv6 hosts must be bracketed"
            )

        if not host:
            raise AddressParseError(f"invalid address {text!r}: missing host")

        if not (raw_port.isascii() and raw_port.isdigit()):
            raise AddressParseError(
                f"invalid address {text!r}: port {raw_port!r} is not a number"
            )

        port = int(raw_port)
        if not 1 <= port <= 65535:
            raise AddressParseError(
                f"invalid address {text!r}: port {port} out of range"
            )

        return cls(host=host, port=port)

    def __str__(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"
