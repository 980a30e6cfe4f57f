import pytest
from unittest.mock import Mock

from msgframe.core.transport.addr import get_remote_addr


@pytest.mark.ut
def test_get_remote_addr_with_socket():
    transport = Mock()
    sock = Mock()
    sock.getpeername.return_value = ("1.2.3.4", 5678)
    transport.get_extra_info.side_effect = lambda key: sock if key == "socket" else None

    assert get_remote_addr(transport) == ("1.2.3.4", 5678)


@pytest.mark.ut
def test_get_remote_addr_with_peername():
    transport = Mock()
    transport.get_extra_info.side_effect = lambda key: None if key == "socket" else ("5.6.7.8", 9999)

    assert get_remote_addr(transport) == ("5.6.7.8", 9999)


@pytest.mark.ut
def test_get_remote_addr_ipv6_peername():
    transport = Mock()
    transport.get_extra_info.side_effect = lambda key: None if key == "socket" else ("::1", 4242, 0, 0)

    assert get_remote_addr(transport) == ("::1", 4242)


@pytest.mark.ut
def test_get_remote_addr_socket_not_connected():
    transport = Mock()
    sock = Mock()
    sock.getpeername.side_effect = OSError("not connected")
    transport.get_extra_info.side_effect = lambda key: sock if key == "socket" else None

    assert get_remote_addr(transport) is None


@pytest.mark.ut
def test_get_remote_addr_invalid():
    transport = Mock()

    def fake_extra_info(key):
        if key == "socket":
            return None
        if key == "peername":
            return ("only-one-element",)
        return None

    transport.get_extra_info.side_effect = fake_extra_info

    assert get_remote_addr(transport) is None
