import pytest

from msgframe.core.errors import AddressParseError, ConnectError
from msgframe.core.models.address import Address


@pytest.mark.ut
@pytest.mark.parametrize(
    "text, host, port",
    [
        ("127.0.0.1:8080", "127.0.0.1", 8080),
        ("localhost:1", "localhost", 1),
        ("example.org:65535", "example.org", 65535),
        ("[::1]:9000", "::1", 9000),
        ("  10.0.0.1:22 ", "10.0.0.1", 22),
    ],
)
def test_parse_valid(text, host, port):
    address = Address.parse(text)

    assert address.host == host
    assert address.port == port


@pytest.mark.ut
@pytest.mark.parametrize(
    "text",
    [
        "bad-address",
        ":8080",
        "localhost:",
        "localhost:http",
        "localhost:0",
        "localhost:-1",
        "localhost:65536",
        "localhost:80.5",
        "::1:9000",
        "",
    ],
)
def test_parse_invalid(text):
    with pytest.raises(AddressParseError):
        Address.parse(text)


@pytest.mark.ut
def test_parse_error_is_a_connect_error_and_value_error():
    with pytest.raises(ConnectError):
        Address.parse("127.0.0.1:0")

    with pytest.raises(ValueError):
        Address.parse("nope")


@pytest.mark.ut
def test_str_roundtrip():
    assert str(Address("127.0.0.1", 4000)) == "127.0.0.1:4000"
    assert str(Address("::1", 4000)) == "[::1]:4000"
    assert Address.parse(str(Address("::1", 4000))) == Address("::1", 4000)
