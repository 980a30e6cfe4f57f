import logging
from typing import Any

import msgpack

from msgframe.core.connections.client import ClientSession
from msgframe.core.errors import ComplianceError

_logger = logging.getLogger("core.compliance")


def _bounds(name: str, bits: int, signed: bool) -> list[tuple[str, Any]]:
    if signed:
        low, high = -(2 ** (bits - 1)), 2 ** (bits - 1) - 1
    else:
        low, high = 0, 2**bits - 1
    return [(name, 0), (name, low), (name, high)]


ROUNDTRIP_VALUES: list[tuple[str, Any]] = [
    *_bounds("identity_u8", 8, signed=False),
    *_bounds("identity_u16", 16, signed=False),
    *_bounds("identity_u32", 32, signed=False),
    *_bounds("identity_u64", 64, signed=False),
    *_bounds("identity_i8", 8, signed=True),
    *_bounds("identity_i16", 16, signed=True),
    *_bounds("identity_i32", 32, signed=True),
    *_bounds("identity_i64", 64, signed=True),
    ("identity_bool", True),
    ("identity_bool", False),
    ("identity_float", 0.5),
    ("identity_nil", None),
    ("identity_string", ""),
    ("identity_string", "Short"),
    ("identity_string", "Long" * 128),
    ("identity_string", "Longer" * 10_000),
    ("identity_data", b""),
    ("identity_data", bytes([0, 13, 61, 23, 0, 32, 51, 12, 0])),
    # epoch
    ("identity_timestamp", msgpack.Timestamp(0, 0)),
    ("identity_timestamp", msgpack.Timestamp(1561378047, 0)),
    ("identity_timestamp", msgpack.Timestamp(1561378047, 2398)),
    # year 2200
    ("identity_timestamp", msgpack.Timestamp(7273195896, 0)),
    ("identity_timestamp", msgpack.Timestamp(7273195896, 23549)),
    # before epoch
    ("identity_timestamp", msgpack.Timestamp(-14182980, 0)),
    # year 2600
    ("identity_timestamp", msgpack.Timestamp(19898323200, 0)),
    ("identity_timestamp", msgpack.Timestamp(19898323200, 2359807)),
    ("identity_list", [1, "two", [3.0, None]]),
    ("identity_map", {"a": 1, "nested": {"b": [True, False]}, "bin": b"\x00"}),
]
"""
Values sent by `run_roundtrips`, each tagged with the check it belongs to.
"""


def _same(expected: Any, actual: Any) -> bool:
    if type(expected) is not type(actual):
        return False
    if isinstance(expected, list):
        return len(expected) == len(actual) and all(
            _same(e, a) for e, a in zip(expected, actual)
        )
    if isinstance(expected, dict):
        return expected.keys() == actual.keys() and all(
            _same(v, actual[k]) for k, v in expected.items()
        )
    return expected == actual


async def run_roundtrips(
    session: ClientSession,
    values: list[tuple[str, Any]] | None = None,
) -> int:
    """
    Send every value through `session` and check the echo.

    Types are compared as well as values, so an integer coming back as a
    boolean (or the reverse) is a failure. Returns the number of values
    checked; raises ComplianceError on the first mismatch.
    """
    if values is None:
        values = ROUNDTRIP_VALUES

    for name, expected in values:
        actual = await session.request(expected)
        if not _same(expected, actual):
            raise ComplianceError(
                f"{name}: expected {expected!r:.80}, got {actual!r:.80}"
            )
        _logger.debug(f"{name}: ok")

    return len(values)
