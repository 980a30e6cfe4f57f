import pytest
import yaml

from tests.fake.fake_transport import FakeStreamWriter, FakeTransport

from msgframe.core.transport.codec import FrameCodec
from msgframe.infra.msgpack_serializer import MsgPackSerializer


@pytest.fixture
def serializer():
    return MsgPackSerializer()


@pytest.fixture
def codec(serializer):
    return FrameCodec(serializer, max_buffer_size=1024 * 1024)


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def writer(transport):
    return FakeStreamWriter(transport)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run with no msgframe environment and an empty working directory."""
    monkeypatch.delenv("MSGFRAMECONFIG", raising=False)
    for name in ("MSGFRAME_LOG_LEVEL", "MSGFRAME_SERVER__PORT", "MSGFRAME_SERVER__HOST"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.fixture
def config_file(tmp_path):
    file = tmp_path / "msgframe.yaml"

    data = {
        "server": {
            "host": "127.0.0.1",
            "port": 0,
            "backlog": 10,
            "max_buffer_size": 64 * 1024,
            "timeout_graceful_shutdown": 1,
        },
        "client": {
            "connect_timeout": 2.5,
        },
        "log_level": "DEBUG",
    }

    file.write_text(yaml.dump(data))
    return file
