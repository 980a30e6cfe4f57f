import asyncio

import pytest

from msgframe.bootstrap import deps
from msgframe.bootstrap.boot import announce, main
from msgframe.bootstrap.config.settings import MsgFrameConfig
from msgframe.core.compliance import ROUNDTRIP_VALUES
from msgframe.core.controlplane import ControlPlane
from msgframe.core.models.address import Address
from msgframe.infra.msgpack_serializer import MsgPackSerializer


@pytest.fixture
def fresh_deps(clean_env):
    deps.get_config.cache_clear()
    deps.get_cp.cache_clear()
    yield
    deps.get_config.cache_clear()
    deps.get_cp.cache_clear()
    asyncio.set_event_loop(None)


@pytest.mark.it
def test_serve_probe_and_roundtrip(clean_env):
    controlplane = ControlPlane(MsgFrameConfig(), MsgPackSerializer())
    loop = controlplane.loop
    stop_event = asyncio.Event()
    bound: list[Address] = []

    async def scenario():
        serving = asyncio.create_task(controlplane.serve(stop_event, bound.append))
        while not bound:
            await asyncio.sleep(0.01)

        await controlplane.probe(str(bound[0]))
        count = await controlplane.roundtrip(str(bound[0]))

        stop_event.set()
        await asyncio.wait_for(serving, timeout=5)
        return count

    try:
        assert loop.run_until_complete(scenario()) == len(ROUNDTRIP_VALUES)
        assert bound[0].port != 0
        assert not controlplane.listener.state.connections
    finally:
        loop.close()
        asyncio.set_event_loop(None)


@pytest.mark.it
def test_announce_prints_host_port(capsys):
    announce(Address("127.0.0.1", 41234))

    assert capsys.readouterr().out == "127.0.0.1:41234\n"


@pytest.mark.it
def test_main_client_bad_address_exits(fresh_deps):
    with pytest.raises(SystemExit, match="invalid address"):
        main(["client", "bad-address"])


@pytest.mark.it
def test_main_client_unreachable_exits(fresh_deps):
    with pytest.raises(SystemExit, match="Error: "):
        main(["client", "127.0.0.1:0"])
