import json
from functools import lru_cache

from pydantic import ValidationError

from msgframe.bootstrap.config.settings import MsgFrameConfig
from msgframe.core.controlplane import ControlPlane
from msgframe.infra.msgpack_serializer import MsgPackSerializer


@lru_cache
def get_cp() -> ControlPlane:
    return ControlPlane(
        config=get_config(),
        serializer=MsgPackSerializer(),
    )


@lru_cache
def get_config() -> MsgFrameConfig:
    try:
        return MsgFrameConfig()
    except ValidationError as ex:
        msg = ["Configuration validation failed:"]
        errs = json.loads(ex.json())
        for err in errs:
            msg.append(f"  {'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}")
        raise SystemExit("\n".join(msg))
