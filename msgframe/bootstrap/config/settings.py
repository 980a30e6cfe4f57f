from typing import Annotated, Literal

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from msgframe.bootstrap.config.loader import get_configfile


class ServerSettings(BaseModel):
    host: Annotated[
        str,
        Field(
            description="Bind address for the listener. Loopback by default.",
            default="127.0.0.1"
        )
    ]

    port: Annotated[
        int,
        Field(
            description=(
                "TCP port for the listener.\n"
                "0 lets the OS pick an ephemeral port; the bound address is printed."
            ),
            default=0,
            ge=0,
            le=65535
        )
    ]

    backlog: Annotated[
        int,
        Field(
            description="Maximum number of pending TCP connections.",
            default=128,
            gt=0
        )
    ]

    max_buffer_size: Annotated[
        int,
        Field(
            description=(
                "Maximum number of bytes buffered for a single incomplete frame.\n"
                "A peer exceeding it is disconnected."
            ),
            default=4 * 1024 * 1024,
            gt=0
        )
    ]

    timeout_graceful_shutdown: Annotated[
        float,
        Field(
            description="Maximum time allowed for graceful shutdown.",
            default=5.0,
            ge=0
        )
    ]


class ClientSettings(BaseModel):
    connect_timeout: Annotated[
        Annotated[float, Field(gt=0)] | None,
        Field(
            description=(
                "Seconds to wait for the connection to be established.\n"
                "Unset means wait as long as the OS does."
            ),
            default=None
        )
    ]


class MsgFrameConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MSGFRAME_",
        env_nested_delimiter="__",
        extra="ignore"
    )

    server: Annotated[
        ServerSettings,
        Field(
            description="Listener (server role) configuration.",
            default_factory=ServerSettings
        )
    ]

    client: Annotated[
        ClientSettings,
        Field(
            description="Connector (client role) configuration.",
            default_factory=ClientSettings
        )
    ]

    log_level: Annotated[
        Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        Field(
            description="Logging verbosity when --log-level is not given.",
            default="INFO"
        )
    ]

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: tuple[PydanticBaseSettingsSource, ...] = (init_settings, env_settings)

        configfile = get_configfile()
        if configfile is not None:
            sources += (YamlConfigSettingsSource(settings_cls, yaml_file=configfile),)

        return sources
