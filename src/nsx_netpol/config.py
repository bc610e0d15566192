"""Environment configuration for the nsx-netpol CLI.

Settings are read from ``NSX_NETPOL_*`` environment variables. Command-line
options take precedence. The translation functions never read settings;
the CLI resolves them and passes values explicitly.

Environment Variables:
    NSX_NETPOL_NAMESPACE: Default target namespace (default: ``default``)
    NSX_NETPOL_PORT_MODE: ``numeric`` or ``passthrough`` (default: ``numeric``)
    NSX_NETPOL_LOG_LEVEL: Log level for stderr output (default: ``WARNING``)
    NSX_NETPOL_LOG_FORMAT: ``console`` or ``json`` (default: ``console``)
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from nsx_netpol.exceptions import ConfigurationError
from nsx_netpol.ports import PortMode
from nsx_netpol.telemetry.logging import resolve_level


class Settings(BaseSettings):
    """nsx-netpol configuration."""

    model_config = SettingsConfigDict(
        env_prefix="NSX_NETPOL_",
        extra="ignore",
    )

    namespace: str = Field(default="default", description="Default target namespace")
    port_mode: PortMode = Field(default=PortMode.NUMERIC, description="Port parsing mode")
    log_level: str = Field(default="WARNING", description="Minimum log level")
    log_format: Literal["console", "json"] = Field(
        default="console", description="Log output format"
    )

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        resolve_level(v)
        return v.upper()


def get_settings() -> Settings:
    """Load settings from the environment.

    Raises:
        ConfigurationError: If an environment variable has an invalid value.
    """
    try:
        return Settings()
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        msg = f"Invalid NSX_NETPOL_* configuration: {fields}"
        raise ConfigurationError(msg) from e


__all__ = ["Settings", "get_settings"]
