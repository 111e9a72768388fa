"""Configuration schema using Pydantic.

Two layers: per-client credentials seeded once from ``OTRS_API_*``
environment variables, and process-wide RPC options shared by every
connection created afterwards.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_URI = "Core"
DEFAULT_RPC_SUFFIX = "rpc.pl"
DEFAULT_TIMEOUT_SECONDS = 30.0


class ClientSettings(BaseSettings):
    """Credentials read from the environment at client construction.

    Empty strings mean "not provided"; the client keeps its own default then.
    """
    location: str = ""  # Base URL, e.g. https://otrs.example.com/otrs/
    uri: str = ""  # RPC namespace; client falls back to DEFAULT_URI
    username: str = ""  # SOAP user configured in Kernel/Config.pm
    password: str = Field(default="", repr=False)

    model_config = SettingsConfigDict(
        env_prefix="OTRS_API_",
        env_ignore_empty=True,
        extra="ignore",
    )


class ProcessSettings(BaseSettings):
    """Environment overrides for the process-wide RPC options."""
    rpc: str = DEFAULT_RPC_SUFFIX  # Appended to location to form the endpoint
    trace: bool = False  # Keep raw request/response text of each exchange
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    model_config = SettingsConfigDict(
        env_prefix="OTRS_API_",
        env_ignore_empty=True,
        extra="ignore",
    )


class RpcOptions(BaseModel):
    """Immutable snapshot of the options a connection is built with."""
    rpc_suffix: str = DEFAULT_RPC_SUFFIX
    trace: bool = False
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_settings(cls, settings: ProcessSettings) -> "RpcOptions":
        return cls(
            rpc_suffix=settings.rpc,
            trace=settings.trace,
            timeout_seconds=settings.timeout_seconds,
        )
