"""Settings for the networking library."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    transport_backend: str = Field("httpx", validation_alias="NETWORKING_TRANSPORT_BACKEND")

    # Passed straight to the transport; the request pipeline itself never times out.
    connect_timeout_seconds: float = Field(10.0, validation_alias="NETWORKING_CONNECT_TIMEOUT_SECONDS")
    read_timeout_seconds: float = Field(30.0, validation_alias="NETWORKING_READ_TIMEOUT_SECONDS")
    follow_redirects: bool = Field(True, validation_alias="NETWORKING_FOLLOW_REDIRECTS")

    user_agent: str = Field("", validation_alias="NETWORKING_USER_AGENT")
    decode_strict: bool = Field(False, validation_alias="NETWORKING_DECODE_STRICT")
