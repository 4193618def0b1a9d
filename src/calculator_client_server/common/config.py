"""Runtime configuration, read once from the environment at startup."""
import os
from typing import List, Mapping, Optional

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field, field_validator


def _parse_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


class Settings(BaseModel):
    """
    Settings shared by the server and the client.

    Built once by ``Settings.from_env()`` and passed explicitly to the
    components that need it; nothing else reads the environment.
    """

    # Read-only once built, so every component sees the same values
    model_config = ConfigDict(frozen=True)

    api_url: Optional[AnyHttpUrl] = Field(default=None, description="Calculation endpoint used by the client")
    api_timeout_ms: int = Field(default=3000, gt=0, description="Client wait for the remote endpoint")
    basic_auth_user: str = Field(default="admin", description="Basic auth username")
    basic_auth_pass: str = Field(default="admin", description="Basic auth password")
    host: str = Field(default="127.0.0.1", description="Server bind address")
    port: int = Field(default=3000, ge=1, le=65535, description="Server TCP port")
    frontend_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:3001"],
        description="Origins allowed to call the server from a browser",
    )
    log_level: str = Field(default="INFO", description="Logging level name")

    @field_validator("log_level")
    def log_level_must_be_known(cls, v: str) -> str:
        """Ensure the level is one the logging module knows."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v!r}")
        return level

    @property
    def api_timeout(self) -> float:
        """Client timeout in seconds."""
        return self.api_timeout_ms / 1000

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Unset (or empty) variables keep their defaults.

        :param environ: Mapping to read from, defaults to os.environ

        :return: Validated settings
        :rtype: Settings
        :raises pydantic.ValidationError: If a variable holds an invalid value
        """
        env = os.environ if environ is None else environ
        names = {
            "api_url": "API_URL",
            "api_timeout_ms": "API_TIMEOUT_MS",
            "basic_auth_user": "BASIC_AUTH_USER",
            "basic_auth_pass": "BASIC_AUTH_PASS",
            "host": "SERVER_HOST",
            "port": "SERVER_PORT",
            "log_level": "LOG_LEVEL",
        }
        values = {field: env[name] for field, name in names.items() if env.get(name)}
        if env.get("FRONTEND_ORIGINS"):
            values["frontend_origins"] = _parse_origins(env["FRONTEND_ORIGINS"])
        return cls(**values)
