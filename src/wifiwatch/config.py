"""Monitor configuration via environment variables, .env file and command line."""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings
from pydantic_settings.sources import DotEnvSettingsSource, PydanticBaseSettingsSource

# Path to .env file (patch in tests to use tmp_path / ".env")
_ENV_FILE: Path = Path(".env")

_DEFAULT_UNREDACTOR = (
    Path.home() / "Applications" / "wifi-unredactor.app" / "Contents" / "MacOS" / "wifi-unredactor"
)

_LOG_LEVELS = {"debug", "info", "warning", "error", "critical"}


class Settings(BaseSettings):
    model_config = {
        "env_prefix": "WIFIWATCH_",
        "env_file_encoding": "utf-8",
    }

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Load .env from _ENV_FILE (patchable in tests)
        return (
            init_settings,
            env_settings,
            DotEnvSettingsSource(
                settings_cls,
                env_file=_ENV_FILE,
                env_file_encoding="utf-8",
            ),
            file_secret_settings,
        )

    # Diagnostics log (append-only snapshot blocks)
    log_file: Path = Path("wifi_diagnostics.log")

    # Process logging (stderr)
    log_level: str = "info"

    # Probe targets
    ping_target: str = "8.8.8.8"
    router_ip: str = "192.168.88.1"
    dns_query_name: str = "google.com"
    ping_count: int = 5
    traceroute_max_hops: int = 5
    command_timeout: float = 30.0  # seconds before a hung probe counts as failed

    # Thresholds. Router loss uses a fixed 5% (see alerts.rules).
    threshold_signal: int = -70  # dBm
    threshold_loss: float = 5.0  # percent

    # Scheduling
    interval: float = 10.0  # seconds between samples
    traceroute_interval: float = 300.0  # seconds between traceroute runs

    # Radio info sources
    # Structured identity (JSON) source; unset or missing falls back to radio_command.
    unredactor_path: Path | None = _DEFAULT_UNREDACTOR
    radio_command: str = "sudo /usr/bin/wdutil info"
    default_interface: str = "en0"

    # Startup authorization check, empty string disables it
    privilege_command: str = "sudo -v"

    # Optional outputs
    webhook_url: str | None = None
    db_path: Path | None = None

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> str:
        """Accept any case, reject unknown level names."""
        level = str(v).strip().lower()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v!r}")
        return level

    @field_validator("interval", "traceroute_interval", "command_timeout")
    @classmethod
    def positive_seconds(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be a positive number of seconds")
        return v

    @field_validator("webhook_url", mode="before")
    @classmethod
    def blank_to_none(cls, v: object) -> object:
        """Treat WIFIWATCH_WEBHOOK_URL="" as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


def load_config(cli: bool = False) -> Settings:
    """Load configuration from .env and environment (env overrides .env).

    With ``cli=True`` command-line flags (``--interval 5``) override both.
    """
    if cli:
        return Settings(_cli_parse_args=True)
    return Settings()
