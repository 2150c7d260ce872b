import logging
import os
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource
from typing_extensions import Self

DEFAULT_DATA_DIR = Path("~/.local/share/ohmage")


# =============================================================================
# Stream Configuration
# =============================================================================


class StreamConfig(BaseModel):
    """A stream definition uploads may be decoded against."""

    observer_id: str  # e.g. "org.ohmage.mobility"
    observer_version: int = Field(ge=1)
    stream_id: str  # e.g. "accel"
    stream_version: int = Field(ge=1)
    with_id: bool = False  # Points carry metadata.id
    with_timestamp: bool = False  # Points carry metadata.time / metadata.timestamp
    with_location: bool = False  # Points carry metadata.location


# =============================================================================
# Application Configuration
# =============================================================================


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Load settings from YAML file specified by OHMAGE_CONFIG_FILE env var."""

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get the value for a field from the YAML config."""
        yaml_data = self._load_yaml_config()
        field_value = yaml_data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all settings from YAML file."""
        return self._load_yaml_config()

    def _load_yaml_config(self) -> dict[str, Any]:
        """Load config from YAML file if specified."""
        config_file = os.environ.get("OHMAGE_CONFIG_FILE")
        if config_file:
            path = Path(config_file)
            if path.exists():
                return yaml.safe_load(path.read_text()) or {}
        return {}


class Server(BaseModel):
    """Server configuration (nested in Config, uses env_nested_delimiter)."""

    name: str = "ohmage"
    version: str = "0.1.0"
    description: str = "Mobile health data collection service"


class DatabaseConfig(BaseModel):
    """Database configuration (nested in Config, uses env_nested_delimiter).

    The url field uses empty string as sentinel to indicate "derive from the
    data directory". When not overridden via OHMAGE_DATABASE__URL, the SQLite
    path is computed in Config's model_validator.
    """

    url: str = ""  # Empty string = derive from data dir; explicit value = use as-is
    echo: bool = False
    auto_migrate: bool = True  # Create missing tables at startup


class LoggingConfig(BaseModel):
    """Logging configuration (nested in Config, uses env_nested_delimiter)."""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @property
    def file(self) -> str | None:
        """Get log file path from OHMAGE_LOG_FILE env var."""
        return os.environ.get("OHMAGE_LOG_FILE")


class Config(BaseSettings):
    # These are BaseModel, so env_nested_delimiter handles their env vars
    server: Server = Server()
    database: DatabaseConfig = DatabaseConfig()
    logging: LoggingConfig = LoggingConfig()
    streams: list[StreamConfig] = []  # Streams accepted by the upload API

    model_config = {
        "env_prefix": "OHMAGE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",  # Allows OHMAGE_DATABASE__URL override
        "extra": "ignore",
    }

    @model_validator(mode="after")
    def derive_database_url(self) -> Self:
        """Derive a SQLite database URL from OHMAGE_DATA_DIR if not explicitly set."""
        if not self.database.url:
            data_dir = Path(os.environ.get("OHMAGE_DATA_DIR", str(DEFAULT_DATA_DIR)))
            self.database = DatabaseConfig(
                url=f"sqlite+aiosqlite:///{data_dir / 'ohmage.db'}",
                echo=self.database.echo,
                auto_migrate=self.database.auto_migrate,
            )
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include YAML config.

        Priority (highest to lowest):
        1. init_settings - values passed to Config()
        2. env_settings - environment variables
        3. dotenv_settings - .env file
        4. yaml_settings - OHMAGE_CONFIG_FILE yaml
        5. file_secret_settings - secrets from files
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


# Third-party loggers that are too chatty below WARNING
QUIET_LOGGERS = ("asyncio", "aiosqlite", "sqlalchemy.engine", "uvicorn.access")


def configure_logging(config: LoggingConfig) -> None:
    """Route all ohmage logging to one handler: ``OHMAGE_LOG_FILE`` or stderr.

    Replaces any handlers already on the root logger, so calling it again
    (one app per test, say) does not duplicate output.
    """
    if config.file:
        log_path = Path(config.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(config.level)
    handler.setFormatter(logging.Formatter(config.format, datefmt=config.date_format))

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(config.level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.debug("Logging configured: level=%s, file=%s", config.level, config.file)
