"""
Pydantic Settings for goodtimes configuration.

Provides settings loading from TOML files, environment variables, and defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib

from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsError

from .exceptions import ConfigFileError
from .models.config import BuildConfig, LoggingConfig, OutputConfig

CONFIG_FILE_NAME = "goodtimes.toml"


def _get_logger():
    from .di import get_logger

    return get_logger()


def _cargo_metadata_section(data: dict[str, Any]) -> dict[str, Any] | None:
    """Return [workspace|package.metadata.goodtimes] from a parsed Cargo.toml."""
    for table in ("workspace", "package"):
        section = data.get(table, {}).get("metadata", {}).get("goodtimes")
        if isinstance(section, dict):
            return section
    return None


def find_config_file(start_dir: str | None = None) -> Path | None:
    """
    Find goodtimes configuration by walking up from start_dir (or cwd).

    A ``goodtimes.toml`` wins over a ``Cargo.toml`` in the same directory;
    a Cargo.toml only counts when it has a ``metadata.goodtimes`` table.

    Returns:
        Path to config file, or None if not found.
    """
    start = Path(start_dir) if start_dir else Path.cwd()

    for parent in [start, *list(start.parents)]:
        config_path = parent / CONFIG_FILE_NAME
        if config_path.exists():
            return config_path

        manifest = parent / "Cargo.toml"
        if manifest.exists():
            try:
                with open(manifest, "rb") as f:
                    data = tomllib.load(f)
                if _cargo_metadata_section(data) is not None:
                    return manifest
            except tomllib.TOMLDecodeError as e:
                _get_logger().debug("Failed to parse Cargo.toml at %s: %s", manifest, e)
            except OSError as e:
                _get_logger().debug("Failed to read Cargo.toml at %s: %s", manifest, e)

    return None


class TomlConfigSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from TOML config files."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        config_path: Path | None = None,
        start_dir: str | None = None,
    ):
        super().__init__(settings_cls)
        self._config_path = config_path
        self._start_dir = start_dir
        self._data: dict[str, Any] | None = None

    def _load_toml(self) -> dict[str, Any]:
        """Load and cache TOML data."""
        if self._data is not None:
            return self._data

        self._data = {}

        path = self._config_path
        if path is None:
            path = find_config_file(self._start_dir)

        if path is None:
            return self._data

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)

            if path.name == "Cargo.toml":
                data = _cargo_metadata_section(data) or {}

            self._data = data
            self._data["_config_file"] = str(path)

        except tomllib.TOMLDecodeError as e:
            _get_logger().warning("Failed to parse config file %s: %s", path, e)
            self._data["_config_error"] = f"Failed to parse config file: {e}"
        except OSError as e:
            _get_logger().warning("Failed to read config file %s: %s", path, e)
            self._data["_config_error"] = f"Failed to read config file: {e}"

        return self._data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get field value from TOML data."""
        data = self._load_toml()
        field_value = data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return TOML sections for settings initialization."""
        return {k: v for k, v in self._load_toml().items() if not k.startswith("_")}


class GoodtimesSettings(BaseSettings):
    """goodtimes configuration settings with TOML and environment variable support.

    Priority (highest to lowest):
    1. Explicit init values
    2. Environment variables (GOODTIMES_<section>__<field>)
    3. TOML config file (goodtimes.toml or Cargo.toml [*.metadata.goodtimes])
    4. Model defaults
    """

    model_config = {
        "env_prefix": "GOODTIMES_",
        "env_nested_delimiter": "__",
        "extra": "ignore",
    }

    build: BuildConfig = BuildConfig()
    output: OutputConfig = OutputConfig()
    logging: LoggingConfig = LoggingConfig()

    # Internal fields (not from config)
    _config_file: str | None = None
    _config_error: str | None = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to add TOML loading.

        Note: sources are built by pydantic without our arguments, so the
        config location is passed through module-level variables.
        """
        toml_source = TomlConfigSource(
            settings_cls,
            config_path=_current_config_path,
            start_dir=_current_start_dir,
        )
        return (
            init_settings,
            env_settings,
            toml_source,
        )

    @property
    def config_file(self) -> str | None:
        return self._config_file

    @property
    def config_error(self) -> str | None:
        return self._config_error

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to a plain dict."""
        result: dict[str, Any] = {
            "build": self.build.model_dump(),
            "output": self.output.model_dump(),
            "logging": self.logging.model_dump(),
        }
        if self._config_file:
            result["_config_file"] = self._config_file
        if self._config_error:
            result["_config_error"] = self._config_error
        return result


def _describe(error: Exception) -> str:
    if isinstance(error, ValidationError):
        first = error.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        return f"{location}: {first['msg']}"
    return str(error)


# Module-level variables for passing to settings_customise_sources
_current_config_path: Path | None = None
_current_start_dir: str | None = None


def load_settings(
    config_path: Path | None = None,
    start_dir: str | None = None,
    **overrides: Any,
) -> GoodtimesSettings:
    """Load goodtimes settings from config file and environment.

    Args:
        config_path: Explicit path to config file
        start_dir: Directory to start searching from (if config_path not given)
        **overrides: Explicit section values, highest priority

    Returns:
        GoodtimesSettings instance with all sources merged

    Raises:
        ConfigFileError: If a configured value is invalid
    """
    global _current_config_path, _current_start_dir

    _current_config_path = config_path
    _current_start_dir = start_dir

    try:
        settings = GoodtimesSettings(**overrides)

        toml_source = TomlConfigSource(GoodtimesSettings, config_path, start_dir)
        toml_data = toml_source._load_toml()
        if "_config_file" in toml_data:
            settings._config_file = toml_data["_config_file"]
        if "_config_error" in toml_data:
            settings._config_error = toml_data["_config_error"]

        return settings
    except (ValidationError, SettingsError) as e:
        source = config_path or find_config_file(start_dir)
        raise ConfigFileError(
            f"Invalid configuration: {_describe(e)}",
            file_path=str(source) if source else None,
            cause=e,
        ) from e
    finally:
        _current_config_path = None
        _current_start_dir = None
