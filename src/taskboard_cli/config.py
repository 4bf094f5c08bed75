"""Configuration management for Taskboard CLI.

Settings and the stored session live in per-profile JSON files under the
platformdirs config and data directories.
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, Field, ValidationError, field_validator

APP_NAME = "taskboard-cli"

# Environment variables that override the stored API settings
ENV_OVERRIDES = {
    "TASKBOARD_API_ENDPOINT": "endpoint",
    "TASKBOARD_API_KEY": "key",
}


class APIConfig(BaseModel):
    """Remote store project settings."""

    endpoint: str = Field(default="http://localhost:54321")
    key: str = Field(default="")
    timeout: int = Field(default=30, gt=0)

    @field_validator("endpoint")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class AuthConfig(BaseModel):
    """Session handling."""

    auto_refresh: bool = Field(default=True)


class OutputConfig(BaseModel):
    """Terminal output."""

    color: bool = Field(default=True)


class Config(BaseModel):
    """Main configuration."""

    api: APIConfig = Field(default_factory=APIConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


def _read_json(path: Path) -> Optional[Any]:
    """Parsed file contents, or None when missing or unreadable."""
    if not path.exists():
        return None
    try:
        with open(path, "r") as f:
            return json.load(f)
    except (OSError, ValueError):
        return None


def _write_json(path: Path, data: Any, private: bool = False) -> None:
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
    if private:
        # Readable only by owner
        path.chmod(0o600)


def _apply_env_overrides(config: Config) -> Config:
    overrides = {
        field: os.environ[env]
        for env, field in ENV_OVERRIDES.items()
        if os.environ.get(env)
    }
    if not overrides:
        return config
    return config.model_copy(update={"api": config.api.model_copy(update=overrides)})


class ConfigManager:
    """Per-profile settings and session credentials.

    ``config`` is what the rest of the CLI reads: the stored settings with
    environment overrides applied. Only ``file_config`` is ever written back.
    """

    def __init__(self, profile: str = "default"):
        self.profile = profile
        self.config_dir = Path(user_config_dir(APP_NAME))
        self.data_dir = Path(user_data_dir(APP_NAME))
        self.config_file = self.config_dir / f"{profile}.json"
        self.credentials_file = self.data_dir / f"{profile}.credentials.json"

        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._file_config: Optional[Config] = None
        self._config: Optional[Config] = None

    @property
    def file_config(self) -> Config:
        """The settings as stored in the profile file."""
        if self._file_config is None:
            self._file_config = self._read_config_file()
        return self._file_config

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        if self._config is None:
            self._config = _apply_env_overrides(self.file_config)
        return self._config

    def _read_config_file(self) -> Config:
        # A corrupted or invalid file yields the defaults
        data = _read_json(self.config_file)
        try:
            return Config.model_validate(data) if isinstance(data, dict) else Config()
        except ValidationError:
            return Config()

    def load_config(self) -> Config:
        """Read the profile's settings; env overrides win over the file."""
        return _apply_env_overrides(self._read_config_file())

    def save_config(self) -> None:
        """Write the stored settings (never the env overrides) to file."""
        _write_json(self.config_file, self.file_config.model_dump())

    def _replace(self, config: Config) -> None:
        self._file_config = config
        self._config = None
        self.save_config()

    def get(self, key: str) -> Any:
        """Value at a dot-separated key (``api.endpoint``), or None."""
        return self.get_from_config(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a dot-separated key and persist.

        Raises:
            ValidationError: If the new value does not fit the setting
        """
        section, _, name = key.rpartition(".")
        data = self.file_config.model_dump()
        target = data
        for part in section.split(".") if section else []:
            target = target.setdefault(part, {})
        target[name] = value

        self._replace(Config.model_validate(data))

    def reset(self, key: Optional[str] = None) -> None:
        """Restore one key, or the whole profile, to its default."""
        if key is None:
            self._replace(Config())
            return
        default_value = self.get_from_config(Config(), key)
        if default_value is not None:
            self.set(key, default_value)

    def get_from_config(self, config: Config, key: str) -> Any:
        """Get value from a config object using dot notation."""
        value: Any = config
        for part in key.split("."):
            if not isinstance(value, BaseModel):
                return None
            value = getattr(value, part, None)
        return value

    def save_credentials(self, credentials: dict[str, Any]) -> None:
        """Persist the session (tokens, expiry and user identity)."""
        _write_json(self.credentials_file, credentials, private=True)

    def load_credentials(self) -> Optional[dict[str, Any]]:
        """The stored session, or None."""
        data = _read_json(self.credentials_file)
        return data if isinstance(data, dict) else None

    def clear_credentials(self) -> None:
        """Forget the stored session."""
        if self.credentials_file.exists():
            self.credentials_file.unlink()


# Global config manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(profile: str = "default") -> ConfigManager:
    """Get or create the global config manager."""
    global _config_manager
    if _config_manager is None or _config_manager.profile != profile:
        _config_manager = ConfigManager(profile)
    return _config_manager
