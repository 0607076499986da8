import json
import logging
import os
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import toml
from dotenv import load_dotenv

from .errors import ConfigError
from .model import Model, model_from_json

load_dotenv()

logger = logging.getLogger(__name__)

MAX_TOKENS_LIMIT = 4096
CONFIG_FILE_NAME = "config.json"
CACHE_FILE_NAME = "cache.json"


def _executable_dir() -> str:
    return os.path.dirname(os.path.abspath(sys.argv[0]))


@dataclass
class Settings:
    """Operational settings: where files live and how chatty logging is."""

    settings_file: str = field(default_factory=lambda: os.path.join(os.path.expanduser("~/.config/llm-term"), "settings.toml"))
    _file_settings: dict = field(init=False, repr=False)

    data_dir: str = field(init=False)
    log_dir: str = field(init=False)
    verbose: bool = field(init=False)

    def __post_init__(self):
        """Resolve each setting from the environment, the settings file, then defaults."""
        self._file_settings = self._load_settings_file()
        self.data_dir = self._get_setting("LLM_TERM_DATA_DIR", _executable_dir())
        self.log_dir = self._get_setting("LLM_TERM_LOG_DIR", os.path.join(self.data_dir, "logs"))
        self.verbose = str(self._get_setting("LLM_TERM_VERBOSE", False)).lower() in ("1", "true", "yes", "on")

    @property
    def config_path(self) -> str:
        return os.path.join(self.data_dir, CONFIG_FILE_NAME)

    @property
    def cache_path(self) -> str:
        return os.path.join(self.data_dir, CACHE_FILE_NAME)

    def _load_settings_file(self) -> dict:
        """Loads the optional TOML settings file."""
        if not os.path.exists(self.settings_file):
            return {}
        try:
            with open(self.settings_file, "r") as f:
                return toml.load(f)
        except (toml.TomlDecodeError, IOError) as e:
            logger.warning(f"Could not read settings file at {self.settings_file}. Error: {e}")
            return {}

    def _get_setting(self, key: str, default: Optional[Any] = None) -> Any:
        """
        Get a setting, prioritizing environment variables,
        then the settings file, and finally a default value.
        """
        value = os.environ.get(key)
        if value is not None:
            return value

        if key in self._file_settings:
            return self._file_settings[key]
        for section in self._file_settings.values():
            if isinstance(section, dict) and key in section:
                return section[key]

        return default


@dataclass(frozen=True)
class Configuration:
    """The active model plus the token limit, as stored in config.json."""

    model: Model
    max_tokens: int

    def __post_init__(self):
        if isinstance(self.max_tokens, bool) or not isinstance(self.max_tokens, int):
            raise ConfigError(f"max_tokens must be an integer, got {self.max_tokens!r}")
        if not 0 < self.max_tokens <= MAX_TOKENS_LIMIT:
            raise ConfigError(f"max_tokens must be between 1 and {MAX_TOKENS_LIMIT}, got {self.max_tokens}")

    def to_dict(self) -> dict:
        return {"model": self.model.to_json(), "max_tokens": self.max_tokens}

    @classmethod
    def from_dict(cls, data: Any) -> "Configuration":
        if not isinstance(data, dict) or "model" not in data or "max_tokens" not in data:
            raise ConfigError("Configuration must contain 'model' and 'max_tokens'")
        return cls(model=model_from_json(data["model"]), max_tokens=data["max_tokens"])

    def with_model(self, model: Model) -> "Configuration":
        return Configuration(model=model, max_tokens=self.max_tokens)


def save_configuration(path: str, configuration: Configuration) -> None:
    """Writes the configuration as pretty-printed JSON."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(configuration.to_dict(), f, indent=2)
    logger.info(f"Configuration saved to {path}")


def load_configuration(path: str) -> Optional[Configuration]:
    """Reads config.json, returning None when it is missing or unreadable."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (IOError, json.JSONDecodeError) as e:
        logger.info(f"No usable configuration at {path}: {e}")
        return None
    return Configuration.from_dict(data)


def load_or_create_configuration(path: str, create: Callable[[], Configuration]) -> Configuration:
    """
    Loads the configuration, running `create` and saving its result when there is none.

    Args:
        path: Location of config.json.
        create: Builds a fresh configuration, normally the interactive setup wizard.

    Returns:
        The loaded or newly created configuration.
    """
    configuration = load_configuration(path)
    if configuration is None:
        configuration = create()
        save_configuration(path, configuration)
    return configuration
