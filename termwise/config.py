import os
import platform
import sys
import logging
from dataclasses import dataclass, field
from typing import Optional, Any

import toml
from dotenv import load_dotenv

from . import build
from .errors import ConfigError

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_RELEASE_REPO = "termwise/termwise"
API_KEY_PLACEHOLDER = "YOUR_API_KEY_HERE"

# platform.machine() spellings mapped to the names used in release asset files
_ARCH_ALIASES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
}


def default_config_dir() -> str:
    """
    Returns the configuration directory.

    TERMWISE_CONFIG_DIR wins over the home directory. Raises ConfigError when
    neither is available.
    """
    override = os.environ.get("TERMWISE_CONFIG_DIR")
    if override:
        return override
    home = os.path.expanduser("~")
    if not home or home == "~":
        raise ConfigError(
            "Could not determine your home directory. Set HOME or TERMWISE_CONFIG_DIR."
        )
    return os.path.join(home, ".config", "termwise")


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def release_asset_name() -> str:
    """Name of the release asset built for this operating system and CPU."""
    system = platform.system().lower()
    machine = platform.machine().lower()
    return f"termwise-{system}-{_ARCH_ALIASES.get(machine, machine)}"


def executable_path() -> str:
    """Absolute, symlink-free path of the running executable."""
    if getattr(sys, "frozen", False):
        path = sys.executable
    else:
        path = sys.argv[0]
    return os.path.realpath(path)


@dataclass(frozen=True)
class BuildInfo:
    """What the running binary knows about itself, fixed at build time."""

    version: str
    release_repo: str = DEFAULT_RELEASE_REPO
    asset_name: str = field(default_factory=release_asset_name)

    @property
    def is_dev(self) -> bool:
        return self.version == build.DEV_VERSION

    @classmethod
    def current(cls, release_repo: str = DEFAULT_RELEASE_REPO) -> "BuildInfo":
        return cls(version=build.VERSION, release_repo=release_repo)

    @classmethod
    def from_environment(cls) -> "BuildInfo":
        """Build info read from the environment only, never from the config file."""
        return cls.current(release_repo=os.environ.get("TERMWISE_RELEASE_REPO") or DEFAULT_RELEASE_REPO)


@dataclass
class Config:
    """Configuration handler for the CLI tool."""

    api_key: Optional[str] = field(default_factory=lambda: os.environ.get("GEMINI_API_KEY"))
    model: str = DEFAULT_MODEL
    verbose: bool = False
    release_repo: str = DEFAULT_RELEASE_REPO
    config_dir: str = field(default_factory=default_config_dir)
    config_file: str = field(init=False)
    _file_config: dict = field(init=False, repr=False)

    log_dir: str = field(init=False)

    def __post_init__(self):
        """Post-initialization to set up dependent fields."""
        self.config_file = os.path.join(self.config_dir, "config.toml")
        self._file_config = self._load_config_from_file()
        if not self.api_key:
            self.api_key = self._get_config("GEMINI_API_KEY")
        self.model = self._get_config("GEMINI_MODEL", self.model)
        self.verbose = parse_bool(self._get_config("TERMWISE_VERBOSE", self.verbose))
        self.release_repo = self._get_config("TERMWISE_RELEASE_REPO", self.release_repo)
        self.log_dir = self._get_config("TERMWISE_LOG_DIR", os.path.join(self.config_dir, "logs"))

    def _load_config_from_file(self) -> dict:
        """Loads configuration from the TOML file."""
        if not os.path.exists(self.config_file):
            self._create_default_config()
        if not os.path.exists(self.config_file):
            return {}
        try:
            with open(self.config_file, 'r') as f:
                return toml.load(f)
        except (toml.TomlDecodeError, IOError) as e:
            raise ConfigError(f"Could not read config file at {self.config_file}: {e}") from e

    def _create_default_config(self):
        """Creates a default configuration file."""
        default_config = {
            "api": {
                "GEMINI_API_KEY": API_KEY_PLACEHOLDER,
                "GEMINI_MODEL": DEFAULT_MODEL,
            },
            "application": {
                "TERMWISE_LOG_DIR": os.path.join(self.config_dir, "logs"),
                "TERMWISE_VERBOSE": False,
            },
            "release": {
                "TERMWISE_RELEASE_REPO": DEFAULT_RELEASE_REPO,
            },
        }
        try:
            os.makedirs(self.config_dir, exist_ok=True)
            with open(self.config_file, 'w') as f:
                toml.dump(default_config, f)
            print(f"Created default config file at: {self.config_file}", file=sys.stderr)
        except OSError as e:
            logger.warning(f"Could not create default config file at {self.config_file}: {e}")

    def _get_config(self, key: str, default: Optional[Any] = None) -> Any:
        """
        Get a configuration value, prioritizing environment variables,
        then the config file, and finally a default value.
        """
        value = os.environ.get(key)
        if value is not None:
            return value

        for section in self._file_config.values():
            if isinstance(section, dict) and key in section:
                return section[key]

        return default

    def require_api_key(self) -> str:
        """Returns the Gemini API key or raises ConfigError if it is not configured."""
        if not self.api_key or self.api_key == API_KEY_PLACEHOLDER:
            raise ConfigError(
                f"GEMINI_API_KEY is not set. Add it to {self.config_file} or the environment. "
                "Get a key from https://aistudio.google.com/app/apikey"
            )
        return self.api_key

    def build_info(self) -> BuildInfo:
        return BuildInfo.current(release_repo=self.release_repo)

    def __str__(self) -> str:
        """Return string representation of the configuration."""
        config_dict = self.__dict__.copy()
        if self.api_key:
            config_dict['api_key'] = f"{self.api_key[:4]}...{self.api_key[-4:]}" if len(self.api_key) > 8 else "****"
        del config_dict['_file_config']
        return str(config_dict)


# Singleton instance holder
_config_instance: Optional[Config] = None

def get_config() -> Config:
    """Returns the singleton Config instance."""
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance
