"""Configuration management for gql-introspect."""

from dataclasses import dataclass, field
from typing import Optional

import yaml

from . import utils
from .presence import DEFAULT_MAX_TYPE_DEPTH

DEFAULT_SCHEMA_CACHE_DIR = "~/.gql-introspect/schemas"


@dataclass
class Config:
    """Configuration for gql-introspect."""

    default_url: Optional[str] = None
    schema_cache_dir: str = DEFAULT_SCHEMA_CACHE_DIR
    max_type_depth: int = DEFAULT_MAX_TYPE_DEPTH
    log_level: str = "WARNING"
    timeout: int = 30
    profiles: list[dict] = field(default_factory=list)

    def __post_init__(self):
        """Expand paths after initialization."""
        self.schema_cache_dir = utils.expand_path(self.schema_cache_dir)

    def profile_url(self, name: str) -> Optional[str]:
        """Look up the URL of a named profile."""
        for profile in self.profiles:
            if profile.get("name") == name:
                return profile.get("url")
        return None


def get_default_config_path() -> str:
    """Get default config file path."""
    return utils.expand_path("~/.gql-introspect/config.yaml")


def load(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Config object with defaults for missing values.
    """
    if config_path is None:
        config_path = get_default_config_path()

    # Return defaults if config doesn't exist
    if not utils.exists(config_path):
        return Config()

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    # Merge with defaults
    return Config(
        default_url=data.get("default_url"),
        schema_cache_dir=data.get("schema_cache_dir", DEFAULT_SCHEMA_CACHE_DIR),
        max_type_depth=data.get("max_type_depth", DEFAULT_MAX_TYPE_DEPTH),
        log_level=data.get("log_level", "WARNING"),
        timeout=data.get("timeout", 30),
        profiles=data.get("profiles", []),
    )


def create_example_config(path: Optional[str] = None) -> str:
    """Create an example config file and return its path."""
    if path is None:
        path = get_default_config_path()

    utils.ensure_dir(utils.dirname(path))

    example = {
        "default_url": "https://api.example.com/graphql",
        "schema_cache_dir": DEFAULT_SCHEMA_CACHE_DIR,
        "max_type_depth": DEFAULT_MAX_TYPE_DEPTH,
        "log_level": "WARNING",
        "timeout": 30,
        "profiles": [
            {"name": "prod", "url": "https://api.example.com/graphql"},
            {"name": "dev", "url": "http://localhost:4000/graphql"},
        ],
    }

    with open(path, "w") as f:
        yaml.dump(example, f, default_flow_style=False, sort_keys=False)

    return path
