"""
Runtime Configuration

Central configuration for hash selection and diagnostic rendering.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from hashtree.crypto.hashing import (
    DEFAULT_HASH_ALGORITHM,
    HashFunction,
    get_hash_function,
)
from hashtree.schemas.errors import ConfigException

load_dotenv()


@dataclass
class TreeConfig:
    """
    Configuration for building and rendering hash trees.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM
    render_preview_bytes: int = 8

    def __post_init__(self):
        if self.render_preview_bytes < 1:
            raise ConfigException(
                f"render_preview_bytes must be positive, got {self.render_preview_bytes}",
                field_path="render_preview_bytes",
            )

    def hash_function(self) -> HashFunction:
        """Resolve the configured algorithm to a hash function."""
        return get_hash_function(self.hash_algorithm)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - HASHTREE_HASH_ALGORITHM: hashlib algorithm name (default sha256)
        - HASHTREE_RENDER_PREVIEW_BYTES: digest bytes shown per node when rendering
        """
        overrides: dict[str, Any] = {}

        if os.getenv("HASHTREE_HASH_ALGORITHM"):
            overrides["hash_algorithm"] = os.getenv("HASHTREE_HASH_ALGORITHM")
        if os.getenv("HASHTREE_RENDER_PREVIEW_BYTES"):
            raw = os.getenv("HASHTREE_RENDER_PREVIEW_BYTES", "")
            try:
                overrides["render_preview_bytes"] = int(raw)
            except ValueError as e:
                raise ConfigException(
                    f"HASHTREE_RENDER_PREVIEW_BYTES must be an integer, got {raw!r}",
                    field_path="render_preview_bytes",
                ) from e

        return overrides

    @classmethod
    def from_env(cls) -> "TreeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "TreeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TreeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        unknown = set(data) - {"hash_algorithm", "render_preview_bytes"}
        if unknown:
            raise ConfigException(
                f"Unknown configuration keys: {sorted(unknown)}",
                details={"keys": sorted(unknown)},
            )

        return cls(
            hash_algorithm=data.get("hash_algorithm", DEFAULT_HASH_ALGORITHM),
            render_preview_bytes=data.get("render_preview_bytes", 8),
        )

    def with_env_overrides(self) -> "TreeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for key, value in overrides.items():
            setattr(new_config, key, value)
        new_config.__post_init__()
        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "hash_algorithm": self.hash_algorithm,
            "render_preview_bytes": self.render_preview_bytes,
        }


# Global default configuration
_default_config: Optional[TreeConfig] = None


def get_default_config() -> TreeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = TreeConfig.from_env()
    return _default_config


def set_default_config(config: TreeConfig | None) -> None:
    """Set the default runtime configuration (None resets to env loading)."""
    global _default_config
    _default_config = config
