"""Configuration management for binding libraries."""

import os
from pathlib import Path
from typing import Any

import yaml

from bindlib.storage.backends.filesystem import FileLibrary
from bindlib.storage.backends.secure import DEFAULT_NAMESPACE
from bindlib.storage.events import ShutdownNotifier
from bindlib.storage.registry import DEFAULT_LIBRARY_ID, LibraryRegistry
from bindlib.storage.stores import SQLiteSecureStore

BACKENDS = ("secure", "file")

DEFAULTS: dict[str, Any] = {
    "backend": "secure",
    "data_dir": None,
    "namespace": DEFAULT_NAMESPACE,
    "default_library": DEFAULT_LIBRARY_ID,
}


class Config:
    """Configuration file handling."""

    @staticmethod
    def from_file(path: Path) -> dict[str, Any]:
        """Load configuration from a YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")
        except Exception as e:
            raise ValueError(f"Error reading config file: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {path}")
        return data

    @staticmethod
    def get_config_paths() -> list[Path]:
        """Get the default configuration file paths to check."""
        paths = []

        # User config
        xdg_config_home = Path(
            os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
        )
        paths.append(xdg_config_home / "bindlib" / "config.yaml")

        # Project config
        paths.append(Path(".bindlib.yaml"))
        paths.append(Path("bindlib.yaml"))

        return paths

    @staticmethod
    def merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
        """Merge configuration dictionaries, later ones winning."""
        result: dict[str, Any] = {}
        for config in configs:
            result.update({k: v for k, v in config.items() if v is not None})
        return result


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load configuration from defaults, files and environment variables.

    Args:
        path: Explicit config file, used instead of the default locations

    Returns:
        Merged configuration with every key of DEFAULTS present
    """
    config = dict(DEFAULTS)

    if path is not None:
        config = Config.merge_configs(config, Config.from_file(path))
    else:
        # Last one wins for conflicting keys
        for config_path in Config.get_config_paths():
            if config_path.exists():
                try:
                    config = Config.merge_configs(config, Config.from_file(config_path))
                except ValueError:
                    continue

    env_overrides = {}
    if backend := os.environ.get("BINDLIB_BACKEND"):
        env_overrides["backend"] = backend
    if data_dir := os.environ.get("BINDLIB_DATA_DIR"):
        env_overrides["data_dir"] = data_dir
    if namespace := os.environ.get("BINDLIB_NAMESPACE"):
        env_overrides["namespace"] = namespace

    config = Config.merge_configs(config, env_overrides)
    config.setdefault("data_dir", None)
    return config


def create_registry(
    config: dict[str, Any], notifier: ShutdownNotifier | None = None
) -> LibraryRegistry:
    """Build a registry using the configured backend.

    Raises:
        ValueError: If the configured backend is unknown.
    """
    backend = str(config.get("backend", "secure")).lower()
    if backend not in BACKENDS:
        raise ValueError(f"Unknown backend {backend!r}, expected one of {BACKENDS}")

    data_dir = Path(config["data_dir"]).expanduser() if config.get("data_dir") else None
    namespace = config.get("namespace") or DEFAULT_NAMESPACE
    default_library = config.get("default_library") or DEFAULT_LIBRARY_ID

    registry = LibraryRegistry(
        notifier=notifier,
        namespace=namespace,
        default_library_id=default_library,
        secure_store=SQLiteSecureStore(data_dir / "secure.db") if data_dir else None,
    )

    if backend == "file":
        directory = data_dir / namespace if data_dir else None
        registry.factory = FileLibrary.factory(directory, notifier=registry.notifier)

    return registry
