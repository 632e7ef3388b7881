"""World generation configuration loading from TOML files."""

import tomllib
from pathlib import Path

from pydantic import ValidationError

from .exceptions import ConfigurationError
from .terrain.config import WorldGenConfig, validate_config


def load_config(config_path: Path) -> WorldGenConfig:
    """Load and validate configuration from a TOML file.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed and validated WorldGenConfig.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ConfigurationError: If the file is malformed or values are invalid.
    """
    with open(config_path, "rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Malformed config {config_path}: {e}") from e

    try:
        config = WorldGenConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config {config_path}: {e}") from e

    validate_config(config)
    return config


def find_config(name: str) -> Path:
    """Resolve a world generation preset or TOML path.

    A name containing a slash or ending in ``.toml`` is taken as a file
    path. Anything else names a preset shipped in the repository's
    ``configs/`` directory, such as ``default`` or ``dense_structures``.

    Args:
        name: Preset name or path to a TOML file.

    Returns:
        Path to the config file.

    Raises:
        FileNotFoundError: If config file is not found.
    """
    if "/" in name or name.endswith(".toml"):
        path = Path(name)
        if path.exists():
            return path
        raise FileNotFoundError(f"Config file not found: {name}")

    configs_dir = _configs_dir()

    config_path = configs_dir / f"{name}.toml"
    if config_path.exists():
        return config_path

    config_path = configs_dir / name
    if config_path.exists():
        return config_path

    raise FileNotFoundError(
        f"Config '{name}' not found in {configs_dir}. "
        f"Available configs: {list_configs()}"
    )


def list_configs() -> list[str]:
    """List available config names."""
    configs_dir = _configs_dir()
    if not configs_dir.exists():
        return []
    return sorted(p.stem for p in configs_dir.glob("*.toml"))


def _configs_dir() -> Path:
    return Path(__file__).parent.parent.parent / "configs"
