"""Load Tandem configuration"""

import logging
from dataclasses import dataclass
from pathlib import Path

import toml

from .config_classes import RuntimeConfig
from .exceptions import UserResolvableError

LOG = logging.getLogger(__name__)

DEFAULT_CONFIG_FILEPATH = Path("tandem.toml")


class ConfigError(UserResolvableError):
    """Error loading configuration"""


@dataclass(frozen=True)
class Config:
    root: Path
    config_file: Path
    runtime: RuntimeConfig


def default_config() -> Config:
    """Configuration used when there's no config file"""
    return Config(
        root=Path.cwd(),
        config_file=DEFAULT_CONFIG_FILEPATH,
        runtime=RuntimeConfig(),
    )


def load(args: dict) -> Config:
    """Load the configuration file named by --config"""
    if args.get("--config"):
        config_file = Path(args["--config"])
    else:
        config_file = DEFAULT_CONFIG_FILEPATH

    try:
        data = toml.load(config_file)
    except FileNotFoundError:
        raise ConfigError(
            f"{config_file} not found",
            "Create it, or run without one to use the defaults.",
        )
    except toml.TomlDecodeError as exc:
        raise ConfigError(f"{config_file} is not valid TOML", str(exc)) from exc

    runtime = data.pop("runtime", {})
    if data:
        raise ConfigError(
            f"Unknown sections in {config_file}: {', '.join(data)}",
            "The only section is [runtime].",
        )

    try:
        runtime_config = RuntimeConfig(**runtime)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Bad [runtime] section in {config_file}", str(exc)) from exc

    LOG.info("Loaded %s", config_file)
    return Config(
        root=config_file.parent.resolve(),
        config_file=config_file,
        runtime=runtime_config,
    )
