"""Reads UDP listener configs from a TOML config file."""

import tomllib
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

import structlog
from pydantic import ValidationError

from .config import UDPConfig, resolve

logger = structlog.get_logger()

SECTION = "udp"


class ConfigError(Exception):
    """Raised when a config file cannot be turned into listener configs."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.path}: {self.message}"


def _format_validation_error(index: int, exc: ValidationError) -> str:
    details = []
    for error in exc.errors():
        loc = " -> ".join(str(part) for part in error.get("loc", []))
        details.append(f"{loc}: {error.get('msg', '')}")
    return f"[[{SECTION}]] #{index}: " + "; ".join(details)


def parse_section(data: Mapping[str, Any]) -> Tuple[UDPConfig, ...]:
    """
    Build raw listener configs from an already-parsed document.

    ``[udp]`` gives one listener, ``[[udp]]`` gives one per table.
    A document without the section gives none.
    """
    section = data.get(SECTION)
    if section is None:
        return ()

    if isinstance(section, Mapping):
        tables = [section]
    elif isinstance(section, list) and all(isinstance(t, Mapping) for t in section):
        tables = section
    else:
        raise ConfigError(f"'{SECTION}' must be a table or an array of tables")

    configs = []
    for index, table in enumerate(tables):
        try:
            configs.append(UDPConfig.model_validate(table))
        except ValidationError as e:
            raise ConfigError(_format_validation_error(index, e)) from e
    return tuple(configs)


def load_file(path: Union[str, Path]) -> Tuple[UDPConfig, ...]:
    """Raw (unresolved) listener configs from ``path``, in file order."""
    path = Path(path)
    if not path.is_file():
        raise ConfigError("config file not found", path)

    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"invalid TOML: {e}", path) from e
    except OSError as e:
        raise ConfigError(f"cannot read config file: {e}", path) from e

    try:
        configs = parse_section(data)
    except ConfigError as e:
        raise ConfigError(e.message, path) from e

    logger.debug("config_file_parsed", path=str(path), listeners=len(configs))
    return configs


def load_resolved(path: Union[str, Path]) -> Tuple[UDPConfig, ...]:
    """Listener configs from ``path`` with defaults applied."""
    return tuple(resolve(config) for config in load_file(path))


def enabled_configs(configs: Iterable[UDPConfig]) -> Tuple[UDPConfig, ...]:
    return tuple(config for config in configs if config.enabled)
