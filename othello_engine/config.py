from __future__ import annotations

import logging
import pathlib
from dataclasses import dataclass, field, fields
from importlib import resources
from typing import Any, Dict, Optional

import tomli

from .engine.eval import EvalWeights
from .engine.search import SearchConfig

CONFIG_HOME = pathlib.Path("~/.othello_engine").expanduser()
CONFIG_PATH = CONFIG_HOME / "config.toml"

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    pass


@dataclass
class LoggingConfig:
    level: str = "INFO"
    file: str = "othello-engine.log"
    overwrite: bool = True


@dataclass
class EngineConfig:
    search: SearchConfig = field(default_factory=SearchConfig)
    eval: EvalWeights = field(default_factory=EvalWeights)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _read_toml(text: str, origin: str) -> Dict[str, Any]:
    try:
        return tomli.loads(text)
    except tomli.TOMLDecodeError as e:
        raise ConfigError(f"{origin}: {e}") from e


def _overlay(target: Any, table: Dict[str, Any], section: str) -> None:
    known = {f.name for f in fields(target)}
    for k, v in table.items():
        if k not in known:
            logger.warning("Ignoring unknown config key %s.%s", section, k)
            continue
        current = getattr(target, k)
        if isinstance(current, bool) != isinstance(v, bool) or not isinstance(v, type(current)):
            raise ConfigError(f"{section}.{k}: expected {type(current).__name__}, got {type(v).__name__}")
        setattr(target, k, v)


def _merge(cfg: EngineConfig, raw: Dict[str, Any]) -> None:
    for section in ("search", "eval", "logging"):
        table = raw.get(section)
        if table is None:
            continue
        if not isinstance(table, dict):
            raise ConfigError(f"[{section}] must be a table")
        _overlay(getattr(cfg, section), table, section)


def load_defaults_text() -> str:
    return resources.files("othello_engine").joinpath("data").joinpath("defaults.toml").read_text(encoding="utf-8")


def load_config(path: Optional[str | pathlib.Path] = None) -> EngineConfig:
    """Shipped defaults overlaid with the user file.

    With no `path`, ~/.othello_engine/config.toml is used when it exists.
    An explicit `path` that does not exist is an error.
    """
    cfg = EngineConfig()
    _merge(cfg, _read_toml(load_defaults_text(), "defaults.toml"))

    if path is None:
        user_path = CONFIG_PATH
        if not user_path.exists():
            return cfg
    else:
        user_path = pathlib.Path(path).expanduser()
        if not user_path.exists():
            raise ConfigError(f"Config file not found: {user_path}")

    _merge(cfg, _read_toml(user_path.read_text(encoding="utf-8"), str(user_path)))
    logger.debug("Loaded configuration from %s", user_path)
    return cfg
