# server/config_store.py
"""
Load, validate, migrate and publish the unwrap rewards config.

A config file goes through three steps before the reward core sees it:
- jsonschema checks the raw document's structure against
  ``server/unwrap_rewards.schema.json``;
- pydantic parses it into ``UnwrapConfig`` (tier names are a closed enum);
- old versions are migrated and the current version is stamped.

The result is published as a frozen ``Ruleset``. ``ConfigStore`` swaps a
single reference on reload, so a resolve in flight sees either the old
ruleset or the new one, never a mix.
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from functools import lru_cache
from itertools import zip_longest
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import jsonschema
from pydantic import ValidationError

from rewards.rarity import RarityWeights, freeze_weights
from rewards.schemas import UnwrapConfig
from rewards.table import RewardTable, Rewards

from .config import DEFAULT_CONFIG_PATH, MIN_COMPATIBLE_VERSION, PLUGIN_VERSION, SCHEMA_PATH
from .defaults import default_document

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class ConfigError(Exception):
    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


@dataclass(frozen=True)
class Ruleset:
    table: RewardTable
    weights: RarityWeights
    version: Optional[str] = None

    @classmethod
    def from_config(cls, config: UnwrapConfig) -> "Ruleset":
        return cls(
            table=RewardTable.from_config(config),
            weights=freeze_weights(config.rarity_weights),
            version=config.version,
        )

    def lookup(self, trigger_key: str) -> Optional[Rewards]:
        return self.table.lookup(trigger_key)


# ------------------------ Versions ------------------------

def version_tuple(ver: Optional[str]) -> Tuple[int, ...]:
    """Dotted version -> int tuple; anything unparsable sorts as 0.0.0."""
    try:
        return tuple(int(x) for x in (ver or "").split("."))
    except ValueError:
        return (0, 0, 0)


def is_older(ver: Optional[str], than: str) -> bool:
    """Compare part by part; missing parts count as 0, so 1.0 == 1.0.0."""
    for a, b in zip_longest(version_tuple(ver), version_tuple(than), fillvalue=0):
        if a != b:
            return a < b
    return False


def migrate(config: UnwrapConfig, current: str = PLUGIN_VERSION) -> Tuple[UnwrapConfig, bool]:
    """Bring ``config`` up to ``current``. Returns (config, changed)."""
    if not is_older(config.version, current):
        return config, False
    logger.warning("config changes detected, updating from version=%s", config.version)
    previous = config.version
    if is_older(config.version, MIN_COMPATIBLE_VERSION):
        config = UnwrapConfig.model_validate(default_document())
    config = config.model_copy(update={"version": current})
    logger.warning("config update complete from version=%s to version=%s", previous, current)
    return config, True


# ------------------------ Documents ------------------------

@lru_cache(maxsize=4)
def _load_schema(path: str) -> Dict[str, Any]:
    try:
        return json.loads(Path(path).read_text("utf-8"))
    except OSError as e:
        raise ConfigError("E_IO", f"cannot read schema {path}: {e}") from e


def read_document(path: PathLike) -> Dict[str, Any]:
    p = Path(path)
    try:
        data = json.loads(p.read_text("utf-8"))
    except OSError as e:
        raise ConfigError("E_IO", f"cannot read {p}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError("E_JSON", f"{p.name}: {e.msg} (line {e.lineno})") from e
    if not isinstance(data, dict):
        raise ConfigError("E_SCHEMA", f"{p.name}: top level must be an object")
    return data


def validate_document(data: Dict[str, Any], schema_path: PathLike = SCHEMA_PATH) -> None:
    schema = _load_schema(str(schema_path))
    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        where = "/".join(str(p) for p in e.path) or "<root>"
        raise ConfigError("E_SCHEMA", f"{e.message} at {where}") from e


def parse_document(data: Dict[str, Any]) -> UnwrapConfig:
    try:
        return UnwrapConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError("E_INVALID", str(e)) from e


def write_document(path: PathLike, config: UnwrapConfig) -> None:
    p = Path(path)
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(config.to_document(), ensure_ascii=False, indent=2), encoding="utf-8")
    except OSError as e:
        raise ConfigError("E_IO", f"cannot write {p}: {e}") from e


def load_config(path: Optional[PathLike] = None, *, write_back: bool = True) -> UnwrapConfig:
    """
    Read ``path`` (default: ``DEFAULT_CONFIG_PATH``) into a migrated config.

    A missing file yields the default document. With ``write_back`` the
    normalized document is saved, which also creates a missing file.
    """
    p = Path(path or DEFAULT_CONFIG_PATH)
    if p.exists():
        data = read_document(p)
        validate_document(data)
        config, _ = migrate(parse_document(data))
    else:
        logger.info("no config at path=%s, using defaults", p)
        config = UnwrapConfig.model_validate(default_document())
    if write_back:
        write_document(p, config)
    return config


# ------------------------ Store ------------------------

class ConfigStore:
    """Holds the active ``Ruleset``; readers never lock, writers swap."""

    def __init__(self, path: Optional[PathLike] = None, *, write_back: bool = True):
        self.path = Path(path or DEFAULT_CONFIG_PATH)
        self.write_back = write_back
        self._ruleset: Optional[Ruleset] = None
        self._lock = threading.Lock()

    @property
    def current(self) -> Ruleset:
        ruleset = self._ruleset
        if ruleset is None:
            ruleset = self.load()
        return ruleset

    def load(self) -> Ruleset:
        """Build a ruleset from disk and publish it. Failures keep the old one."""
        config = load_config(self.path, write_back=self.write_back)
        ruleset = Ruleset.from_config(config)
        self.publish(ruleset)
        logger.info(
            "loaded unwrap rewards path=%s version=%s triggers=%s",
            self.path,
            ruleset.version,
            len(ruleset.table),
        )
        return ruleset

    reload = load

    def publish(self, ruleset: Ruleset) -> Ruleset:
        with self._lock:
            self._ruleset = ruleset
        return ruleset
