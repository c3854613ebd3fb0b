"""Engine configuration support."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older interpreters
    tomllib = None  # type: ignore

from bnfmatch.errors import ConfigError

CONFIG_FILENAMES = ["bnfmatch.toml", ".bnfmatchrc"]
MAX_DEPTH_ENV = "BNFMATCH_MAX_DEPTH"


@dataclass
class EngineConfig:
    """Settings shared by grammar loading and matching."""

    # Recursion bound for the matcher
    max_depth: int = 50
    encoding: str = "utf-8"
    source: Optional[Path] = None

    def with_overrides(self, *, max_depth: Optional[int] = None) -> "EngineConfig":
        if max_depth is None:
            return self
        _check_depth(max_depth, self.source)
        return EngineConfig(
            max_depth=max_depth,
            encoding=self.encoding,
            source=self.source,
        )


def _check_depth(value: int, source: Optional[Path]) -> None:
    if value < 1:
        raise ConfigError(
            f"max_depth must be a positive integer, got {value}",
            path=str(source) if source else None,
        )


def _read_json_config(path: Path) -> Dict[str, Any]:
    content = path.read_text(encoding="utf-8")
    return json.loads(content)


def _read_toml_config(path: Path) -> Dict[str, Any]:
    if tomllib is None:
        raise ConfigError("TOML parsing requires Python 3.11 or later.", path=str(path))
    with path.open("rb") as handle:
        return tomllib.load(handle)


def locate_config_file(root: Path, explicit: Optional[Path] = None) -> Optional[Path]:
    if explicit is not None:
        return explicit if explicit.exists() else None
    for candidate in CONFIG_FILENAMES:
        path = root / candidate
        if path.exists():
            return path
    return None


def _parse_engine(data: Dict[str, Any], source: Optional[Path]) -> EngineConfig:
    section = data.get("engine") or {}
    if not isinstance(section, dict):
        raise ConfigError("[engine] must be a table", path=str(source) if source else None)
    try:
        max_depth = int(section.get("max_depth", EngineConfig.max_depth))
    except (TypeError, ValueError) as exc:
        raise ConfigError(
            f"max_depth must be an integer: {exc}", path=str(source) if source else None
        ) from exc
    _check_depth(max_depth, source)
    return EngineConfig(
        max_depth=max_depth,
        encoding=str(section.get("encoding") or EngineConfig.encoding),
        source=source,
    )


def load_engine_config(root: Optional[Path] = None, explicit: Optional[Path] = None) -> EngineConfig:
    """Resolve configuration from ``bnfmatch.toml``/``.bnfmatchrc`` and the environment."""
    root = (root or Path.cwd()).resolve()
    config_path = locate_config_file(root, explicit)
    if explicit is not None and config_path is None:
        raise ConfigError(f"Config file not found: {explicit}", path=str(explicit))

    if config_path is None:
        config = EngineConfig()
    else:
        try:
            if config_path.suffix == ".toml":
                data = _read_toml_config(config_path)
            else:
                data = _read_json_config(config_path)
        except (OSError, ValueError) as exc:
            raise ConfigError(f"Cannot read config: {exc}", path=str(config_path)) from exc
        config = _parse_engine(data, config_path)

    env_depth = os.getenv(MAX_DEPTH_ENV)
    if env_depth:
        try:
            depth = int(env_depth)
        except ValueError as exc:
            raise ConfigError(f"{MAX_DEPTH_ENV} must be an integer, got {env_depth!r}") from exc
        config = config.with_overrides(max_depth=depth)
    return config


__all__ = ["EngineConfig", "load_engine_config", "locate_config_file"]
