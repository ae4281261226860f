from __future__ import annotations

from pathlib import Path

from loguru import logger

from ..config import AdkupConfig, load

log = logger

DEFAULT_CONFIG_NAME = '.adkup.toml'


def _cfg_path(p: str | Path | None) -> Path:
    return Path(p or DEFAULT_CONFIG_NAME).resolve()


def _load_cfg(config_path: str | Path | None) -> AdkupConfig:
    """Load the optional TOML overrides; the declared defaults apply otherwise."""
    path = _cfg_path(config_path)
    if not path.exists():
        if config_path is not None:
            raise FileNotFoundError(f'Config not found: {path}')
        return AdkupConfig().expanded_paths()
    return load(path).expanded_paths()
