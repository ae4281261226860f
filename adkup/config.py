"""Declared resource profile, sandbox layout, and optional TOML overrides."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .util import expand

HOMEBREW_INSTALL_URL = (
    'https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh'
)


@dataclass
class ResourceProfile:
    name: str = 'default'
    cpus: int = 8
    memory_gb: int = 16
    mount_type: str = 'virtiofs'
    vm_type: str = 'vz'
    cpu_type: str = 'host'
    arch: str = 'host'


@dataclass
class EnvConfig:
    venv_dir: str = '.venv'
    requirements: str = 'requirements.txt'
    python_version: str = '3.11'

    @property
    def python_formula(self) -> str:
        return f'python@{self.python_version}'

    @property
    def python_exe(self) -> str:
        return f'python{self.python_version}'


@dataclass
class PrereqConfig:
    # executable -> Homebrew formula; empty means the built-in table
    formulas: dict[str, str] = field(default_factory=dict)
    brew_install_url: str = HOMEBREW_INSTALL_URL


@dataclass
class AdkupConfig:
    vm: ResourceProfile = field(default_factory=ResourceProfile)
    env: EnvConfig = field(default_factory=EnvConfig)
    prereqs: PrereqConfig = field(default_factory=PrereqConfig)
    verbosity: int = 1

    def expanded_paths(self) -> 'AdkupConfig':
        self.env.venv_dir = expand(self.env.venv_dir)
        self.env.requirements = expand(self.env.requirements)
        return self


def load(path: Path) -> AdkupConfig:
    raw = tomllib.loads(path.read_text(encoding='utf-8'))
    cfg = AdkupConfig()
    for section in ('vm', 'env', 'prereqs'):
        if section in raw and isinstance(raw[section], dict):
            sec = raw[section]
            obj = getattr(cfg, section)
            for k, v in sec.items():
                if not hasattr(obj, k):
                    continue
                expected = type(getattr(obj, k))
                if type(v) is not expected:
                    raise ValueError(
                        f'{path}: [{section}] {k} must be {expected.__name__}, '
                        f'got {type(v).__name__} {v!r}'
                    )
                setattr(obj, k, v)
    if 'verbosity' in raw:
        cfg.verbosity = int(raw['verbosity'])
    return cfg
