"""Project sandbox (.venv) creation and dependency sync from the manifest."""

from __future__ import annotations

import os
from pathlib import Path

from loguru import logger

from .config import EnvConfig
from .errors import DependencyInstallError
from .util import CmdError

log = logger


def venv_bin(env_cfg: EnvConfig) -> Path:
    return Path(env_cfg.venv_dir) / 'bin'


def venv_python(env_cfg: EnvConfig) -> Path:
    return venv_bin(env_cfg) / 'python'


def venv_env(
    env_cfg: EnvConfig, base: dict[str, str] | None = None
) -> dict[str, str]:
    """Environment equivalent to ``source .venv/bin/activate``."""
    env = dict(os.environ if base is None else base)
    bin_dir = venv_bin(env_cfg).absolute()
    env['VIRTUAL_ENV'] = str(bin_dir.parent)
    env['PATH'] = os.pathsep.join(
        p for p in (str(bin_dir), env.get('PATH', '')) if p
    )
    env.pop('PYTHONHOME', None)
    return env


def ensure_venv(host, env_cfg: EnvConfig) -> bool:
    """Create the sandbox if absent, then always sync pip and the manifest.

    Returns:
        bool: True if the sandbox was created by this call.
    """
    if not host.path_exists(env_cfg.requirements):
        raise DependencyInstallError(
            f'Dependency manifest not found: {env_cfg.requirements}'
        )
    created = False
    try:
        if host.path_exists(env_cfg.venv_dir):
            log.info(
                "Python virtual environment '{}' already exists.", env_cfg.venv_dir
            )
        else:
            log.info('Creating Python virtual environment...')
            host.run(
                [env_cfg.python_exe, '-m', 'venv', env_cfg.venv_dir],
                check=True,
                capture=False,
            )
            created = True

        python = str(venv_python(env_cfg))
        log.info('Upgrading pip...')
        host.run(
            [python, '-m', 'pip', 'install', '--upgrade', 'pip'],
            check=True,
            capture=False,
        )
        log.info('Installing dependencies from {}...', env_cfg.requirements)
        host.run(
            [python, '-m', 'pip', 'install', '-r', env_cfg.requirements],
            check=True,
            capture=False,
        )
    except CmdError as ex:
        raise DependencyInstallError(
            f'Failed to prepare {env_cfg.venv_dir}: {ex.cmd_text} exited {ex.result.code}'
        ) from ex
    return created
