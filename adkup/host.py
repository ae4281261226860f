"""Host access, prerequisite checks, and Homebrew package installation routines."""

from __future__ import annotations

import platform
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from loguru import logger

from .config import AdkupConfig
from .errors import InstallError, MissingToolError
from .util import CmdError, CmdResult, run_cmd, shell_join, which

log = logger


class LocalHost:
    """Runs commands and presence checks against the real machine.

    Anything with ``probe=True`` only inspects state and always runs. Other
    commands mutate the host and are only logged when ``dry_run`` is set.
    """

    def __init__(self, *, dry_run: bool = False) -> None:
        self.dry_run = dry_run

    def which(self, cmd: str) -> Optional[str]:
        return which(cmd)

    def path_exists(self, path: str | Path) -> bool:
        return Path(path).exists()

    def run(
        self,
        cmd: Sequence[str],
        *,
        check: bool = True,
        capture: bool = True,
        env: Optional[dict[str, str]] = None,
        probe: bool = False,
    ) -> CmdResult:
        if self.dry_run and not probe:
            log.info('DRYRUN: {}', shell_join(cmd))
            return CmdResult(0, '', '')
        try:
            return run_cmd(cmd, check=check, capture=capture, env=env)
        except FileNotFoundError as ex:
            # Same contract as a shell: an unknown executable exits 127.
            res = CmdResult(127, '', str(ex))
            if check:
                raise CmdError(cmd, res) from ex
            return res


@dataclass(frozen=True)
class Requirement:
    command: str
    formula: str


REQUIRED_TOOLS = [
    Requirement('colima', 'colima'),
    Requirement('docker', 'docker'),
    Requirement('python3.11', 'python@3.11'),
]

# Homebrew's default prefixes on Apple Silicon and Intel
BREW_PREFIX_BINS = ['/opt/homebrew/bin/brew', '/usr/local/bin/brew']


def host_is_macos() -> bool:
    return platform.system() == 'Darwin'


def required_tools(cfg: AdkupConfig) -> list[Requirement]:
    if cfg.prereqs.formulas:
        return [Requirement(c, f) for c, f in cfg.prereqs.formulas.items()]
    reqs = [r for r in REQUIRED_TOOLS if not r.command.startswith('python')]
    reqs.append(Requirement(cfg.env.python_exe, cfg.env.python_formula))
    return reqs


def missing_packages(host, requirements: Sequence[Requirement]) -> list[str]:
    return [r.formula for r in requirements if host.which(r.command) is None]


def brew_exe(host) -> str:
    """Resolve ``brew``, including a fresh install not yet on PATH."""
    if host.which('brew') is not None:
        return 'brew'
    for candidate in BREW_PREFIX_BINS:
        if host.path_exists(candidate):
            return candidate
    return 'brew'


def _failure_detail(ex: CmdError) -> str:
    log.debug(
        'Command {} failed code={} stderr={}',
        ex.cmd_text,
        ex.result.code,
        ex.result.stderr.strip(),
    )
    return f'`{ex.cmd_text}` exited {ex.result.code}'


def ensure_homebrew(host, cfg: AdkupConfig) -> None:
    if host.which('brew') is not None:
        return
    log.info('Homebrew not found. Installing...')
    try:
        script = host.run(
            ['curl', '-fsSL', cfg.prereqs.brew_install_url], check=True
        )
        host.run(['/bin/bash', '-c', script.stdout], check=True, capture=False)
    except CmdError as ex:
        raise MissingToolError(
            'Homebrew is required but could not be installed: '
            f'{_failure_detail(ex)}'
        ) from ex


def install_packages(host, formulas: Sequence[str]) -> None:
    if not formulas:
        log.info('All prerequisites are already installed.')
        return
    log.info('Installing missing packages: {}...', ' '.join(formulas))
    try:
        host.run(
            [brew_exe(host), 'install', *formulas], check=True, capture=False
        )
    except CmdError as ex:
        raise InstallError(
            f'brew install failed for: {", ".join(formulas)} '
            f'({_failure_detail(ex)})'
        ) from ex


def resolve_prerequisites(host, cfg: AdkupConfig) -> list[str]:
    """Install exactly the missing prerequisites in one ``brew install`` call.

    Returns:
        list[str]: the formulas that were (or in dry-run would be) installed.
    """
    log.info('Checking prerequisites...')
    if not host_is_macos():
        log.warning(
            'Host is not macOS ({}); Homebrew/Colima steps may not apply.',
            platform.system(),
        )
    ensure_homebrew(host, cfg)
    missing = missing_packages(host, required_tools(cfg))
    install_packages(host, missing)
    return missing


def pin_python(host, cfg: AdkupConfig) -> bool:
    """Make the pinned interpreter the default ``python3``.

    Returns:
        bool: True if ``brew link`` had to be run.
    """
    formula = cfg.env.python_formula
    brew = brew_exe(host)
    try:
        listed = host.run([brew, 'list', formula], check=False, probe=True)
        if listed.code != 0:
            host.run([brew, 'install', formula], check=True, capture=False)
        reported = ''
        if host.which('python3') is not None:
            current = host.run(
                ['python3', '--version'], check=False, probe=True
            )
            reported = (current.stdout or current.stderr).strip()
        if cfg.env.python_version in reported:
            log.debug('python3 already reports {}', reported)
            return False
        log.info(
            "Linking {} to be the default 'python3'. "
            'You may be asked for your password.',
            formula,
        )
        host.run(
            [brew, 'link', '--overwrite', formula], check=True, capture=False
        )
    except CmdError as ex:
        raise InstallError(
            f'Could not pin {formula} as python3: {_failure_detail(ex)}'
        ) from ex
    return True
