"""Post-provision smoke tests against Docker and the Orchestrate CLI."""

from __future__ import annotations

from loguru import logger

from .config import EnvConfig
from .errors import SmokeTestError
from .util import CmdError
from .venv import venv_env

log = logger

SMOKE_COMMANDS: list[tuple[str, list[str]]] = [
    ('Checking Docker version', ['docker', 'version']),
    ('Running hello-world container', ['docker', 'run', '--rm', 'hello-world']),
    ('Checking orchestrate CLI', ['orchestrate', '--help']),
]


def run_smoke_tests(host, env_cfg: EnvConfig) -> list[str]:
    log.info('Running sanity checks...')
    env = venv_env(env_cfg)
    passed: list[str] = []
    for label, cmd in SMOKE_COMMANDS:
        log.info('{}...', label)
        try:
            host.run(cmd, check=True, capture=False, env=env)
        except CmdError as ex:
            raise SmokeTestError(
                f'Sanity check failed: `{ex.cmd_text}` exited {ex.result.code}. '
                'Re-run adkup to converge the earlier steps.'
            ) from ex
        passed.append(label)
    return passed
