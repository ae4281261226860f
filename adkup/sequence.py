"""Ordered provisioning workflow: each step must succeed before the next runs.

Stages advance ``INIT -> PREREQS_CHECKED -> VM_READY -> DAEMON_VERIFIED ->
ENV_READY -> SMOKE_TESTED -> DONE``. The first step that raises an
:class:`AdkupError` moves the run to ``FAILED`` and no later step is called.
There are no retries; every step is convergent, so the remedy for a failure
is to run the whole sequence again.
"""

from __future__ import annotations

from typing import Callable

from loguru import logger

from .config import AdkupConfig
from .docker import verify_docker
from .errors import AdkupError
from .host import pin_python, resolve_prerequisites
from .results import RunOutcome, Stage, StepResult
from .smoke import run_smoke_tests
from .venv import ensure_venv
from .vm import ensure_vm

log = logger


def _step_prereqs(host, cfg: AdkupConfig) -> str:
    installed = resolve_prerequisites(host, cfg)
    linked = pin_python(host, cfg)
    parts = [f'installed: {", ".join(installed)}' if installed else 'all present']
    if linked:
        parts.append(f'linked {cfg.env.python_formula}')
    return '; '.join(parts)


def _step_vm(host, cfg: AdkupConfig) -> str:
    restarted = ensure_vm(host, cfg.vm)
    profile = cfg.vm
    detail = (
        f'{profile.cpus} CPU, {profile.memory_gb} GB, '
        f'{profile.mount_type}, {profile.vm_type}'
    )
    return f'{detail} (restarted)' if restarted else detail


def _step_daemon(host, cfg: AdkupConfig) -> str:
    verify_docker(host)
    return 'docker info ok'


def _step_env(host, cfg: AdkupConfig) -> str:
    created = ensure_venv(host, cfg.env)
    state = 'created' if created else 'reused'
    return f'{cfg.env.venv_dir} {state}, synced from {cfg.env.requirements}'


def _step_smoke(host, cfg: AdkupConfig) -> str:
    passed = run_smoke_tests(host, cfg.env)
    return f'{len(passed)} checks passed'


StepFunc = Callable[..., str]

STEPS: list[tuple[Stage, str, StepFunc]] = [
    (Stage.PREREQS_CHECKED, 'Prerequisites', _step_prereqs),
    (Stage.VM_READY, 'Colima VM', _step_vm),
    (Stage.DAEMON_VERIFIED, 'Docker daemon', _step_daemon),
    (Stage.ENV_READY, 'Python environment', _step_env),
    (Stage.SMOKE_TESTED, 'Sanity checks', _step_smoke),
]


def run_sequence(
    host, cfg: AdkupConfig, *, steps: list[tuple[Stage, str, StepFunc]] | None = None
) -> RunOutcome:
    outcome = RunOutcome()
    for stage, label, func in STEPS if steps is None else steps:
        log.debug('Entering step {} (from {})', label, outcome.state.value)
        try:
            detail = func(host, cfg)
        except AdkupError as ex:
            log.debug('Step {} failed: {}', label, ex)
            outcome.steps.append(
                StepResult(stage, label, ok=False, error=str(ex))
            )
            outcome.state = Stage.FAILED
            outcome.failed_step = label
            outcome.error = str(ex)
            return outcome
        outcome.steps.append(StepResult(stage, label, ok=True, detail=detail))
        outcome.reached = outcome.state = stage
    outcome.reached = outcome.state = Stage.DONE
    return outcome
