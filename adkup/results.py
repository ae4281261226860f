"""Result dataclasses recorded by each provisioning step and the whole run."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class Stage(enum.Enum):
    INIT = 'init'
    PREREQS_CHECKED = 'prereqs_checked'
    VM_READY = 'vm_ready'
    DAEMON_VERIFIED = 'daemon_verified'
    ENV_READY = 'env_ready'
    SMOKE_TESTED = 'smoke_tested'
    DONE = 'done'
    FAILED = 'failed'


@dataclass
class StepResult:
    stage: Stage
    label: str
    ok: bool
    detail: str = ''
    error: str = ''


@dataclass
class RunOutcome:
    reached: Stage = Stage.INIT
    state: Stage = Stage.INIT
    steps: list[StepResult] = field(default_factory=list)
    failed_step: str = ''
    error: str = ''

    @property
    def ok(self) -> bool:
        return self.state is Stage.DONE

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1

    def as_dict(self) -> dict[str, object]:
        return {
            'reached': self.reached.value,
            'state': self.state.value,
            'failed_step': self.failed_step,
            'error': self.error,
            'steps': [
                {'stage': s.stage.value, 'label': s.label, 'ok': s.ok}
                for s in self.steps
            ],
        }
