"""Rendering of per-step status lines and the manual next steps."""

from __future__ import annotations

import textwrap

from .config import EnvConfig
from .results import RunOutcome, Stage


def status_line(ok: bool | None, label: str, detail: str = '') -> str:
    icon = '✅' if ok is True else ('➖' if ok is None else '❌')
    suffix = f' - {detail}' if detail else ''
    return f'{icon} {label}{suffix}'


def render_summary(outcome: RunOutcome) -> str:
    lines = [
        status_line(s.ok, s.label, s.detail if s.ok else s.error)
        for s in outcome.steps
    ]
    if outcome.state is Stage.DONE:
        lines.append('')
        lines.append('✅ Installation and setup completed successfully!')
    return '\n'.join(lines)


def render_next_steps(env_cfg: EnvConfig | None = None) -> str:
    env_cfg = env_cfg or EnvConfig()
    return textwrap.dedent(
        f"""
        Next Steps:
        1. Copy the example environment file:
           cp .env.example .env
        2. Edit '.env' and add your WO_ENTITLEMENT_KEY to run the local server.
        3. Activate the Python virtual environment:
           source {env_cfg.venv_dir}/bin/activate
        4. Start the Orchestrate development server:
           orchestrate server start -e .env

        Happy orchestrating!
        """
    ).strip('\n')
