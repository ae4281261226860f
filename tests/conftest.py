"""Fake hosts shared by the provisioning tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from adkup.util import CmdError, CmdResult

FORMULA_COMMANDS = {
    'colima': 'colima',
    'docker': 'docker',
    'python@3.11': 'python3.11',
}


class FakeHost:
    """Records every argv and answers from a table of canned results.

    ``results`` maps an argv prefix (tuple) to a return code or a
    :class:`CmdResult`; the longest matching prefix wins.
    """

    def __init__(self, *, present=(), paths=(), results=None) -> None:
        self.present = set(present)
        self.paths = {str(p) for p in paths}
        self.results = dict(results or {})
        self.calls: list[list[str]] = []
        self.envs: list[dict | None] = []

    def which(self, cmd):
        return f'/opt/homebrew/bin/{cmd}' if cmd in self.present else None

    def path_exists(self, path):
        return str(path) in self.paths

    def respond(self, cmd: list[str]) -> CmdResult:
        best = None
        for prefix, res in self.results.items():
            if tuple(cmd[: len(prefix)]) == prefix:
                if best is None or len(prefix) > len(best[0]):
                    best = (prefix, res)
        if best is None:
            return CmdResult(0, '', '')
        res = best[1]
        return res if isinstance(res, CmdResult) else CmdResult(res, '', '')

    def run(self, cmd, *, check=True, capture=True, env=None, probe=False):
        cmd = list(cmd)
        self.calls.append(cmd)
        self.envs.append(env)
        res = self.respond(cmd)
        if check and res.code != 0:
            raise CmdError(cmd, res)
        return res

    def called(self, *prefix: str) -> list[list[str]]:
        return [c for c in self.calls if tuple(c[: len(prefix)]) == prefix]


class SimulatedMac(FakeHost):
    """A fake macOS host whose state changes as commands are run.

    Stopping a VM that is not running fails, like a tool that refuses to
    stop a missing instance.
    """

    def __init__(
        self,
        *,
        present=('python3',),
        formulas=(),
        python3_version='Python 3.9.6',
        vm_running=False,
        vm_args=None,
        paths=('requirements.txt',),
        fail=None,
    ) -> None:
        super().__init__(present=present, paths=paths)
        self.formulas = set(formulas)
        self.python3_version = python3_version
        self.vm_running = vm_running
        self.vm_args = vm_args
        self.venv_packages: set[str] = set()
        self.pip_syncs = 0
        self.fail = dict(fail or {})

    def respond(self, cmd: list[str]) -> CmdResult:
        for prefix, res in self.fail.items():
            if tuple(cmd[: len(prefix)]) == prefix:
                if isinstance(res, CmdResult):
                    return res
                return CmdResult(res, '', f'simulated failure: {prefix}')
        ok = CmdResult(0, '', '')
        bad = CmdResult(1, '', 'error')
        head = cmd[0]
        if os.path.basename(head) == 'brew':
            head = 'brew'
        if head == 'curl':
            return CmdResult(0, 'echo installing homebrew', '')
        if head == '/bin/bash':
            self.present.add('brew')
            return ok
        if head == 'brew':
            if 'brew' not in self.present:
                return CmdResult(127, '', 'brew: command not found')
            if cmd[1] == 'install':
                for formula in cmd[2:]:
                    self.formulas.add(formula)
                    self.present.add(FORMULA_COMMANDS.get(formula, formula))
                return ok
            if cmd[1] == 'list':
                return ok if cmd[2] in self.formulas else bad
            if cmd[1] == 'link':
                self.python3_version = 'Python 3.11.9'
                self.present.add('python3')
                return ok
        if cmd == ['python3', '--version']:
            return CmdResult(0, self.python3_version + '\n', '')
        if head == 'colima':
            if cmd[1] == 'status':
                return ok if self.vm_running else bad
            if cmd[1] == 'stop':
                if not self.vm_running:
                    return CmdResult(1, '', 'colima is not running')
                self.vm_running = False
                return ok
            if cmd[1] == 'start':
                self.vm_running = True
                self.vm_args = cmd[2:]
                return ok
        if head == 'docker':
            return ok if self.vm_running else bad
        if cmd[1:3] == ['-m', 'venv']:
            self.paths.add(cmd[3])
            return ok
        if cmd[1:4] == ['-m', 'pip', 'install']:
            venv_dir = str(Path(head).parent.parent)
            if venv_dir not in self.paths:
                return CmdResult(127, '', f'{head}: not found')
            if cmd[4] == '-r':
                self.pip_syncs += 1
                self.venv_packages = {'ibm-watsonx-orchestrate'}
            return ok
        if head == 'orchestrate':
            return ok if 'ibm-watsonx-orchestrate' in self.venv_packages else bad
        return ok


@pytest.fixture(autouse=True)
def _assume_macos(monkeypatch):
    monkeypatch.setattr('adkup.host.host_is_macos', lambda: True)
