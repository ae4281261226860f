"""Colima VM convergence: status probe, stop, and start with the declared profile."""

from __future__ import annotations

from loguru import logger

from .config import ResourceProfile
from .errors import VMError
from .resource_checks import vm_resource_warning_lines
from .util import CmdError

log = logger


def _profile_args(profile: ResourceProfile) -> list[str]:
    if profile.name and profile.name != 'default':
        return ['--profile', profile.name]
    return []


def start_args(profile: ResourceProfile) -> list[str]:
    return [
        'colima',
        'start',
        *_profile_args(profile),
        '--cpu-type',
        profile.cpu_type,
        '--arch',
        profile.arch,
        f'--vm-type={profile.vm_type}',
        '--mount-type',
        profile.mount_type,
        '-c',
        str(profile.cpus),
        '-m',
        str(profile.memory_gb),
    ]


def vm_running(host, profile: ResourceProfile) -> bool:
    res = host.run(
        ['colima', 'status', *_profile_args(profile)], check=False, probe=True
    )
    return res.code == 0


def stop_vm(host, profile: ResourceProfile) -> bool:
    """Stop the VM if it is running; a stopped VM is left alone.

    Returns:
        bool: True if a stop was issued.
    """
    if not vm_running(host, profile):
        log.debug('Colima profile {} is not running; nothing to stop', profile.name)
        return False
    log.info('Colima is already running. Stopping it to apply new configuration...')
    try:
        host.run(
            ['colima', 'stop', *_profile_args(profile)], check=True, capture=False
        )
    except CmdError as ex:
        log.debug('colima stop stderr={}', ex.result.stderr.strip())
        raise VMError(
            f'Failed to stop Colima profile {profile.name}: '
            f'{ex.cmd_text} exited {ex.result.code}'
        ) from ex
    return True


def start_vm(host, profile: ResourceProfile) -> None:
    log.info(
        'Starting Colima with vm-type={}, mount-type={}, {} CPUs, and {}GB RAM...',
        profile.vm_type,
        profile.mount_type,
        profile.cpus,
        profile.memory_gb,
    )
    try:
        # colima start creates the instance when absent, else reconfigures it
        host.run(start_args(profile), check=True, capture=False)
    except CmdError as ex:
        raise VMError(
            f'colima start failed for profile {profile.name} (code={ex.result.code}).'
        ) from ex
    log.info('Colima started successfully.')


def ensure_vm(host, profile: ResourceProfile) -> bool:
    """Converge the Colima VM onto ``profile``.

    Any running instance is restarted; the live settings are not diffed.

    Returns:
        bool: True if a running VM had to be stopped first.
    """
    log.info('Setting up Colima machine...')
    for line in vm_resource_warning_lines(host, profile):
        log.warning(line)
    stopped = stop_vm(host, profile)
    start_vm(host, profile)
    return stopped
