"""Host capacity sanity checks for the declared Colima resource profile."""

from __future__ import annotations

import os
from pathlib import Path

from .config import ResourceProfile


def host_mem_total_gb(host) -> float | None:
    if host.which('sysctl'):
        res = host.run(['sysctl', '-n', 'hw.memsize'], check=False, probe=True)
        if res.code == 0 and res.stdout.strip().isdigit():
            return int(res.stdout.strip()) / (1024**3)
    try:
        text = Path('/proc/meminfo').read_text(encoding='utf-8', errors='ignore')
    except OSError:
        return None
    for line in text.splitlines():
        if line.startswith('MemTotal:'):
            parts = line.split()
            if len(parts) >= 2 and parts[1].isdigit():
                return int(parts[1]) / (1024**2)
    return None


def host_cpu_count() -> int | None:
    try:
        count = os.cpu_count()
    except Exception:
        return None
    return int(count) if count else None


def vm_resource_warning_lines(host, profile: ResourceProfile) -> list[str]:
    warnings: list[str] = []
    mem_total_gb = host_mem_total_gb(host)
    if mem_total_gb is not None and profile.memory_gb > mem_total_gb * 0.8:
        warnings.append(
            'Requested VM memory is large relative to host total memory: '
            f'requested={profile.memory_gb} GiB, MemTotal={mem_total_gb:.1f} GiB. '
            'If Colima fails to start, lower vm.memory_gb.'
        )

    cpu_count = host_cpu_count()
    if cpu_count is not None and profile.cpus > cpu_count:
        warnings.append(
            'Requested VM CPUs exceed host CPU count: '
            f'requested={profile.cpus}, host_cpus={cpu_count}. '
            'If Colima fails to start, lower vm.cpus.'
        )
    return warnings
