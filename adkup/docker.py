"""Docker daemon reachability check through the Colima VM."""

from __future__ import annotations

from loguru import logger

from .errors import ConnectivityError

log = logger

DAEMON_UNREACHABLE = (
    'Could not connect to the Docker daemon. '
    'Please ensure Colima started correctly.'
)


def verify_docker(host) -> None:
    log.info('Verifying Docker socket and connection...')
    res = host.run(['docker', 'info'], check=False, capture=True)
    if res.code != 0:
        log.debug(
            'docker info failed code={} stderr={}', res.code, res.stderr.strip()
        )
        raise ConnectivityError(DAEMON_UNREACHABLE)
    log.info('Docker daemon is accessible.')
