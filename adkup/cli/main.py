"""Top-level CLI wiring and logging setup."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

import typer
from loguru import logger

from ..host import LocalHost
from ..sequence import run_sequence
from ..status import render_next_steps, render_summary
from ._common import _cfg_path, _load_cfg, log

app = typer.Typer(
    name='adkup',
    help='Install prerequisites, converge Colima, and prepare the ADK sandbox.',
    add_completion=False,
)


@app.command()
def setup(
    config: Optional[Path] = typer.Option(
        None,
        '--config',
        help='Path to config TOML (default: .adkup.toml if present).',
    ),
    verbose: int = typer.Option(
        0, '--verbose', '-v', count=True, help='Increase verbosity (-v, -vv).'
    ),
    dry_run: bool = typer.Option(
        False, '--dry-run', help='Print mutating actions without running them.'
    ),
) -> None:
    try:
        cfg = _load_cfg(config)
        _setup_logging(verbose, cfg.verbosity)
        log.debug('Config: {} (dry_run={})', _cfg_path(config), dry_run)
        outcome = run_sequence(LocalHost(dry_run=dry_run), cfg)
    except KeyboardInterrupt:
        typer.echo('🚨  ERROR: Interrupted; re-run adkup to resume.', err=True)
        raise typer.Exit(code=130)
    except Exception as ex:
        typer.echo(f'ERROR: {ex}', err=True)
        log.error('Unhandled adkup error: {}', ex)
        raise typer.Exit(code=2)

    log.debug('Run outcome: {}', outcome.as_dict())
    if not outcome.ok:
        typer.echo(f'🚨  ERROR: {outcome.error}', err=True)
        raise typer.Exit(code=outcome.exit_code)
    typer.echo(render_summary(outcome))
    typer.echo('')
    typer.echo(render_next_steps(cfg.env))


def main() -> None:
    app()


def _setup_logging(args_verbose: int, cfg_verbosity: int) -> None:
    logger.remove()
    effective_verbosity = args_verbose if args_verbose > 0 else cfg_verbosity
    level = 'WARNING'
    if effective_verbosity == 1:
        level = 'INFO'
    elif effective_verbosity >= 2:
        level = 'DEBUG'
    colorize = sys.stderr.isatty() and os.getenv('NO_COLOR') is None
    logger.add(
        sys.stderr,
        level=level,
        colorize=colorize,
        format='<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>',
    )
    log.debug(
        'Logging configured at {} (effective_verbosity={}, colorize={})',
        level,
        effective_verbosity,
        colorize,
    )
