# src/hydralite/cli.py
"""
Interface de linha de comando do hydralite.

    hydralite [-c FILE]... [OVERRIDES]...

Compõe os arquivos informados (ou `./config.yaml`), aplica os overrides,
resolve interpolações, imprime a configuração efetiva em YAML e grava os
artefatos da execução em `<hydra.run.dir>/.hydra/`.

Exemplos:

    hydralite -c configs/main.yaml trainer.max_epochs=50 +db.pool=8
    hydralite hydra.run.dir=null          # sem diretório de execução

Erros de configuração encerram com código 1 e mensagem em stderr.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Tuple

import click

from hydralite.core.config.emitter import to_yaml_string
from hydralite.core.config.errors import ConfigError
from hydralite.core.config.interpolation import resolve_interpolations
from hydralite.core.config.loader import load_config_files
from hydralite.core.config.node import ConfigNode, make_null, make_string
from hydralite.core.config.overrides import apply_overrides
from hydralite.core.config.paths import assign_path
from hydralite.core.runtime.app import set_job_name
from hydralite.core.runtime.job_logging import (
    LOG_FORMAT,
    init_logging,
    log_config,
    parse_log_level,
)
from hydralite.core.runtime.run_dir import (
    ensure_run_defaults,
    resolve_run_directory,
    write_run_artifacts,
)


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config.yaml"
RUN_DIR_PATH = ["hydra", "run", "dir"]


def _config_sources(config_files: Tuple[str, ...]) -> Tuple[str, ...]:
    if config_files:
        return config_files
    if Path(DEFAULT_CONFIG_FILE).exists():
        return (DEFAULT_CONFIG_FILE,)
    logger.warning(
        "No configuration file given and '%s' not found; starting from an empty mapping",
        DEFAULT_CONFIG_FILE,
    )
    return ()


def _pin_run_directory(config: ConfigNode) -> Optional[Path]:
    """Torna `hydra.run.dir` absoluto e o grava de volta na árvore."""
    run_dir = resolve_run_directory(config)
    if run_dir is None:
        assign_path(config, RUN_DIR_PATH, make_null(), require_new=False)
        return None
    run_dir = Path(os.path.normpath(run_dir.absolute()))
    assign_path(config, RUN_DIR_PATH, make_string(str(run_dir)), require_new=False)
    return run_dir


def build_config(config_files: Tuple[str, ...], overrides: Tuple[str, ...]) -> ConfigNode:
    config = load_config_files(config_files)
    ensure_run_defaults(config)
    apply_overrides(config, overrides)
    set_job_name(config)
    resolve_interpolations(config)
    return config


@click.command()
@click.option(
    "--config",
    "-c",
    "config_files",
    multiple=True,
    type=click.Path(dir_okay=False),
    help="Configuration file (repeatable, merged left to right)",
)
@click.option("--log-level", default="WARNING", show_default=True, help="Console log level")
@click.argument("overrides", nargs=-1)
def main(config_files: Tuple[str, ...], log_level: str, overrides: Tuple[str, ...]) -> None:
    """Compose, override and resolve a configuration, then print it as YAML."""
    logging.basicConfig(level=parse_log_level(log_level), format=LOG_FORMAT)

    try:
        config = build_config(_config_sources(config_files), overrides)
        run_dir = _pin_run_directory(config)

        click.echo(to_yaml_string(config), nl=False)

        metadata_dir = write_run_artifacts(config, overrides, run_dir)
        if metadata_dir is not None:
            init_logging(config)
            log_config(config)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e


if __name__ == "__main__":
    main()
