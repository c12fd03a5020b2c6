# src/hydralite/core/runtime/app.py
"""
Inicialização de uma aplicação a partir de arquivos e overrides.

Encadeia as etapas da engine na ordem obrigatória:

    1. composição dos arquivos (`defaults` + merge da esquerda para a direita)
    2. aplicação dos overrides
    3. preenchimento de `hydra.job.name`, quando ausente ou null
    4. resolução das interpolações

Uso típico em um script:

    config = initialize(["configs/main.yaml"], sys.argv[1:])
    batch = expect_int(config, "trainer.batch_size")
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from hydralite.core.config.interpolation import resolve_interpolations
from hydralite.core.config.loader import PathLike, load_config_files
from hydralite.core.config.node import ConfigNode, make_string
from hydralite.core.config.overrides import apply_overrides
from hydralite.core.config.paths import assign_path, find_path


logger = logging.getLogger(__name__)

DEFAULT_JOB_NAME = "app"


def _default_job_name() -> str:
    if sys.argv and sys.argv[0]:
        return Path(sys.argv[0]).name or DEFAULT_JOB_NAME
    return DEFAULT_JOB_NAME


def set_job_name(config: ConfigNode, job_name: Optional[str] = None) -> None:
    """Define `hydra.job.name` quando ausente ou null (nunca sobrescreve)."""
    node = find_path(config, ["hydra", "job", "name"])
    if node is not None and not node.is_null():
        return
    name = make_string(job_name or _default_job_name())
    if node is None:
        assign_path(config, ["hydra", "job", "name"], name, require_new=True)
    else:
        node.replace(name)


def initialize(
    config_files: Sequence[PathLike],
    overrides: Sequence[str] = (),
    *,
    job_name: Optional[str] = None,
    default_config: Optional[PathLike] = None,
) -> ConfigNode:
    """
    Compõe, aplica overrides e resolve a configuração de uma aplicação.

    Args:
        config_files: Arquivos raiz, mesclados em ordem.
        overrides: Expressões `[+]path=valor`.
        job_name: Nome do job; default é o nome do programa (`sys.argv[0]`).
        default_config: Arquivo usado quando `config_files` está vazio
            e o arquivo existe.

    Returns:
        ConfigNode: árvore resolvida, pronta para leitura.
    """
    files = list(config_files)
    if not files and default_config is not None and Path(default_config).exists():
        files.append(default_config)

    config = load_config_files(files)
    apply_overrides(config, overrides)
    set_job_name(config, job_name)
    resolve_interpolations(config)
    logger.debug("Initialised configuration from %d file(s)", len(files))
    return config
