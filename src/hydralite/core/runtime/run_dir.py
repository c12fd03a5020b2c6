# src/hydralite/core/runtime/run_dir.py
"""
Diretório de execução (run dir) e artefatos gravados por run.

Cada execução pode materializar a configuração efetiva em:

    <hydra.run.dir>/
        .hydra/
            config.yaml     → árvore completa resolvida
            hydra.yaml      → subárvore `hydra`
            overrides.yaml  → expressões de override, na ordem recebida

`hydra.run.dir` tem como default `outputs/${now:%Y-%m-%d_%H-%M-%S}`;
`null` (ou string vazia) desativa a criação do diretório.

Limites explícitos:
    - Não resolve interpolações (o chamador resolve antes)
    - Não configura logging
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from hydralite.core.config.emitter import write_yaml_file
from hydralite.core.config.errors import (
    ConfigIOError,
    StructuralConflictError,
    TypeMismatchError,
)
from hydralite.core.config.node import ConfigNode, make_mapping, make_string
from hydralite.core.config.paths import find_path


logger = logging.getLogger(__name__)

DEFAULT_RUN_DIR = "outputs/${now:%Y-%m-%d_%H-%M-%S}"
METADATA_DIRNAME = ".hydra"


def _child_mapping(parent: ConfigNode, key: str, label: str) -> ConfigNode:
    mapping = parent.value
    if key not in mapping:
        mapping[key] = make_mapping()
    elif not mapping[key].is_mapping():
        raise StructuralConflictError(f"'{label}' must be a mapping")
    return mapping[key]


def ensure_run_defaults(config: ConfigNode) -> None:
    """
    Garante `hydra.run.dir` na árvore, in-place.

    Raises:
        StructuralConflictError: se a raiz, `hydra` ou `hydra.run` não forem mappings.
    """
    if config.is_null():
        config.replace(make_mapping())
    if not config.is_mapping():
        raise StructuralConflictError("Root configuration is not a mapping")

    hydra = _child_mapping(config, "hydra", "hydra")
    run = _child_mapping(hydra, "run", "hydra.run")
    if "dir" not in run.value:
        run.value["dir"] = make_string(DEFAULT_RUN_DIR)


def resolve_run_directory(config: ConfigNode) -> Optional[Path]:
    """
    Lê `hydra.run.dir` de uma árvore já resolvida.

    Returns:
        Optional[Path]: diretório configurado, ou `None` se desativado.

    Raises:
        TypeMismatchError: se o valor não for string nem null.
    """
    template = DEFAULT_RUN_DIR
    node = find_path(config, ["hydra", "run", "dir"])
    if node is not None:
        if node.is_null():
            return None
        if not node.is_string():
            raise TypeMismatchError("hydra.run.dir must be a string or null")
        template = node.value
    if not template:
        return None
    return Path(template)


def write_run_artifacts(
    config: ConfigNode,
    overrides: Sequence[str],
    run_dir: Optional[Path],
) -> Optional[Path]:
    """
    Grava `config.yaml`, `hydra.yaml` e `overrides.yaml` em `<run_dir>/.hydra`.

    Returns:
        Optional[Path]: diretório de metadados criado, ou `None` se `run_dir` é `None`.

    Raises:
        ConfigIOError: se os diretórios ou arquivos não puderem ser criados.
    """
    if run_dir is None:
        logger.info("hydra.run.dir is null; skipping run directory creation")
        return None

    metadata_dir = Path(run_dir) / METADATA_DIRNAME
    try:
        metadata_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigIOError(
            f"Failed to create run directory '{metadata_dir}': {e.strerror or e}"
        ) from e

    write_yaml_file(config, metadata_dir / "config.yaml")

    hydra_node = find_path(config, ["hydra"])
    if hydra_node is not None:
        write_yaml_file(hydra_node, metadata_dir / "hydra.yaml")

    write_yaml_file(
        ConfigNode.from_python(list(overrides)), metadata_dir / "overrides.yaml"
    )
    logger.debug("Stored run artifacts in %s", metadata_dir)
    return metadata_dir
