# src/hydralite/core/config/loader.py
"""
Loader canônico de configuração do hydralite (composição via `defaults`).

Este módulo carrega um arquivo YAML raiz e, recursivamente, as fontes
declaradas em sua chave reservada `defaults`, produzindo uma única
árvore composta.

Exemplo:

    # main.yaml
    defaults:
      - db: postgres          # db/postgres.yaml, colocado sob `db`
      - ?logging/extra        # logging/extra.yaml, opcional, mesclado na raiz
      - _self_
    trainer:
      batch_size: 16

Algoritmo por arquivo:
    1. Canonicaliza o path e rejeita se já estiver em carregamento (ciclo)
    2. Faz o parse da fonte
    3. Processa cada entrada de `defaults` em ordem, acumulando o resultado
       (entradas `{group: name}` vão para o path `group` do acumulador)
    4. Remove `defaults` da raiz e mescla a raiz sobre o acumulador
    5. Libera o path, permitindo reuso em ramos independentes

Princípios fundamentais:
    - Paths relativos são resolvidos a partir do diretório do arquivo que inclui
    - A extensão `.yaml` é acrescentada quando ausente
    - O conteúdo do próprio arquivo sempre vence os defaults

Invariantes:
    - Um ciclo de inclusão sempre termina com `CyclicIncludeError`
    - Nenhuma árvore parcial é retornada em caso de erro

Limites explícitos:
    - Não aplica overrides
    - Não resolve interpolações
    - Não valida schema
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Set, Tuple, Union

from .errors import (
    CyclicIncludeError,
    InvalidDefaultsError,
    UnresolvedReferenceError,
)
from .merge import merge
from .node import ConfigNode, make_mapping
from .paths import KeyPath, assign_path, find_path, parse_path
from .reader import read_file, read_string


logger = logging.getLogger(__name__)

DEFAULTS_KEY = "defaults"
SELF_ENTRY = "_self_"
DEFAULT_EXTENSION = ".yaml"

PathLike = Union[str, os.PathLike]


@dataclass(frozen=True)
class DefaultSpec:
    """
    Entrada de `defaults` já resolvida.

    Campos:
        - include_path: arquivo a carregar (absoluto, normalizado)
        - target_path: destino no acumulador (`None` → raiz)
        - optional: ausência do arquivo é ignorada
    """

    include_path: Path
    target_path: Optional[KeyPath]
    optional: bool = False


def _normalize(path: Path) -> Path:
    return Path(path).resolve()


def _strip_optional(text: str) -> Tuple[str, bool]:
    if text.startswith("?"):
        text = text[1:]
        if text.startswith(" "):
            text = text[1:]
        return text.strip(), True
    return text.strip(), False


def _candidate(relative: Path, base_dir: Path) -> Path:
    if not relative.suffix:
        relative = relative.with_name(relative.name + DEFAULT_EXTENSION)
    if not relative.is_absolute():
        relative = base_dir / relative
    return Path(os.path.normpath(relative))


def parse_default_entry(entry: ConfigNode, base_dir: Path) -> DefaultSpec:
    """
    Interpreta uma entrada de `defaults`.

    Formatos aceitos:
        - `"name"` / `"?name"`: inclusão mesclada na raiz
        - `{group: name}` / `{"?group": name}`: inclusão de
          `group/name.yaml` colocada sob o path `group`

    Raises:
        InvalidDefaultsError: para qualquer outro formato.
    """
    if entry.is_string():
        value, optional = _strip_optional(entry.value)
        if not value:
            raise InvalidDefaultsError("defaults entries cannot be empty strings")
        return DefaultSpec(_candidate(Path(value), base_dir), None, optional)

    if entry.is_mapping():
        if len(entry.value) != 1:
            raise InvalidDefaultsError(
                "defaults entries as mappings must contain exactly one key"
            )
        raw_key, name = next(iter(entry.value.items()))
        if not name.is_string():
            raise InvalidDefaultsError(
                f"defaults mapping values must be strings (got {name.type_name()} "
                f"for '{raw_key}')"
            )
        key, optional = _strip_optional(raw_key)
        target_path = parse_path(key)
        return DefaultSpec(
            _candidate(Path(key) / name.value, base_dir), target_path, optional
        )

    raise InvalidDefaultsError(
        f"Unsupported defaults entry type: {entry.type_name()}"
    )


def _load_with_includes(path: Path, visiting: Set[Path]) -> ConfigNode:
    normalized = _normalize(path)
    if normalized in visiting:
        raise CyclicIncludeError(
            f"Detected recursive configuration include involving '{normalized}'"
        )
    visiting.add(normalized)

    try:
        logger.debug("Loading configuration source %s", normalized)
        root = read_file(normalized)

        # arquivo vazio -> mapping vazio
        if root.is_null():
            root = make_mapping()
        if not root.is_mapping():
            return root

        result = make_mapping()
        defaults = root.value.pop(DEFAULTS_KEY, None)
        if defaults is not None:
            if not defaults.is_sequence():
                raise InvalidDefaultsError(
                    f"'{DEFAULTS_KEY}' must be a sequence in {normalized}"
                )
            base_dir = normalized.parent
            for entry in defaults.value:
                if entry.is_string() and entry.value == SELF_ENTRY:
                    continue
                _apply_default(result, parse_default_entry(entry, base_dir), visiting)

        merge(result, root)
        return result
    finally:
        visiting.discard(normalized)


def _apply_default(result: ConfigNode, spec: DefaultSpec, visiting: Set[Path]) -> None:
    if not spec.include_path.exists():
        if spec.optional:
            logger.debug("Skipping optional include %s (not found)", spec.include_path)
            return
        raise UnresolvedReferenceError(
            f"Included configuration '{spec.include_path}' not found"
        )

    child = _load_with_includes(spec.include_path, visiting)

    if spec.target_path is None:
        merge(result, child)
        return

    existing = find_path(result, spec.target_path)
    if existing is None:
        assign_path(result, spec.target_path, child, require_new=True)
    else:
        merge(existing, child)


def load_config_file(path: PathLike) -> ConfigNode:
    """
    Carrega um arquivo de configuração resolvendo sua cadeia de `defaults`.

    Args:
        path: Caminho do arquivo YAML raiz.

    Returns:
        ConfigNode: árvore composta (ainda sem interpolação).

    Raises:
        ConfigIOError: se o arquivo raiz não puder ser lido.
        ConfigParseError: se alguma fonte for YAML inválido.
        InvalidDefaultsError: se `defaults` tiver formato inválido.
        UnresolvedReferenceError: se uma inclusão obrigatória não existir.
        CyclicIncludeError: se houver ciclo de inclusão.
    """
    return _load_with_includes(Path(path), set())


def load_config_files(paths: Iterable[PathLike]) -> ConfigNode:
    """Compõe vários arquivos e os mescla da esquerda para a direita."""
    config = make_mapping()
    for path in paths:
        merge(config, load_config_file(path))
    return config


def load_config_string(content: str, name: str = "<string>") -> ConfigNode:
    """Faz o parse de um documento em memória, sem processar `defaults`."""
    return read_string(content, name)
