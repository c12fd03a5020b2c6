# src/hydralite/core/config/overrides.py
"""
Overrides pontuais no estilo linha de comando.

Sintaxe:

    [+]<path-pontilhado>=<literal>

    trainer.max_epochs=100         # atualiza chave existente
    +trainer.schedule=[1,2,3]      # cria chave nova (e mappings intermediários)
    db.host=null                   # null apaga o valor
    files.model\\.ckpt="a=b"        # ponto escapado no path; `=` no valor

Apenas o primeiro `=` separa path e valor. O valor é lido com a mesma
gramática das fontes YAML (escalares, listas e mappings em fluxo,
strings com aspas).

O prefixo `+` distingue "inserir chave nova" de "atualizar chave
existente", pegando erros de digitação em overrides.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List

from .errors import ConfigParseError
from .node import ConfigNode, deep_copy
from .paths import KeyPath, assign_path, parse_path, render_path
from .reader import read_string


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Override:
    """Diretiva de override já interpretada."""

    path: KeyPath
    value: ConfigNode
    require_new: bool = False


def _parse_value_expression(expression: str) -> ConfigNode:
    wrapper = read_string(f"value: {expression}\n", "<override>")
    if not wrapper.is_mapping():
        raise ConfigParseError("Override value parsing failed: unexpected YAML structure")
    if "value" not in wrapper.value:
        raise ConfigParseError("Override value parsing failed: missing 'value' key")
    return wrapper.value["value"]


def parse_override(expression: str) -> Override:
    """
    Interpreta uma expressão `[+]path=valor`.

    Raises:
        ConfigParseError: expressão vazia, `+` sem chave, ausência de `=`,
            path ou valor vazios, path inválido ou literal YAML inválido.
    """
    if not expression:
        raise ConfigParseError("Empty override expression")

    require_new = False
    working = expression
    if working.startswith("+"):
        require_new = True
        working = working[1:]
        if not working:
            raise ConfigParseError("Override expression missing key after '+'")

    path_part, sep, value_part = working.partition("=")
    if not sep:
        raise ConfigParseError(f"Override expression '{expression}' is missing '='")
    if not path_part:
        raise ConfigParseError(f"Override expression '{expression}' has empty key")
    if not value_part:
        raise ConfigParseError(f"Override expression '{expression}' has empty value")

    return Override(
        path=parse_path(path_part),
        value=_parse_value_expression(value_part),
        require_new=require_new,
    )


def apply_override(root: ConfigNode, override: Override) -> None:
    """Aplica um override já interpretado; o valor é copiado, nunca compartilhado."""
    assign_path(root, override.path, deep_copy(override.value), override.require_new)


def apply_overrides(root: ConfigNode, expressions: Iterable[str]) -> List[Override]:
    """
    Interpreta e aplica uma lista de expressões, em ordem.

    A primeira falha interrompe a operação; overrides anteriores já
    aplicados permanecem na árvore.

    Returns:
        List[Override]: overrides aplicados.
    """
    applied: List[Override] = []
    for expression in expressions:
        override = parse_override(expression)
        apply_override(root, override)
        logger.debug(
            "Applied override %s%s",
            "+" if override.require_new else "",
            render_path(override.path),
        )
        applied.append(override)
    return applied
