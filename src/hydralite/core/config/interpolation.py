# src/hydralite/core/config/interpolation.py
"""
Resolução de interpolações `${...}` sobre a árvore composta.

Executada depois da composição e dos overrides, reescreve in-place toda
string que contém placeholders. Tipos de expressão (por prefixo):

    ${now:%Y-%m-%d}            → horário local formatado via strftime
    ${oc.env:HOME}             → variável de ambiente ("" se ausente)
    ${oc.env:OUT_DIR,outputs}  → variável de ambiente com fallback
    ${trainer.batch_size}      → referência pontilhada a outro nó

Uma referência resolve primeiro o nó alvo, portanto sempre observa o
valor final, independente da ordem de travessia. O fallback de
`oc.env` é ele próprio conteúdo interpolável no mesmo path
(`${oc.env:A,${paths.default}}`).

Decisões arquiteturais:
    - Dois conjuntos por execução: `resolving` (em andamento) e
      `resolved` (concluídos), indexados pela tupla de componentes do path
    - Cada nó é resolvido no máximo uma vez; um ciclo de referências
      termina com `CyclicInterpolationError`
    - `now:` é amostrado a cada referência (não há cache entre nós)
    - O texto substituído não é reprocessado: um valor final contendo
      `${` literal permanece como está

Limites explícitos:
    - Referências só atravessam mappings (índices de sequência não são endereçáveis)
    - Containers não podem ser interpolados dentro de strings
"""

from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import List, Sequence, Set, Tuple

from .errors import (
    ConfigParseError,
    CyclicInterpolationError,
    InterpolationTypeError,
    UnresolvedReferenceError,
)
from .node import ConfigNode, make_string
from .paths import find_path, parse_path, render_path


logger = logging.getLogger(__name__)

NOW_PREFIX = "now:"
ENV_PREFIX = "oc.env:"


def format_now(pattern: str) -> str:
    """Formata o horário local atual segundo `pattern` (strftime)."""
    return datetime.now().strftime(pattern)


def node_to_string(node: ConfigNode) -> str:
    """Forma textual de um escalar para substituição em string."""
    if node.is_string():
        return node.value
    if node.is_bool():
        return "true" if node.value else "false"
    if node.is_int():
        return str(node.value)
    if node.is_double():
        return repr(node.value)
    if node.is_null():
        return "null"
    raise InterpolationTypeError(
        f"Cannot interpolate complex node types ({node.type_name()})"
    )


# Fecha no `}` balanceado, não no próximo `}`: `${oc.env:A,${b}}` é um único placeholder.
def _find_closing_brace(value: str, start: int) -> int:
    depth = 1
    index = start
    while index < len(value):
        if value.startswith("${", index):
            depth += 1
            index += 2
            continue
        if value[index] == "}":
            depth -= 1
            if depth == 0:
                return index
        index += 1
    return -1


class _ResolutionPass:
    """Estado de uma única execução de `resolve_interpolations`."""

    def __init__(self, root: ConfigNode):
        self.root = root
        self.resolving: Set[Tuple[str, ...]] = set()
        self.resolved: Set[Tuple[str, ...]] = set()

    def resolve_node(self, node: ConfigNode, path: List[str]) -> None:
        key = tuple(path)
        if key in self.resolved:
            return
        if key in self.resolving:
            raise CyclicInterpolationError(
                f"Detected interpolation cycle involving '{render_path(path)}'"
            )
        self.resolving.add(key)

        try:
            if node.is_mapping():
                for child_key, child in node.value.items():
                    self.resolve_node(child, path + [child_key])
            elif node.is_sequence():
                for index, child in enumerate(node.value):
                    self.resolve_node(child, path + [str(index)])
            elif node.is_string() and "${" in node.value:
                node.replace(make_string(self.resolve_string(path, node.value)))
        finally:
            self.resolving.discard(key)

        self.resolved.add(key)

    def resolve_string(self, path: Sequence[str], value: str) -> str:
        parts: List[str] = []
        pos = 0
        while pos < len(value):
            start = value.find("${", pos)
            if start == -1:
                parts.append(value[pos:])
                break
            parts.append(value[pos:start])
            end = _find_closing_brace(value, start + 2)
            if end == -1:
                raise ConfigParseError(
                    f"Unterminated ${{...}} placeholder in '{value}' "
                    f"at '{render_path(path)}'"
                )
            parts.append(self.resolve_expression(path, value[start + 2:end]))
            pos = end + 1
        return "".join(parts)

    def resolve_expression(self, path: Sequence[str], expression: str) -> str:
        if expression.startswith(NOW_PREFIX):
            return format_now(expression[len(NOW_PREFIX):])
        if expression.startswith(ENV_PREFIX):
            return self.resolve_env(path, expression[len(ENV_PREFIX):])

        target_path = parse_path(expression)
        target = find_path(self.root, target_path)
        if target is None:
            raise UnresolvedReferenceError(
                f"Interpolation reference '{expression}' not found "
                f"(referenced from '{render_path(path)}')"
            )
        self.resolve_node(target, target_path)
        return node_to_string(target)

    def resolve_env(self, path: Sequence[str], body: str) -> str:
        name, _, fallback = body.partition(",")
        name = name.strip()
        fallback = fallback.strip()

        env_value = os.environ.get(name)
        if env_value:
            return env_value
        if not fallback:
            return ""
        logger.debug("Environment variable %s unset, using fallback at %s", name, render_path(path))
        return self.resolve_string(path, fallback)


def resolve_interpolations(root: ConfigNode) -> None:
    """
    Resolve, in-place, todos os placeholders `${...}` da árvore.

    Args:
        root (ConfigNode): Árvore composta e com overrides aplicados.

    Raises:
        ConfigParseError: placeholder não terminado ou referência com path inválido.
        UnresolvedReferenceError: referência a nó inexistente.
        CyclicInterpolationError: ciclo de referências.
        InterpolationTypeError: referência a mapping/sequência dentro de string.
    """
    _ResolutionPass(root).resolve_node(root, [])
