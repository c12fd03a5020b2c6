# src/hydralite/core/config/accessors.py
"""
Leitura tipada de valores obrigatórios da árvore resolvida.

Atalhos para código de aplicação que precisa ligar a configuração a
estruturas próprias:

    host = expect_string(config, ["database", "host"])
    port = expect_int(config, "database.port")

O path pode ser uma lista de componentes ou uma expressão pontilhada
(mesma gramática dos overrides).
"""

from __future__ import annotations

from typing import Sequence, Union

from .errors import MissingKeyError, TypeMismatchError
from .node import ConfigNode
from .paths import find_path, parse_path, render_path


PathArg = Union[str, Sequence[str]]


def _as_path(path: PathArg) -> Sequence[str]:
    if isinstance(path, str):
        return parse_path(path)
    return path


def has_node(root: ConfigNode, path: PathArg) -> bool:
    return find_path(root, _as_path(path)) is not None


def require_node(root: ConfigNode, path: PathArg) -> ConfigNode:
    """
    Retorna o nó em `path`.

    Raises:
        MissingKeyError: se o nó não existir.
    """
    components = _as_path(path)
    node = find_path(root, components)
    if node is None:
        raise MissingKeyError(
            f"Missing required configuration node: {render_path(components)}"
        )
    return node


def _expected(kind_label: str, path: PathArg, node: ConfigNode) -> TypeMismatchError:
    return TypeMismatchError(
        f"Expected {kind_label} at {render_path(_as_path(path))} "
        f"(got {node.type_name()})"
    )


def expect_string(root: ConfigNode, path: PathArg) -> str:
    node = require_node(root, path)
    if not node.is_string():
        raise _expected("string", path, node)
    return node.value


def expect_int(root: ConfigNode, path: PathArg) -> int:
    node = require_node(root, path)
    if not node.is_int():
        raise _expected("integer", path, node)
    return node.value


def expect_double(root: ConfigNode, path: PathArg) -> float:
    # int é aceito e convertido
    node = require_node(root, path)
    if not (node.is_double() or node.is_int()):
        raise _expected("numeric value", path, node)
    return node.as_double()


def expect_bool(root: ConfigNode, path: PathArg) -> bool:
    node = require_node(root, path)
    if not node.is_bool():
        raise _expected("boolean", path, node)
    return node.value
