# src/hydralite/core/config/paths.py
"""
Gramática de paths pontilhados e navegação na árvore.

Um path é uma sequência ordenada e não vazia de componentes string.
Na forma textual os componentes são separados por `.`; `\\.` e `\\\\`
permitem um ponto ou uma barra invertida literais dentro de um componente.

    parse_path("trainer.max_epochs")   -> ["trainer", "max_epochs"]
    parse_path("files.model\\.ckpt")   -> ["files", "model.ckpt"]

A mesma gramática é compartilhada por overrides, referências de
interpolação e chaves de grupo em `defaults`.

Política de atribuição (`assign_path`):

    | chave existe | require_new | resultado                  |
    |--------------|-------------|----------------------------|
    | sim          | False       | update                     |
    | não          | True        | insert                     |
    | não          | False       | MissingKeyError            |
    | sim          | True        | StructuralConflictError    |

Invariantes:
    - `parse_path(render_path(p)) == p` para qualquer path válido
    - `find_path` nunca levanta exceção por ausência
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from .errors import ConfigParseError, MissingKeyError, StructuralConflictError
from .node import ConfigNode, make_mapping


KeyPath = List[str]

ROOT_LABEL = "<root>"


def parse_path(expression: str) -> KeyPath:
    """
    Converte uma expressão pontilhada em lista de componentes.

    Raises:
        ConfigParseError: expressão vazia, componente vazio, `.` final
            ou `\\` pendente no fim da expressão.
    """
    if not expression:
        raise ConfigParseError("Path expression cannot be empty")

    components: KeyPath = []
    current: List[str] = []
    escape = False

    for ch in expression:
        if escape:
            current.append(ch)
            escape = False
        elif ch == "\\":
            escape = True
        elif ch == ".":
            if not current:
                raise ConfigParseError(
                    f"Empty path component in expression '{expression}'"
                )
            components.append("".join(current))
            current = []
        else:
            current.append(ch)

    if escape:
        raise ConfigParseError(f"Dangling escape in path expression '{expression}'")
    if not current:
        raise ConfigParseError(f"Path expression '{expression}' cannot end with '.'")
    components.append("".join(current))
    return components


def render_path(path: Sequence[str]) -> str:
    """Inverso de `parse_path`; o path vazio (raiz) é exibido como `<root>`."""
    if not path:
        return ROOT_LABEL
    return ".".join(
        component.replace("\\", "\\\\").replace(".", "\\.") for component in path
    )


def find_path(root: ConfigNode, path: Sequence[str]) -> Optional[ConfigNode]:
    """Retorna o nó em `path` ou `None` (só atravessa mappings)."""
    current = root
    for component in path:
        if not current.is_mapping():
            return None
        child = current.value.get(component)
        if child is None:
            return None
        current = child
    return current


def assign_path(
    root: ConfigNode,
    path: Sequence[str],
    value: ConfigNode,
    require_new: bool,
) -> None:
    """
    Grava `value` em `path`, criando mappings intermediários somente
    quando `require_new` é verdadeiro.

    A raiz null é promovida in-place a mapping vazio; qualquer outra raiz
    não-mapping é um conflito estrutural.

    Raises:
        ConfigParseError: path vazio.
        MissingKeyError: chave ausente sem `require_new`.
        StructuralConflictError: raiz ou componente intermediário não-mapping,
            ou chave existente com `require_new`.
    """
    if not path:
        raise ConfigParseError("Cannot assign empty path")

    if root.is_null():
        root.replace(make_mapping())
    elif not root.is_mapping():
        raise StructuralConflictError(
            f"Root configuration is not a mapping ({root.type_name()})"
        )

    current = root
    last = len(path) - 1
    for index, segment in enumerate(path):
        mapping = current.value
        exists = segment in mapping

        if index == last:
            if not exists and not require_new:
                raise MissingKeyError(
                    f"Key '{segment}' does not exist. "
                    f"Use '+{segment}=...' to add new parameters."
                )
            if exists and require_new:
                raise StructuralConflictError(
                    f"Cannot add new key '{segment}' because it already exists"
                )
            mapping[segment] = value
            return

        if not exists:
            if not require_new:
                raise MissingKeyError(
                    f"Path component '{segment}' does not exist. "
                    f"Use '+{segment}=...' to introduce new nested parameters."
                )
            mapping[segment] = make_mapping()
        elif not mapping[segment].is_mapping():
            raise StructuralConflictError(
                f"Path component '{segment}' refers to a non-mapping node "
                f"({mapping[segment].type_name()})"
            )
        current = mapping[segment]
