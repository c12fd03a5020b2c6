# src/hydralite/core/config/node.py
"""
Modelo de árvore tipada do hydralite.

Este módulo define o `ConfigNode`, o valor canônico de uma árvore de
configuração. Cada nó carrega exatamente uma variante, identificada por
`NodeKind`:

    - null     → marcador explícito de ausência/apagamento
    - bool     → booleano
    - int      → inteiro com sinal de 64 bits
    - double   → ponto flutuante
    - string   → texto (possivelmente com placeholders `${...}`)
    - sequence → lista ordenada de `ConfigNode`
    - mapping  → dicionário `str -> ConfigNode` com chaves únicas

Princípios fundamentais:
    - Um nó é sempre exatamente uma variante
    - Atribuir um novo valor substitui a variante inteira
    - A posse dos filhos é exclusiva (árvore, sem referências compartilhadas)

Invariantes:
    - `deep_copy` produz uma árvore totalmente independente
    - Igualdade é estrutural: `int 1` e `double 1.0` são diferentes
    - Acessores checados nunca fazem coerção, exceto `as_double` sobre int

Limites explícitos:
    - Não realiza merge (ver `merge.py`)
    - Não navega paths (ver `paths.py`)
    - Não faz parsing nem serialização
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List

from .errors import TypeMismatchError


INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class NodeKind(str, Enum):
    """
    Variantes possíveis de um `ConfigNode`.

    Os valores são strings para facilitar mensagens de erro e inspeção
    (`type_name()` retorna exatamente o valor do enum).
    """
    NULL = "null"
    BOOL = "bool"
    INT = "int"
    DOUBLE = "double"
    STRING = "string"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


@dataclass
class ConfigNode:
    """
    Nó mutável da árvore de configuração.

    Campos:
        - kind: variante ativa
        - value: payload da variante (`None`, `bool`, `int`, `float`, `str`,
          `List[ConfigNode]` ou `Dict[str, ConfigNode]`)

    O nó é mutável para permitir as operações in-place da engine
    (merge, override e interpolação) preservando a referência do dono.
    Para construir nós use as fábricas `make_*` ou `ConfigNode.from_python`.
    """

    kind: NodeKind = NodeKind.NULL
    value: Any = None

    # -----------------------------
    # Predicados
    # -----------------------------
    def is_null(self) -> bool:
        return self.kind is NodeKind.NULL

    def is_bool(self) -> bool:
        return self.kind is NodeKind.BOOL

    def is_int(self) -> bool:
        return self.kind is NodeKind.INT

    def is_double(self) -> bool:
        return self.kind is NodeKind.DOUBLE

    def is_string(self) -> bool:
        return self.kind is NodeKind.STRING

    def is_sequence(self) -> bool:
        return self.kind is NodeKind.SEQUENCE

    def is_mapping(self) -> bool:
        return self.kind is NodeKind.MAPPING

    def is_container(self) -> bool:
        return self.kind in (NodeKind.SEQUENCE, NodeKind.MAPPING)

    def empty(self) -> bool:
        """True para null, sequência vazia ou mapping vazio."""
        if self.is_null():
            return True
        if self.is_container():
            return len(self.value) == 0
        return False

    def type_name(self) -> str:
        return self.kind.value

    # -----------------------------
    # Acessores checados
    # -----------------------------
    def _expect(self, kind: NodeKind, label: str) -> Any:
        if self.kind is not kind:
            raise TypeMismatchError(
                f"ConfigNode: value is not {label} (got {self.type_name()})"
            )
        return self.value

    def as_bool(self) -> bool:
        return self._expect(NodeKind.BOOL, "a bool")

    def as_int(self) -> int:
        return self._expect(NodeKind.INT, "an int")

    def as_double(self) -> float:
        if self.is_int():
            return float(self.value)
        if not self.is_double():
            raise TypeMismatchError(
                f"ConfigNode: value is not numeric (got {self.type_name()})"
            )
        return self.value

    def as_string(self) -> str:
        return self._expect(NodeKind.STRING, "a string")

    def as_sequence(self) -> List["ConfigNode"]:
        return self._expect(NodeKind.SEQUENCE, "a sequence")

    def as_mapping(self) -> Dict[str, "ConfigNode"]:
        return self._expect(NodeKind.MAPPING, "a mapping")

    # -----------------------------
    # Mutação
    # -----------------------------
    def replace(self, other: "ConfigNode") -> None:
        """
        Substitui a variante deste nó pela de `other`, in-place.

        A posse do payload de `other` é transferida: o chamador não deve
        continuar usando `other` depois da chamada.
        """
        self.kind = other.kind
        self.value = other.value

    # -----------------------------
    # Conversão para/de objetos Python
    # -----------------------------
    @classmethod
    def from_python(cls, obj: Any) -> "ConfigNode":
        """
        Constrói uma árvore a partir de valores Python puros.

        Mapeamento: None→null, bool→bool, int→int, float→double, str→string,
        list/tuple→sequence, dict→mapping (chaves devem ser str).
        Um `ConfigNode` recebido é copiado profundamente.

        Raises:
            TypeMismatchError: para tipos não representáveis ou chaves não-str.
            ValueError: para inteiros fora do intervalo int64.
        """
        if isinstance(obj, ConfigNode):
            return deep_copy(obj)
        if obj is None:
            return make_null()
        if isinstance(obj, bool):
            return make_bool(obj)
        if isinstance(obj, int):
            return make_int(obj)
        if isinstance(obj, float):
            return make_double(obj)
        if isinstance(obj, str):
            return make_string(obj)
        if isinstance(obj, (list, tuple)):
            return cls(NodeKind.SEQUENCE, [cls.from_python(item) for item in obj])
        if isinstance(obj, dict):
            mapping: Dict[str, ConfigNode] = {}
            for key, item in obj.items():
                if not isinstance(key, str):
                    raise TypeMismatchError(
                        f"mapping keys must be strings, got {type(key).__name__}"
                    )
                mapping[key] = cls.from_python(item)
            return cls(NodeKind.MAPPING, mapping)
        raise TypeMismatchError(
            f"cannot represent {type(obj).__name__} as a ConfigNode"
        )

    def to_python(self) -> Any:
        """Converte a árvore em `None/bool/int/float/str/list/dict` puros."""
        if self.is_sequence():
            return [item.to_python() for item in self.value]
        if self.is_mapping():
            return {key: item.to_python() for key, item in self.value.items()}
        return self.value


# -----------------------------
# Fábricas
# -----------------------------
def make_null() -> ConfigNode:
    return ConfigNode(NodeKind.NULL, None)


def make_bool(value: bool) -> ConfigNode:
    return ConfigNode(NodeKind.BOOL, bool(value))


def make_int(value: int) -> ConfigNode:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeMismatchError(f"expected int, got {type(value).__name__}")
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"integer {value} is outside the int64 range")
    return ConfigNode(NodeKind.INT, value)


def make_double(value: float) -> ConfigNode:
    return ConfigNode(NodeKind.DOUBLE, float(value))


def make_string(value: str) -> ConfigNode:
    if not isinstance(value, str):
        raise TypeMismatchError(f"expected str, got {type(value).__name__}")
    return ConfigNode(NodeKind.STRING, value)


def make_sequence() -> ConfigNode:
    return ConfigNode(NodeKind.SEQUENCE, [])


def make_mapping() -> ConfigNode:
    return ConfigNode(NodeKind.MAPPING, {})


def deep_copy(node: ConfigNode) -> ConfigNode:
    """Copia recursivamente `node`, alocando uma árvore independente."""
    if node.is_sequence():
        return ConfigNode(NodeKind.SEQUENCE, [deep_copy(child) for child in node.value])
    if node.is_mapping():
        return ConfigNode(
            NodeKind.MAPPING,
            {key: deep_copy(child) for key, child in node.value.items()},
        )
    return ConfigNode(node.kind, node.value)
