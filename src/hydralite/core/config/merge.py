# src/hydralite/core/config/merge.py
"""
Política canônica de merge de árvores de configuração.

Este módulo implementa a regra de merge usada pela composição
(`defaults`), pela CLI (múltiplos `-c`) e por qualquer chamador que
precise sobrepor uma árvore a outra.

Política de merge:
    - source null            → destino vira null (null apaga, não é "ausente")
    - destino null           → destino vira cópia profunda de source
    - mapping + mapping      → merge recursivo por chave
    - qualquer outro caso    → destino substituído por cópia de source
      (sequências e escalares nunca são mesclados elemento a elemento)

Invariantes:
    - `source` nunca é mutado nem compartilhado com o destino
    - Chaves ausentes em `source` são preservadas no destino
    - `merge(merge(A, B), B) == merge(A, B)`

Limites explícitos:
    - Não carrega arquivos
    - Não resolve interpolações
    - Não realiza coerção de tipos
"""

from .node import ConfigNode, deep_copy, make_null


def merge(destination: ConfigNode, source: ConfigNode) -> None:
    """
    Mescla `source` sobre `destination`, in-place.

    Diferente de um merge estritamente tipado, conflitos de tipo não são
    erro: o valor de `source` vence e substitui a variante do destino.
    Apenas mappings são combinados recursivamente.

    Args:
        destination (ConfigNode): Nó que recebe o merge (mutado).
        source (ConfigNode): Nó sobreposto (somente leitura).
    """
    if source.is_null():
        destination.replace(make_null())
        return

    if destination.is_null():
        destination.replace(deep_copy(source))
        return

    if destination.is_mapping() and source.is_mapping():
        target = destination.value
        for key, source_value in source.value.items():
            if key not in target:
                target[key] = deep_copy(source_value)
                continue
            # dict -> merge recursivo
            merge(target[key], source_value)
        return

    # sequência, escalar ou conflito de tipo -> sobrescrita total
    destination.replace(deep_copy(source))


def merged(base: ConfigNode, override: ConfigNode) -> ConfigNode:
    """Versão funcional de `merge`: retorna uma nova árvore sem mutar os inputs."""
    result = deep_copy(base)
    merge(result, override)
    return result
