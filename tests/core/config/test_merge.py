# tests/core/config/test_merge.py
"""
Testes da política de deep-merge de configuração.

Este módulo valida o comportamento de `merge` (in-place) e `merged`
(funcional), responsáveis por combinar uma árvore base com uma
árvore sobreposta.

Os testes asseguram que:
- valores escalares são sobrescritos
- mappings são mesclados de forma recursiva
- sequências são sobrescritas integralmente
- null na fonte apaga o destino; null no destino aceita a fonte
- conflitos de tipo resultam em substituição, nunca em erro
- a árvore fonte não é mutada nem compartilhada com o destino

Decisões arquiteturais:
    - O merge é determinístico
    - Não há heurísticas implícitas para listas (sem concatenação)

Limites explícitos:
    - Não valida carregamento de arquivos YAML
    - Não valida overrides de linha de comando
"""

import pytest

try:
    from hydralite.core.config.merge import merge, merged
    from hydralite.core.config.node import ConfigNode, make_int, make_null
    from hydralite.core.config.reader import read_string
except Exception as e:  # noqa: BLE001
    merge = None
    merged = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que os módulos de merge de config estejam disponíveis para os testes.

    Falha explicitamente com uma mensagem orientada quando `merge`
    e/ou `merged` não podem ser importados.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing merge module. Implement:\n"
            "- src/hydralite/core/config/merge.py (merge, merged)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def _tree(data):
    return ConfigNode.from_python(data)


def test_merge_simple_override():
    """
    Verifica o override básico de valores escalares.

    Invariantes:
        - O valor sobrescrito reflete exatamente a fonte
        - Chaves não sobrescritas permanecem inalteradas
    """
    _require_imports()
    destination = _tree({"a": 1, "b": 2})

    merge(destination, _tree({"b": 99}))

    assert destination.to_python() == {"a": 1, "b": 99}


def test_merge_nested_dicts():
    _require_imports()
    destination = _tree({"db": {"host": "localhost", "port": 5432}})

    merge(destination, _tree({"db": {"port": 6543, "user": "app"}}))

    assert destination.to_python() == {
        "db": {"host": "localhost", "port": 6543, "user": "app"}
    }


def test_merge_replaces_sequences_entirely():
    """
    Verifica que sequências nunca são concatenadas nem mescladas por índice.
    """
    _require_imports()
    destination = _tree({"tags": ["a", "b", "c"]})

    merge(destination, _tree({"tags": ["z"]}))

    assert destination.to_python() == {"tags": ["z"]}


def test_merge_null_source_clears_destination():
    _require_imports()
    destination = _tree({"db": {"host": "x"}})

    merge(destination, _tree({"db": None}))

    assert destination.to_python() == {"db": None}


def test_merge_into_null_destination_copies_source():
    _require_imports()
    destination = make_null()
    source = _tree({"a": [1]})

    merge(destination, source)

    assert destination == source
    assert destination.as_mapping()["a"] is not source.as_mapping()["a"]


def test_merge_type_conflict_replaces_destination():
    """
    Verifica que conflito de tipo (mapping x escalar) não é erro:
    o valor da fonte vence.
    """
    _require_imports()
    destination = _tree({"model": {"name": "resnet"}})

    merge(destination, _tree({"model": "vit"}))
    assert destination.to_python() == {"model": "vit"}

    merge(destination, _tree({"model": {"depth": 12}}))
    assert destination.to_python() == {"model": {"depth": 12}}


def test_merge_does_not_alias_source():
    _require_imports()
    destination = _tree({})
    source = _tree({"nested": {"value": 1}})

    merge(destination, source)
    destination.as_mapping()["nested"].as_mapping()["value"].replace(make_int(2))

    assert source.to_python() == {"nested": {"value": 1}}


def test_merged_does_not_mutate_inputs(
    project_like_config_defaults_yaml, project_like_config_local_yaml
):
    """
    Verifica a versão funcional sobre fontes YAML realistas.

    Invariantes:
        - `base` e `override` não sofrem mutação
        - Chaves não sobrescritas são preservadas
    """
    _require_imports()
    base = read_string(project_like_config_defaults_yaml)
    override = read_string(project_like_config_local_yaml)
    base_before = base.to_python()
    override_before = override.to_python()

    result = merged(base, override)

    assert base.to_python() == base_before
    assert override.to_python() == override_before
    assert result.to_python() == {
        "trainer": {"batch_size": 64, "max_epochs": 10, "lr": 0.001, "shuffle": True},
        "db": {"host": "db.internal", "port": 5432},
        "tags": ["gpu"],
    }


@pytest.mark.parametrize(
    "base, override",
    [
        ({"a": 1, "b": {"c": [1, 2]}}, {"b": {"c": [3], "d": None}}),
        ({"db": {"host": "x", "port": 1}}, {"db": None}),
        ({"db": None}, {"db": {"host": "y", "opts": {"ssl": True}}}),
        ({"tags": ["a"], "n": {"m": {"k": 1}}}, {"tags": [], "n": {"m": {"j": [None]}}}),
        ({"model": {"name": "resnet"}}, {"model": "vit"}),
        (None, {"a": [1, {"b": None}]}),
    ],
)
def test_merge_is_idempotent(base, override):
    """
    Verifica que mesclar a mesma fonte duas vezes equivale a mesclar uma vez:
    `merge(merge(A, B), B) == merge(A, B)`.
    """
    _require_imports()
    once = merged(_tree(base), _tree(override))
    twice = merged(once, _tree(override))

    assert twice == once
