# tests/conftest.py
"""
Fixtures compartilhados para testes do hydralite.

Este módulo define fixtures reutilizáveis que fornecem:
- conteúdo YAML semelhante ao uso real (defaults + overrides locais)
- uma árvore de arquivos com `defaults` e grupos (`db/postgres.yaml`)
- um helper para gravar fontes YAML em `tmp_path`
- limpeza dos handlers de logging instalados pela engine

Decisões arquiteturais:
    - Fontes YAML fornecidas como string sempre que o teste não exige I/O
    - Arquivos reais criados apenas sob `tmp_path`
    - Imports do core são realizados de forma lazy dentro das fixtures

Invariantes:
    - Nenhuma fixture depende de variáveis de ambiente do host
    - Nenhuma fixture escreve fora de `tmp_path`
    - O logger raiz volta ao estado original após cada teste

Limites explícitos:
    - Não substituir testes de integração da CLI
    - Não conter lógica condicional complexa
"""

import logging
from pathlib import Path

import pytest


# =====================================================
# Fontes YAML em memória
# =====================================================

@pytest.fixture
def project_like_config_defaults_yaml() -> str:
    """
    YAML base semelhante ao `config.yaml` de um projeto real.

    Usado por:
        - Testes de merge (base + local)
        - Testes do emitter (round trip)
    """
    return """\
trainer:
  batch_size: 16
  max_epochs: 10
  lr: 0.001
  shuffle: true
db:
  host: localhost
  port: 5432
tags: [baseline, cpu]
"""


@pytest.fixture
def project_like_config_local_yaml() -> str:
    """YAML local com overrides sobre `project_like_config_defaults_yaml`."""
    return """\
trainer:
  batch_size: 64
db:
  host: db.internal
tags: [gpu]
"""


# =====================================================
# Árvores de arquivos
# =====================================================

@pytest.fixture
def write_yaml(tmp_path: Path):
    """
    Fixture factory que grava um arquivo YAML relativo a `tmp_path`.

    Diretórios intermediários são criados conforme necessário.

    Returns:
        Callable[[str, str], Path]: `write_yaml("db/postgres.yaml", texto)`.
    """

    def _write(relative: str, content: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def composed_project(write_yaml) -> Path:
    """
    Projeto com composição via `defaults`:

        main.yaml          → inclui `db: postgres` e `?extras` (opcional, ausente)
        db/postgres.yaml   → host/port do banco

    Returns:
        Path: caminho do `main.yaml`.
    """
    write_yaml(
        "db/postgres.yaml",
        "host: localhost\nport: 5432\n",
    )
    return write_yaml(
        "main.yaml",
        """\
defaults:
  - db: postgres
  - ?extras
  - _self_
db:
  port: 6543
app:
  url: "postgres://${db.host}:${db.port}"
""",
    )


# =====================================================
# Logging
# =====================================================

@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Remove handlers nomeados `hydralite.*` e restaura o nível do logger raiz."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        name = handler.get_name() or ""
        if name.startswith("hydralite."):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
