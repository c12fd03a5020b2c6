# src/hydralite/core/__init__.py
"""
Core do hydralite.

Componentes:
    - config  → modelo de árvore e todas as operações sobre configuração
    - runtime → integração com a execução de uma aplicação

O core não depende da CLI: a CLI é apenas um adapter sobre estas camadas.
"""
