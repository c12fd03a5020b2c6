# src/hydralite/core/runtime/__init__.py
"""
Integração da configuração com a execução de uma aplicação:
diretório de execução, artefatos `.hydra/`, logging e `initialize`.
"""
