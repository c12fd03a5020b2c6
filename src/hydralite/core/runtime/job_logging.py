# src/hydralite/core/runtime/job_logging.py
"""
Configuração de logging a partir da árvore resolvida.

Chaves lidas:

    hydra:
      job_logging:
        root:
          level: DEBUG              # TRACE|DEBUG|INFO|WARN|WARNING|ERROR|FATAL
          handlers: [console, file]
        handlers:
          file:
            filename: run.log       # default: <hydra.run.dir>/<hydra.job.name>.log

Os handlers instalados no logger raiz são nomeados, de modo que uma
nova chamada substitui (ou mantém, se o arquivo for o mesmo) os
handlers da chamada anterior.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional

from hydralite.core.config.emitter import to_yaml_string
from hydralite.core.config.errors import ConfigIOError
from hydralite.core.config.node import ConfigNode
from hydralite.core.config.paths import find_path


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_HANDLER_NAME = "hydralite.console"
FILE_HANDLER_NAME = "hydralite.file"

_LEVELS = {
    "TRACE": logging.DEBUG,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "FATAL": logging.CRITICAL,
    "CRITICAL": logging.CRITICAL,
}


def parse_log_level(level: Optional[str]) -> int:
    """Converte o nome do nível; valores desconhecidos caem em INFO."""
    if level is None:
        return logging.INFO
    return _LEVELS.get(level.upper(), logging.INFO)


def _string_at(config: ConfigNode, path: List[str]) -> Optional[str]:
    node = find_path(config, path)
    if node is not None and node.is_string():
        return node.value
    return None


def _handler_names(config: ConfigNode) -> Optional[List[str]]:
    node = find_path(config, ["hydra", "job_logging", "root", "handlers"])
    if node is None or not node.is_sequence():
        return None
    return [item.value for item in node.value if item.is_string()]


def _log_file_path(config: ConfigNode) -> Optional[Path]:
    node = find_path(config, ["hydra", "job_logging", "handlers", "file", "filename"])
    if node is None:
        run_dir = _string_at(config, ["hydra", "run", "dir"]) or "."
        job_name = _string_at(config, ["hydra", "job", "name"]) or "app"
        return Path(run_dir) / f"{job_name}.log"
    if not node.is_string() or not node.value or node.value == "null":
        return None
    return Path(node.value)


def _find_handler(root: logging.Logger, name: str) -> Optional[logging.Handler]:
    for handler in root.handlers:
        if handler.get_name() == name:
            return handler
    return None


def _drop_handler(root: logging.Logger, name: str) -> None:
    handler = _find_handler(root, name)
    if handler is not None:
        root.removeHandler(handler)
        handler.close()


def _install_console(root: logging.Logger) -> None:
    if _find_handler(root, CONSOLE_HANDLER_NAME) is not None:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(CONSOLE_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)


def _install_file(root: logging.Logger, path: Path) -> None:
    resolved = path.resolve()
    existing = _find_handler(root, FILE_HANDLER_NAME)
    if isinstance(existing, logging.FileHandler) and Path(existing.baseFilename) == resolved:
        return
    _drop_handler(root, FILE_HANDLER_NAME)

    try:
        resolved.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(resolved, mode="w", encoding="utf-8")
    except OSError as e:
        raise ConfigIOError(f"Failed to open log file '{resolved}': {e.strerror or e}") from e
    handler.set_name(FILE_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)


def init_logging(config: ConfigNode) -> None:
    """
    Configura o logger raiz conforme `hydra.job_logging`.

    - nível: `hydra.job_logging.root.level` (default INFO)
    - console: quando listado em `handlers` ou quando não há lista
    - arquivo: quando `file` está listado; desativado por filename vazio/`null`

    Raises:
        ConfigIOError: se o arquivo de log não puder ser aberto.
    """
    root = logging.getLogger()
    level = parse_log_level(_string_at(config, ["hydra", "job_logging", "root", "level"]))
    root.setLevel(level)

    handlers = _handler_names(config)
    if handlers is None or "console" in handlers:
        _install_console(root)
    else:
        _drop_handler(root, CONSOLE_HANDLER_NAME)

    log_path = _log_file_path(config) if handlers and "file" in handlers else None
    if log_path is None:
        _drop_handler(root, FILE_HANDLER_NAME)
    else:
        _install_file(root, log_path)

    logger.debug("Logging initialised at level %s", logging.getLevelName(level))


def log_config(config: ConfigNode) -> None:
    """Registra a árvore serializada, linha a linha, em DEBUG."""
    logger.debug("--- resolved config ---")
    for line in to_yaml_string(config).splitlines():
        if line:
            logger.debug("%s", line)
