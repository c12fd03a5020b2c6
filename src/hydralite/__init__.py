# src/hydralite/__init__.py
"""
hydralite: configuração hierárquica composta a partir de arquivos YAML.

Arquitetura em alto nível:
    - core.config   → árvore de configuração, merge, paths, leitura/escrita
                      YAML, composição via `defaults`, overrides e interpolação
    - core.runtime  → bootstrap de uma execução (run dir, logging, job name)
    - cli           → comando `hydralite`

Fluxo canônico:

    compose (defaults) → overrides → interpolação → leitura tipada

Limites explícitos:
    - Não valida schema
    - Não executa sweeps/multirun
    - Não oferece resolvers de interpolação plugáveis
"""

from .core.config.accessors import (
    expect_bool,
    expect_double,
    expect_int,
    expect_string,
    has_node,
    require_node,
)
from .core.config.emitter import to_yaml_string, write_yaml_file
from .core.config.errors import (
    ConfigError,
    ConfigIOError,
    ConfigParseError,
    CyclicIncludeError,
    CyclicInterpolationError,
    InterpolationTypeError,
    InvalidDefaultsError,
    MissingKeyError,
    StructuralConflictError,
    TypeMismatchError,
    UnresolvedReferenceError,
)
from .core.config.interpolation import resolve_interpolations
from .core.config.loader import load_config_file, load_config_files, load_config_string
from .core.config.merge import merge, merged
from .core.config.node import ConfigNode, NodeKind
from .core.config.overrides import apply_overrides, parse_override
from .core.config.paths import assign_path, find_path, parse_path, render_path
from .core.runtime.app import initialize

__version__ = "0.1.0"

__all__ = [
    "ConfigNode",
    "NodeKind",
    "merge",
    "merged",
    "parse_path",
    "render_path",
    "find_path",
    "assign_path",
    "load_config_file",
    "load_config_files",
    "load_config_string",
    "parse_override",
    "apply_overrides",
    "resolve_interpolations",
    "to_yaml_string",
    "write_yaml_file",
    "has_node",
    "require_node",
    "expect_string",
    "expect_int",
    "expect_double",
    "expect_bool",
    "initialize",
    "ConfigError",
    "ConfigParseError",
    "InvalidDefaultsError",
    "TypeMismatchError",
    "InterpolationTypeError",
    "MissingKeyError",
    "StructuralConflictError",
    "CyclicIncludeError",
    "CyclicInterpolationError",
    "UnresolvedReferenceError",
    "ConfigIOError",
]
