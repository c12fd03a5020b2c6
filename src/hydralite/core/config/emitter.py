# src/hydralite/core/config/emitter.py
"""
Serialização canônica de `ConfigNode` em YAML block-style.

Formato:
    - mappings como linhas `chave: valor`, chaves em ordem lexicográfica
    - sequências como linhas `- valor`
    - containers aninhados indentados com dois espaços por nível
    - containers vazios inline (`{}` / `[]`)

Strings recebem aspas duplas (com escapes estilo C) quando seriam
relidas como outro tipo ou quando contêm pontuação significativa para
YAML; chaves também são protegidas quando contêm `.`, para não serem
confundidas com paths.

Invariantes:
    - `read_string(to_yaml_string(t)) == t` para árvores sem NaN/Inf
    - A mesma árvore produz sempre o mesmo texto
"""

from __future__ import annotations

import math
import os
from io import StringIO
from pathlib import Path
from typing import TextIO, Union

from .errors import ConfigIOError, TypeMismatchError
from .node import ConfigNode
from .reader import interpret_scalar


_SPECIAL_CHARS = frozenset(":#&*?|-<>=!%@[]{},'\"`\\")
_SIMPLE_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def _needs_escape(ch: str) -> bool:
    code = ord(ch)
    return code < 0x20 or 0x7F <= code <= 0x9F or ch in "\u2028\u2029\ufeff"


def _needs_quoting(value: str, is_key: bool) -> bool:
    if not value:
        return True
    if not interpret_scalar(value).is_string():
        return True
    if any(ch in _SPECIAL_CHARS or _needs_escape(ch) for ch in value):
        return True
    if value[0] == " " or value[-1] == " ":
        return True
    # marcadores de documento
    if value.startswith(("---", "...")):
        return True
    if is_key and "." in value:
        return True
    return False


def escape_string(value: str) -> str:
    """Envolve `value` em aspas duplas, escapando caracteres especiais."""
    out = ['"']
    for ch in value:
        if ch in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[ch])
        elif _needs_escape(ch):
            code = ord(ch)
            out.append(f"\\x{code:02x}" if code <= 0xFF else f"\\u{code:04x}")
        else:
            out.append(ch)
    out.append('"')
    return "".join(out)


def format_scalar(node: ConfigNode) -> str:
    if node.is_null():
        return "null"
    if node.is_bool():
        return "true" if node.value else "false"
    if node.is_int():
        return str(node.value)
    if node.is_double():
        value = node.value
        if math.isnan(value):
            return ".nan"
        if math.isinf(value):
            return ".inf" if value > 0 else "-.inf"
        return repr(value)
    if node.is_string():
        if _needs_quoting(node.value, is_key=False):
            return escape_string(node.value)
        return node.value
    raise TypeMismatchError("Cannot format non-scalar node directly")


def format_key(key: str) -> str:
    if _needs_quoting(key, is_key=True):
        return escape_string(key)
    return key


def _emit_child(prefix: str, value: ConfigNode, out: TextIO, indent: int) -> None:
    if value.is_container():
        if value.empty():
            out.write(f"{prefix} {'{}' if value.is_mapping() else '[]'}\n")
        else:
            out.write(f"{prefix}\n")
            emit_yaml(value, out, indent + 2)
    else:
        out.write(f"{prefix} {format_scalar(value)}\n")


def emit_yaml(node: ConfigNode, out: TextIO, indent: int = 0) -> None:
    """Escreve `node` em `out` a partir da indentação dada."""
    pad = " " * indent
    if node.is_mapping():
        if not node.value:
            out.write(f"{pad}{{}}\n")
            return
        for key in sorted(node.value):
            _emit_child(f"{pad}{format_key(key)}:", node.value[key], out, indent)
    elif node.is_sequence():
        if not node.value:
            out.write(f"{pad}[]\n")
            return
        for item in node.value:
            _emit_child(f"{pad}-", item, out, indent)
    else:
        out.write(f"{pad}{format_scalar(node)}\n")


def to_yaml_string(node: ConfigNode) -> str:
    buffer = StringIO()
    emit_yaml(node, buffer)
    return buffer.getvalue()


def write_yaml_file(node: ConfigNode, path: Union[str, os.PathLike]) -> None:
    """
    Grava `node` em `path` (UTF-8).

    Raises:
        ConfigIOError: se o arquivo não puder ser aberto para escrita.
    """
    try:
        with Path(path).open("w", encoding="utf-8") as f:
            emit_yaml(node, f)
    except OSError as e:
        raise ConfigIOError(f"Failed to open output file '{path}': {e.strerror or e}") from e
