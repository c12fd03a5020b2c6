# src/hydralite/core/config/reader.py
"""
Leitura de fontes YAML para `ConfigNode`.

O PyYAML é usado apenas como tokenizador orientado a eventos
(`yaml.parse`): escalares chegam como texto cru e a interpretação de
tipos é feita aqui, por sintaxe literal, independente do resolver
implícito do PyYAML.

Interpretação de escalares plain (sem aspas):
    - `null`, `~` (case-insensitive)         → null
    - vazio (`key:`)                         → string ""
    - `true` / `false` (case-insensitive)    → bool
    - literal inteiro dentro de int64        → int
      (sinal opcional; zero à esquerda não é aceito, exceto o próprio `0`)
    - literal float com `.` e/ou expoente     → double (overflow vira string)
    - qualquer outro texto                    → string

Escalares com aspas (ou com tag `!!str`) são sempre strings.

Limites explícitos:
    - Anchors e aliases não são suportados (erro explícito)
    - Apenas um documento por fonte
    - Chaves de mapping precisam ser interpretadas como string
"""

from __future__ import annotations

import math
import re
from pathlib import Path
from typing import Iterator, Optional

import yaml

from .errors import ConfigIOError, ConfigParseError
from .node import (
    INT64_MAX,
    INT64_MIN,
    ConfigNode,
    NodeKind,
    make_bool,
    make_double,
    make_int,
    make_null,
    make_string,
)


_INT_LITERAL = re.compile(r"[+-]?(?:0|[1-9][0-9]*)")
_FLOAT_LITERAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_STR_TAG = "tag:yaml.org,2002:str"


def interpret_scalar(text: str) -> ConfigNode:
    """Interpreta o texto de um escalar plain segundo a sintaxe literal."""
    lower = text.lower()

    if lower in ("null", "~"):
        return make_null()
    if lower == "true":
        return make_bool(True)
    if lower == "false":
        return make_bool(False)

    if _INT_LITERAL.fullmatch(text):
        parsed = int(text)
        if INT64_MIN <= parsed <= INT64_MAX:
            return make_int(parsed)
        # fora do intervalo int64 -> string

    if _FLOAT_LITERAL.fullmatch(text) and ("." in text or "e" in lower):
        parsed_float = float(text)
        underflow = parsed_float == 0.0 and any(ch in "123456789" for ch in lower.split("e")[0])
        if not math.isinf(parsed_float) and not underflow:
            return make_double(parsed_float)

    return make_string(text)


class _EventReader:
    """Percorre o stream de eventos do PyYAML construindo a árvore."""

    def __init__(self, content: str, name: str):
        self._name = name
        self._events: Iterator[yaml.Event] = yaml.parse(content, Loader=yaml.SafeLoader)

    def _next(self) -> yaml.Event:
        try:
            return next(self._events)
        except yaml.YAMLError as e:
            raise ConfigParseError(f"YAML parse error in {self._name}: {e}") from e
        except StopIteration:
            raise ConfigParseError(f"YAML parse error in {self._name}: unexpected end of stream")

    def _fail(self, message: str) -> ConfigParseError:
        return ConfigParseError(f"{message} (in {self._name})")

    def read_stream(self) -> ConfigNode:
        event = self._next()
        if not isinstance(event, yaml.StreamStartEvent):
            raise self._fail("YAML stream did not start correctly")

        event = self._next()
        if isinstance(event, yaml.StreamEndEvent):
            return make_null()
        if not isinstance(event, yaml.DocumentStartEvent):
            raise self._fail("Expected YAML document start")

        root = self._read_node(self._next())

        if not isinstance(self._next(), yaml.DocumentEndEvent):
            raise self._fail("Expected YAML document end")
        if not isinstance(self._next(), yaml.StreamEndEvent):
            raise self._fail("Expected a single YAML document")
        return root

    def _read_node(self, event: yaml.Event) -> ConfigNode:
        if isinstance(event, yaml.AliasEvent):
            raise self._fail("YAML aliases are not supported")
        if isinstance(event, yaml.NodeEvent) and event.anchor is not None:
            raise self._fail(f"YAML anchors are not supported ('&{event.anchor}')")

        if isinstance(event, yaml.ScalarEvent):
            if event.style is not None or event.tag == _STR_TAG:
                return make_string(event.value)
            return interpret_scalar(event.value)
        if isinstance(event, yaml.SequenceStartEvent):
            return self._read_sequence()
        if isinstance(event, yaml.MappingStartEvent):
            return self._read_mapping()
        raise self._fail(f"Unexpected YAML event while parsing node: {type(event).__name__}")

    def _read_sequence(self) -> ConfigNode:
        items = []
        while True:
            event = self._next()
            if isinstance(event, yaml.SequenceEndEvent):
                return ConfigNode(NodeKind.SEQUENCE, items)
            items.append(self._read_node(event))

    def _read_mapping(self) -> ConfigNode:
        mapping = {}
        while True:
            event = self._next()
            if isinstance(event, yaml.MappingEndEvent):
                return ConfigNode(NodeKind.MAPPING, mapping)
            key = self._read_node(event)
            if not key.is_string():
                raise self._fail(
                    f"YAML mapping keys must be strings (got {key.type_name()})"
                )
            mapping[key.value] = self._read_node(self._next())


def read_string(content: str, name: str = "<string>") -> ConfigNode:
    """
    Faz o parse de um único documento YAML em memória.

    Args:
        content: Texto YAML.
        name: Nome usado nas mensagens de erro.

    Returns:
        ConfigNode: raiz do documento (null para stream vazio).

    Raises:
        ConfigParseError: se o YAML for inválido ou usar recursos não suportados.
    """
    return _EventReader(content, name).read_stream()


def read_file(path: Path, name: Optional[str] = None) -> ConfigNode:
    """Lê e faz o parse de um arquivo YAML (sem processar `defaults`)."""
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigIOError(f"Failed to open YAML file '{path}': {e.strerror or e}") from e
    return read_string(content, name or str(path))
