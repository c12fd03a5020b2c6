# tests/core/config/test_emitter.py
"""
Testes da serialização canônica em YAML.

Os testes asseguram que:
- a saída é determinística (chaves ordenadas, indentação de dois espaços)
- strings ambíguas recebem aspas duplas e escapes
- a saída relida reproduz a mesma árvore
"""

from pathlib import Path

import pytest

from hydralite.core.config.emitter import (
    escape_string,
    format_key,
    format_scalar,
    to_yaml_string,
    write_yaml_file,
)
from hydralite.core.config.errors import ConfigIOError
from hydralite.core.config.node import ConfigNode, make_double, make_string
from hydralite.core.config.reader import read_file, read_string


def test_block_layout_with_sorted_keys():
    tree = ConfigNode.from_python(
        {"b": 1, "a": {"x": [1, "two"], "e": {}}, "s": "true", "n": None, "l": []}
    )

    assert to_yaml_string(tree) == (
        "a:\n"
        "  e: {}\n"
        "  x:\n"
        "    - 1\n"
        "    - two\n"
        "b: 1\n"
        "l: []\n"
        "n: null\n"
        's: "true"\n'
    )


def test_nested_containers_inside_sequences():
    tree = ConfigNode.from_python([[1, 2], {"k": "v"}])

    assert to_yaml_string(tree) == "-\n  - 1\n  - 2\n-\n  k: v\n"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("plain", "plain"),
        ("", '""'),
        ("123", '"123"'),
        ("null", '"null"'),
        ("a: b", '"a: b"'),
        (" padded", '" padded"'),
        ('say "hi"', '"say \\"hi\\""'),
        ("line\nbreak", '"line\\nbreak"'),
        ("\x01", '"\\x01"'),
    ],
)
def test_string_quoting(value, expected):
    assert format_scalar(make_string(value)) == expected


def test_doubles_and_special_floats():
    assert format_scalar(make_double(0.1)) == "0.1"
    assert format_scalar(make_double(100.0)) == "100.0"
    assert format_scalar(make_double(float("inf"))) == ".inf"
    assert format_scalar(make_double(float("-inf"))) == "-.inf"
    assert format_scalar(make_double(float("nan"))) == ".nan"


def test_keys_with_dots_are_quoted():
    assert format_key("model.ckpt") == '"model.ckpt"'
    assert format_key("model") == "model"


def test_escape_string_unicode_separators():
    assert escape_string("a\u2028b") == '"a\\u2028b"'


def test_round_trip_preserves_tree(project_like_config_defaults_yaml):
    """
    Verifica que reler a saída do emitter reproduz a árvore original,
    inclusive para strings que seriam interpretadas como outros tipos.
    """
    tricky = {
        "numbers_as_text": ["1", "1.5", "true", "~", ""],
        "punctuation": ["a: b", "#hash", "- dash", "{x}", "it's", "back\\slash"],
        "whitespace": [" lead", "trail ", "tab\there", "multi\nline"],
        "unicode": ["café", "sep\u2028x", "bell\x07", "\x85"],
        "model.ckpt": {"1": "one", "": "empty"},
        "doubles": [0.1, 1e-07, 1e16, -2.5],
        "big": 9223372036854775807,
        "deep": {"a": [[{"b": [None, False]}]], "empty_map": {}, "empty_seq": []},
    }
    for data in (tricky, read_string(project_like_config_defaults_yaml).to_python()):
        tree = ConfigNode.from_python(data)
        assert read_string(to_yaml_string(tree)) == tree


def test_emission_is_deterministic():
    tree = ConfigNode.from_python({"z": 1, "a": {"y": 2, "b": 3}})

    assert to_yaml_string(tree) == to_yaml_string(ConfigNode.from_python(tree.to_python()))


def test_write_yaml_file(tmp_path: Path):
    tree = ConfigNode.from_python({"a": {"b": "c"}})
    target = tmp_path / "out.yaml"

    write_yaml_file(tree, target)

    assert read_file(target) == tree


def test_write_yaml_file_unwritable_is_io_error(tmp_path: Path):
    with pytest.raises(ConfigIOError):
        write_yaml_file(ConfigNode.from_python({}), tmp_path / "missing" / "out.yaml")


@pytest.mark.parametrize("value", ["...", "---", "--- x", "...x"])
def test_document_markers_are_quoted(value):
    tree = make_string(value)

    emitted = to_yaml_string(tree)

    assert emitted.startswith('"')
    assert read_string(emitted) == tree
    assert read_string(to_yaml_string(ConfigNode.from_python({"k": value}))).to_python() == {"k": value}
