"""
Parsing and rendering benchmarks comparing jtree against standard libraries.

Parsers compared:
- Standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)
- jtree (tokenize, then recursive descent into JsonValue trees)
"""

import json
from collections.abc import Callable
from typing import Any

import orjson
import pytest
import ujson  # type: ignore[import-untyped]

import jtree
from benchmarks.data_generators import DATA_TYPES
from benchmarks.data_generators import generate_test_data

PARSERS: list[tuple[str, Callable[[Any], Any]]] = [
    ("stdlib_json", json.loads),
    ("orjson", orjson.loads),
    ("ujson", ujson.loads),
    ("jtree", jtree.loads),
]


def _root_kind(result: Any) -> str:
    """Names the root container kind for any of the compared parsers."""
    if isinstance(result, jtree.JsonValue):
        return result.kind.value
    return "object" if isinstance(result, dict) else "array"


class TestParsingBenchmarks:
    """Benchmarks for parsing speed across libraries and document shapes."""

    @pytest.mark.parametrize("data_type", DATA_TYPES)
    @pytest.mark.parametrize("parser,parse_func", PARSERS)
    def test_parsing(
        self,
        benchmark: Any,
        parser: str,
        parse_func: Callable[[Any], Any],
        data_type: str,
    ) -> None:
        """Benchmarks a full parse of one generated document."""
        test_data = generate_test_data(data_type).encode("utf-8")

        result = benchmark(parse_func, test_data)

        expected = json.loads(test_data)
        assert _root_kind(result) == _root_kind(expected)
        if parser == "jtree":
            assert result.to_python() == expected


class TestJtreeStages:
    """Benchmarks for the individual jtree stages."""

    @pytest.mark.benchmark(group="stages")
    @pytest.mark.parametrize("data_type", DATA_TYPES)
    def test_tokenize(self, benchmark: Any, data_type: str) -> None:
        """Benchmarks the scanner alone."""
        test_data = generate_test_data(data_type).encode("utf-8")

        tokens = benchmark(jtree.tokenize, test_data)

        assert tokens

    @pytest.mark.benchmark(group="stages")
    @pytest.mark.parametrize("data_type", DATA_TYPES)
    def test_parse_tokens(self, benchmark: Any, data_type: str) -> None:
        """Benchmarks recursive descent over an already scanned token list."""
        tokens = jtree.tokenize(generate_test_data(data_type))

        result = benchmark(jtree.parse, tokens)

        assert result.kind in (jtree.ValueKind.ARRAY, jtree.ValueKind.OBJECT)


class TestRenderingBenchmarks:
    """Benchmarks for indented rendering against json.dumps(indent=4)."""

    @pytest.mark.benchmark(group="rendering")
    @pytest.mark.parametrize("data_type", ["large_object", "nested_structure"])
    def test_stdlib_render(self, benchmark: Any, data_type: str) -> None:
        data = json.loads(generate_test_data(data_type))

        text = benchmark(json.dumps, data, indent=4)

        assert text.startswith("{\n")

    @pytest.mark.benchmark(group="rendering")
    @pytest.mark.parametrize("data_type", ["large_object", "nested_structure"])
    def test_jtree_render(self, benchmark: Any, data_type: str) -> None:
        value = jtree.loads(generate_test_data(data_type))

        text = benchmark(value.render)

        assert text.startswith("{\n")
        assert jtree.loads(text) == value
