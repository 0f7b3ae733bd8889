"""
Test data generators for parsing benchmarks.

Every document is produced by ``json.dumps`` with its default separators, so
the only whitespace between tokens is the single space that jtree accepts.
Generation is seeded per call, so repeated runs measure the same text.
"""

import json
import random
import string
from collections.abc import Callable
from typing import Any

DATA_TYPES = (
    "small_object",
    "large_object",
    "mixed_array",
    "nested_structure",
    "string_heavy",
    "keyword_heavy",
)

_ESCAPES = ('\\"', "\\\\", "\\/", "\\b", "\\f", "\\n", "\\r", "\\t")
_ESCAPE_PROBABILITY = 0.3


def generate_test_data(data_type: str, seed: int = 1234) -> str:
    """Generates JSON text for one of DATA_TYPES."""
    generators: dict[str, Callable[[random.Random], Any]] = {
        "small_object": _small_object,
        "large_object": _large_object,
        "mixed_array": _mixed_array,
        "nested_structure": _nested_structure,
        "string_heavy": _string_heavy,
        "keyword_heavy": _keyword_heavy,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    return json.dumps(generators[data_type](random.Random(seed)))


def _small_object(rng: random.Random) -> dict[str, Any]:
    return {
        "id": 12345,
        "name": "Alice Johnson",
        "email": "alice@example.com",
        "active": True,
        "balance": 1234.56,
        "metadata": {"created": "2024-01-15T10:30:00Z", "source": "api"},
    }


def _large_object(rng: random.Random) -> dict[str, Any]:
    """A user record with transaction and activity history (> 10KB)."""
    return {
        "user_id": rng.randint(1000000, 9999999),
        "profile": {
            "first_name": _word(rng, 10),
            "last_name": _word(rng, 12),
            "email": f"{_word(rng, 8)}@{_word(rng, 6)}.com",
            "address": {
                "street": f"{rng.randint(1, 9999)} {_word(rng, 8)} St",
                "city": _word(rng, 12),
                "zip": f"{rng.randint(10000, 99999)}",
                "country": "US",
            },
            "notifications": {
                "email": rng.choice([True, False]),
                "sms": rng.choice([True, False]),
                "push": None,
            },
        },
        "transactions": [
            {
                "id": f"txn_{i:06d}",
                "amount": round(rng.uniform(1.0, 1000.0), 2),
                "currency": rng.choice(["USD", "EUR", "GBP", "JPY"]),
                "description": f"Payment for {_word(rng, 20)}",
                "status": rng.choice(["completed", "pending", "failed"]),
            }
            for i in range(50)
        ],
        "activity_log": [
            {
                "action": rng.choice(["login", "logout", "purchase", "view"]),
                "ip_address": ".".join(
                    str(rng.randint(1, 255)) for _ in range(4)
                ),
                "user_agent": f"Mozilla/5.0 ({_word(rng, 20)})",
            }
            for _ in range(30)
        ],
    }


def _mixed_array(rng: random.Random) -> list[Any]:
    """Two hundred elements drawn from every value kind."""
    makers: list[Callable[[int], Any]] = [
        lambda i: rng.randint(-1000, 1000),
        lambda i: round(rng.uniform(-100.0, 100.0), 3),
        lambda i: _word(rng, rng.randint(5, 30)),
        lambda i: rng.choice([True, False]),
        lambda i: None,
        lambda i: {"index": i, "value": _word(rng, 10), "tags": []},
    ]
    return [rng.choice(makers)(i) for i in range(200)]


def _nested_structure(rng: random.Random) -> dict[str, Any]:
    def level(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"value": _word(rng, 10)}
        return {
            "level": depth,
            "data": _word(rng, 15),
            "items": [level(depth - 1) for _ in range(3)],
            "nested": level(depth - 1),
        }

    return level(8)


def _string_heavy(rng: random.Random) -> dict[str, Any]:
    """Strings dense with escapes; unicode escapes stay in printable ASCII."""

    def escaped() -> str:
        return "".join(
            rng.choice(_ESCAPES)
            if rng.random() < _ESCAPE_PROBABILITY
            else rng.choice(string.ascii_letters + string.digits + " ")
            for _ in range(50)
        )

    return {
        "strings": [escaped() for _ in range(100)],
        "unicode": [
            f"Unicode: \\u{rng.randint(0x0020, 0x007E):04x}" for _ in range(50)
        ],
        "paths": {
            f"key_{i}": f"C:\\\\Users\\\\{_word(rng, 8)}\\\\file_{i}.txt"
            for i in range(20)
        },
    }


def _keyword_heavy(rng: random.Random) -> list[Any]:
    """Short tokens only, so scanning cost dominates decoding cost."""
    return [
        [rng.choice([True, False, None]), rng.randint(0, 9)] for _ in range(500)
    ]


def _word(rng: random.Random, length: int) -> str:
    return "".join(rng.choices(string.ascii_letters, k=length))
