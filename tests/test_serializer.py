"""Tests for embedding input data into program text."""

from __future__ import annotations

import ast
import json
import math

import pytest

from scriptexec.errors import SerializationError
from scriptexec.serializer import escape_json


@pytest.mark.parametrize(
    "value",
    [
        None,
        {},
        [],
        0,
        -12.5,
        True,
        "",
        "plain",
        {"nested": {"list": [1, "two", None, False]}, "empty": []},
        ["quote \" and backslash \\", "newline\nand tab\t", "'single'"],
        {"unicode": "café     \U0001f600"},
        "\"); import os; (\"",
    ],
)
def test_literal_decodes_to_original_value(value):
    literal = escape_json(value)
    # The literal is a Python string literal holding a JSON document.
    assert json.loads(ast.literal_eval(literal)) == value
    # ... and also a JSON string, which is how JavaScript reads it.
    assert json.loads(json.loads(literal)) == value


def test_literal_is_single_quoted_token():
    literal = escape_json({"a": "x\ny"})
    assert literal.startswith('"') and literal.endswith('"')
    assert "\n" not in literal
    assert literal.isascii()


def test_cycle_raises_serialization_error():
    data = []
    data.append(data)
    with pytest.raises(SerializationError):
        escape_json(data)


def test_unsupported_type_raises_serialization_error():
    with pytest.raises(SerializationError) as excinfo:
        escape_json({"when": object()})
    assert isinstance(excinfo.value.__cause__, TypeError)


def test_non_finite_float_raises_serialization_error():
    with pytest.raises(SerializationError):
        escape_json([math.nan])


def test_serialization_error_is_value_error():
    with pytest.raises(ValueError):
        escape_json({1, 2})
