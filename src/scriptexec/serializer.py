"""Embed JSON input data into generated program text."""

from __future__ import annotations

import json
from typing import Any

from .errors import SerializationError


def escape_json(value: Any) -> str:
    """Return a quoted string literal holding ``value`` as a JSON document.

    The value is encoded to JSON and the resulting document is encoded a
    second time as a JSON string.  With ``ensure_ascii`` every non-ASCII
    character becomes a ``\\uXXXX`` escape, so the literal is valid both as
    a Python and as a JavaScript string literal and contains nothing that
    can close the surrounding expression.  Passing the literal to
    ``json.loads`` / ``JSON.parse`` inside the generated program gives back
    ``value``.

    Raises :class:`SerializationError` for cycles, unsupported types and
    non-finite floats.
    """
    try:
        document = json.dumps(value, ensure_ascii=True, allow_nan=False)
    except (TypeError, ValueError, RecursionError) as exc:
        raise SerializationError(f"Input data is not JSON serializable: {exc}") from exc
    return json.dumps(document, ensure_ascii=True)
