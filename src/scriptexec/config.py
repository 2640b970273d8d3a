"""Configuration loader.

The script execution service reads its configuration from environment
variables so that the same container image can run with different
interpreter images.  Reasonable defaults are provided so that local
development works out of the box when the ``wasm/`` directory sits next to
the working directory.

Environment variables:

``PYTHON_PATH``
    Location of the sandboxed Python interpreter image.  Defaults to
    ``wasm/python/bin/python.wasm``.

``PYTHON_LIB_PATH``
    Directory holding the Python standard library.  It is copied into a
    fresh workspace for every execution.  Defaults to ``wasm/python/lib``.

``QUICKJS_PATH``
    Location of the sandboxed QuickJS interpreter image.  Defaults to
    ``wasm/quickjs/quickjs.wasm``.

``SCRIPTEXEC_WASMER_PATH``
    The runtime binary used to load the interpreter images.  Defaults to
    ``wasmer`` (resolved via ``PATH``).

``SCRIPTEXEC_MAX_EXECUTION_SECONDS``
    Wall‑clock timeout (in seconds) for a single execution.  ``0`` disables
    the timeout.  Default is 30.

``SCRIPTEXEC_ALLOWED_LANGS``
    Comma‑separated list of languages exposed by the API.  Defaults to
    ``python,quickjs``.

``SCRIPTEXEC_API_KEY``
    Shared secret expected in the ``x‑api‑key`` header.  Empty disables the
    check.

``SCRIPTEXEC_LOG_LEVEL``
    Level name for the ``scriptexec`` logger.  Defaults to ``INFO``.

``PORT``
    The port on which the API server listens.  Defaults to 8080.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

SUPPORTED_LANGS = ("python", "quickjs")

DEFAULT_PYTHON_PATH = "wasm/python/bin/python.wasm"
DEFAULT_PYTHON_LIB_PATH = "wasm/python/lib"
DEFAULT_QUICKJS_PATH = "wasm/quickjs/quickjs.wasm"


@dataclass(frozen=True)
class Config:
    """Centralised configuration object."""

    python_path: str = DEFAULT_PYTHON_PATH
    python_lib_path: str = DEFAULT_PYTHON_LIB_PATH
    quickjs_path: str = DEFAULT_QUICKJS_PATH
    wasmer_path: str = "wasmer"
    max_execution_seconds: int = 30
    allowed_langs: List[str] = field(default_factory=lambda: list(SUPPORTED_LANGS))
    api_key: str = ""
    log_level: str = "INFO"
    port: int = 8080

    @classmethod
    def load(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        env = os.environ if environ is None else environ

        def _int_var(name: str, default: int) -> int:
            val = env.get(name)
            if val is None or val == "":
                return default
            try:
                return int(val)
            except ValueError:
                raise ValueError(f"Invalid integer for {name}: {val}")

        allowed_langs_env = env.get("SCRIPTEXEC_ALLOWED_LANGS", ",".join(SUPPORTED_LANGS))
        allowed_langs = [lang.strip().lower() for lang in allowed_langs_env.split(",") if lang.strip()]
        unknown = [lang for lang in allowed_langs if lang not in SUPPORTED_LANGS]
        if unknown:
            raise ValueError(
                f"Invalid SCRIPTEXEC_ALLOWED_LANGS: {', '.join(unknown)}. "
                f"Use any of {', '.join(SUPPORTED_LANGS)}."
            )

        max_execution_seconds = _int_var("SCRIPTEXEC_MAX_EXECUTION_SECONDS", 30)
        if max_execution_seconds < 0:
            raise ValueError("SCRIPTEXEC_MAX_EXECUTION_SECONDS must not be negative")

        return cls(
            python_path=env.get("PYTHON_PATH") or DEFAULT_PYTHON_PATH,
            python_lib_path=env.get("PYTHON_LIB_PATH") or DEFAULT_PYTHON_LIB_PATH,
            quickjs_path=env.get("QUICKJS_PATH") or DEFAULT_QUICKJS_PATH,
            wasmer_path=env.get("SCRIPTEXEC_WASMER_PATH") or "wasmer",
            max_execution_seconds=max_execution_seconds,
            allowed_langs=allowed_langs,
            api_key=env.get("SCRIPTEXEC_API_KEY", ""),
            log_level=env.get("SCRIPTEXEC_LOG_LEVEL", "INFO").upper(),
            port=_int_var("PORT", 8080),
        )

    @classmethod
    def from_env(cls) -> "Config":
        """
        Alternate constructor used by the API to load configuration.

        This wrapper calls :meth:`load` with the process environment.
        """
        return cls.load()
