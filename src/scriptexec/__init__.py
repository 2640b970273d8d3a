"""Script execution service package.

This package runs user scripts inside sandboxed WebAssembly interpreters
(Python and QuickJS) and returns their explicit output, their log output
and their return value on separate channels, whatever the language.

The top‑level modules include:

* ``config`` – configuration handling for environment variables.
* ``errors`` – exceptions raised while preparing or running a script.
* ``serializer`` – embedding of JSON input data into program text.
* ``models`` – Pydantic models for execution requests and HTTP bodies.
* ``executor`` – program wrappers, language adapters and the sandbox executor.
* ``api`` – FastAPI application exposing HTTP endpoints.
"""

from .config import Config
from .errors import ProvisioningError, SandboxExecutionError, ScriptExecError, SerializationError
from .models import ExecutionRequest

__all__ = [
    "Config",
    "ExecutionRequest",
    "ProvisioningError",
    "SandboxExecutionError",
    "ScriptExecError",
    "SerializationError",
]
