"""
Execution backends for the script execution API.

Each adapter wraps a user script for one interpreter, builds the argument
vector for the sandbox runtime and delegates to a
:class:`~scriptexec.executor.base.SandboxExecutor`.  The production executor
is :class:`WasmerExecutor`.  Additional languages can be added by
implementing the ``ScriptAdapter`` interface from ``base.py``.
"""

from .base import ExecutionResult, InvocationSpec, SandboxExecutor, ScriptAdapter
from .python_adapter import PythonAdapter
from .quickjs_adapter import QuickJsAdapter
from .wasmer import WasmerExecutor
from .workspace import provision_workspace
from .wrappers import PythonWrapper, QuickJsWrapper, WrapperGenerator, prefix_lines

ADAPTERS = {
    PythonAdapter.language: PythonAdapter,
    QuickJsAdapter.language: QuickJsAdapter,
}

__all__ = [
    "ADAPTERS",
    "ExecutionResult",
    "InvocationSpec",
    "SandboxExecutor",
    "ScriptAdapter",
    "PythonAdapter",
    "QuickJsAdapter",
    "WasmerExecutor",
    "provision_workspace",
    "PythonWrapper",
    "QuickJsWrapper",
    "WrapperGenerator",
    "prefix_lines",
]
