"""
Adapter for the sandboxed Python interpreter.

The Python image needs its standard library at run time.  Every execution
gets a private copy of the library directory, mapped into the sandbox as
``lib`` and removed once the interpreter exits.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..models import ExecutionRequest
from .base import ExecutionResult, InvocationSpec, ScriptAdapter
from .workspace import provision_workspace
from .wrappers import PythonWrapper


class PythonAdapter(ScriptAdapter):
    """Execute Python scripts with a per-execution copy of the library."""

    language = "python"
    wrapper = PythonWrapper()
    health_script = """
      log('log')
      print('print\\n',end='')
      return 'result'
      """
    health_expected = ("print\nresult", "log\n")

    async def execute(self, request: ExecutionRequest) -> ExecutionResult:
        program = self.wrapper.wrap_data(request.script, request.input_data)
        async with provision_workspace(self.config.python_lib_path) as workspace:
            invocation = self.build_invocation(program, workspace)
            return await self._invoke(invocation, request)

    def build_invocation(self, program: str, workspace: Optional[Path] = None) -> InvocationSpec:
        if workspace is None:
            raise ValueError("The Python adapter requires a workspace")
        # -B: do not write .pyc files on import
        # -q: do not print the version banner
        # -c: run the program passed as the next argument
        return InvocationSpec(
            executable_path=self.config.python_path,
            argv=[f"--mapdir=lib:{workspace}", "--", "-B", "-q", "-c", program],
            resources=[workspace],
        )
