"""
Adapter for the sandboxed QuickJS interpreter.

QuickJS needs no files besides its image, so no workspace is provisioned.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..models import ExecutionRequest
from .base import ExecutionResult, InvocationSpec, ScriptAdapter
from .wrappers import QuickJsWrapper


class QuickJsAdapter(ScriptAdapter):
    """Execute JavaScript scripts with QuickJS."""

    language = "quickjs"
    wrapper = QuickJsWrapper()
    health_script = """
      console.log('console.log');
      log('log');
      console.error('console.error');
      print("print\\n");
      return 'result';
      """
    health_expected = ("print\nresult", "console.log\nlog\nconsole.error\n")

    async def execute(self, request: ExecutionRequest) -> ExecutionResult:
        program = self.wrapper.wrap_data(request.script, request.input_data)
        return await self._invoke(self.build_invocation(program), request)

    def build_invocation(self, program: str, workspace: Optional[Path] = None) -> InvocationSpec:
        # --std: expose the std module (std.out, std.err)
        # -e: evaluate the program passed as the next argument
        return InvocationSpec(
            executable_path=self.config.quickjs_path,
            argv=["--", "--std", "-e", program],
        )
