"""
Sandbox executor backed by the ``wasmer`` runtime.

The executor knows nothing about languages: it receives the argument vector
an adapter built, prepends the runtime binary and runs it as a subprocess.
Standard output and error are returned as text.  A nonzero exit status, a
launch failure or an exceeded timeout raise
:class:`~scriptexec.errors.SandboxExecutionError`.
"""

from __future__ import annotations

import asyncio
import contextlib
import time
from typing import Optional, Sequence

from ..errors import SandboxExecutionError
from .base import ExecutionResult, SandboxExecutor


class WasmerExecutor(SandboxExecutor):
    """Run interpreter images with the wasmer command line."""

    def __init__(self, wasmer_path: str = "wasmer", timeout: Optional[float] = 30) -> None:
        """
        Parameters
        ----------
        wasmer_path: str, optional
            Runtime binary, looked up on ``PATH`` when not absolute.
        timeout: float, optional
            Wall‑clock limit in seconds.  ``None`` or ``0`` waits forever.
        """
        self.wasmer_path = wasmer_path
        self.timeout = timeout or None

    async def run(self, argv: Sequence[str]) -> ExecutionResult:
        args = [self.wasmer_path, *argv]
        start_time = time.perf_counter()
        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise SandboxExecutionError(f"Unable to launch {self.wasmer_path}: {exc}", argv=args) from exc

        timed_out = False
        try:
            stdout_bytes, stderr_bytes = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            timed_out = True
        finally:
            # Also reached on cancellation; the child must not outlive the call.
            if process.returncode is None:
                await _kill(process)
        if timed_out:
            raise SandboxExecutionError(
                f"Execution timed out after {self.timeout} seconds",
                argv=args,
                exit_code=process.returncode,
                timed_out=True,
            )
        duration = int((time.perf_counter() - start_time) * 1000)

        stdout = stdout_bytes.decode("utf-8", errors="replace")
        stderr = stderr_bytes.decode("utf-8", errors="replace")
        if process.returncode != 0:
            raise SandboxExecutionError(
                f"Process exited with status {process.returncode}",
                argv=args,
                exit_code=process.returncode,
                stdout=stdout,
                stderr=stderr,
            )
        return ExecutionResult(stdout, stderr, duration)


async def _kill(process: asyncio.subprocess.Process) -> None:
    with contextlib.suppress(ProcessLookupError):
        process.kill()
    await process.wait()
