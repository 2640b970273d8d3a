"""
Base interfaces and dataclasses for script execution.

Two roles meet here:

* A :class:`SandboxExecutor` runs an argument vector in an isolated
  process and returns the captured output, raising on failure.  It knows
  nothing about languages.
* A :class:`ScriptAdapter` turns an
  :class:`~scriptexec.models.ExecutionRequest` into a wrapped program and an
  :class:`InvocationSpec` for one target interpreter, hands it to the
  executor and reports the outcome.  Failures from the executor are logged
  and re‑raised unchanged.

Resource limits (memory, CPU) are enforced by the sandbox runtime itself;
the executor only applies a wall‑clock timeout.
"""

from __future__ import annotations

import abc
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from ..config import Config
from ..models import ExecutionRequest
from .wrappers import WrapperGenerator

logger = logging.getLogger("scriptexec.executor")


@dataclass(frozen=True)
class ExecutionResult:
    """Result of running a wrapped program.

    Attributes
    ----------
    stdout: str
        Explicit output of the script followed by its return value.
    stderr: str
        Everything the script logged.
    duration_ms: int
        Wall‑clock execution time in milliseconds.  Not compared by
        health checks.
    """

    stdout: str
    stderr: str
    duration_ms: int = 0


@dataclass(frozen=True)
class InvocationSpec:
    """Everything needed to start one sandboxed interpreter."""

    executable_path: str
    argv: List[str]
    resources: List[Path] = field(default_factory=list)

    @property
    def command(self) -> List[str]:
        """Argument vector handed to the executor, image path first."""
        return [self.executable_path, *self.argv]


class SandboxExecutor(abc.ABC):
    """Run a prepared argument vector in an isolated process."""

    @abc.abstractmethod
    async def run(self, argv: Sequence[str]) -> ExecutionResult:
        """Run ``argv`` and return its captured output.

        Raises
        ------
        SandboxExecutionError
            If the process cannot be launched, exits with a nonzero status
            or exceeds the timeout.
        """
        raise NotImplementedError


class ScriptAdapter(abc.ABC):
    """
    Abstract base class for language adapters.

    Subclasses set :attr:`language`, :attr:`wrapper` and the health check
    fixture, and implement :meth:`execute` and :meth:`build_invocation`.
    """

    language: str = ""
    wrapper: WrapperGenerator
    #: Script that touches every output channel.
    health_script: str = ""
    #: Exact (stdout, stderr) pair :attr:`health_script` must produce.
    health_expected: tuple = ("", "")

    def __init__(self, config: Config, sandbox: SandboxExecutor) -> None:
        self.config = config
        self.sandbox = sandbox

    @abc.abstractmethod
    async def execute(self, request: ExecutionRequest) -> ExecutionResult:
        """Run ``request`` and return its separated output streams."""
        raise NotImplementedError

    @abc.abstractmethod
    def build_invocation(self, program: str, workspace: Optional[Path] = None) -> InvocationSpec:
        """Build the argument vector that runs ``program``."""
        raise NotImplementedError

    async def _invoke(self, invocation: InvocationSpec, request: ExecutionRequest) -> ExecutionResult:
        """Hand ``invocation`` to the executor, logging timing and failures."""
        start = time.perf_counter()
        try:
            result = await self.sandbox.run(invocation.command)
        except Exception as exc:
            logger.warning(
                "%s execution failed for task %s: script=%r args=%r error=%r",
                self.language,
                request.task_id,
                request.script,
                list(request.args),
                exc,
            )
            raise
        else:
            logger.info(
                "%s execution succeeded for task %s: stdout=%r stderr=%r",
                self.language,
                request.task_id,
                result.stdout,
                result.stderr,
            )
            return result
        finally:
            logger.info(
                "%s execution for task %s took %d ms",
                self.language,
                request.task_id,
                int((time.perf_counter() - start) * 1000),
            )

    async def health_check(self) -> bool:
        """Run :attr:`health_script` and compare both streams exactly.

        Never raises: a mismatch or a failure is logged and reported as
        ``False``.
        """
        request = ExecutionRequest(script=self.health_script, input_data={}, task_id=f"healthcheck-{self.language}")
        try:
            result = await self.execute(request)
        except Exception:
            logger.exception("Unexpected %s healthcheck error", self.language)
            return False
        if (result.stdout, result.stderr) == tuple(self.health_expected):
            return True
        logger.warning(
            "Unexpected %s healthcheck result: stdout=%r stderr=%r",
            self.language,
            result.stdout,
            result.stderr,
        )
        return False
