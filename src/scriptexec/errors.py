"""Exceptions raised by the script execution layer.

Only the health check probes turn a failure into a normal result; every
other failure propagates to the caller unchanged.
"""

from __future__ import annotations

from typing import Optional, Sequence


class ScriptExecError(Exception):
    """Base class for all errors raised by :mod:`scriptexec`."""


class SerializationError(ScriptExecError, ValueError):
    """Input data cannot be embedded into a generated program."""


class ProvisioningError(ScriptExecError):
    """A workspace could not be created or populated."""


class SandboxExecutionError(ScriptExecError):
    """The sandboxed interpreter exited with a nonzero status or never started.

    Attributes
    ----------
    argv: list[str]
        Full command line that was run.
    exit_code: int or None
        Exit status of the process, ``None`` if it could not be launched.
    stdout, stderr: str
        Whatever the process wrote before it failed.
    timed_out: bool
        ``True`` when the process was killed for exceeding the timeout.
    """

    def __init__(
        self,
        message: str,
        argv: Sequence[str] = (),
        exit_code: Optional[int] = None,
        stdout: str = "",
        stderr: str = "",
        timed_out: bool = False,
    ) -> None:
        super().__init__(message)
        self.argv = list(argv)
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        self.timed_out = timed_out
