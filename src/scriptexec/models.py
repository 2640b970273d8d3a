"""Pydantic models for execution requests and HTTP bodies.

``ExecutionRequest`` is what the adapters consume.  The remaining models
express the structure of the HTTP API.
"""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ExecutionRequest(BaseModel):
    """A single script submitted for execution.  Immutable once built."""

    model_config = ConfigDict(frozen=True)

    script: str
    args: List[str] = Field(default_factory=list)
    input_data: Any = None
    task_id: str = "UnknownID"


class ExecuteRequest(BaseModel):
    """Request body for ``POST /exec``."""

    language: str = Field(
        default="python",
        description="Target interpreter: 'python' or 'quickjs' ('js' and 'javascript' are aliases).",
    )
    script: str = Field(..., description="Script body, executed as the body of a function.")
    args: List[str] = Field(default_factory=list)
    input_data: Any = Field(
        default=None,
        description="JSON value exposed to the script as 'inputData' (Python) or '$' (QuickJS).",
    )
    task_id: Optional[str] = Field(default=None, description="Label used in diagnostics.")

    def to_execution_request(self) -> ExecutionRequest:
        return ExecutionRequest(
            script=self.script,
            args=self.args,
            input_data=self.input_data,
            task_id=self.task_id or "UnknownID",
        )


class ExecuteResponse(BaseModel):
    """Response body for a successful execution."""

    stdout: str
    stderr: str
    duration_ms: int


class ExecutionFailure(BaseModel):
    """Response body when the interpreter exits with an error."""

    detail: str
    exit_code: Optional[int] = None
    stdout: str = ""
    stderr: str = ""
    timed_out: bool = False


class HealthStatus(BaseModel):
    """Outcome of a language health check."""

    language: str
    healthy: bool
