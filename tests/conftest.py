"""Shared fixtures: configs and sandbox executors that need no wasmer."""

from __future__ import annotations

import shutil
import sys
from pathlib import Path
from typing import List, Optional, Sequence

import pytest

from scriptexec.config import Config
from scriptexec.executor import ExecutionResult, SandboxExecutor, WasmerExecutor


class RecordingSandbox(SandboxExecutor):
    """Return a canned result (or raise a canned error) and remember every call."""

    def __init__(self, result: Optional[ExecutionResult] = None, error: Optional[Exception] = None) -> None:
        self.result = result or ExecutionResult("", "")
        self.error = error
        self.calls: List[List[str]] = []
        self.mapped_dirs: List[Path] = []
        self.mapped_contents: List[List[str]] = []

    async def run(self, argv: Sequence[str]) -> ExecutionResult:
        self.calls.append(list(argv))
        for arg in argv:
            if arg.startswith("--mapdir=lib:"):
                mapped = Path(arg[len("--mapdir=lib:"):])
                self.mapped_dirs.append(mapped)
                self.mapped_contents.append(sorted(p.name for p in mapped.iterdir()))
        if self.error is not None:
            raise self.error
        return self.result


class HostInterpreterSandbox(SandboxExecutor):
    """Run the interpreter arguments after ``--`` with a host binary.

    Stands in for wasmer so generated programs can be checked end to end.
    """

    def __init__(self, binary: str, timeout: float = 30) -> None:
        self.executor = WasmerExecutor(binary, timeout=timeout)

    async def run(self, argv: Sequence[str]) -> ExecutionResult:
        argv = list(argv)
        return await self.executor.run(argv[argv.index("--") + 1:])


@pytest.fixture
def lib_dir(tmp_path) -> Path:
    lib = tmp_path / "lib"
    (lib / "python3.6" / "encodings").mkdir(parents=True)
    (lib / "python3.6" / "os.py").write_text("# os\n", encoding="utf-8")
    (lib / "python3.6" / "encodings" / "__init__.py").write_text("", encoding="utf-8")
    return lib


@pytest.fixture
def config(lib_dir) -> Config:
    return Config(
        python_path="images/python.wasm",
        python_lib_path=str(lib_dir),
        quickjs_path="images/quickjs.wasm",
    )


@pytest.fixture
def host_python() -> HostInterpreterSandbox:
    return HostInterpreterSandbox(sys.executable)


@pytest.fixture
def host_quickjs() -> HostInterpreterSandbox:
    qjs = shutil.which("qjs")
    if qjs is None:
        pytest.skip("qjs is not installed")
    return HostInterpreterSandbox(qjs)
