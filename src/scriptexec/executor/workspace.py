"""
Per-execution workspaces.

A workspace is a fresh temporary directory holding a copy of the files an
interpreter image needs at run time (the Python standard library).  The
directory belongs to exactly one execution and is removed when it ends,
whether the execution succeeded or raised.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
import tempfile
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

from ..errors import ProvisioningError

logger = logging.getLogger("scriptexec.executor")


@asynccontextmanager
async def provision_workspace(
    lib_path: str | Path,
    parent: Optional[str] = None,
) -> AsyncIterator[Path]:
    """Yield a temporary directory populated with the contents of ``lib_path``.

    Copying runs in a worker thread so other executions keep going.  The
    directory is removed on every exit path, including cancellation while
    the copy is still running.  Failures are raised as
    :class:`ProvisioningError`.
    """
    start = time.perf_counter()
    lib_path = Path(lib_path)
    if not lib_path.is_dir():
        raise ProvisioningError(f"Library directory not found: {lib_path}")
    try:
        workspace = Path(tempfile.mkdtemp(prefix="scriptexec-", dir=parent))
    except OSError as exc:
        raise ProvisioningError(f"Unable to create workspace: {exc}") from exc
    copy = asyncio.ensure_future(asyncio.to_thread(shutil.copytree, lib_path, workspace, dirs_exist_ok=True))
    try:
        try:
            await asyncio.shield(copy)
        except OSError as exc:
            raise ProvisioningError(f"Unable to copy {lib_path} into workspace: {exc}") from exc
        logger.info(
            "Created workspace %s from %s in %d ms",
            workspace,
            lib_path,
            int((time.perf_counter() - start) * 1000),
        )
        yield workspace
    finally:
        # The copy thread cannot be interrupted; it must finish before removal.
        if not copy.done():
            await asyncio.wait([copy])
        if not copy.cancelled():
            copy.exception()
        await asyncio.to_thread(shutil.rmtree, workspace, True)
        logger.info("Removed workspace %s", workspace)
