"""
FastAPI application for the script execution service.

This module configures logging, builds one adapter per allowed language
and registers the HTTP routes.  Configuration is read once, when the
application is created, and handed to every adapter; nothing reads the
environment while a request is served.
"""

from __future__ import annotations

import logging
import time
from typing import Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from ..config import Config
from ..errors import ProvisioningError, SandboxExecutionError, SerializationError
from ..executor import ADAPTERS, SandboxExecutor, ScriptAdapter, WasmerExecutor
from ..models import ExecuteRequest, ExecuteResponse, ExecutionFailure, HealthStatus

logger = logging.getLogger("scriptexec")

if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter("[scriptexec] %(levelname)s - %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)

logger.setLevel(logging.INFO)

LANGUAGE_ALIASES = {
    "js": "quickjs",
    "javascript": "quickjs",
}


def build_adapters(config: Config, sandbox: SandboxExecutor) -> Dict[str, ScriptAdapter]:
    """Instantiate the adapters for every allowed language."""
    return {lang: ADAPTERS[lang](config, sandbox) for lang in config.allowed_langs}


def create_app(config: Optional[Config] = None, sandbox: Optional[SandboxExecutor] = None) -> FastAPI:
    """Build the application.

    ``sandbox`` defaults to a :class:`WasmerExecutor` configured from
    ``config``; tests pass their own.
    """
    if config is None:
        config = Config.from_env()
    logger.setLevel(config.log_level)
    if sandbox is None:
        sandbox = WasmerExecutor(config.wasmer_path, timeout=config.max_execution_seconds)

    logger.info(
        "Loaded config: python_path=%s, python_lib_path=%s, quickjs_path=%s, allowed_langs=%s, max_exec=%s",
        config.python_path,
        config.python_lib_path,
        config.quickjs_path,
        config.allowed_langs,
        config.max_execution_seconds,
    )

    app = FastAPI(title="Script Execution Service", version="0.1.0")
    app.state.config = config
    app.state.adapters = build_adapters(config, sandbox)

    def get_adapter(language: str) -> ScriptAdapter:
        language = language.lower()
        language = LANGUAGE_ALIASES.get(language, language)
        adapter = app.state.adapters.get(language)
        if adapter is None:
            logger.warning("Unsupported language: %s", language)
            raise HTTPException(status_code=400, detail=f"Unsupported language: {language}")
        return adapter

    @app.middleware("http")
    async def authenticate(request: Request, call_next):
        """Middleware to enforce API key authentication on all requests."""
        path = request.url.path
        method = request.method
        client = getattr(request.client, "host", "unknown")

        logger.info("Incoming request: %s %s from %s", method, path, client)

        if config.api_key and request.headers.get("x-api-key") != config.api_key:
            logger.warning("Invalid API key for %s %s from %s", method, path, client)
            return JSONResponse(status_code=401, content={"detail": "Invalid API key"})

        response = await call_next(request)
        logger.info("Response: %s %s -> %s", method, path, response.status_code)
        return response

    @app.get("/health")
    async def health() -> Dict[str, str]:
        """Return a simple liveness response."""
        return {"status": "ok"}

    @app.get("/health/{language}", response_model=HealthStatus)
    async def language_health(language: str):
        """Run the health check script for ``language``."""
        adapter = get_adapter(language)
        healthy = await adapter.health_check()
        status = HealthStatus(language=adapter.language, healthy=healthy)
        return JSONResponse(status_code=200 if healthy else 503, content=status.model_dump())

    @app.post("/exec", response_model=ExecuteResponse, responses={422: {"model": ExecutionFailure}})
    async def execute(req: ExecuteRequest):
        """Run a script and return its output and log streams."""
        adapter = get_adapter(req.language)
        request = req.to_execution_request()
        logger.info("[/exec] Running %s script for task %s", adapter.language, request.task_id)

        start = time.perf_counter()
        try:
            result = await adapter.execute(request)
        except SerializationError as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        except SandboxExecutionError as exc:
            failure = ExecutionFailure(
                detail=str(exc),
                exit_code=exc.exit_code,
                stdout=exc.stdout,
                stderr=exc.stderr,
                timed_out=exc.timed_out,
            )
            return JSONResponse(status_code=422, content=failure.model_dump())
        except ProvisioningError as exc:
            logger.error("[/exec] Workspace provisioning failed: %s", exc)
            raise HTTPException(status_code=500, detail="Unable to provision workspace")

        duration_ms = int((time.perf_counter() - start) * 1000)
        logger.info("[/exec] Execution finished for task %s: duration_ms=%s", request.task_id, duration_ms)
        return ExecuteResponse(stdout=result.stdout, stderr=result.stderr, duration_ms=duration_ms)

    return app
