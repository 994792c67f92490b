"""FastAPI application exposing the lock endpoints."""

from __future__ import annotations

from pathlib import Path

import os

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from typing import Optional

from semapi.app.models import LockParams, UnlockParams
from semapi.core.errors import LockError, StoreUnavailable, UnlockError, ValidationError
from semapi.core.lock_manager import LockManager
from semapi.core.models import LockStatus
from semapi.core.settings import ServiceSettings
from semapi.core.store import LockStore
from semapi.core.store_redis import RedisLockStore
from semapi.core.validation import validate_lock_params, validate_unlock_params
from semapi.services import AuditLogger
from semapi.utils.logging import get_logger, set_log_level


logger = get_logger("SemapiAPI")

_COMPONENT_LOGGERS = ("SemapiAPI", "LockManager", "RedisLockStore")


def _normalize_prefix(prefix: str) -> str:
    prefix = prefix.strip().strip("/")
    return f"/{prefix}" if prefix else ""


def _check_body_target(path_target: str, body_target: Optional[str]) -> None:
    if body_target and body_target != path_target:
        raise ValidationError("target", f"target {body_target!r} does not match path target {path_target!r}")


def _describe_request_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(item) for item in err.get("loc", ()) if item != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "invalid request"


def create_app(settings: Optional[ServiceSettings] = None, *, store: Optional[LockStore] = None) -> FastAPI:
    settings = settings or ServiceSettings()
    if store is None:
        store = RedisLockStore.from_settings(settings.redis)
        if settings.redis.url:
            logger.info("Using Redis lock store from configured URL")
        else:
            logger.info("Using Redis lock store at %s:%s/%s", settings.redis.host, settings.redis.port, settings.redis.db)
    audit_logger = AuditLogger(settings.audit_log_path) if settings.audit_log_path else None
    manager = LockManager(store, audit_logger=audit_logger)
    set_log_level(settings.log_level.upper(), *_COMPONENT_LOGGERS)

    app = FastAPI(title="SEMAPI")
    app.state.settings = settings
    app.state.lock_manager = manager

    @app.on_event("startup")
    async def _startup() -> None:
        try:
            await store.ping()
        except StoreUnavailable as exc:
            logger.warning("Lock store not reachable at startup: %s", exc)

    @app.on_event("shutdown")
    async def _shutdown() -> None:
        await store.close()

    @app.exception_handler(LockError)
    @app.exception_handler(UnlockError)
    async def _lock_failure(request: Request, exc: Exception) -> PlainTextResponse:
        return PlainTextResponse(str(exc), status_code=500)

    @app.exception_handler(ValidationError)
    async def _invalid_params(request: Request, exc: ValidationError) -> PlainTextResponse:
        return PlainTextResponse(str(exc), status_code=400)

    @app.exception_handler(RequestValidationError)
    async def _invalid_body(request: Request, exc: RequestValidationError) -> PlainTextResponse:
        return PlainTextResponse(_describe_request_errors(exc), status_code=400)

    @app.exception_handler(StoreUnavailable)
    async def _store_down(request: Request, exc: StoreUnavailable) -> PlainTextResponse:
        return PlainTextResponse(str(exc), status_code=503)

    router = APIRouter(prefix=_normalize_prefix(settings.route_prefix))

    @router.get("/health-check", response_class=PlainTextResponse)
    async def health_check() -> str:
        return "pong"

    @router.get("/redis/ping", response_class=PlainTextResponse)
    async def store_ping() -> str:
        await store.ping()
        return "pong"

    @router.post("/{target}/lock", response_class=PlainTextResponse)
    async def lock(target: str, payload: LockParams) -> str:
        _check_body_target(target, payload.target)
        target, user, ttl = validate_lock_params(target, payload.user, payload.ttl)
        await manager.acquire_lock(target, user, ttl)
        return "OK"

    @router.post("/{target}/unlock", response_class=PlainTextResponse)
    async def unlock(target: str, payload: UnlockParams) -> str:
        _check_body_target(target, payload.target)
        target, user = validate_unlock_params(target, payload.user)
        await manager.release_lock(target, user)
        return "OK"

    @router.get("/{target}", response_model=LockStatus)
    async def lock_status(target: str) -> LockStatus:
        return await manager.status(target)

    app.include_router(router)
    return app


# Default ASGI app when run via `uvicorn semapi.app.main:app` with env SEMAPI_CONFIG

config_env = os.getenv("SEMAPI_CONFIG", "config/semapi.example.yml")
app = create_app(ServiceSettings.load(Path(config_env)))
