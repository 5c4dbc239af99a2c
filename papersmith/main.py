from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from papersmith.api.router import router
from papersmith.errors import PaperSmithError, StoreIOFailure
from papersmith.observability import configure_logging, init_otel
from papersmith.settings import Settings, settings

logger = logging.getLogger(__name__)


def _cors_origins(value: str) -> list[str]:
    return [o.strip() for o in value.split(",") if o.strip()] or ["*"]


async def _store_unavailable(request: Request, exc: StoreIOFailure) -> JSONResponse:
    logger.error("%s %s: paper store unavailable: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": str(exc)})


async def _unhandled_core_error(request: Request, exc: PaperSmithError) -> JSONResponse:
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


def create_app(cfg: Settings = settings) -> FastAPI:
    configure_logging(cfg.log_level)
    app = FastAPI(title=cfg.app_name)
    tracing = init_otel(app, cfg)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(cfg.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StoreIOFailure, _store_unavailable)
    app.add_exception_handler(PaperSmithError, _unhandled_core_error)
    app.include_router(router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "env": cfg.env, "llm_provider": cfg.llm_provider}

    logger.info(
        "%s ready (storage=%s, questions=%s, provider=%s, tracing=%s)",
        cfg.app_name,
        cfg.storage_backend,
        cfg.question_source,
        cfg.llm_provider,
        tracing,
    )
    return app


app = create_app()
