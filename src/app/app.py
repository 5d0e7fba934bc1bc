"""Entrypoint da aplicação de checkout de pagamentos.

Este módulo é o ponto de entrada principal do serviço.
Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080

Cloud Run:
    O container deve expor a porta 8080 (padrão do Cloud Run).
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.routes import create_api_router
from app.bootstrap import initialize_app, validate_runtime_settings
from app.bootstrap.clients import create_async_redis_client, create_firestore_client
from config.logging import get_logger
from config.settings import get_base_settings, get_dedupe_settings, get_firestore_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)

CORS_METHODS = ["POST", "GET", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "Authorization", "x-signature", "x-request-id"]


async def _seed_firestore_health_doc(firestore_client: object) -> None:
    """Escreve documento mínimo de health para check de readiness."""

    def _write_doc() -> None:
        firestore_client.collection("_health").document("check").set(  # type: ignore[attr-defined]
            {
                "updated_at": datetime.now(UTC).isoformat(),
                "service": get_base_settings().service_name,
            }
        )

    await asyncio.to_thread(_write_doc)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações
    - Inicializa conexões usadas pelos backends configurados

    Shutdown:
    - Fecha conexão Redis
    """
    logger.info("app_starting")
    validate_runtime_settings()
    app.state.redis_client = None
    app.state.firestore_client = None

    if get_dedupe_settings().backend == "redis":
        try:
            app.state.redis_client = create_async_redis_client()
        except Exception as exc:
            logger.warning("redis_client_not_ready", extra={"error_type": type(exc).__name__})

    if get_firestore_settings().audit_backend == "firestore":
        try:
            app.state.firestore_client = create_firestore_client()
            await _seed_firestore_health_doc(app.state.firestore_client)
        except Exception as exc:
            logger.warning(
                "firestore_client_not_ready", extra={"error_type": type(exc).__name__}
            )

    yield

    logger.info("app_shutting_down")
    redis_client = getattr(app.state, "redis_client", None)
    if redis_client is not None:
        await redis_client.aclose()


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """405 em JSON no formato das demais respostas de erro.

    OPTIONS sem cabeçalhos de preflight (não tratado pelo CORSMiddleware)
    responde 200 vazio com os métodos aceitos.
    """
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        if request.method == "OPTIONS":
            return Response(
                status_code=status.HTTP_200_OK,
                headers={
                    "Access-Control-Allow-Origin": "*",
                    "Access-Control-Allow-Methods": ", ".join(CORS_METHODS),
                    "Access-Control-Allow-Headers": ", ".join(CORS_HEADERS),
                },
            )
        return JSONResponse(
            content={"error": "method_not_allowed"},
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            headers=getattr(exc, "headers", None),
        )
    return await http_exception_handler(request, exc)


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Returns:
        Aplicação FastAPI configurada.
    """
    fastapi_app = FastAPI(
        title="Checkout Pagamentos",
        description="Relay de cobranças cartão/PIX e webhook do Mercado Pago",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Checkout é servido de outro domínio
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )
    fastapi_app.add_exception_handler(StarletteHTTPException, _http_error_handler)

    # Registra todas as rotas
    fastapi_app.include_router(create_api_router())

    logger.info("app_configured")

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    logger.info("app_starting_dev_mode")
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )


if __name__ == "__main__":
    main()
