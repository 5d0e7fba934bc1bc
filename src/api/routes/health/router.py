"""Endpoints de health check para Cloud Run."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config.settings import (
    get_base_settings,
    get_dedupe_settings,
    get_firestore_settings,
    get_mercadopago_settings,
)

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Resultado de checagem de dependência."""

    status: Literal["ok", "skipped", "failed"]
    latency_ms: float | None = None
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "latency_ms": self.latency_ms,
            "error": self.error,
        }


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe - verifica se o serviço está rodando."""
    return HealthResponse(
        status="healthy",
        service=get_base_settings().service_name,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness probe com verificação real das dependências configuradas.

    Redis só é exigido com DEDUPE_BACKEND=redis e Firestore só com
    AUDIT_BACKEND=firestore; o token do Mercado Pago é sempre exigido.
    """
    redis_required = get_dedupe_settings().backend == "redis"
    firestore_required = get_firestore_settings().audit_backend == "firestore"

    redis_check, firestore_check = await asyncio.gather(
        _check_redis(getattr(request.app.state, "redis_client", None), redis_required),
        _check_firestore(
            getattr(request.app.state, "firestore_client", None), firestore_required
        ),
    )
    mercadopago_check = _check_mercadopago()

    checks = {
        "redis": redis_check,
        "firestore": firestore_check,
        "mercadopago": mercadopago_check,
    }
    ready = all(check.status != "failed" for check in checks.values())
    if not ready:
        logger.warning(
            "readiness_failed",
            extra={"failed": [name for name, c in checks.items() if c.status == "failed"]},
        )

    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {name: check.as_dict() for name, check in checks.items()},
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


async def _check_redis(redis_client: Any | None, required: bool) -> DependencyCheck:
    if not required:
        return DependencyCheck(status="skipped")
    if redis_client is None:
        return DependencyCheck(status="failed", error="not_configured")
    started_at = time.perf_counter()
    try:
        await asyncio.wait_for(redis_client.ping(), timeout=2.0)
    except TimeoutError:
        return DependencyCheck(status="failed", error="timeout")
    except Exception as exc:
        return DependencyCheck(status="failed", error=type(exc).__name__)
    latency_ms = (time.perf_counter() - started_at) * 1000
    return DependencyCheck(status="ok", latency_ms=round(latency_ms, 2))


async def _check_firestore(firestore_client: Any | None, required: bool) -> DependencyCheck:
    if not required:
        return DependencyCheck(status="skipped")
    if firestore_client is None:
        return DependencyCheck(status="failed", error="not_configured")
    started_at = time.perf_counter()
    try:
        await asyncio.wait_for(
            asyncio.to_thread(_read_firestore_health_doc, firestore_client),
            timeout=3.0,
        )
    except TimeoutError:
        return DependencyCheck(status="failed", error="timeout")
    except Exception as exc:
        return DependencyCheck(status="failed", error=type(exc).__name__)
    latency_ms = (time.perf_counter() - started_at) * 1000
    return DependencyCheck(status="ok", latency_ms=round(latency_ms, 2))


def _read_firestore_health_doc(firestore_client: Any) -> bool:
    doc = firestore_client.collection("_health").document("check").get()
    return bool(getattr(doc, "exists", False))


def _check_mercadopago() -> DependencyCheck:
    if not get_mercadopago_settings().access_token:
        return DependencyCheck(status="failed", error="access_token_missing")
    return DependencyCheck(status="ok")
