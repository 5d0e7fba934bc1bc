"""Agregador de rotas - registra todos os routers da API.

Este módulo é responsável por criar o router principal da API
e incluir os sub-routers de cobrança, webhook e health.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.health.router import router as health_router
from api.routes.mercadopago import router as mercadopago_router
from api.routes.payments import router as payments_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados.

    Returns:
        APIRouter configurado com todos os endpoints.
    """
    api_router = APIRouter()

    # Health checks (sem prefixo para /health e /ready na raiz)
    api_router.include_router(health_router, tags=["health"])

    # Cobranças: /create-card-payment e /create-payment
    api_router.include_router(payments_router, tags=["payments"])

    # Notificações: /webhook
    api_router.include_router(mercadopago_router, tags=["mercadopago"])

    return api_router
