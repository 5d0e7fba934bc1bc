"""Rotas HTTP da API - adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (cobranças, webhook, health)
- Leitura inicial do request (body, headers, query params)
- Delegação para connectors/use_cases
- Respostas HTTP apropriadas

Estrutura:
- routes/payments/: cobranças de cartão e PIX
- routes/mercadopago/: webhook de notificações
- routes/health/: health checks e readiness

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
