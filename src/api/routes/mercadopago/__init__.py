"""Rotas de notificação do Mercado Pago."""

from api.routes.mercadopago.webhook import router

__all__ = ["router"]
