"""Rotas de cobrança (cartão e PIX)."""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.payments.card import router as card_router
from api.routes.payments.pix import router as pix_router

router = APIRouter()
router.include_router(card_router)
router.include_router(pix_router)

__all__ = ["router"]
