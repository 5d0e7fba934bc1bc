"""Connectors - adapters de borda para APIs externas.

Estrutura:
- mercadopago/: API de pagamentos e webhook do Mercado Pago
"""

__all__: list[str] = []
