"""Payload builders - construção de bodies para APIs externas.

Estrutura:
- mercadopago/: criação de pagamentos (cartão e PIX)
"""

__all__: list[str] = []
