"""API - camada de borda e adapters do provedor de pagamentos.

Responsabilidades:
- Receber requests do checkout e notificações do Mercado Pago
- Validar assinaturas e payloads
- Construir payloads para a API do Mercado Pago
- Converter erros em respostas HTTP

Subpastas:
- connectors/: adapter HTTP e webhook do Mercado Pago
- payload_builders/: construção de bodies de criação de pagamento
- routes/: endpoints HTTP (cobranças, webhook, health)

NÃO PODE conter: regras de despacho de status, dedupe, orquestração de use cases.
"""
