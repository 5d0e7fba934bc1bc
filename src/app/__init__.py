"""App - coração do sistema: casos de uso, serviços e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: modelos do checkout e status de pagamento
- use_cases/: cobranças de cartão/PIX e notificações
- services/: despacho de notificações por status
- infra/: implementações concretas de IO (stores)
- protocols/: contratos/interfaces
- observability/: correlation id para logs estruturados

Padrão: app executa; api adapta; utils apoia.
"""
