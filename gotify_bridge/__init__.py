"""Bridge de webhooks do Alertmanager para o Gotify.

Este pacote contém:
- constants: variáveis de ambiente e carregamento da configuração
- errors: hierarquia de erros do bridge
- models: tipos do lote recebido, da notificação e do resultado por alerta
- decoder: validação e leitura do corpo da requisição
- utils: busca de anotações e helpers de formatação
- formatters: montagem da notificação (texto simples ou HTML estendido)
- services: cliente HTTP do Gotify
- pipeline: despacho alerta a alerta e agregação da resposta
- metrics: contadores e exportação no formato do Prometheus
- auth: basic auth do endpoint de métricas
- controller: criação do Flask app e endpoints
"""
