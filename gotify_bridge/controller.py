import logging
from typing import Optional

from flask import Flask, Response, request

from .auth import basic_auth_required
from .constants import BridgeConfig
from .metrics import BridgeCounters, build_registry, render_metrics
from .pipeline import AlertPipeline
from .services import GotifyClient

logger = logging.getLogger(__name__)

ALL_METHODS = ['GET', 'HEAD', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS', 'TRACE', 'CONNECT']


def _text_response(body: str, status: int) -> Response:
    return Response(body + "\n", status=status, mimetype="text/plain")


def create_app(config: BridgeConfig, client: Optional[GotifyClient] = None,
               counters: Optional[BridgeCounters] = None):
    app = Flask(__name__)
    if client is None:
        client = GotifyClient(config.gotify_endpoint, config.gotify_token, config.timeout)
    if counters is None:
        counters = BridgeCounters()
    pipeline = AlertPipeline(config, client, counters)
    registry = build_registry(counters, config.metrics_namespace, config.version)

    app.config['BRIDGE_CONFIG'] = config
    app.config['BRIDGE_COUNTERS'] = counters

    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok', 'service': 'alertmanager-gotify-bridge'}, 200

    def webhook():
        body = request.get_data(cache=False)
        logger.debug(f"bridge: Received request: {request.method} {request.path} from {request.remote_addr}")
        for name, value in request.headers.items():
            logger.debug(f"bridge:  {name.lower()}: {value}")
        logger.debug(f"bridge: BODY: {body!r}")

        status, text = pipeline.handle(body)
        return _text_response(text, status)

    def metrics_view():
        payload, content_type = render_metrics(registry)
        return Response(payload, status=200, content_type=content_type)

    app.add_url_rule(config.webhook_path, 'webhook', webhook, methods=ALL_METHODS)
    app.add_url_rule(
        config.metrics_path,
        'metrics',
        basic_auth_required(metrics_view, config.metrics_auth_username, config.metrics_auth_password),
        methods=['GET'],
    )

    logger.info(
        f"Serving {config.webhook_path} translating to {config.gotify_endpoint}"
        f" (metrics at {config.metrics_path}{', basic auth' if config.metrics_auth_enabled else ''})"
    )
    return app
