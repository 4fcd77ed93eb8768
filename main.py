import logging
import os
import sys

from gotify_bridge.constants import DEFAULT_GOTIFY_ENDPOINT, load_config
from gotify_bridge.controller import create_app
from gotify_bridge.errors import ConfigError

try:
    config = load_config()
except ConfigError as exc:
    sys.stderr.write(f"ERROR: {exc}\n")
    sys.exit(1)

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("gotify_bridge")

requested_endpoint = os.environ.get("GOTIFY_ENDPOINT", DEFAULT_GOTIFY_ENDPOINT)
if requested_endpoint != config.gotify_endpoint:
    logger.warning(
        f"/message not at the end of GOTIFY_ENDPOINT ({requested_endpoint}). Automatically appending it. "
        f"New endpoint: {config.gotify_endpoint}"
    )

app = create_app(config)

if __name__ == '__main__':
    server_type = "debug " if config.debug else ""
    logger.info(
        f"Starting {server_type}server on http://{config.bind_address}:{config.port}{config.webhook_path} "
        f"translating to {config.gotify_endpoint} ..."
    )
    app.run(host=config.bind_address, port=config.port, debug=config.debug, use_reloader=False, threaded=True)
