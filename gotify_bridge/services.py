import json
import logging
from typing import Optional

import requests

from .errors import DispatchTransportError, DownstreamRejection
from .models import OutboundNotification

logger = logging.getLogger(__name__)


class GotifyClient:
    """
    Cliente HTTP do endpoint /message do Gotify.
    A sessão é compartilhada entre requisições; cada POST recebe seu próprio timeout.
    """

    def __init__(self, endpoint: str, token: str, timeout: float, session: Optional[requests.Session] = None):
        self.endpoint = endpoint
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self):
        return {
            "Content-Type": "application/json",
            "X-Gotify-Key": self.token,
        }

    def send(self, notification: OutboundNotification) -> requests.Response:
        """
        Envia a notificação. Levanta DispatchTransportError quando não há resposta
        e DownstreamRejection quando o Gotify responde algo diferente de 200.
        """
        body = json.dumps(notification.to_payload())
        logger.debug(f"    Outbound: {body}")

        try:
            resp = self.session.post(self.endpoint, data=body, headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error(f"Error dispatching to Gotify: {exc}")
            raise DispatchTransportError(exc) from exc

        logger.debug(f"    Dispatched! Response was {resp.text}")
        if resp.status_code != 200:
            logger.warning(
                f"Non-200 response from gotify at {self.endpoint}. Code: {resp.status_code}, "
                f"Status: {resp.reason} (enable debug to see body)"
            )
            raise DownstreamRejection(resp.status_code, resp.reason, resp.text)
        return resp

    def close(self):
        self.session.close()
