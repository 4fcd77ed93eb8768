"""Pipeline de tradução e despacho dos alertas de um lote."""
import logging
from typing import Iterable, List, Optional, Tuple

from . import metrics
from .constants import BridgeConfig
from .decoder import decode_batch
from .errors import DecodeError, DispatchTransportError, DownstreamRejection, MissingFieldError
from .formatters import build_notification
from .models import (
    DISPATCH_ERROR,
    DISPATCHED,
    DOWNSTREAM_NON_200,
    SKIPPED_MISSING_FIELD,
    AlertOutcome,
    InboundAlert,
    InboundBatch,
)
from .services import GotifyClient

logger = logging.getLogger(__name__)

NO_CONTENT_TEXT = "No content sent"
HTTP_OK = 200
HTTP_BAD_REQUEST = 400
HTTP_INTERNAL_SERVER_ERROR = 500


def aggregate_outcomes(outcomes: Iterable[AlertOutcome]) -> Tuple[int, str]:
    """
    Reduz os resultados de um lote a (status HTTP, corpo).
    Não há ranking de falhas: o último alerta que impôs um status vence.
    """
    status = HTTP_OK
    lines = []
    for outcome in outcomes:
        if outcome.status_code is not None:
            status = outcome.status_code
        lines.append(outcome.text)
    return status, "\n".join(lines)


class AlertPipeline:
    def __init__(self, config: BridgeConfig, client: GotifyClient, counters: metrics.BridgeCounters):
        self.config = config
        self.client = client
        self.counters = counters

    def process_alert(self, idx: int, alert: InboundAlert) -> AlertOutcome:
        self.counters.inc(metrics.ALERTS_RECEIVED)
        logger.debug(f"  Alert {idx}")

        notification, missing = build_notification(alert, self.config)
        try:
            if missing:
                raise MissingFieldError(missing)
            logger.debug("    Required fields found. Dispatching to gotify...")
            self.client.send(notification)
        except MissingFieldError as exc:
            logger.debug("    Unable to dispatch!")
            self.counters.inc(metrics.ALERTS_INVALID)
            return AlertOutcome(idx, SKIPPED_MISSING_FIELD, str(exc), HTTP_BAD_REQUEST, exc.missing)
        except DispatchTransportError as exc:
            self.counters.inc(metrics.ALERTS_FAILED)
            return AlertOutcome(idx, DISPATCH_ERROR, str(exc), HTTP_INTERNAL_SERVER_ERROR)
        except DownstreamRejection as exc:
            self.counters.inc(metrics.ALERTS_FAILED)
            return AlertOutcome(idx, DOWNSTREAM_NON_200, str(exc), exc.status_code)

        self.counters.inc(metrics.ALERTS_PROCESSED)
        return AlertOutcome(idx, DISPATCHED, f"Message {idx} dispatched")

    def process_batch(self, batch: InboundBatch) -> List[AlertOutcome]:
        logger.debug(f"Detected {len(batch.alerts)} alerts")
        return [self.process_alert(idx, alert) for idx, alert in enumerate(batch.alerts)]

    def handle(self, body: Optional[bytes]) -> Tuple[int, str]:
        """Processa o corpo de uma requisição do webhook e devolve (status, texto)."""
        self.counters.inc(metrics.REQUESTS_RECEIVED)

        try:
            batch = decode_batch(body or b"")
        except DecodeError as exc:
            logger.warning(f"Unmarshal of request failed: {exc}")
            logger.debug(f"BEGIN passed data:\n{body!r}\nEND passed data.")
            self.counters.inc(metrics.REQUESTS_INVALID)
            return HTTP_BAD_REQUEST, str(exc)

        if batch is None:
            return HTTP_OK, NO_CONTENT_TEXT

        return aggregate_outcomes(self.process_batch(batch))
