import logging
from typing import List, Tuple

from .constants import STATUS_MARKERS, BridgeConfig
from .models import InboundAlert, OutboundNotification
from .utils import annotation_or_default, is_link, lookup_annotation, parse_int, truncate_timestamp

logger = logging.getLogger(__name__)


def format_source_link(url: str) -> str:
    return "<br/><a href='" + url + "'>go to source</a>"


def format_created_at(starts_at: str) -> str:
    return (
        "<br/><br/><i><font style='color: #999999;' data-mx-color='#999999'> alert created at: "
        + truncate_timestamp(starts_at)
        + "</font></i><br/>"
    )


def build_notification(alert: InboundAlert, config: BridgeConfig) -> Tuple[OutboundNotification, List[str]]:
    """
    Monta a notificação do Gotify para um alerta.

    Retorna (notificação, anotações faltantes). Com a lista vazia o alerta pode
    ser despachado; caso contrário deve ser descartado.
    """
    title = ""
    message = ""
    extras = {}
    missing: List[str] = []

    if config.extended_details:
        extras["client::display"] = {"contentType": "text/html"}
        marker = STATUS_MARKERS.get(alert.status)
        if marker:
            message += marker["message"]
            title += marker["title"]

    title_value = lookup_annotation(alert.annotations, config.title_annotation)
    if title_value is not None:
        title += title_value
        logger.debug(f"    title: {title}")
    else:
        missing.append(config.title_annotation)
        logger.debug(f"    title annotation ({config.title_annotation}) missing")

    message_value = lookup_annotation(alert.annotations, config.message_annotation)
    if message_value is not None:
        message += message_value
        logger.debug(f"    message: {message}")
    else:
        missing.append(config.message_annotation)
        logger.debug(f"    message annotation ({config.message_annotation}) missing")

    priority = annotation_or_default(
        alert.annotations, config.priority_annotation, config.default_priority, convert=parse_int
    )
    logger.debug(f"    priority: {priority}")

    if config.extended_details:
        if is_link(alert.generator_url):
            message += format_source_link(alert.generator_url)
            extras["client::notification"] = {"click": {"url": alert.generator_url}}
        if alert.starts_at:
            message += format_created_at(alert.starts_at)

    return OutboundNotification(title=title, message=message, priority=priority, extras=extras), missing
