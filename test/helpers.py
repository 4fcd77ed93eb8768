import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from unittest.mock import Mock

import requests

from gotify_bridge.constants import BridgeConfig
from gotify_bridge.services import GotifyClient


def make_config(**overrides):
    values = dict(
        gotify_endpoint="http://gotify.local/message",
        gotify_token="secret-token",
        timeout=5.0,
        title_annotation="description",
        message_annotation="summary",
        priority_annotation="priority",
        default_priority=5,
        extended_details=False,
    )
    values.update(overrides)
    return BridgeConfig(**values)


def make_response(status_code=200, reason="OK", text="{}"):
    resp = Mock(spec=requests.Response)
    resp.status_code = status_code
    resp.reason = reason
    resp.text = text
    return resp


def make_client(*responses, config=None):
    """GotifyClient com sessão falsa; cada item é uma resposta ou uma exceção a levantar."""
    config = config or make_config()
    session = Mock(spec=requests.Session)
    session.post.side_effect = list(responses)
    return GotifyClient(config.gotify_endpoint, config.gotify_token, config.timeout, session=session)


def make_alert(description="Disk full", summary="Disk / is at 95%", **extra):
    annotations = {}
    if description is not None:
        annotations["description"] = description
    if summary is not None:
        annotations["summary"] = summary
    annotations.update(extra.pop("annotations", {}))
    alert = {"status": "firing", "annotations": annotations}
    alert.update(extra)
    return alert
