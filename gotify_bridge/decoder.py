import json
from typing import Any, Dict, Optional

from .errors import DecodeError
from .models import InboundAlert, InboundBatch


def _get_field(obj: Dict[str, Any], name: str) -> Any:
    """
    Busca a chave exata e, na falta dela, sem diferenciar maiúsculas.
    O Alertmanager envia camelCase, mas clientes antigos mandam 'Alerts', 'Annotations'...
    """
    if name in obj:
        return obj[name]
    lowered = name.lower()
    for key, value in obj.items():
        if isinstance(key, str) and key.lower() == lowered:
            return value
    return None


def _as_string(value: Any, where: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"{where} must be a string, got {type(value).__name__}")
    return value


def _decode_annotations(value: Any, where: str) -> Dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DecodeError(f"{where} must be an object, got {type(value).__name__}")
    annotations = {}
    for key, item in value.items():
        annotations[key] = _as_string(item, f"{where}.{key}")
    return annotations


def _decode_alert(raw: Any, idx: int) -> InboundAlert:
    where = f"alerts[{idx}]"
    if raw is None:
        return InboundAlert()
    if not isinstance(raw, dict):
        raise DecodeError(f"{where} must be an object, got {type(raw).__name__}")
    return InboundAlert(
        annotations=_decode_annotations(_get_field(raw, "annotations"), f"{where}.annotations"),
        status=_as_string(_get_field(raw, "status"), f"{where}.status"),
        generator_url=_as_string(_get_field(raw, "generatorURL"), f"{where}.generatorURL"),
        starts_at=_as_string(_get_field(raw, "startsAt"), f"{where}.startsAt"),
    )


def decode_batch(body: bytes) -> Optional[InboundBatch]:
    """
    Converte o corpo bruto da requisição em um InboundBatch.

    Retorna None para corpo vazio (caso distinto, não é erro).
    Levanta DecodeError para JSON malformado ou com formato incompatível.
    """
    if not body:
        return None

    try:
        data = json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise DecodeError(str(exc)) from exc
    except RecursionError as exc:
        # JSON aninhado demais para o parser
        raise DecodeError(f"request body is nested too deeply: {exc}") from exc

    if data is None:
        return InboundBatch()
    if not isinstance(data, dict):
        raise DecodeError(f"request body must be a JSON object, got {type(data).__name__}")

    raw_alerts = _get_field(data, "alerts")
    if raw_alerts is None:
        return InboundBatch()
    if not isinstance(raw_alerts, list):
        raise DecodeError(f"alerts must be a list, got {type(raw_alerts).__name__}")

    return InboundBatch(alerts=[_decode_alert(raw, idx) for idx, raw in enumerate(raw_alerts)])
