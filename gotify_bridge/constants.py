import os
import re
from dataclasses import dataclass
from typing import Mapping, Optional
from urllib.parse import urlparse

from .errors import ConfigError

# Valores padrão; o ambiente só é lido em load_config()
DEFAULT_GOTIFY_ENDPOINT = "http://127.0.0.1:80/message"
DEFAULT_BIND_ADDRESS = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_WEBHOOK_PATH = "/gotify_webhook"
DEFAULT_BUILD_VERSION = "dev"

# Anotações do Alertmanager usadas para montar a notificação
DEFAULT_TITLE_ANNOTATION = "description"
DEFAULT_MESSAGE_ANNOTATION = "summary"
DEFAULT_PRIORITY_ANNOTATION = "priority"
DEFAULT_PRIORITY = 5

# Métricas
DEFAULT_METRICS_NAMESPACE = "alertmanager_gotify_bridge"
DEFAULT_METRICS_PATH = "/metrics"

MESSAGE_SUFFIX = "/message"
DEFAULT_TIMEOUT_SECONDS = 5.0

# Marcadores do modo estendido (HTML)
STATUS_MARKERS = {
    "resolved": {
        "title": "[RES] ",
        "message": "<font style='color: #00b339;' data-mx-color='#00b339'>RESOLVED</font><br/> ",
    },
    "firing": {
        "title": "[FIR] ",
        "message": "<font style='color: #b31e00;' data-mx-color='#b31e00'>FIRING</font><br/> ",
    },
}

_DURATION_UNITS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}
_DURATION_RE = re.compile(r'^\s*([0-9]*\.?[0-9]+)\s*(ms|s|m|h)?\s*$')


def _env_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, value: Optional[str], default: int) -> int:
    if value is None or value.strip() == "":
        return default
    try:
        return int(value.strip())
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {value!r}")


def parse_duration(value: Optional[str], default: float = DEFAULT_TIMEOUT_SECONDS) -> float:
    """
    Converte uma duração em segundos.
    Aceita número puro (segundos) ou sufixos ms/s/m/h: '5', '5s', '1.5s', '500ms', '1m'.
    """
    if value is None or value.strip() == "":
        return default
    match = _DURATION_RE.match(value)
    if not match:
        raise ConfigError(f"TIMEOUT must be a duration like '5s', got {value!r}")
    amount = float(match.group(1))
    unit = match.group(2) or "s"
    seconds = amount * _DURATION_UNITS[unit]
    if seconds <= 0:
        raise ConfigError(f"TIMEOUT must be positive, got {value!r}")
    return seconds


def normalize_endpoint(endpoint: str) -> str:
    """Garante que o endpoint termine em /message, como a API do Gotify espera."""
    if endpoint.endswith(MESSAGE_SUFFIX):
        return endpoint
    if endpoint.endswith("/"):
        return endpoint + MESSAGE_SUFFIX.lstrip("/")
    return endpoint + MESSAGE_SUFFIX


def _validate_endpoint(endpoint: str) -> None:
    parsed = urlparse(endpoint)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigError(f"invalid gotify endpoint: {endpoint}")


@dataclass(frozen=True)
class BridgeConfig:
    gotify_endpoint: str = DEFAULT_GOTIFY_ENDPOINT
    gotify_token: str = ""
    bind_address: str = DEFAULT_BIND_ADDRESS
    port: int = DEFAULT_PORT
    webhook_path: str = DEFAULT_WEBHOOK_PATH
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    title_annotation: str = DEFAULT_TITLE_ANNOTATION
    message_annotation: str = DEFAULT_MESSAGE_ANNOTATION
    priority_annotation: str = DEFAULT_PRIORITY_ANNOTATION
    default_priority: int = DEFAULT_PRIORITY
    extended_details: bool = False
    metrics_auth_username: str = ""
    metrics_auth_password: str = ""
    metrics_namespace: str = DEFAULT_METRICS_NAMESPACE
    metrics_path: str = DEFAULT_METRICS_PATH
    debug: bool = False
    version: str = DEFAULT_BUILD_VERSION

    @property
    def metrics_auth_enabled(self) -> bool:
        return bool(self.metrics_auth_username and self.metrics_auth_password)


def load_config(environ: Optional[Mapping[str, str]] = None, logger=None) -> BridgeConfig:
    """
    Monta o BridgeConfig a partir do ambiente.
    Levanta ConfigError quando o token falta ou o endpoint é inválido.
    """
    env = os.environ if environ is None else environ

    token = env.get("GOTIFY_TOKEN", "")
    if not token:
        raise ConfigError("The token for Gotify API must be set in the environment variable GOTIFY_TOKEN")

    endpoint = env.get("GOTIFY_ENDPOINT", DEFAULT_GOTIFY_ENDPOINT)
    normalized = normalize_endpoint(endpoint)
    if normalized != endpoint and logger is not None:
        logger.warning(
            f"/message not at the end of GOTIFY_ENDPOINT ({endpoint}). Automatically appending it. "
            f"New endpoint: {normalized}"
        )
    _validate_endpoint(normalized)

    return BridgeConfig(
        gotify_endpoint=normalized,
        gotify_token=token,
        bind_address=env.get("BIND_ADDRESS", DEFAULT_BIND_ADDRESS),
        port=_env_int("PORT", env.get("PORT"), DEFAULT_PORT),
        webhook_path=env.get("WEBHOOK_PATH", DEFAULT_WEBHOOK_PATH),
        timeout=parse_duration(env.get("TIMEOUT")),
        title_annotation=env.get("TITLE_ANNOTATION", DEFAULT_TITLE_ANNOTATION),
        message_annotation=env.get("SUMMARY_ANNOTATION", DEFAULT_MESSAGE_ANNOTATION),
        priority_annotation=env.get("PRIORITY_ANNOTATION", DEFAULT_PRIORITY_ANNOTATION),
        default_priority=_env_int("DEFAULT_PRIORITY", env.get("DEFAULT_PRIORITY"), DEFAULT_PRIORITY),
        extended_details=_env_bool(env.get("EXTENDED_DETAILS")),
        metrics_auth_username=env.get("METRICS_AUTH_USERNAME") or env.get("AUTH_USERNAME", ""),
        metrics_auth_password=env.get("METRICS_AUTH_PASSWORD") or env.get("AUTH_PASSWORD", ""),
        metrics_namespace=env.get("METRICS_NAMESPACE", DEFAULT_METRICS_NAMESPACE),
        metrics_path=env.get("METRICS_PATH", DEFAULT_METRICS_PATH),
        debug=_env_bool(env.get("DEBUG_MODE")),
        version=env.get("BUILD_VERSION", DEFAULT_BUILD_VERSION),
    )
