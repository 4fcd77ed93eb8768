from typing import Optional, Sequence


class BridgeError(Exception):
    """Base de todos os erros do bridge."""


class ConfigError(BridgeError):
    """Configuração inválida detectada na inicialização."""


class DecodeError(BridgeError):
    """Corpo da requisição não pôde ser interpretado como lote de alertas."""


class MissingFieldError(BridgeError):
    def __init__(self, missing: Sequence[str]):
        self.missing = list(missing)
        super().__init__(f"Missing annotation: {', '.join(self.missing)}")


class DispatchTransportError(BridgeError):
    """Falha de transporte ao falar com o Gotify (conexão, timeout, etc.)."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(str(cause))


class DownstreamRejection(BridgeError):
    def __init__(self, status_code: int, reason: Optional[str] = None, body: str = ""):
        self.status_code = status_code
        self.reason = reason or ""
        self.body = body
        status = f"{status_code} {self.reason}".strip()
        super().__init__(f"Gotify Error: {status}")
