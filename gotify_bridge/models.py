from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Tipos de resultado por alerta
DISPATCHED = "dispatched"
SKIPPED_MISSING_FIELD = "skipped-missing-field"
DISPATCH_ERROR = "dispatch-error"
DOWNSTREAM_NON_200 = "downstream-non-200"


@dataclass
class InboundAlert:
    annotations: Dict[str, str] = field(default_factory=dict)
    status: str = ""
    generator_url: str = ""
    starts_at: str = ""


@dataclass
class InboundBatch:
    alerts: List[InboundAlert] = field(default_factory=list)


@dataclass
class OutboundNotification:
    title: str
    message: str
    priority: int
    extras: Dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "message": self.message,
            "priority": self.priority,
            "extras": self.extras,
        }


@dataclass
class AlertOutcome:
    """
    Resultado transitório do processamento de um alerta.
    status_code é o código HTTP que o alerta impõe ao lote (None quando foi entregue).
    """
    index: int
    kind: str
    text: str
    status_code: Optional[int] = None
    missing: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.kind == DISPATCHED
