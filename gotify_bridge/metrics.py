import threading
from typing import Dict, Tuple

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest
from prometheus_client.core import CounterMetricFamily, InfoMetricFamily

REQUESTS_RECEIVED = "requests_received"
REQUESTS_INVALID = "requests_invalid"
ALERTS_RECEIVED = "alerts_received"
ALERTS_INVALID = "alerts_invalid"
ALERTS_PROCESSED = "alerts_processed"
ALERTS_FAILED = "alerts_failed"

COUNTER_HELP = {
    REQUESTS_RECEIVED: "Number of webhook requests received",
    REQUESTS_INVALID: "Number of webhook requests with an undecodable body",
    ALERTS_RECEIVED: "Number of alerts received",
    ALERTS_INVALID: "Number of alerts skipped for missing annotations",
    ALERTS_PROCESSED: "Number of alerts dispatched to Gotify",
    ALERTS_FAILED: "Number of alerts Gotify failed to accept",
}


class BridgeCounters:
    """Contadores monotônicos compartilhados entre requisições (incremento sob lock)."""

    def __init__(self):
        self._lock = threading.Lock()
        self._values: Dict[str, int] = {name: 0 for name in COUNTER_HELP}

    def inc(self, name: str, amount: int = 1) -> None:
        if name not in self._values:
            raise KeyError(f"unknown counter: {name}")
        with self._lock:
            self._values[name] += amount

    def get(self, name: str) -> int:
        with self._lock:
            return self._values[name]

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._values)


class BridgeCollector:
    """Expõe os contadores do bridge no formato do Prometheus."""

    def __init__(self, counters: BridgeCounters, namespace: str, version: str = "dev"):
        self.counters = counters
        self.namespace = namespace
        self.version = version

    def collect(self):
        info = InfoMetricFamily(f"{self.namespace}_build", "Build information of the bridge")
        info.add_metric([], {"version": self.version})
        yield info
        for name, value in self.counters.snapshot().items():
            yield CounterMetricFamily(f"{self.namespace}_{name}", COUNTER_HELP[name], value=value)


def build_registry(counters: BridgeCounters, namespace: str, version: str = "dev") -> CollectorRegistry:
    registry = CollectorRegistry()
    registry.register(BridgeCollector(counters, namespace, version))
    return registry


def render_metrics(registry: CollectorRegistry) -> Tuple[bytes, str]:
    return generate_latest(registry), CONTENT_TYPE_LATEST
