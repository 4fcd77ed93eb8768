import re
from typing import Callable, Mapping, Optional, TypeVar

T = TypeVar("T")

TIMESTAMP_DISPLAY_LENGTH = 19

# Mesmas regras do strconv.Atoi: só dígitos ASCII, sinal opcional, sem espaços, dentro de int64
_INT_RE = re.compile(r'[+-]?[0-9]+')
INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1


def lookup_annotation(annotations: Optional[Mapping[str, str]], key: str) -> Optional[str]:
    """Retorna o valor da anotação ou None quando ausente (valor vazio conta como presente)."""
    if not annotations:
        return None
    return annotations.get(key)


def parse_int(value: Optional[str]) -> Optional[int]:
    if value is None or not _INT_RE.fullmatch(value):
        return None
    if len(value.lstrip("+-").lstrip("0")) > 19:
        return None
    number = int(value)
    if number < INT64_MIN or number > INT64_MAX:
        return None
    return number


def annotation_or_default(annotations: Optional[Mapping[str, str]], key: str, default: T,
                          convert: Callable[[str], Optional[T]] = None) -> T:
    """
    Combina busca + conversão + fallback num único ponto.
    Se a anotação falta, ou a conversão devolve None, fica o default.
    """
    raw = lookup_annotation(annotations, key)
    if raw is None:
        return default
    value = convert(raw) if convert else raw
    return default if value is None else value


def truncate_timestamp(timestamp_str: str) -> str:
    # 2024-05-01T10:20:30.123456789Z -> 2024-05-01T10:20:30
    return timestamp_str[:TIMESTAMP_DISPLAY_LENGTH]


def is_link(url: Optional[str]) -> bool:
    return bool(url) and url.startswith("http")
