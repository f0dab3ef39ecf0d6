# src/atlas_taskflow/core/traceability/serializer.py
"""
Serialização de Results e Chains para logs e inspeção.

`Result.to_h()` e `Chain.to_h()` produzem dicionários com objetos Python
arbitrários (exceções, datas, Decimals, enums). Este módulo converte
essas estruturas em valores JSON-safe e em representações `chave=valor`
legíveis.

Decisões arquiteturais:
    - Timestamps são sempre ISO 8601 em UTC
    - Exceções viram "[Classe] mensagem"
    - Objetos desconhecidos caem em `repr()` (nunca levantam)

Limites explícitos:
    - Não persiste nada em disco
    - Não decide níveis de log
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime, time, timezone
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, Dict


def _ensure_tzaware_utc(dt: datetime) -> datetime:
    """Timestamps timezone-naive são assumidos como UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def iso(dt: datetime) -> str:
    return _ensure_tzaware_utc(dt).isoformat()


def to_serializable(value: Any) -> Any:
    """Converte recursivamente `value` em tipos aceitos por `json.dumps`."""
    if value is None or isinstance(value, (bool, int, float, str)) and not isinstance(value, Enum):
        return value
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Mapping):
        return {str(k): to_serializable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_serializable(v) for v in value]
    if isinstance(value, datetime):
        return iso(value)
    if isinstance(value, (date, time)):
        return value.isoformat()
    if isinstance(value, (Decimal, Fraction, complex)):
        return str(value)
    if isinstance(value, BaseException):
        return f"[{value.__class__.__name__}] {value}"
    to_h = getattr(value, "to_h", None)
    if callable(to_h):
        return to_serializable(to_h())
    return repr(value)


def _format_value(value: Any) -> str:
    if isinstance(value, str):
        return value if value and " " not in value else repr(value)
    return repr(value)


def to_key_value(data: Mapping[str, Any]) -> str:
    """`{"a": 1, "b": "x y"}` → `a=1 b='x y'`"""
    return " ".join(f"{key}={_format_value(value)}" for key, value in data.items())


def serialize_result(result: Any) -> Dict[str, Any]:
    return to_serializable(result.to_h())


def serialize_chain(chain: Any) -> Dict[str, Any]:
    return to_serializable(chain.to_h())
