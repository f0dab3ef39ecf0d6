# src/atlas_taskflow/core/coercions/builtin.py
"""
Coerções embutidas do Atlas TaskFlow.

Cada coerção recebe `(value, options)` e devolve um `Check`:
    - Check.passed(valor_convertido) em caso de sucesso
    - Check.failed(mensagem_traduzida) quando a conversão não é possível

Tags disponíveis:
    array, boolean, complex, date, datetime, decimal, float, hash,
    integer, rational, string, time

Decisões arquiteturais:
    - `bool` não é aceito como número (True não vira 1 nem 1.0)
    - Datas usam `options.format` (strptime) quando informado;
      caso contrário, ISO 8601 (`fromisoformat`)
    - `decimal` usa precisão 14 por padrão (`options.precision`)
    - Strings iniciadas por "[" / "{" são decodificadas como JSON para
      `array` / `hash`

Limites explícitos:
    - Não valida faixas ou formatos de negócio (ver validators)
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from datetime import date, datetime, time
from decimal import Context as DecimalContext, Decimal, InvalidOperation
from fractions import Fraction
from typing import Any, Callable, Dict

from atlas_taskflow.core.checks import Check
from atlas_taskflow.core.locale import translate

from .registry import CoercionOptions

DEFAULT_DECIMAL_PRECISION = 14

FALSEY = re.compile(r"^(false|f|no|n|0)$", re.IGNORECASE)
TRUTHY = re.compile(r"^(true|t|yes|y|1)$", re.IGNORECASE)


def coercion_failure(type_key: str, *, article: str = "into_a") -> Check:
    type_name = translate(f"taskflow.types.{type_key}")
    return Check.failed(translate(f"taskflow.coercions.{article}", type=type_name))


def coerce_array(value: Any, options: CoercionOptions) -> Check:
    if value is None:
        return Check.passed([])
    if isinstance(value, list):
        return Check.passed(value)
    if isinstance(value, (tuple, set, frozenset)):
        return Check.passed(list(value))
    if isinstance(value, str) and value.startswith("["):
        try:
            decoded = json.loads(value)
        except ValueError:
            return coercion_failure("array", article="into_an")
        if isinstance(decoded, list):
            return Check.passed(decoded)
        return coercion_failure("array", article="into_an")
    return Check.passed([value])


def coerce_boolean(value: Any, options: CoercionOptions) -> Check:
    text = str(value).lower()
    if FALSEY.match(text):
        return Check.passed(False)
    if TRUTHY.match(text):
        return Check.passed(True)
    return coercion_failure("boolean")


def coerce_complex(value: Any, options: CoercionOptions) -> Check:
    try:
        return Check.passed(complex(value))
    except (TypeError, ValueError):
        return coercion_failure("complex")


def coerce_date(value: Any, options: CoercionOptions) -> Check:
    if isinstance(value, datetime):
        return Check.passed(value.date())
    if isinstance(value, date):
        return Check.passed(value)
    try:
        if options.format:
            return Check.passed(datetime.strptime(value, options.format).date())
        return Check.passed(date.fromisoformat(value))
    except (TypeError, ValueError):
        return coercion_failure("date")


def coerce_datetime(value: Any, options: CoercionOptions) -> Check:
    if isinstance(value, datetime):
        return Check.passed(value)
    if isinstance(value, date):
        return Check.passed(datetime.combine(value, time()))
    try:
        if options.format:
            return Check.passed(datetime.strptime(value, options.format))
        return Check.passed(datetime.fromisoformat(value))
    except (TypeError, ValueError):
        return coercion_failure("datetime")


def coerce_time(value: Any, options: CoercionOptions) -> Check:
    if isinstance(value, datetime):
        return Check.passed(value.time())
    if isinstance(value, time):
        return Check.passed(value)
    try:
        if options.format:
            return Check.passed(datetime.strptime(value, options.format).time())
        return Check.passed(time.fromisoformat(value))
    except (TypeError, ValueError):
        return coercion_failure("time")


def coerce_decimal(value: Any, options: CoercionOptions) -> Check:
    if isinstance(value, bool) or value is None:
        return coercion_failure("decimal")
    precision = options.precision or DEFAULT_DECIMAL_PRECISION
    try:
        return Check.passed(DecimalContext(prec=precision).create_decimal(str(value).strip()))
    except (InvalidOperation, TypeError, ValueError):
        return coercion_failure("decimal")


def coerce_float(value: Any, options: CoercionOptions) -> Check:
    if isinstance(value, bool):
        return coercion_failure("float")
    try:
        return Check.passed(float(value))
    except (TypeError, ValueError):
        return coercion_failure("float")


def coerce_hash(value: Any, options: CoercionOptions) -> Check:
    if isinstance(value, dict):
        return Check.passed(value)
    if isinstance(value, Mapping):
        return Check.passed(dict(value))
    try:
        if isinstance(value, (list, tuple)):
            return Check.passed(dict(value))
        if isinstance(value, str) and value.startswith("{"):
            decoded = json.loads(value)
            if isinstance(decoded, dict):
                return Check.passed(decoded)
    except (TypeError, ValueError):
        pass
    return coercion_failure("hash")


def coerce_integer(value: Any, options: CoercionOptions) -> Check:
    if isinstance(value, bool):
        return coercion_failure("integer", article="into_an")
    try:
        return Check.passed(int(value))
    except (TypeError, ValueError, OverflowError):
        return coercion_failure("integer", article="into_an")


def coerce_rational(value: Any, options: CoercionOptions) -> Check:
    if isinstance(value, bool):
        return coercion_failure("rational")
    try:
        return Check.passed(Fraction(value))
    except (TypeError, ValueError, ZeroDivisionError):
        return coercion_failure("rational")


def coerce_string(value: Any, options: CoercionOptions) -> Check:
    return Check.passed("" if value is None else str(value))


BUILTIN_COERCIONS: Dict[str, Callable[[Any, CoercionOptions], Check]] = {
    "array": coerce_array,
    "boolean": coerce_boolean,
    "complex": coerce_complex,
    "date": coerce_date,
    "datetime": coerce_datetime,
    "decimal": coerce_decimal,
    "float": coerce_float,
    "hash": coerce_hash,
    "integer": coerce_integer,
    "rational": coerce_rational,
    "string": coerce_string,
    "time": coerce_time,
}
