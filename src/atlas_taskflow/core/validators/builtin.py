# src/atlas_taskflow/core/validators/builtin.py
"""
Validadores embutidos do Atlas TaskFlow.

Tags disponíveis:
    absence, exclusion, format, inclusion, length, numeric, presence

Convenções de faixas (`within`, `not_within`, `in` em range):
    - `range(a, b)` cobre os inteiros de `a` até `b - 1`
    - uma sequência `(min, max)` cobre o intervalo fechado [min, max]

Mensagens customizadas:
    - `<regra>_message` (ex.: `min_message`) tem precedência sobre `message`
    - ambas aceitam placeholders `str.format` (`{min}`, `{max}`, `{values}`...)
"""

from __future__ import annotations

import re
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from atlas_taskflow.core.checks import Check
from atlas_taskflow.core.exceptions import AttributeDefinitionError
from atlas_taskflow.core.locale import translate

from .registry import ValidatorOptions

_BLANK = re.compile(r"\S")


def is_present(value: Any) -> bool:
    if isinstance(value, str):
        return bool(_BLANK.search(value))
    if hasattr(value, "__len__"):
        return len(value) > 0
    return value is not None


def bounds(bounds_value: Any) -> Tuple[Any, Any]:
    if isinstance(bounds_value, range):
        return bounds_value.start, bounds_value.stop - 1
    if isinstance(bounds_value, (list, tuple)) and len(bounds_value) == 2:
        return bounds_value[0], bounds_value[1]
    raise AttributeDefinitionError(
        "Range options must be a range or a (min, max) pair",
        details={"received": repr(bounds_value)},
    )


def _fail(options: ValidatorOptions, keys: Sequence[str], key: str, **interpolations: Any) -> Check:
    message = options.message_for(*keys, **interpolations)
    return Check.failed(message or translate(key, **interpolations))


def _describe(values: Any) -> str:
    return ", ".join(repr(v) for v in values)


def _holds(comparison: Callable[[], bool]) -> Optional[bool]:
    """Resultado da comparação, ou None quando os valores não são comparáveis."""
    try:
        return bool(comparison())
    except TypeError:
        return None


# ---------------------------------------------------------------------------
# presence / absence
# ---------------------------------------------------------------------------

def validate_presence(value: Any, options: ValidatorOptions) -> Check:
    if is_present(value):
        return Check.passed(value)
    return _fail(options, (), "taskflow.validators.presence")


def validate_absence(value: Any, options: ValidatorOptions) -> Check:
    if not is_present(value):
        return Check.passed(value)
    return _fail(options, (), "taskflow.validators.absence")


# ---------------------------------------------------------------------------
# format
# ---------------------------------------------------------------------------

def validate_format(value: Any, options: ValidatorOptions) -> Check:
    with_ = options.extra.get("with")
    without = options.extra.get("without")

    if with_ is None and without is None:
        valid = False
    elif not isinstance(value, str):
        valid = False
    else:
        valid = (with_ is None or re.search(with_, value) is not None) and (
            without is None or re.search(without, value) is None
        )

    if valid:
        return Check.passed(value)
    return _fail(options, (), "taskflow.validators.format")


# ---------------------------------------------------------------------------
# inclusion / exclusion
# ---------------------------------------------------------------------------

def _membership_options(options: ValidatorOptions) -> Tuple[Optional[str], Any]:
    if "in" in options.extra:
        return "in", options.extra["in"]
    if "within" in options.extra:
        return "within", options.extra["within"]
    return None, ()


def validate_inclusion(value: Any, options: ValidatorOptions) -> Check:
    key, values = _membership_options(options)

    if isinstance(values, range) or key == "within":
        low, high = bounds(values)
        if value is not None and _holds(lambda: low <= value <= high):
            return Check.passed(value)
        return _fail(
            options, ("within", "in"), "taskflow.validators.inclusion.within", min=low, max=high
        )

    if value in list(values):
        return Check.passed(value)
    return _fail(options, ("of",), "taskflow.validators.inclusion.of", values=_describe(values))


def validate_exclusion(value: Any, options: ValidatorOptions) -> Check:
    key, values = _membership_options(options)

    if isinstance(values, range) or key == "within":
        low, high = bounds(values)
        if value is not None and _holds(lambda: low <= value <= high):
            return _fail(
                options, ("within", "in"), "taskflow.validators.exclusion.within", min=low, max=high
            )
        return Check.passed(value)

    if value in list(values):
        return _fail(options, ("of",), "taskflow.validators.exclusion.of", values=_describe(values))
    return Check.passed(value)


# ---------------------------------------------------------------------------
# length / numeric
# ---------------------------------------------------------------------------

def _measure(subject: Any, value: Any, options: ValidatorOptions, prefix: str) -> Check:
    """
    Aplica a primeira regra de magnitude declarada, na ordem:
    within, not_within, in, not_in, min+max, min, max, is, is_not.

    Um `subject` None ou não comparável com a regra falha com a mensagem
    da própria regra.
    """
    rules = options.extra
    key = f"taskflow.validators.{prefix}"
    measurable = subject is not None

    for name, negate in (("within", False), ("not_within", True), ("in", False), ("not_in", True)):
        if name in rules:
            low, high = bounds(rules[name])
            covered = _holds(lambda: low <= subject <= high) if measurable else None
            if covered is not None and covered != negate:
                return Check.passed(value)
            if negate:
                return _fail(options, (name,), f"{key}.not_within", min=low, max=high)
            return _fail(options, (name,), f"{key}.within", min=low, max=high)

    if "min" in rules and "max" in rules:
        low, high = rules["min"], rules["max"]
        if measurable and _holds(lambda: low <= subject <= high):
            return Check.passed(value)
        return _fail(options, ("within",), f"{key}.within", min=low, max=high)
    if "min" in rules:
        if measurable and _holds(lambda: rules["min"] <= subject):
            return Check.passed(value)
        return _fail(options, ("min",), f"{key}.min", min=rules["min"])
    if "max" in rules:
        if measurable and _holds(lambda: subject <= rules["max"]):
            return Check.passed(value)
        return _fail(options, ("max",), f"{key}.max", max=rules["max"])
    if "is" in rules:
        if measurable and subject == rules["is"]:
            return Check.passed(value)
        return _fail(options, ("is",), f"{key}.is", **{"is": rules["is"]})
    if "is_not" in rules:
        if measurable and subject != rules["is_not"]:
            return Check.passed(value)
        return _fail(options, ("is_not",), f"{key}.is_not", is_not=rules["is_not"])

    raise AttributeDefinitionError(
        f"No known {prefix} validator options given",
        details={"options": sorted(rules)},
    )


def validate_length(value: Any, options: ValidatorOptions) -> Check:
    subject = len(value) if hasattr(value, "__len__") else None
    return _measure(subject, value, options, "length")


def validate_numeric(value: Any, options: ValidatorOptions) -> Check:
    return _measure(value, value, options, "numeric")


BUILTIN_VALIDATORS: Dict[str, Callable[[Any, ValidatorOptions], Check]] = {
    "absence": validate_absence,
    "exclusion": validate_exclusion,
    "format": validate_format,
    "inclusion": validate_inclusion,
    "length": validate_length,
    "numeric": validate_numeric,
    "presence": validate_presence,
}
