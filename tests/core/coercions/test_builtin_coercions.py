# tests/core/coercions/test_builtin_coercions.py
"""
Testes das coerções embutidas e do CoercionRegistry.

Os testes asseguram que:
- cada coerção converte as entradas canônicas do seu tipo
- entradas inconvertíveis devolvem `Check` reprovado com mensagem traduzida
- `bool` não é aceito como número
- o registry embrulha retornos que não são `Check`
- tags desconhecidas levantam UnknownCoercionError

Limites explícitos:
    - Não valida o pipeline de atributos (ver tests/core/attributes)
"""

from datetime import date, datetime, time
from decimal import Decimal
from fractions import Fraction

import pytest

try:
    from atlas_taskflow.core.coercions import BUILTIN_COERCIONS, CoercionOptions, CoercionRegistry, default_coercions
    from atlas_taskflow.core.exceptions import UnknownCoercionError
except Exception as e:  # noqa: BLE001
    BUILTIN_COERCIONS = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(f"Missing coercions package. Import error: {_IMPORT_ERR}")


def _coerce(tag, value, **options):
    _require_imports()
    return BUILTIN_COERCIONS[tag](value, CoercionOptions.build(options))


def test_builtin_tags():
    _require_imports()
    assert sorted(BUILTIN_COERCIONS) == [
        "array", "boolean", "complex", "date", "datetime", "decimal",
        "float", "hash", "integer", "rational", "string", "time",
    ]


@pytest.mark.parametrize(
    "tag, value, expected",
    [
        ("array", None, []),
        ("array", (1, 2), [1, 2]),
        ("array", "[1, 2]", [1, 2]),
        ("array", "x", ["x"]),
        ("boolean", "Yes", True),
        ("boolean", "0", False),
        ("boolean", False, False),
        ("complex", "1+2j", complex(1, 2)),
        ("date", "2026-10-19", date(2026, 10, 19)),
        ("date", datetime(2026, 10, 19, 8, 30), date(2026, 10, 19)),
        ("datetime", "2026-10-19T08:30:00", datetime(2026, 10, 19, 8, 30)),
        ("datetime", date(2026, 10, 19), datetime(2026, 10, 19)),
        ("time", "08:30", time(8, 30)),
        ("decimal", "10.50", Decimal("10.50")),
        ("decimal", 3, Decimal(3)),
        ("float", "2.5", 2.5),
        ("hash", [("a", 1)], {"a": 1}),
        ("hash", '{"a": 1}', {"a": 1}),
        ("integer", "42", 42),
        ("integer", 4.9, 4),
        ("rational", "3/4", Fraction(3, 4)),
        ("string", 12, "12"),
        ("string", None, ""),
    ],
)
def test_successful_coercions(tag, value, expected):
    check = _coerce(tag, value)

    assert check.ok is True
    assert check.message is None
    assert check.value == expected


@pytest.mark.parametrize(
    "tag, value, message",
    [
        ("array", "[1, 2", "could not coerce into an array"),
        ("boolean", "maybe", "could not coerce into a boolean"),
        ("complex", "abc", "could not coerce into a complex"),
        ("date", "19/10/2026", "could not coerce into a date"),
        ("datetime", 123, "could not coerce into a datetime"),
        ("time", "noon", "could not coerce into a time"),
        ("decimal", "ten", "could not coerce into a decimal"),
        ("decimal", True, "could not coerce into a decimal"),
        ("float", True, "could not coerce into a float"),
        ("hash", "a=1", "could not coerce into a hash"),
        ("integer", "4.2", "could not coerce into an integer"),
        ("integer", None, "could not coerce into an integer"),
        ("integer", False, "could not coerce into an integer"),
        ("rational", "1/0", "could not coerce into a rational"),
    ],
)
def test_failed_coercions(tag, value, message):
    check = _coerce(tag, value)

    assert check.ok is False
    assert check.message == message


def test_date_format_and_decimal_precision():
    assert _coerce("date", "19/10/2026", format="%d/%m/%Y").value == date(2026, 10, 19)
    assert _coerce("time", "8h30", format="%Hh%M").value == time(8, 30)
    assert _coerce("decimal", "1.23456789", precision=3).value == Decimal("1.23")


def test_coercion_options_build():
    _require_imports()
    options = CoercionOptions.build({"format": {"with": "x"}, "precision": 2, "strict": True})

    assert options.format is None
    assert options.precision == 2
    assert options.extra == {"strict": True}


def test_registry_wraps_plain_returns_and_layers_entries():
    _require_imports()
    registry = default_coercions()
    local = CoercionRegistry({"upcase": lambda value, options: value.upper()})

    layered = registry.layered(local.entries())

    assert layered.coerce("upcase", None, "abc").value == "ABC"
    assert layered.coerce("integer", None, "7").value == 7
    assert "upcase" not in registry
    assert registry.layered({}) is registry

    with pytest.raises(UnknownCoercionError) as excinfo:
        registry.coerce("upcase", None, "abc")
    assert excinfo.value.details["name"] == "upcase"


def test_registry_rejects_invalid_entries():
    _require_imports()
    registry = CoercionRegistry()

    with pytest.raises(ValueError):
        registry.register(" ", str)
    with pytest.raises(TypeError):
        registry.register("number", 42)

    registry.register("number", "to_number").deregister("number")
    assert len(registry) == 0
