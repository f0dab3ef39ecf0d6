# tests/core/validators/test_builtin_validators.py
"""
Testes dos validadores embutidos e do ValidatorRegistry.

Os testes asseguram que:
- cada validador aprova e reprova as entradas canônicas
- mensagens padrão são traduzidas e interpoladas
- `<regra>_message` tem precedência sobre `message`
- faixas seguem as convenções de `range` (fim exclusivo) e
  `(min, max)` (intervalo fechado)
- declarações inválidas levantam AttributeDefinitionError

Limites explícitos:
    - Condições `if`/`unless` e `allow_nil` são avaliadas pelo
      AttributeValue (ver tests/core/attributes)
"""

import pytest

try:
    from atlas_taskflow.core.checks import Check
    from atlas_taskflow.core.exceptions import AttributeDefinitionError
    from atlas_taskflow.core.validators import BUILTIN_VALIDATORS, ValidatorOptions, default_validators, is_present
except Exception as e:  # noqa: BLE001
    BUILTIN_VALIDATORS = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(f"Missing validators package. Import error: {_IMPORT_ERR}")


def _validate(tag, value, raw=True):
    _require_imports()
    return BUILTIN_VALIDATORS[tag](value, ValidatorOptions.build(raw))


# =====================================================
# presence / absence
# =====================================================

@pytest.mark.parametrize("value, present", [
    ("x", True), (" \n", False), ("", False), ([], False), ({"a": 1}, True), (None, False), (0, True), (False, True),
])
def test_is_present(value, present):
    _require_imports()
    assert is_present(value) is present


def test_presence_and_absence():
    assert _validate("presence", "ana").ok
    assert _validate("presence", "  ").message == "cannot be empty"
    assert _validate("absence", None).ok
    assert _validate("absence", "ana").message == "must be empty"
    assert _validate("presence", None, {"message": "is required"}).message == "is required"


# =====================================================
# format
# =====================================================

def test_format_with_and_without():
    assert _validate("format", "a@b.c", {"with": r"@"}).ok
    assert not _validate("format", "abc", {"with": r"@"}).ok
    assert _validate("format", "abc", {"without": r"\d"}).ok
    assert _validate("format", "ab1", {"with": r"^[a-z]", "without": r"\d"}).message == "is an invalid format"
    assert not _validate("format", 123, {"with": r"\d"}).ok
    assert not _validate("format", "abc", {}).ok


# =====================================================
# inclusion / exclusion
# =====================================================

def test_inclusion_of_values():
    assert _validate("inclusion", "open", {"in": ["open", "closed"]}).ok
    check = _validate("inclusion", "lost", {"in": ["open", "closed"]})
    assert check.message == "must be one of: 'open', 'closed'"


def test_inclusion_within_ranges():
    assert _validate("inclusion", 10, {"within": (1, 10)}).ok
    assert _validate("inclusion", 4, {"in": range(1, 5)}).ok
    assert _validate("inclusion", 5, {"in": range(1, 5)}).message == "must be within 1 and 4"
    assert _validate("inclusion", None, {"within": (1, 10)}).message == "must be within 1 and 10"


def test_exclusion():
    assert _validate("exclusion", "guest", {"in": ["admin", "root"]}).ok
    assert _validate("exclusion", "root", {"in": ["admin", "root"]}).message == "must not be one of: 'admin', 'root'"
    assert _validate("exclusion", 3, {"within": [1, 5]}).message == "must not be within 1 and 5"
    assert _validate("exclusion", 6, {"within": [1, 5]}).ok


def test_custom_message_keys():
    check = _validate("inclusion", "x", {"in": ["a"], "of_message": "pick {values}"})
    assert check.message == "pick 'a'"

    check = _validate("exclusion", 2, {"within": (1, 3), "within_message": "not {min}..{max}"})
    assert check.message == "not 1..3"


# =====================================================
# length / numeric
# =====================================================

@pytest.mark.parametrize(
    "raw, value, message",
    [
        ({"within": (2, 4)}, "abcde", "length must be within 2 and 4"),
        ({"not_within": (2, 4)}, "abc", "length must not be within 2 and 4"),
        ({"in": range(2, 5)}, "a", "length must be within 2 and 4"),
        ({"not_in": range(2, 5)}, "ab", "length must not be within 2 and 4"),
        ({"min": 2, "max": 4}, "a", "length must be within 2 and 4"),
        ({"min": 2}, "a", "length must be at least 2"),
        ({"max": 2}, "abc", "length must be at most 2"),
        ({"is": 2}, "abc", "length must be 2"),
        ({"is_not": 3}, "abc", "length must not be 3"),
    ],
)
def test_length_failures(raw, value, message):
    assert _validate("length", value, raw).message == message


def test_length_passes_and_counts_collections():
    assert _validate("length", [1, 2, 3], {"min": 3}).ok
    assert _validate("length", "abcd", {"not_within": (1, 3)}).ok
    assert _validate("length", {"a": 1}, {"is": 1}).ok


@pytest.mark.parametrize(
    "raw, value, message",
    [
        ({"within": (18, 65)}, 70, "must be within 18 and 65"),
        ({"not_within": (0, 9)}, 5, "must not be within 0 and 9"),
        ({"min": 18}, 16, "must be at least 18"),
        ({"max": 100}, 101, "must be at most 100"),
        ({"is": 1}, 2, "must be 1"),
        ({"is_not": 0}, 0, "must not be 0"),
    ],
)
def test_numeric_failures(raw, value, message):
    assert _validate("numeric", value, raw).message == message


def test_numeric_custom_message_and_passes():
    assert _validate("numeric", 18, {"min": 18}).ok
    assert _validate("numeric", 2.5, {"min": 1, "max": 3}).ok
    check = _validate("numeric", 1, {"min": 5, "min_message": "at least {min}", "message": "generic"})
    assert check.message == "at least 5"
    check = _validate("numeric", 9, {"max": 5, "min_message": "at least {min}", "message": "generic"})
    assert check.message == "generic"


def test_invalid_declarations_raise():
    with pytest.raises(AttributeDefinitionError):
        _validate("numeric", 1, {"between": (1, 2)})
    with pytest.raises(AttributeDefinitionError):
        _validate("length", "a", {"within": (1, 2, 3)})
    with pytest.raises(AttributeDefinitionError):
        _validate("presence", "a", "yes")


# =====================================================
# ValidatorOptions / registry
# =====================================================

def test_validator_options_build():
    _require_imports()
    options = ValidatorOptions.build({"if": "is_admin", "unless": "is_guest", "allow_nil": 1, "message": "m", "min": 1})

    assert options.if_ == "is_admin"
    assert options.unless == "is_guest"
    assert options.allow_nil is True
    assert options.message == "m"
    assert options.extra == {"min": 1}
    assert ValidatorOptions.build(True) == ValidatorOptions()


def test_registry_interprets_plain_returns():
    _require_imports()
    registry = default_validators()
    registry.register("positive", lambda value, options: value > 0)
    registry.register("noop", lambda value, options: None)
    registry.register("checked", lambda value, options: Check.failed("custom"))

    assert registry.validate("positive", None, 1).ok
    assert registry.validate("positive", None, 0).message == "Invalid"
    assert registry.validate("positive", None, 0, ValidatorOptions(message="must be positive")).message == (
        "must be positive"
    )
    assert registry.validate("noop", None, 0).ok
    assert registry.validate("checked", None, 0).message == "custom"
    assert "positive" not in default_validators()


@pytest.mark.parametrize(
    "tag, raw, value, message",
    [
        ("numeric", {"min": 18}, "15", "must be at least 18"),
        ("numeric", {"within": (1, 5)}, None, "must be within 1 and 5"),
        ("numeric", {"not_within": (1, 5)}, "3", "must not be within 1 and 5"),
        ("numeric", {"min": 1, "max": 5}, object(), "must be within 1 and 5"),
        ("numeric", {"max": 5}, None, "must be at most 5"),
        ("numeric", {"is": 1}, None, "must be 1"),
        ("length", {"min": 3}, None, "length must be at least 3"),
        ("length", {"is_not": 0}, 42, "length must not be 0"),
    ],
)
def test_measure_rules_fail_on_uncomparable_values(tag, raw, value, message):
    check = _validate(tag, value, raw)

    assert isinstance(check, Check)
    assert not check.ok
    assert check.message == message


def test_range_membership_ignores_uncomparable_values():
    assert _validate("inclusion", "a", {"within": (1, 5)}).message == "must be within 1 and 5"
    assert _validate("exclusion", "a", {"within": (1, 5)}).ok
