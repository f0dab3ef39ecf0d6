# tests/core/test_conditions.py
"""
Testes da invocação uniforme de referências (nome de método, callable,
booleano) e do payload canônico de erros.

Invariantes:
    - Nome de método inexistente levanta AttributeError
    - Properties são lidas, não invocadas
    - `if_` e `unless` precisam concordar quando ambos estão presentes
"""

import pytest

try:
    from atlas_taskflow.core.checks import Check
    from atlas_taskflow.core.conditions import evaluate, invoke, resolve
    from atlas_taskflow.core.errors import ErrorPayload, task_execution_error
except Exception as e:  # noqa: BLE001
    invoke = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


class Target:
    enabled = True

    @property
    def plan(self):
        return "pro"

    def greet(self, name="world"):
        return f"hello {name}"


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(f"Missing conditions/errors modules. Import error: {_IMPORT_ERR}")


def test_invoke_resolves_methods_properties_and_callables():
    _require_imports()
    target = Target()

    assert invoke(target, "greet") == "hello world"
    assert invoke(target, "greet", "ana") == "hello ana"
    assert invoke(target, "plan") == "pro"
    assert invoke(target, lambda t, suffix: t.plan + suffix, "!") == "pro!"

    with pytest.raises(AttributeError):
        invoke(target, "missing")
    with pytest.raises(TypeError):
        invoke(target, 42)


@pytest.mark.parametrize(
    "if_, unless, expected",
    [
        (None, None, True),
        (True, None, True),
        (False, None, False),
        ("enabled", None, True),
        (None, "enabled", False),
        (lambda t: t.plan == "pro", lambda t: False, True),
        (True, True, False),
    ],
)
def test_evaluate(if_, unless, expected):
    _require_imports()
    assert evaluate(Target(), if_=if_, unless=unless) is expected


def test_resolve_literals_methods_and_callables():
    _require_imports()
    target = Target()

    assert resolve(target, "greet") == "hello world"
    assert resolve(target, "plain text") == "plain text"
    assert resolve(target, lambda t: t.plan) == "pro"
    assert resolve(target, 10) == 10
    assert resolve(target, None) is None


def test_resolve_treats_data_members_as_literals():
    """Apenas métodos são invocados; properties e dados com o mesmo nome são literais."""
    _require_imports()
    target = Target()

    assert resolve(target, "plan") == "plan"
    assert resolve(target, "enabled") == "enabled"
    assert resolve(target, lambda t: "greet") == "greet"


def test_check_invariants():
    _require_imports()

    assert Check.passed(1) == Check(ok=True, value=1)
    assert Check.failed("bad").message == "bad"
    with pytest.raises(ValueError):
        Check.failed("")


def test_task_execution_error_payload():
    _require_imports()
    payload = task_execution_error(task="Charge", exc=RuntimeError())

    assert isinstance(payload, ErrorPayload)
    assert payload.to_dict()["message"] == "RuntimeError"
    assert payload.to_dict()["details"]["exception_class"] == "RuntimeError"
