# tests/core/execution/test_result.py
"""
Testes da máquina de estados state × status do Result.

Este módulo valida as transições do Result isoladamente, sem passar
pelo Executor, garantindo que:
- apenas as transições canônicas são aceitas
- transições ilegais levantam InvalidTransitionError sem alterar o Result
- repetir a mesma transição é no-op
- skip/fail/throw respeitam `halt` e preservam metadata
- ligações caused_failure / threw_failure são explícitas

Decisões arquiteturais:
    - Halts dentro de `work()` são exceções (Fault) para interromper
      o corpo; fora dele, `halt=False` registra apenas o desfecho
    - `throw` nunca sobrescreve chaves da falha original

Invariantes:
    - Após a execução: success ⇔ complete; skipped/failed ⇒ interrupted
"""

import pytest

try:
    from atlas_taskflow import FailFault, InvalidTransitionError, SkipFault, State, Status, Task
    from atlas_taskflow.core.execution.result import Result
except Exception as e:  # noqa: BLE001
    Task = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _result():
    if _IMPORT_ERR is not None:
        pytest.fail(f"Missing execution layer. Import error: {_IMPORT_ERR}")

    class Sample(Task):
        def work(self):
            pass

    return Sample().result


def _executing():
    result = _result()
    result.mark_executing()
    return result


def test_initial_result():
    result = _result()

    assert isinstance(result, Result)
    assert result.state is State.INITIALIZED
    assert result.status is Status.SUCCESS
    assert result.is_initialized
    assert result.is_success and result.is_good and not result.is_bad
    assert result.outcome == "initialized"
    assert result.metadata == {}
    assert result.index == 0
    assert result.id == result.task.id


def test_state_transitions():
    result = _executing()
    result.mark_executing()

    assert result.is_executing
    result.mark_executed()
    assert result.is_complete
    assert result.is_executed
    assert result.outcome == "success"
    result.mark_complete()


def test_illegal_state_transitions_do_not_change_the_result():
    result = _result()

    with pytest.raises(InvalidTransitionError):
        result.mark_complete()
    with pytest.raises(InvalidTransitionError):
        result.mark_interrupted()
    assert result.is_initialized

    result.mark_executing()
    result.mark_executed()
    with pytest.raises(InvalidTransitionError) as excinfo:
        result.mark_executing()
    assert excinfo.value.details["state"] == "complete"
    assert result.is_complete


def test_complete_requires_success():
    result = _executing()
    result.skip("nothing to do", halt=False)

    with pytest.raises(InvalidTransitionError):
        result.mark_complete()
    result.mark_executed()
    assert result.is_interrupted


def test_skip_without_halt_records_reason_and_metadata():
    result = _executing()

    result.skip("already done", halt=False, source="cache")

    assert result.is_skipped
    assert result.is_good and result.is_bad
    assert result.metadata == {"reason": "already done", "source": "cache"}
    assert result.reason == "already done"
    assert result.caused_failure is None


def test_skip_with_halt_raises_skip_fault():
    result = _executing()

    with pytest.raises(SkipFault) as excinfo:
        result.skip()

    assert excinfo.value.result is result
    assert str(excinfo.value) == "Unspecified"
    assert result.reason == "Unspecified"


def test_fail_sets_failure_links_to_self():
    result = _executing()

    with pytest.raises(FailFault):
        result.fail("card declined", code=402)

    assert result.is_failed
    assert result.metadata == {"reason": "card declined", "code": 402}
    assert result.caused_failure is result
    assert result.threw_failure is result
    assert result.is_caused_failure
    assert result.is_threw_failure
    assert not result.is_thrown_failure


def test_repeated_halt_is_noop_and_conflicting_halt_raises():
    result = _executing()
    result.fail("first", halt=False)

    result.fail("second", halt=False)
    assert result.reason == "first"

    with pytest.raises(InvalidTransitionError):
        result.skip("late", halt=False)
    assert result.is_failed


def test_halt_after_execution_raises():
    result = _executing()
    result.mark_executed()

    with pytest.raises(InvalidTransitionError):
        result.fail("too late", halt=False)
    assert result.is_success


def test_throw_adopts_failure_without_overwriting_metadata():
    origin = _executing()
    origin.fail("card declined", halt=False, code=402)
    middle = _executing()
    middle.throw(origin, halt=False, code=500, step="charge")
    outer = _executing()

    with pytest.raises(FailFault):
        outer.throw(middle)

    assert middle.metadata == {"reason": "card declined", "code": 402, "step": "charge"}
    assert middle.caused_failure is origin
    assert middle.threw_failure is origin
    assert outer.caused_failure is origin
    assert outer.threw_failure is middle
    assert outer.is_thrown_failure
    assert not outer.is_caused_failure


def test_throw_of_success_is_noop_and_skip_is_adopted():
    ok = _executing()
    target = _executing()

    target.throw(ok)
    assert target.is_success

    skipped = _executing()
    skipped.skip("not today", halt=False)
    target.throw(skipped, halt=False)
    assert target.is_skipped
    assert target.reason == "not today"
    assert target.caused_failure is None


def test_throw_requires_a_result():
    result = _executing()
    with pytest.raises(TypeError):
        result.throw("failed")


def test_outcome_of_thrown_failure_is_the_state():
    origin = _executing()
    origin.fail("boom", halt=False)
    origin.mark_executed()
    outer = _executing()
    outer.throw(origin, halt=False)
    outer.mark_executed()

    assert origin.outcome == "failed"
    assert outer.outcome == "interrupted"


def test_handle_dispatches_on_predicates():
    result = _executing()
    result.skip("later", halt=False)
    result.mark_executed()
    seen = []

    returned = (
        result.handle("skipped", lambda r: seen.append("skipped"))
        .handle("success", lambda r: seen.append("success"))
        .handle("bad", lambda r: seen.append("bad"))
        .handle("interrupted", lambda r: seen.append("interrupted"))
    )

    assert returned is result
    assert seen == ["skipped", "bad", "interrupted"]
    with pytest.raises(ValueError):
        result.handle("exploded", print)


def test_to_h_includes_failure_summaries():
    origin = _executing()
    origin.fail("boom", halt=False)

    data = origin.to_h()

    assert data["class"] == "Sample"
    assert data["type"] == "Task"
    assert data["state"] == "executing"
    assert data["status"] == "failed"
    assert data["metadata"] == {"reason": "boom"}
    assert data["caused_failure"]["id"] == origin.id
    assert "caused_failure" not in data["caused_failure"]
    assert "caused_failure" not in _result().to_h()
