# tests/core/engine/test_pipeline_step_args.py
"""
Testes de argumentos por Step (`step_args`) e substituição de Steps (`with_steps`).
"""

import pytest

from trilho.core.engine.engine import Pipeline
from trilho.core.exceptions import UnknownStepError
from trilho.core.pipeline.outcome import Success, failure, success
from trilho.core.pipeline.step import extend


def _fake_load_user(state):
    return success(extend(state, user={"id": 0, "name": "fake"}))


def test_step_args_reach_the_named_step(checkout):
    pipeline = Pipeline().add_step("charge", "try", checkout.charge, catch=checkout.GatewayTimeout)

    assert pipeline.run({}) == Success({"charged": 10})
    assert pipeline.run({}, step_args={"charge": {"amount": 99}}) == Success({"charged": 99})


def test_step_args_are_scoped_to_a_single_run(checkout):
    pipeline = Pipeline().add_step("charge", "try", checkout.charge, catch=checkout.GatewayTimeout)
    pipeline.run({}, step_args={"charge": {"amount": 99}})
    assert pipeline.run({}) == Success({"charged": 10})


def test_step_args_for_unknown_step_are_rejected():
    pipeline = Pipeline().add_step("a", "map", lambda s: s)
    with pytest.raises(UnknownStepError):
        pipeline.run({}, step_args={"b": {"x": 1}})


def test_step_args_must_be_mappings():
    pipeline = Pipeline().add_step("a", "map", lambda s: s)
    with pytest.raises(TypeError):
        pipeline.run({}, step_args={"a": [1]})


def test_with_steps_replaces_functions_without_touching_original(checkout_pipeline, checkout):
    """
    `with_steps` injeta um dublê no lugar de `load_user`, preservando ordem e
    adapters; o pipeline original continua usando a função real.
    """
    fake = checkout_pipeline.with_steps(load_user=_fake_load_user)

    out = fake.run({"input": {"token": "anything"}})
    assert out.is_success()
    assert out.state["user"] == {"id": 0, "name": "fake"}
    assert fake.names == checkout_pipeline.names
    assert [s.kind for s in fake.steps] == [s.kind for s in checkout_pipeline.steps]

    original = checkout_pipeline.run({"input": {"token": "anything"}})
    assert original.is_failure()
    assert original.error.error == "invalid_user_token"


def test_with_steps_accepts_a_mapping_for_dotted_names():
    pipeline = Pipeline().add_step("payments.charge", "continue", lambda s: failure("declined"))
    fake = pipeline.with_steps({"payments.charge": lambda s: Success(extend(s, ok=True))})
    assert fake.run({}) == Success({"ok": True})


def test_with_steps_rejects_unknown_names(checkout_pipeline):
    with pytest.raises(UnknownStepError):
        checkout_pipeline.with_steps(missing=lambda s: s)


def test_step_lookup_by_name(checkout_pipeline, checkout):
    spec = checkout_pipeline.step("load_user")
    assert spec.fn is checkout.load_user
    assert checkout_pipeline.with_steps(load_user=_fake_load_user).step("load_user").fn is _fake_load_user
    with pytest.raises(UnknownStepError):
        checkout_pipeline.step("charge")
