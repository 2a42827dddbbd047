"""Unit tests for PolicyEngine and PolicyEngineBuilder."""

from __future__ import annotations

from typing import Any

import pytest

from dataspace_policy.config.settings import PolicyEngineSettings
from dataspace_policy.engine import (
    PolicyContext,
    PolicyEngine,
    PolicyEngineBuilder,
    RuleBindingRegistry,
)
from dataspace_policy.kernel.errors import PolicyConfigurationError, RegistryClosedError
from dataspace_policy.model import AtomicConstraint, Operator, Permission, Policy, Rule
from dataspace_policy.testing import RecordingConstraintFunction


def _spatial(op: Operator, right: Any, rule: Rule, context: PolicyContext) -> bool:
    return right == context.get_data("region")


def _spatial_policy() -> Policy:
    return Policy(permissions=[Permission(action="use", constraints=[AtomicConstraint.of("spatial", Operator.IN, "eu")])])


@pytest.fixture
def engine(engine_builder: PolicyEngineBuilder) -> PolicyEngine:
    engine_builder.bind("use", "ctx")
    engine_builder.bind("spatial", "ctx")
    engine_builder.register_function("ctx", Permission, "spatial", _spatial)
    return engine_builder.build()


# ---------------------------------------------------------------------------
# End-to-end
# ---------------------------------------------------------------------------


class TestSpatialScenario:
    def test_validate_succeeds(self, engine: PolicyEngine) -> None:
        assert engine.validate(_spatial_policy()).is_ok()

    def test_matching_region_succeeds(self, engine: PolicyEngine) -> None:
        assert engine.evaluate("ctx", _spatial_policy(), PolicyContext("ctx", region="eu")).is_ok()

    def test_other_region_fails(self, engine: PolicyEngine) -> None:
        context = PolicyContext("ctx", region="us")
        result = engine.evaluate("ctx", _spatial_policy(), context)
        assert result.is_err()
        assert any("spatial" in m for m in result.messages)
        assert result.messages == context.get_problems()

    def test_unbound_action_fails_validation(self, engine: PolicyEngine) -> None:
        result = engine.validate(Policy(permissions=[Permission(action="pay")]))
        assert len(result.messages) == 1
        assert "pay" in result.messages[0]
        assert "not bound to any scopes" in result.messages[0]


class TestEvaluate:
    def test_out_of_scope_constraints_are_not_evaluated(self, engine_builder: PolicyEngineBuilder) -> None:
        fn = RecordingConstraintFunction(False)
        engine_builder.bind("use", "ctx")
        engine_builder.bind("purpose", "transfer")
        engine_builder.register_function("*", Permission, "purpose", fn)
        policy = Policy(permissions=[Permission(action="use", constraints=[AtomicConstraint.of("purpose", "EQ", "x")])])
        assert engine_builder.build().evaluate("ctx", policy, PolicyContext("ctx")).is_ok()
        assert fn.calls == []

    def test_filter_uses_bindings(self, engine: PolicyEngine) -> None:
        policy = Policy(permissions=[Permission(action="sell")])
        assert engine.filter(policy, "ctx").permissions == ()

    def test_pre_and_post_validators_run(self, engine_builder: PolicyEngineBuilder) -> None:
        order: list[str] = []

        def pre(policy: Policy, context: PolicyContext) -> bool:
            order.append("pre")
            return True

        def post(policy: Policy, context: PolicyContext) -> bool:
            order.append("post")
            return True

        engine_builder.register_pre_validator("contract", pre)
        engine_builder.register_post_validator("contract.negotiation", post)
        engine = engine_builder.build()
        assert engine.evaluate("contract.negotiation", Policy(), PolicyContext("contract.negotiation")).is_ok()
        assert order == ["pre", "post"]
        order.clear()
        engine.evaluate("contract", Policy(), PolicyContext("contract"))
        assert order == ["pre"]

    def test_failing_validator_without_problem_adds_message(self, engine_builder: PolicyEngineBuilder) -> None:
        def reject(policy: Policy, context: PolicyContext) -> bool:
            return False

        engine_builder.register_pre_validator("ctx", reject)
        result = engine_builder.build().evaluate("ctx", Policy(), PolicyContext("ctx"))
        assert result.messages == [f"Pre-validator failed: {reject.__qualname__}"]

    def test_failing_validator_with_own_problem(self, engine_builder: PolicyEngineBuilder) -> None:
        def reject(policy: Policy, context: PolicyContext) -> bool:
            context.report_problem("counter-party not trusted")
            return False

        engine_builder.register_post_validator("ctx", reject)
        result = engine_builder.build().evaluate("ctx", Policy(), PolicyContext("ctx"))
        assert result.messages == ["counter-party not trusted"]

    def test_post_validator_runs_after_failed_evaluation(self, engine: PolicyEngine) -> None:
        context = PolicyContext("ctx", region="us")
        engine.evaluate("ctx", _spatial_policy(), context)
        assert context.has_problems()


class TestContextTypes:
    class TransferContext(PolicyContext):
        def __init__(self) -> None:
            super().__init__("transfer")

    def test_wrong_context_type_rejected(self, engine_builder: PolicyEngineBuilder) -> None:
        engine_builder.register_scope("transfer", self.TransferContext)
        engine = engine_builder.build()
        with pytest.raises(PolicyConfigurationError):
            engine.evaluate("transfer", Policy(), PolicyContext("transfer"))

    def test_matching_context_type_accepted(self, engine_builder: PolicyEngineBuilder) -> None:
        engine_builder.register_scope("transfer", self.TransferContext)
        assert engine_builder.build().evaluate("transfer", Policy(), self.TransferContext()).is_ok()

    def test_enforcement_can_be_disabled(self, binding_registry: RuleBindingRegistry) -> None:
        builder = PolicyEngineBuilder(binding_registry, PolicyEngineSettings(enforce_context_types=False))
        builder.register_scope("transfer", self.TransferContext)
        assert builder.build().evaluate("transfer", Policy(), PolicyContext("transfer")).is_ok()


class TestBuilder:
    def test_engine_requires_binding_registry(self, engine_builder: PolicyEngineBuilder) -> None:
        with pytest.raises(PolicyConfigurationError):
            PolicyEngine(None, engine_builder.freeze())

    def test_builder_closed_after_build(self, engine_builder: PolicyEngineBuilder) -> None:
        engine_builder.build()
        with pytest.raises(RegistryClosedError):
            engine_builder.register_function("ctx", Permission, "k", RecordingConstraintFunction())

    def test_bindings_still_accepted_after_build(self, engine_builder: PolicyEngineBuilder) -> None:
        engine = engine_builder.build()
        engine_builder.bind("use", "ctx")
        assert engine.filter(Policy(permissions=[Permission(action="use")]), "ctx").permissions

    def test_default_binding_registry(self) -> None:
        assert isinstance(PolicyEngineBuilder().binding_registry, RuleBindingRegistry)

    def test_from_env_reads_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("POLICY_ENGINE_VALIDATION_SCOPES", "catalog")
        builder = PolicyEngineBuilder.from_env()
        builder.bind("use", "catalog")
        builder.bind("spatial", "catalog")
        builder.register_function("transfer", Permission, "spatial", RecordingConstraintFunction())
        policy = Policy(permissions=[Permission(action="use", constraints=[AtomicConstraint.of("spatial", "EQ", "x")])])
        result = builder.build().validate(policy)
        assert "not bound to any functions" in result.messages[0]

    def test_validation_scopes_default_to_all(self, engine_builder: PolicyEngineBuilder) -> None:
        engine_builder.bind("use", "catalog")
        engine_builder.bind("spatial", "catalog")
        engine_builder.register_function("transfer", Permission, "spatial", RecordingConstraintFunction())
        policy = Policy(permissions=[Permission(action="use", constraints=[AtomicConstraint.of("spatial", "EQ", "x")])])
        assert engine_builder.build().validate(policy).is_ok()
