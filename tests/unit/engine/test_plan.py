"""Unit tests for evaluation plans."""

from __future__ import annotations

from dataspace_policy.engine import (
    AtomicConstraintStep,
    MultiplicityConstraintStep,
    PolicyEngineBuilder,
    RuleBindingRegistry,
)
from dataspace_policy.model import (
    AtomicConstraint,
    Duty,
    Operator,
    OrConstraint,
    Permission,
    Policy,
    Prohibition,
)
from dataspace_policy.testing import (
    RecordingConstraintFunction,
    RecordingDynamicFunction,
    RecordingRuleFunction,
)


def _atomic(key: str) -> AtomicConstraint:
    return AtomicConstraint.of(key, Operator.EQ, "v")


def spatial_check(policy, context):
    return True


class TestEvaluationPlan:
    def _builder(self, registry: RuleBindingRegistry) -> PolicyEngineBuilder:
        builder = PolicyEngineBuilder(registry)
        builder.bind("use", "catalog")
        builder.bind("spatial", "catalog")
        builder.bind("purpose", "transfer")
        return builder

    def test_validators_listed(self, binding_registry: RuleBindingRegistry) -> None:
        builder = self._builder(binding_registry)
        builder.register_pre_validator("catalog", spatial_check)
        builder.register_post_validator("*", spatial_check)
        plan = builder.build().create_evaluation_plan("catalog", Policy())
        assert plan.scope == "catalog"
        assert [v.name for v in plan.pre_validators] == ["spatial_check"]
        assert [v.name for v in plan.post_validators] == ["spatial_check"]

    def test_in_scope_rule_not_filtered(self, binding_registry: RuleBindingRegistry) -> None:
        fn = RecordingConstraintFunction()
        builder = self._builder(binding_registry)
        builder.register_function("catalog", Permission, "spatial", fn)
        policy = Policy(permissions=[Permission(action="use", constraints=[_atomic("spatial")])])
        [step] = builder.build().create_evaluation_plan("catalog", policy).permission_steps
        assert not step.filtered
        [constraint_step] = step.constraint_steps
        assert isinstance(constraint_step, AtomicConstraintStep)
        assert not constraint_step.is_filtered
        assert constraint_step.functions == ("RecordingConstraintFunction",)
        assert fn.calls == []

    def test_out_of_scope_action_reason(self, binding_registry: RuleBindingRegistry) -> None:
        policy = Policy(prohibitions=[Prohibition(action="sell")])
        [step] = self._builder(binding_registry).build().create_evaluation_plan("catalog", policy).prohibition_steps
        assert step.filtered
        assert step.filtering_reasons == ("action 'sell' is not bound to scope 'catalog'",)

    def test_constraint_reasons(self, binding_registry: RuleBindingRegistry) -> None:
        policy = Policy(permissions=[Permission(action="use", constraints=[_atomic("purpose")])])
        [step] = self._builder(binding_registry).build().create_evaluation_plan("catalog", policy).permission_steps
        [constraint_step] = step.constraint_steps
        assert isinstance(constraint_step, AtomicConstraintStep)
        assert constraint_step.filtering_reasons == (
            "leftOperand 'purpose' is not bound to scope 'catalog'",
            "leftOperand 'purpose' is not bound to any function within scope 'catalog'",
        )

    def test_multiplicity_step_nests_children(self, binding_registry: RuleBindingRegistry) -> None:
        builder = self._builder(binding_registry)
        builder.register_function("catalog", Permission, RecordingDynamicFunction({"spatial"}))
        constraint = OrConstraint((_atomic("spatial"), _atomic("purpose")))
        policy = Policy(permissions=[Permission(action="use", constraints=[constraint])])
        [step] = builder.build().create_evaluation_plan("catalog", policy).permission_steps
        [multiplicity] = step.constraint_steps
        assert isinstance(multiplicity, MultiplicityConstraintStep)
        assert multiplicity.connective == "OR"
        spatial, purpose = multiplicity.steps
        assert isinstance(spatial, AtomicConstraintStep) and isinstance(purpose, AtomicConstraintStep)
        assert spatial.functions == ("RecordingDynamicFunction[spatial]",)
        assert purpose.is_filtered

    def test_duties_and_rule_functions(self, binding_registry: RuleBindingRegistry) -> None:
        builder = self._builder(binding_registry)
        builder.register_function("catalog", Duty, RecordingRuleFunction())
        policy = Policy(permissions=[Permission(action="use", duties=[Duty(action="notify")])])
        [step] = builder.build().create_evaluation_plan("catalog", policy).permission_steps
        assert step.rule_functions == ()
        [duty_step] = step.duty_steps
        assert duty_step.filtered
        assert [f.name for f in duty_step.rule_functions] == ["RecordingRuleFunction"]
