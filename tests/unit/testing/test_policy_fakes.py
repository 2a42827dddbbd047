"""Unit tests for the recording fakes and policy strategies."""

from __future__ import annotations

import sys
from unittest.mock import patch

import pytest
from hypothesis import given, settings

from dataspace_policy.engine import DynamicAtomicConstraintFunction, PolicyContext
from dataspace_policy.engine.functions import AtomicConstraintFunction, RuleFunction
from dataspace_policy.model import (
    AtomicConstraint,
    Constraint,
    MultiplicityConstraint,
    Operator,
    Permission,
    Policy,
)
from dataspace_policy.testing import (
    RecordingConstraintFunction,
    RecordingDynamicFunction,
    RecordingRuleFunction,
    constraint_strategy,
    policy_strategy,
    scope_strategy,
)
from dataspace_policy.testing.generators.strategies import _require_hypothesis


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class TestRecordingConstraintFunction:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(RecordingConstraintFunction(), AtomicConstraintFunction)

    def test_records_calls(self) -> None:
        fn = RecordingConstraintFunction(False)
        context = PolicyContext("catalog")
        assert fn.evaluate(Operator.EQ, "eu", Permission(), context) is False
        assert fn.calls[0].right_value == "eu"
        assert fn.calls[0].context is context

    def test_callable_result(self) -> None:
        fn = RecordingConstraintFunction(lambda op, right, rule, ctx: right == "eu")
        context = PolicyContext("catalog")
        assert fn.evaluate(Operator.EQ, "eu", Permission(), context)
        assert not fn.evaluate(Operator.EQ, "us", Permission(), context)

    def test_validation_errors(self) -> None:
        fn = RecordingConstraintFunction(validation_errors=["bad"])
        assert fn.validate(Operator.EQ, 1, Permission()).messages == ["bad"]
        assert len(fn.validations) == 1


class TestRecordingDynamicFunction:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(RecordingDynamicFunction(), DynamicAtomicConstraintFunction)

    def test_set_of_keys(self) -> None:
        fn = RecordingDynamicFunction({"region"})
        assert fn.can_handle("region")
        assert not fn.can_handle("purpose")
        assert fn.asked == ["region", "purpose"]

    def test_records_key(self) -> None:
        fn = RecordingDynamicFunction(result=False)
        assert not fn.evaluate("region", Operator.EQ, "eu", Permission(), PolicyContext("c"))
        assert fn.calls[0].key == "region"


class TestRecordingRuleFunction:
    def test_records_rules_and_contexts(self) -> None:
        fn = RecordingRuleFunction()
        context = PolicyContext("c")
        rule = Permission(action="use")
        assert fn.evaluate(rule, context)
        assert fn.rules == [rule]
        assert fn.contexts == [context]
        assert isinstance(fn, RuleFunction)


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


class TestRequireHypothesis:
    def test_raises_clear_error_without_hypothesis(self) -> None:
        with patch.dict(sys.modules, {"hypothesis.strategies": None}):
            with pytest.raises(ImportError, match="hypothesis"):
                _require_hypothesis()


class TestStrategies:
    @settings(max_examples=30, deadline=None)
    @given(scope=scope_strategy())
    def test_scope_segments(self, scope: str) -> None:
        assert 1 <= len(scope.split(".")) <= 3
        assert "" not in scope.split(".")

    @settings(max_examples=30, deadline=None)
    @given(constraint=constraint_strategy())
    def test_constraints_are_well_formed(self, constraint: Constraint) -> None:
        assert isinstance(constraint, (AtomicConstraint, MultiplicityConstraint))
        if isinstance(constraint, MultiplicityConstraint):
            assert constraint.constraints

    @settings(max_examples=30, deadline=None)
    @given(policy=policy_strategy())
    def test_duties_point_back_to_permission(self, policy: Policy) -> None:
        for permission in policy.permissions:
            for duty in permission.duties:
                assert duty.parent_permission is permission
