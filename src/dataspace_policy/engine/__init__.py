"""Policy engine – bindings, function registry, evaluation and validation.

Modules:
  scope.py      – ALL_SCOPES, DELIMITER, scope hierarchy helpers
  context.py    – PolicyContext
  binding.py    – RuleBindingRegistry
  functions.py  – function contracts and callable adapters
  registry.py   – FunctionRegistryBuilder, FunctionRegistry
  filter.py     – ScopeFilter
  evaluator.py  – PolicyEvaluator
  validator.py  – RuleValidator, PolicyValidator
  plan.py       – PolicyEvaluationPlanner and plan steps
  engine.py     – PolicyEngine, PolicyEngineBuilder
"""

from dataspace_policy.engine.binding import DynamicBinder, RuleBindingRegistry
from dataspace_policy.engine.context import PolicyContext
from dataspace_policy.engine.engine import PolicyEngine, PolicyEngineBuilder
from dataspace_policy.engine.evaluator import PolicyEvaluator
from dataspace_policy.engine.filter import ScopeFilter
from dataspace_policy.engine.functions import (
    AtomicConstraintFunction,
    BoundDynamicFunction,
    ConstraintFunction,
    DynamicAtomicConstraintFunction,
    DynamicConstraintFunction,
    RuleFunction,
)
from dataspace_policy.engine.plan import (
    AtomicConstraintStep,
    MultiplicityConstraintStep,
    PolicyEvaluationPlan,
    PolicyEvaluationPlanner,
    RuleFunctionStep,
    RuleStep,
    ValidatorStep,
)
from dataspace_policy.engine.registry import FunctionRegistry, FunctionRegistryBuilder
from dataspace_policy.engine.scope import ALL_SCOPES, DELIMITER
from dataspace_policy.engine.validator import PolicyValidator, RuleValidator

__all__ = [
    "ALL_SCOPES",
    "AtomicConstraintFunction",
    "AtomicConstraintStep",
    "BoundDynamicFunction",
    "ConstraintFunction",
    "DELIMITER",
    "DynamicAtomicConstraintFunction",
    "DynamicBinder",
    "DynamicConstraintFunction",
    "FunctionRegistry",
    "FunctionRegistryBuilder",
    "MultiplicityConstraintStep",
    "PolicyContext",
    "PolicyEngine",
    "PolicyEngineBuilder",
    "PolicyEvaluationPlan",
    "PolicyEvaluationPlanner",
    "PolicyEvaluator",
    "PolicyValidator",
    "RuleBindingRegistry",
    "RuleFunction",
    "RuleFunctionStep",
    "RuleStep",
    "RuleValidator",
    "ScopeFilter",
    "ValidatorStep",
]
