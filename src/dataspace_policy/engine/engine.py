"""Policy engine façade – filter, evaluate, validate and plan.

Composition happens once at startup::

    bindings = RuleBindingRegistry()
    bindings.bind("use", "catalog")
    bindings.bind("spatial", "catalog")

    builder = PolicyEngineBuilder(bindings)
    builder.register_function("catalog", Permission, "spatial", SpatialFunction())
    engine = builder.build()

The resulting :class:`PolicyEngine` is read-only and may be shared by any
number of threads; every call works on its own :class:`PolicyContext`.
"""

from __future__ import annotations

from dataspace_policy.config.settings import EnvSettingsLoader, PolicyEngineSettings, SettingsFactory
from dataspace_policy.engine.binding import DynamicBinder, RuleBindingRegistry
from dataspace_policy.engine.context import PolicyContext
from dataspace_policy.engine.evaluator import PolicyEvaluator
from dataspace_policy.engine.filter import ScopeFilter
from dataspace_policy.engine.plan import PolicyEvaluationPlan, PolicyEvaluationPlanner
from dataspace_policy.engine.registry import FunctionRegistry, FunctionRegistryBuilder, ValidatorEntry
from dataspace_policy.engine.validator import PolicyValidator, RuleValidator
from dataspace_policy.kernel.errors import PolicyConfigurationError
from dataspace_policy.kernel.types import Result, failure, success
from dataspace_policy.model import Policy
from dataspace_policy.observability.logging import get_logger

_log = get_logger(__name__)


class PolicyEngine:
    """Evaluates and validates policies against the registered functions."""

    def __init__(
        self,
        binding_registry: RuleBindingRegistry | None,
        functions: FunctionRegistry,
        settings: PolicyEngineSettings | None = None,
    ) -> None:
        if binding_registry is None:
            raise PolicyConfigurationError("PolicyEngine requires a RuleBindingRegistry")
        self._settings = settings or PolicyEngineSettings()
        self._functions = functions
        self._scope_filter = ScopeFilter(binding_registry)
        self._rule_validator = RuleValidator(binding_registry)

    @property
    def functions(self) -> FunctionRegistry:
        return self._functions

    def filter(self, policy: Policy, scope: str) -> Policy:
        """Return a copy of *policy* holding only what is visible in *scope*."""
        return self._scope_filter.apply_scope(policy, scope)

    def evaluate(self, scope: str, policy: Policy, context: PolicyContext) -> Result[None]:
        """Evaluate *policy* in *scope*, collecting every problem into *context*."""
        self._check_context_type(scope, context)
        _log.debug("policy.evaluation.started", scope=scope, policy_uid=policy.uid)

        for validator in self._functions.pre_validators(scope):
            self._run_validator("Pre-validator", validator, policy, context)

        PolicyEvaluator(self._functions, scope, context).evaluate(self.filter(policy, scope))

        for validator in self._functions.post_validators(scope):
            self._run_validator("Post-validator", validator, policy, context)

        if context.has_problems():
            problems = context.get_problems()
            _log.info("policy.evaluation.failed", scope=scope, policy_uid=policy.uid, problems=len(problems))
            return failure(*problems)
        _log.debug("policy.evaluation.succeeded", scope=scope, policy_uid=policy.uid)
        return success()

    def validate(self, policy: Policy) -> Result[None]:
        """Check that every action and left operand is bound and resolvable."""
        validator = PolicyValidator(
            self._rule_validator, self._functions, self._settings.validation_scopes
        )
        result = validator.validate(policy)
        if result.is_err():
            _log.info("policy.validation.failed", policy_uid=policy.uid, problems=len(result.messages))
        return result

    def create_evaluation_plan(self, scope: str, policy: Policy) -> PolicyEvaluationPlan:
        """Describe what :meth:`evaluate` would do for *policy* in *scope*."""
        return PolicyEvaluationPlanner(self._rule_validator, self._functions, scope).plan(policy)

    def _run_validator(
        self, label: str, validator: ValidatorEntry, policy: Policy, context: PolicyContext
    ) -> None:
        reported = len(context.get_problems())
        if not validator.function(policy, context) and len(context.get_problems()) == reported:
            context.report_problem(f"{label} failed: {validator.name}")

    def _check_context_type(self, scope: str, context: PolicyContext) -> None:
        if not self._settings.enforce_context_types:
            return
        expected = self._functions.context_type(scope)
        if expected is not None and not isinstance(context, expected):
            raise PolicyConfigurationError(
                f"Scope '{scope}' expects a {expected.__name__}, got {type(context).__name__}",
                detail={"scope": scope},
            )


class PolicyEngineBuilder(FunctionRegistryBuilder):
    """Boot-time registration surface that produces a :class:`PolicyEngine`.

    Rule bindings go to the shared :class:`RuleBindingRegistry`; functions and
    validators are collected here and frozen by :meth:`build`.
    """

    def __init__(
        self,
        binding_registry: RuleBindingRegistry | None = None,
        settings: PolicyEngineSettings | None = None,
    ) -> None:
        super().__init__()
        self.binding_registry = binding_registry if binding_registry is not None else RuleBindingRegistry()
        self._settings = settings

    @classmethod
    def from_env(cls, binding_registry: RuleBindingRegistry | None = None) -> "PolicyEngineBuilder":
        """Create a builder whose settings come from ``POLICY_ENGINE_*`` variables."""
        settings = SettingsFactory.create(PolicyEngineSettings, loaders=[EnvSettingsLoader()])
        return cls(binding_registry, settings)

    def bind(self, rule_type: str, scope: str) -> None:
        self.binding_registry.bind(rule_type, scope)

    def dynamic_bind(self, binder: DynamicBinder) -> None:
        self.binding_registry.dynamic_bind(binder)

    def build(self) -> PolicyEngine:
        return PolicyEngine(self.binding_registry, self.freeze(), self._settings)


__all__ = ["PolicyEngine", "PolicyEngineBuilder"]
