"""Policy model – immutable Policy / Rule / Constraint tree.

Modules:
  expression.py – Expression, LiteralExpression
  constraint.py – Operator, AtomicConstraint, And/Or/Xone constraints
  rule.py       – RuleKind, Action, Permission, Prohibition, Duty
  policy.py     – Policy, PolicyType
"""

from dataspace_policy.model.constraint import (
    AndConstraint,
    AtomicConstraint,
    Constraint,
    MultiplicityConstraint,
    Operator,
    OrConstraint,
    XoneConstraint,
)
from dataspace_policy.model.expression import Expression, LiteralExpression, as_expression
from dataspace_policy.model.policy import Policy, PolicyType
from dataspace_policy.model.rule import Action, Duty, Permission, Prohibition, Rule, RuleKind

__all__ = [
    "Action",
    "AndConstraint",
    "AtomicConstraint",
    "Constraint",
    "Duty",
    "Expression",
    "LiteralExpression",
    "MultiplicityConstraint",
    "Operator",
    "OrConstraint",
    "Permission",
    "Policy",
    "PolicyType",
    "Prohibition",
    "Rule",
    "RuleKind",
    "XoneConstraint",
    "as_expression",
]
