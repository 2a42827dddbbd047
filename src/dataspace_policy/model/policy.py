"""Policy – root container of permissions, prohibitions and obligations."""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any, Iterable, Iterator

from dataspace_policy.model.rule import Duty, Permission, Prohibition, Rule


class PolicyType(str, Enum):
    SET = "set"
    OFFER = "offer"
    CONTRACT = "contract"


@dataclasses.dataclass(frozen=True)
class Policy:
    """Immutable usage-control policy.

    Rule sequences are stored as tuples; lists passed to the constructor are
    converted. Metadata fields are carried unchanged through scope filtering.
    """

    permissions: tuple[Permission, ...] = ()
    prohibitions: tuple[Prohibition, ...] = ()
    obligations: tuple[Duty, ...] = ()
    uid: str | None = None
    assigner: str | None = None
    assignee: str | None = None
    target: str | None = None
    inherits_from: str | None = None
    policy_type: PolicyType = PolicyType.SET
    extensible_properties: dict[str, Any] = dataclasses.field(
        default_factory=dict, hash=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "permissions", tuple(self.permissions))
        object.__setattr__(self, "prohibitions", tuple(self.prohibitions))
        object.__setattr__(self, "obligations", tuple(self.obligations))
        object.__setattr__(self, "extensible_properties", dict(self.extensible_properties))

    def rules(self) -> Iterator[Rule]:
        """Iterate top-level rules: permissions, prohibitions, then obligations."""
        yield from self.permissions
        yield from self.prohibitions
        yield from self.obligations

    def with_rules(
        self,
        *,
        permissions: Iterable[Permission] | None = None,
        prohibitions: Iterable[Prohibition] | None = None,
        obligations: Iterable[Duty] | None = None,
    ) -> "Policy":
        """Return a copy with the given rule sequences replaced."""
        return dataclasses.replace(
            self,
            permissions=tuple(self.permissions if permissions is None else permissions),
            prohibitions=tuple(self.prohibitions if prohibitions is None else prohibitions),
            obligations=tuple(self.obligations if obligations is None else obligations),
        )

    def is_empty(self) -> bool:
        return not (self.permissions or self.prohibitions or self.obligations)


__all__ = ["Policy", "PolicyType"]
