"""PolicyContext – per-call carrier of the scope and accumulated problems."""

from __future__ import annotations

from typing import Any


class PolicyContext:
    """Mutable state of a single ``evaluate`` call.

    Collaborators subclass it to carry request data (claims, participant id)
    to the evaluation functions registered for their scope::

        class CatalogRequestContext(PolicyContext):
            def __init__(self, participant_id: str) -> None:
                super().__init__("catalog.request")
                self.participant_id = participant_id

    A context is created fresh for every call and discarded afterwards; it is
    never shared between concurrent evaluations.
    """

    def __init__(self, scope: str, **data: Any) -> None:
        self._scope = scope
        self._problems: list[str] = []
        self._data: dict[str, Any] = dict(data)

    def scope(self) -> str:
        return self._scope

    def report_problem(self, problem: str) -> None:
        self._problems.append(problem)

    def has_problems(self) -> bool:
        return bool(self._problems)

    def get_problems(self) -> list[str]:
        return list(self._problems)

    def put_data(self, key: str, value: Any) -> None:
        self._data[key] = value

    def get_data(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(scope={self._scope!r}, problems={len(self._problems)})"


__all__ = ["PolicyContext"]
