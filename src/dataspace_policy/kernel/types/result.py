"""Result[T] – Ok and Err variants with a non-short-circuiting merge.

``Err`` carries every collected problem message. Merging two results never
drops messages: the policy engine relies on this to report every violation
of a policy in a single pass.
"""

from __future__ import annotations

from typing import Callable, Generic, Iterable, NoReturn, TypeVar

from dataspace_policy.kernel.errors.policy import PolicyFailureError

T = TypeVar("T")
U = TypeVar("U")


class Ok(Generic[T]):
    """Successful result variant."""

    __slots__ = ("_value",)

    def __init__(self, value: T = None) -> None:  # type: ignore[assignment]
        self._value = value

    @property
    def value(self) -> T:
        return self._value

    @property
    def messages(self) -> list[str]:
        return []

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self._value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        return self._value

    def map(self, func: Callable[[T], U]) -> "Ok[U]":
        return Ok(func(self._value))

    def flat_map(self, func: "Callable[[T], Result[U]]") -> "Result[U]":
        return func(self._value)

    def merge(self, other: "Result[T]") -> "Result[T]":
        """Combine with *other*; succeeds only when both succeed."""
        return other if other.is_err() else self

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Ok) and other._value == self._value

    def __hash__(self) -> int:
        return hash(("ok", self._value))

    def __repr__(self) -> str:
        return f"Ok({self._value!r})"


class Err:
    """Error result variant holding an ordered list of problem messages."""

    __slots__ = ("_messages",)

    def __init__(self, messages: Iterable[str] | str) -> None:
        if isinstance(messages, str):
            messages = [messages]
        self._messages: list[str] = list(messages)

    @property
    def messages(self) -> list[str]:
        return list(self._messages)

    @property
    def failure_detail(self) -> str:
        return ", ".join(self._messages)

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise PolicyFailureError(self._messages)

    def unwrap_or(self, default: T) -> T:
        return default

    def map(self, func: Callable[[T], U]) -> "Err":  # noqa: ARG002
        return self

    def flat_map(self, func: "Callable[[T], Result[U]]") -> "Err":  # noqa: ARG002
        return self

    def merge(self, other: "Result[T]") -> "Err":
        """Combine with *other*, keeping this result's messages first."""
        return Err(self._messages + other.messages)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Err) and other._messages == self._messages

    def __hash__(self) -> int:
        return hash(("err", tuple(self._messages)))

    def __repr__(self) -> str:
        return f"Err({self._messages!r})"


type Result[T] = Ok[T] | Err


def success(value: T = None) -> Ok[T]:  # type: ignore[assignment]
    """Return a successful result (``Ok(None)`` when no value is given)."""
    return Ok(value)


def failure(*messages: str) -> Err:
    """Return a failed result carrying *messages*."""
    return Err(messages)


def merge_all(results: Iterable["Result[T]"]) -> "Result[None]":
    """Fold *results* with :meth:`merge`, visiting every element."""
    merged: Result[None] = Ok(None)
    for result in results:
        merged = merged.merge(result)
    return merged


__all__ = ["Err", "Ok", "Result", "failure", "merge_all", "success"]
