"""
Ordered fallback: try candidates one at a time, stop at the first success.

Each attempt reports Success or RecoverableFailure; the combinator returns
Success or Exhausted so callers never re-derive the classification.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
C = TypeVar("C")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class RecoverableFailure:
    reason: str


@dataclass(frozen=True)
class Exhausted:
    attempts: int
    last_reason: str


AttemptResult = Union[Success[T], RecoverableFailure]


def first_success(
    candidates: Iterable[C],
    attempt: Callable[[C], AttemptResult],
) -> Union[Success[T], Exhausted]:
    attempts = 0
    last_reason = "no candidates to try"
    for candidate in candidates:
        attempts += 1
        outcome = attempt(candidate)
        if isinstance(outcome, Success):
            return outcome
        last_reason = outcome.reason
    return Exhausted(attempts=attempts, last_reason=last_reason)
