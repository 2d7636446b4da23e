from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from finance_tracker.models import Confidence

T = TypeVar("T")


@dataclass(frozen=True)
class Classification(Generic[T]):
    value: T
    confidence: Confidence
    rule: str


@dataclass(frozen=True)
class Rule(Generic[T]):
    """A predicate over normalized text and the classification it yields."""
    name: str
    predicate: Callable[[str], bool]
    value: T
    confidence: Confidence


def first_match(rules: Sequence[Rule[T]], text: str) -> Classification[T] | None:
    for rule in rules:
        if rule.predicate(text):
            return Classification(rule.value, rule.confidence, rule.name)
    return None
