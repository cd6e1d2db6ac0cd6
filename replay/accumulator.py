#!/usr/bin/env python3
from typing import Any, Dict, List

from replay.models import ComparisonOutcome


class ResultAccumulator:
    """Append-only collection of winning comparisons, in replay order."""

    def __init__(self) -> None:
        self._outcomes: List[ComparisonOutcome] = []

    def add(self, outcome: ComparisonOutcome) -> None:
        self._outcomes.append(outcome)

    def all(self) -> List[ComparisonOutcome]:
        return list(self._outcomes)

    def to_json_ready(self) -> List[Dict[str, Any]]:
        return [outcome.to_dict() for outcome in self._outcomes]

    def __len__(self) -> int:
        return len(self._outcomes)
