"""JSON-file persistence for trade datasets and replay results."""
from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Iterable, List

from replay.errors import MalformedInputError
from replay.models import ComparisonOutcome


def load_dataset(path: Path | str) -> List[Any]:
    """Reads a trades export: a JSON array of ``{"data": {...}}`` rows."""
    with open(path, encoding="utf-8") as handle:
        try:
            rows = json.load(handle)
        except json.JSONDecodeError as exc:
            raise MalformedInputError(f"{path}: invalid JSON ({exc})") from exc
    if not isinstance(rows, list):
        raise MalformedInputError(f"{path}: expected a JSON array of trade records")
    return rows


class JsonResultStore:
    """Writes the accumulated comparison outcomes as a single JSON document."""

    def __init__(self, output_path: Path | str) -> None:
        self.output_path = Path(output_path)

    async def write_results(self, outcomes: Iterable[ComparisonOutcome]) -> Path:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None,
            self._write_results_sync,
            [outcome.to_dict() for outcome in outcomes],
        )

    def _write_results_sync(self, payload: list[dict]) -> Path:
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.output_path, "w", encoding="utf-8") as handle:
            json.dump(payload, handle)
        return self.output_path
