"""Change-impact summary produced by the evaluation stage of the pipeline.

The artifact is JSON of the form::

    {"rebuildCountByKernel": {"linux": 12, "darwin": 3}, "labels": {"10.rebuild-nixos-tests": false}}

Other keys in the file are ignored.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from prguard_core.errors import ImpactFileError


@dataclass(frozen=True)
class ChangeImpactSummary:
    rebuild_count_by_kernel: dict[str, int] = field(default_factory=dict)
    labels: dict[str, bool] = field(default_factory=dict)

    @property
    def max_rebuild_count(self) -> int:
        return max(self.rebuild_count_by_kernel.values(), default=0)

    def has_label(self, name: str) -> bool:
        return bool(self.labels.get(name, False))

    @classmethod
    def from_dict(cls, data: dict) -> ChangeImpactSummary:
        if not isinstance(data, dict):
            raise ImpactFileError(f"Expected a JSON object, got {type(data).__name__}.")
        counts = data.get("rebuildCountByKernel") or {}
        labels = data.get("labels") or {}
        if not isinstance(counts, dict) or not isinstance(labels, dict):
            raise ImpactFileError("rebuildCountByKernel and labels must both be JSON objects.")
        try:
            return cls(
                rebuild_count_by_kernel={str(k): int(v) for k, v in counts.items()},
                labels={str(k): bool(v) for k, v in labels.items()},
            )
        except (TypeError, ValueError) as e:
            raise ImpactFileError(f"Invalid rebuild count: {e}") from e


def load_impact(path: str | Path) -> ChangeImpactSummary:
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ImpactFileError(f"Change-impact file not found: {p}") from e
    except json.JSONDecodeError as e:
        raise ImpactFileError(f"Could not parse {p}: {e}") from e
    return ChangeImpactSummary.from_dict(data)
