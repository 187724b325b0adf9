"""Collect ``runs-on`` runner tags from a parsed workflow document."""
from __future__ import annotations

import json
from typing import Any, List, Mapping, Sequence


def _stringify_keys(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(key): _stringify_keys(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_stringify_keys(item) for item in value]
    return value


def canonical_tag(value: Any) -> str:
    """Return the textual form of a ``runs-on`` value.

    Strings pass through untouched. Anything else (group selectors, matrix
    expressions loaded as mappings) is encoded as compact JSON with sorted
    keys, so equal selectors always yield the same tag. Mapping keys that
    cannot be ordered against each other are compared as text.
    """
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, sort_keys=True, separators=(",", ":"), default=str)
    except TypeError:
        return json.dumps(
            _stringify_keys(value), sort_keys=True, separators=(",", ":"), default=str
        )


def extract_runs_on(document: Any) -> List[str]:
    """Return every runner tag declared by the jobs of *document*.

    Tags are returned in job declaration order with duplicates preserved.
    Documents without a ``jobs`` mapping, jobs that are not mappings and jobs
    without ``runs-on`` contribute nothing, as do empty or false scalar
    values such as ``runs-on: ""``.
    """
    tags: List[str] = []
    if not isinstance(document, Mapping):
        return tags
    jobs = document.get("jobs")
    if not isinstance(jobs, Mapping):
        return tags
    for job in jobs.values():
        if not isinstance(job, Mapping):
            continue
        runs_on = job.get("runs-on")
        if not runs_on and not isinstance(runs_on, Mapping):
            continue
        if isinstance(runs_on, str):
            tags.append(runs_on)
        elif isinstance(runs_on, Sequence):
            tags.extend(canonical_tag(item) for item in runs_on)
        else:
            tags.append(canonical_tag(runs_on))
    return tags


__all__ = ["canonical_tag", "extract_runs_on"]
