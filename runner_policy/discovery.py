"""Locate workflow files and fold their runner tags together.

Discovery problems (missing directory, unreadable tree) abort the run with
:class:`~runner_policy.errors.WorkflowDiscoveryError`. Problems with a single
file are logged and that file is skipped.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Iterable, List

from ruamel.yaml import YAML

from .errors import WorkflowDiscoveryError
from .extract import extract_runs_on

logger = logging.getLogger(__name__)

WORKFLOW_SUFFIXES = (".yml", ".yaml")


def find_workflow_files(workflows_dir: Path) -> List[Path]:
    """Return all ``*.yml``/``*.yaml`` files below *workflows_dir*, sorted."""
    workflows_dir = Path(workflows_dir)
    if not workflows_dir.is_dir():
        raise WorkflowDiscoveryError(f"Workflow directory not found: {workflows_dir}")
    try:
        files = [
            path
            for path in workflows_dir.rglob("*")
            if path.suffix in WORKFLOW_SUFFIXES and path.is_file()
        ]
    except OSError as exc:
        raise WorkflowDiscoveryError(
            f"Failed to list workflow files under {workflows_dir}: {exc}"
        ) from exc
    return sorted(files)


def load_workflow(path: Path) -> Any:
    """Parse one workflow file; read and YAML errors propagate."""
    yaml = YAML(typ="safe")
    return yaml.load(Path(path).read_text(encoding="utf-8"))


def collect_runner_tags(
    paths: Iterable[Path],
    loader: Callable[[Path], Any] = load_workflow,
) -> List[str]:
    """Return the runner tags of every loadable file in *paths*, in order."""
    tags: List[str] = []
    for path in paths:
        logger.debug("Processing %s", path)
        try:
            found = extract_runs_on(loader(path))
        except Exception as exc:  # noqa: BLE001
            logger.warning("Error processing file %s: %s", path, exc)
            continue
        tags.extend(found)
    return tags


__all__ = [
    "WORKFLOW_SUFFIXES",
    "collect_runner_tags",
    "find_workflow_files",
    "load_workflow",
]
