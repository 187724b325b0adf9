"""Allowlist verdict and run orchestration.

``run`` discovers workflow files, extracts their runner tags, publishes the
unique tags as the ``runner-tags`` output and then decides whether every tag
is allowed. The output is written before the verdict so it is available even
when the check fails.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Optional

from .actions import ActionsChannel
from .config import Settings
from .discovery import collect_runner_tags, find_workflow_files, load_workflow

logger = logging.getLogger(__name__)

WILDCARD = "*"
RUNNER_TAGS_OUTPUT = "runner-tags"


@dataclass
class CheckResult:
    tags: List[str] = field(default_factory=list)
    allowed: List[str] = field(default_factory=list)
    disallowed: List[str] = field(default_factory=list)
    passed: bool = True
    message: str = ""


def unique_tags(tags: Iterable[str]) -> List[str]:
    """Drop repeated tags, keeping the first occurrence of each."""
    return list(dict.fromkeys(tags))


def parse_allowlist(raw: Optional[str]) -> List[str]:
    return (raw or "").split()


def disallowed_tags(tags: Iterable[str], allowed: Iterable[str]) -> List[str]:
    allowed_set = set(allowed)
    if WILDCARD in allowed_set:
        return []
    return [tag for tag in tags if tag not in allowed_set]


def evaluate(tags: Iterable[str], allowed: Iterable[str]) -> CheckResult:
    """Compare unique *tags* against the *allowed* runners."""
    tags = unique_tags(tags)
    allowed = list(allowed)
    disallowed = disallowed_tags(tags, allowed)
    if disallowed:
        return CheckResult(
            tags=tags,
            allowed=allowed,
            disallowed=disallowed,
            passed=False,
            message=f"Found disallowed runner tags: {', '.join(disallowed)}",
        )
    return CheckResult(tags=tags, allowed=allowed, message="All runner tags are allowed")


def run(
    settings: Settings,
    channel: ActionsChannel,
    loader: Callable[[Any], Any] = load_workflow,
) -> CheckResult:
    """Run the policy check and report the outcome on *channel*.

    Never raises: any error that escapes per-file handling, discovery failures
    included, becomes a failed result.
    """
    try:
        files = find_workflow_files(settings.workflows_dir)
        logger.info("Found %d workflow files to analyze", len(files))

        tags = unique_tags(collect_runner_tags(files, loader=loader))
        logger.info("Unique runner tags found: %s", tags)
        channel.set_output(RUNNER_TAGS_OUTPUT, json.dumps(tags))

        allowed = parse_allowlist(settings.allowed_runners)
        logger.info("Allowed runners: %s", allowed)

        result = evaluate(tags, allowed)
        if result.passed:
            logger.info(result.message)
        else:
            channel.set_failed(result.message)
    except Exception as exc:  # noqa: BLE001
        logger.debug("Policy run aborted", exc_info=True)
        result = CheckResult(
            passed=False,
            message=f"Action failed with error: {exc}",
        )
        channel.set_failed(result.message)
    if settings.summary:
        try:
            channel.write_summary(result)
        except OSError as exc:
            logger.warning("Failed to write job summary: %s", exc)
    return result


__all__ = [
    "CheckResult",
    "RUNNER_TAGS_OUTPUT",
    "WILDCARD",
    "disallowed_tags",
    "evaluate",
    "parse_allowlist",
    "run",
    "unique_tags",
]
