"""GitHub Actions input, output and failure reporting.

Inputs arrive as ``INPUT_<NAME>`` environment variables, outputs are appended
to the file named by ``GITHUB_OUTPUT`` and failures are surfaced as
``::error::`` workflow commands plus a non-zero exit code.
"""
from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, List, Mapping, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .policy import CheckResult

logger = logging.getLogger(__name__)


def input_env_name(name: str) -> str:
    return "INPUT_" + name.replace(" ", "_").upper()


def get_input(name: str, env: Optional[Mapping[str, str]] = None) -> str:
    """Return the action input *name*, or ``""`` when it was not provided."""
    source = os.environ if env is None else env
    return source.get(input_env_name(name), "").strip()


class ActionsChannel:
    """Report outputs and the verdict back to the workflow runner."""

    def __init__(self, env: Optional[Mapping[str, str]] = None):
        self._env = dict(os.environ if env is None else env)
        self.outputs: dict[str, str] = {}
        self.failure: Optional[str] = None

    @property
    def exit_code(self) -> int:
        return 1 if self.failure is not None else 0

    def set_output(self, name: str, value: str) -> None:
        self.outputs[name] = value
        output_path = self._env.get("GITHUB_OUTPUT")
        if not output_path:
            logger.info("Output %s=%s (GITHUB_OUTPUT not set)", name, value)
            return
        with open(output_path, "a", encoding="utf-8") as handle:
            handle.write(f"{name}={value}\n")

    def set_failed(self, message: str) -> None:
        self.failure = message
        print(f"::error::{message}", flush=True)

    def write_summary(self, result: "CheckResult") -> None:
        """Append a Markdown report of *result* to the job summary, if any."""
        summary_path = self._env.get("GITHUB_STEP_SUMMARY")
        if not summary_path:
            return
        lines: List[str] = [
            "### Runner Policy",
            "",
            f"- Status: {'passed' if result.passed else 'failed'}",
            f"- Allowed runners: {', '.join(result.allowed) if result.allowed else '<none>'}",
        ]
        if result.disallowed:
            lines.append(f"- Disallowed runner tags: {', '.join(result.disallowed)}")
        if result.tags:
            lines.append("")
            lines.append("Runner tags found:")
            lines.extend(f"- `{tag}`" for tag in result.tags)
        else:
            lines.append("- Runner tags found: <none>")
        with open(summary_path, "a", encoding="utf-8") as handle:
            handle.write("\n".join(lines) + "\n")


__all__ = ["ActionsChannel", "get_input", "input_env_name"]
