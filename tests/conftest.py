from __future__ import annotations

import os
from pathlib import Path

import pytest

from runner_policy.actions import ActionsChannel


@pytest.fixture(autouse=True)
def clean_actions_env(monkeypatch):
    """Keep the host runner's GITHUB_* and INPUT_* variables out of tests."""
    for key in list(os.environ):
        if key.startswith(("GITHUB_", "INPUT_")):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    (tmp_path / ".github" / "workflows").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def write_workflow(workspace: Path):
    def _write(name: str, content: str | bytes) -> Path:
        path = workspace / ".github" / "workflows" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def channel(tmp_path: Path) -> ActionsChannel:
    env = {
        "GITHUB_OUTPUT": str(tmp_path / "github_output"),
        "GITHUB_STEP_SUMMARY": str(tmp_path / "step_summary.md"),
    }
    return ActionsChannel(env)
