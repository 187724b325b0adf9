"""Configuration loading for the runner policy check.

Settings are resolved once, at the process boundary, from (highest first):
command-line flags, the ``allowed-runners`` action input, an optional YAML
config file and built-in defaults. The config file lives at
``.github/runner-policy.yml`` in the workspace unless ``--config`` points
elsewhere.
"""
from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from ruamel.yaml import YAML, YAMLError

from .actions import get_input
from .errors import ConfigError

DEFAULT_CONFIG_PATH = Path(".github") / "runner-policy.yml"
DEFAULT_WORKFLOWS_DIR = Path(".github") / "workflows"
ALLOWED_RUNNERS_INPUT = "allowed-runners"


@dataclass(frozen=True)
class Settings:
    workspace: Path
    allowed_runners: str
    workflows_dir: Path
    summary: bool = True


def _defaults() -> Dict[str, Any]:
    return {
        "allowed-runners": "",
        "workflows-dir": str(DEFAULT_WORKFLOWS_DIR),
        "summary": True,
    }


def load_config(path: Path, required: bool = False) -> Dict[str, Any]:
    """Load the YAML config at *path* merged over the defaults.

    A missing file yields the defaults unless *required* is set. Unreadable or
    malformed files raise :class:`ConfigError`.
    """
    config = _defaults()
    path = Path(path)
    if not path.exists():
        if required:
            raise ConfigError(f"Config file not found: {path}")
        return config
    try:
        data = YAML(typ="safe").load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, YAMLError) as exc:
        raise ConfigError(f"Failed to read config {path}: {exc}") from exc
    if data is None:
        return config
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must be a mapping, got {type(data).__name__}")
    allowed = data.get("allowed-runners")
    if isinstance(allowed, list):
        if not all(isinstance(item, str) for item in allowed):
            raise ConfigError(f"Config {path}: allowed-runners entries must be strings")
        data["allowed-runners"] = " ".join(allowed)
    elif allowed is not None and not isinstance(allowed, str):
        raise ConfigError(f"Config {path}: allowed-runners must be a string or a list")
    workflows_dir = data.get("workflows-dir")
    if workflows_dir is not None and not isinstance(workflows_dir, str):
        raise ConfigError(f"Config {path}: workflows-dir must be a string")
    summary = data.get("summary")
    if summary is not None and not isinstance(summary, bool):
        raise ConfigError(f"Config {path}: summary must be true or false")
    config.update(data)
    return config


def resolve_workspace(cli_value: Optional[str], env: Mapping[str, str]) -> Path:
    return Path(cli_value or env.get("GITHUB_WORKSPACE") or ".")


def resolve_settings(
    args: argparse.Namespace,
    env: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Build :class:`Settings` from parsed CLI *args* and the environment."""
    env = os.environ if env is None else env
    workspace = resolve_workspace(getattr(args, "workspace", None), env)

    config_arg = getattr(args, "config", None)
    if config_arg:
        config = load_config(Path(config_arg), required=True)
    else:
        config = load_config(workspace / DEFAULT_CONFIG_PATH)

    allowed = getattr(args, "allowed_runners", None)
    if allowed is None:
        allowed = get_input(ALLOWED_RUNNERS_INPUT, env) or str(config["allowed-runners"] or "")

    workflows_dir = Path(getattr(args, "workflows_dir", None) or config["workflows-dir"])
    if not workflows_dir.is_absolute():
        workflows_dir = workspace / workflows_dir

    summary = config.get("summary", True) is not False and not getattr(args, "no_summary", False)
    return Settings(
        workspace=workspace,
        allowed_runners=allowed,
        workflows_dir=workflows_dir,
        summary=summary,
    )


__all__ = [
    "ALLOWED_RUNNERS_INPUT",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_WORKFLOWS_DIR",
    "Settings",
    "load_config",
    "resolve_settings",
    "resolve_workspace",
]
