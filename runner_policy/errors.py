"""Exceptions raised by the runner policy check."""
from __future__ import annotations


class RunnerPolicyError(Exception):
    """Base class for errors that abort a policy run."""


class WorkflowDiscoveryError(RunnerPolicyError):
    """The workflow directory could not be enumerated."""


class ConfigError(RunnerPolicyError):
    """Configuration could not be read or is malformed."""
