"""Runner policy check for GitHub Actions workflows.

This package scans ``.github/workflows`` for workflow definitions, collects
every ``runs-on`` runner tag declared by their jobs and fails when a tag is
missing from the ``allowed-runners`` allowlist. The discovered tags are always
published as the ``runner-tags`` output so later steps can inspect them.
"""

__all__ = ["cli", "extract", "policy"]
__version__ = "1.0.0"
