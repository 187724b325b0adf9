"""Entry point for the runner policy check.

Executing ``python -m runner_policy`` forwards to the CLI defined in
``runner_policy.cli``.
"""
from .cli import main


if __name__ == "__main__":
    raise SystemExit(main())
