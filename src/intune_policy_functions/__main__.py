"""
Entry point for running intune_policy_functions as a module.

This file enables:
- `python -m intune_policy_functions compliance --group-id ... --name ...`
- `uv run python -m intune_policy_functions update-ring --group-id ...`
"""

from __future__ import annotations

from intune_policy_functions.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
