#!/usr/bin/env python3
# Copyright 2026 Seqdraft Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the local CI checks: formatting, lint, type check, tests with coverage, and packaging.

Pass step names (e.g. ``tests lint``) to run a subset.
"""

import subprocess
import sys
import time
from pathlib import Path

from yachalk import chalk

# ###############
# Public Interface
# ###############

STEPS: dict[str, list[str]] = {
    "format": ["uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/"],
    "lint": ["uv", "run", "ruff", "check", "src/", "tests/", "tools/"],
    "typecheck": ["uv", "run", "ty", "check", "src/"],
    "tests": ["uv", "run", "pytest", "--cov=seqdraft", "--cov-report=term-missing"],
    "build": ["uv", "build"],
}


def main(argv: list[str]) -> int:
    """Run the selected CI steps and print a summary."""
    selected = argv or list(STEPS)
    unknown = [name for name in selected if name not in STEPS]
    if unknown:
        print(chalk.red(f"Unknown step(s): {', '.join(unknown)}"), file=sys.stderr)
        return 2

    results = [_run_step(name, STEPS[name]) for name in selected]

    print(f"\n{chalk.blue('Summary')}")
    for name, passed, elapsed in results:
        badge = chalk.green("PASS") if passed else chalk.red("FAIL")
        print(f"  {badge}  {name} ({elapsed:.1f}s)")
    print()
    return 0 if all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################


def _run_step(name: str, cmd: list[str]) -> tuple[str, bool, float]:
    print(f"\n{chalk.blue('-' * 60)}\n{chalk.blue(name)}: {' '.join(cmd)}")
    start = time.monotonic()
    proc = subprocess.run(cmd, cwd=Path(__file__).resolve().parent.parent)
    return name, proc.returncode == 0, time.monotonic() - start


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
