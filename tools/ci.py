#!/usr/bin/env python3
# Copyright 2026 CMLModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the CMLModel checks locally: format, lint, type check, tests, CLI smoke test and build.

Usage:
    python tools/ci.py               # all steps
    python tools/ci.py --only Tests  # a subset, by step name
"""

import argparse
import pathlib
import subprocess
import sys
import time

from yachalk import chalk

# ###############
# Public Interface
# ###############

STEPS: dict[str, list[str]] = {
    "Format": ["uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/"],
    "Lint": ["uv", "run", "ruff", "check", "src/", "tests/", "tools/"],
    "Types": ["uv", "run", "ty", "check", "src/"],
    "Tests": ["uv", "run", "pytest", "--cov=cmlmodel", "--cov-report=term-missing"],
    "CLI": ["uv", "run", "cmlmodel", "--help"],
    "Build": ["uv", "build"],
}


def main() -> int:
    """Run the selected CI steps and print a coloured summary."""
    parser = argparse.ArgumentParser(description="Run CMLModel CI steps")
    parser.add_argument("--only", nargs="+", choices=list(STEPS), help="Run only these steps")
    args = parser.parse_args()

    selected = args.only or list(STEPS)
    results = [_run_step(name, STEPS[name]) for name in selected]
    _print_summary(results)
    return 0 if all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################

_RULE = "=" * 60


def _run_step(name: str, cmd: list[str]) -> tuple[str, bool, float]:
    print(f"\n{chalk.blue(_RULE)}\n{chalk.blue(name)}\n{chalk.blue(_RULE)}")
    start = time.monotonic()
    proc = subprocess.run(cmd, cwd=pathlib.Path(__file__).parent.parent)
    return name, proc.returncode == 0, time.monotonic() - start


def _print_summary(results: list[tuple[str, bool, float]]) -> None:
    print(f"\n{chalk.blue(_RULE)}\n{chalk.blue('  Summary')}\n{chalk.blue(_RULE)}")
    for name, passed, elapsed in results:
        colour = chalk.green if passed else chalk.red
        status = "PASS" if passed else "FAIL"
        print(colour(f"  {status}  {name} ({elapsed:.1f}s)"))
    print()


if __name__ == "__main__":
    sys.exit(main())
