#!/usr/bin/env python3
# Copyright 2026 yamlscan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the CI checks locally: format, lint, tests with coverage, and build.

Pass step names to run a subset, e.g. ``tools/ci.py lint tests``.
"""

import argparse
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
    "tests": ["uv", "run", "pytest", "--cov=yamlscan", "--cov-report=term-missing"],
    "build": ["uv", "build"],
}


def main() -> int:
    """Run the selected CI steps and print a summary."""
    parser = argparse.ArgumentParser(description="Run yamlscan CI checks")
    parser.add_argument("steps", nargs="*", metavar="STEP", help=f"Steps to run: {', '.join(STEPS)} (default: all)")
    parser.add_argument("--fail-fast", action="store_true", help="Stop at the first failing step")
    args = parser.parse_args()

    selected = args.steps or list(STEPS)
    unknown = [s for s in selected if s not in STEPS]
    if unknown:
        parser.error(f"unknown step(s): {', '.join(unknown)}")
    results: list[tuple[str, bool, float]] = []
    for name in selected:
        _banner(name.capitalize())
        start = time.monotonic()
        proc = subprocess.run(STEPS[name], cwd=_repo_root())
        passed = proc.returncode == 0
        results.append((name, passed, time.monotonic() - start))
        if not passed and args.fail_fast:
            break

    _banner("  Summary")
    for name, passed, elapsed in results:
        if passed:
            print(chalk.green(f"  PASS  {name} ({elapsed:.1f}s)"))
        else:
            print(chalk.red(f"  FAIL  {name} ({elapsed:.1f}s)"))
    print()
    return 0 if all(passed for _, passed, _ in results) and len(results) == len(selected) else 1


# ################
# Implementation
# ################


def _banner(title: str) -> None:
    sep = chalk.blue("=" * 60)
    print(f"\n{sep}")
    print(chalk.blue(title))
    print(sep)


def _repo_root() -> Path:
    return Path(__file__).resolve().parent.parent


if __name__ == "__main__":
    sys.exit(main())
