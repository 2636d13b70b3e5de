#!/usr/bin/env python3
"""Run repository checks: ruff, pyright and pytest.

Exits non-zero on the first failing check so CI and local tooling can
observe status.
"""

from __future__ import annotations

import argparse
import os
import subprocess
import sys

TARGETS = ["user_directory", "tests"]


def run(cmd: list[str], env: dict[str, str] | None = None) -> int:
    print("=>", " ".join(cmd))
    return subprocess.run(cmd, check=False, env=env).returncode


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--fix", action="store_true", help="Let ruff apply fixes")
    parser.add_argument("--no-types", action="store_true", help="Skip pyright")
    parser.add_argument("--no-tests", action="store_true", help="Skip running pytest")
    args = parser.parse_args()

    ruff = [sys.executable, "-m", "ruff", "check", *TARGETS]
    if args.fix:
        ruff.append("--fix")
    if run(ruff) != 0:
        print("ruff failed")
        return 1

    if not args.no_types and run([sys.executable, "-m", "pyright", *TARGETS]) != 0:
        print("pyright failed")
        return 1

    if not args.no_tests:
        env = os.environ.copy()
        # QObjects only; no platform plugin is needed
        env.setdefault("QT_QPA_PLATFORM", "offscreen")
        if run([sys.executable, "-m", "pytest", "-q", "tests"], env=env) != 0:
            print("pytest failed")
            return 1

    print("All checks passed")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
