"""Run the monday-cli checks (ruff, mypy, pytest) and print one JSON report.

Usage:
    py scripts/quality_gate.py                 # every check
    py scripts/quality_gate.py --only mypy     # one check (repeatable)
    py scripts/quality_gate.py --skip-tests    # everything but pytest
    py scripts/quality_gate.py --fix           # let ruff fix what it can first

Exit status is 0 when every selected check passes, 1 otherwise.
"""

from __future__ import annotations

import argparse
import importlib.util
import json
import re
import subprocess
import sys
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
PACKAGE = ROOT / "monday_cli"

# Subpackage -> the optional module it imports.
OPTIONAL_SUBPACKAGES = {"mcp_server": "mcp"}


def mypy_targets() -> list[str]:
    """Package modules and subpackages; optional ones only when their extra is installed."""
    targets = []
    for path in sorted(PACKAGE.iterdir()):
        if path.name.startswith("__pycache__"):
            continue
        extra = OPTIONAL_SUBPACKAGES.get(path.name)
        if extra and importlib.util.find_spec(extra) is None:
            continue
        if path.suffix == ".py" or (path / "__init__.py").exists():
            targets.append(str(path.relative_to(ROOT)))
    return targets


def _count(pattern: str) -> Callable[[str], dict]:
    regex = re.compile(pattern, re.MULTILINE)
    return lambda text: {"findings": len(regex.findall(text))}


def _pytest_summary(text: str) -> dict:
    counts = {"passed": 0, "failed": 0, "skipped": 0}
    for line in reversed(text.strip().splitlines()):
        found = {k: re.search(rf"(\d+)\s+{k}", line) for k in counts}
        if any(found.values()):
            for key, match in found.items():
                if match:
                    counts[key] = int(match.group(1))
            break
    return counts


@dataclass(frozen=True)
class Check:
    name: str
    args: tuple[str, ...]
    summarize: Callable[[str], dict]
    tail: int = 4000

    def command(self) -> list[str]:
        args = list(self.args)
        if self.name == "mypy":
            args += mypy_targets()
        return [sys.executable, "-m", *args]


CHECKS = (
    Check("ruff_lint", ("ruff", "check", "."), _count(r"^\S+:\d+:\d+:")),
    Check("ruff_format", ("ruff", "format", "--check", "."), _count(r"^Would reformat")),
    Check("mypy", ("mypy",), _count(r": error:")),
    Check(
        "pytest",
        ("pytest", "tests/", "-q", "--no-header", "--tb=short"),
        _pytest_summary,
        tail=2000,
    ),
)


def run_check(check: Check) -> dict:
    t0 = time.monotonic()
    proc = subprocess.run(
        check.command(), capture_output=True, text=True, cwd=str(ROOT), timeout=300
    )
    text = proc.stdout + proc.stderr
    result = {
        "status": "pass" if proc.returncode == 0 else "fail",
        **check.summarize(text),
        "duration_s": round(time.monotonic() - t0, 1),
    }
    if proc.returncode != 0:
        result["output"] = text.strip()[-check.tail :]
    return result


def main(argv=None) -> int:
    names = [c.name for c in CHECKS]
    parser = argparse.ArgumentParser(description="Run the monday-cli quality checks")
    parser.add_argument("--only", action="append", choices=names, help="Run only this check")
    parser.add_argument("--skip-tests", action="store_true", help="Skip pytest")
    parser.add_argument("--fix", action="store_true", help="Run 'ruff check --fix' first")
    args = parser.parse_args(argv)

    selected = set(args.only or names)
    if args.skip_tests:
        selected.discard("pytest")

    if args.fix:
        subprocess.run([sys.executable, "-m", "ruff", "check", "--fix", "."], cwd=str(ROOT))

    t0 = time.monotonic()
    checks: dict[str, dict] = {}
    for check in CHECKS:
        if check.name not in selected:
            checks[check.name] = {"status": "skip"}
            continue
        print(f"Running {check.name}...", file=sys.stderr)
        checks[check.name] = run_check(check)

    passed = all(c["status"] in ("pass", "skip") for c in checks.values())
    report = {
        "overall": "pass" if passed else "fail",
        "checks": checks,
        "total_duration_s": round(time.monotonic() - t0, 1),
    }
    print(json.dumps(report, indent=2))
    return 0 if passed else 1


if __name__ == "__main__":
    sys.exit(main())
