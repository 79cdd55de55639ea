#!/usr/bin/env python3
"""Test runner for step-retry."""

import argparse
import subprocess
import sys
from pathlib import Path


def run_tests(
    test_path: str = "tests/",
    verbose: bool = True,
    coverage: bool = False,
    skip_slow: bool = False,
) -> int:
    """Run tests with optional coverage."""
    project_root = Path(__file__).parent

    cmd = [sys.executable, "-m", "pytest"]

    if verbose:
        cmd.append("-v")

    if coverage:
        cmd.extend(
            [
                "--cov=src/step_retry",
                "--cov-report=term-missing",
                "--cov-report=html:htmlcov",
            ]
        )

    if skip_slow:
        cmd.extend(["-m", "not slow"])

    cmd.append(str(project_root / test_path))

    print(f"Running: {' '.join(cmd)}")
    print("-" * 50)

    try:
        result = subprocess.run(cmd, cwd=project_root)
        return result.returncode
    except KeyboardInterrupt:
        print("\nTests interrupted by user")
        return 130


def main() -> None:
    """Main test runner."""
    parser = argparse.ArgumentParser(description="Run step-retry tests")
    parser.add_argument("--path", default="tests/", help="Test path to run")
    parser.add_argument(
        "--no-verbose", action="store_true", help="Disable verbose output"
    )
    parser.add_argument("--coverage", action="store_true", help="Run with coverage")
    parser.add_argument(
        "--fast", action="store_true", help="Skip tests that wait on real timers"
    )

    args = parser.parse_args()

    exit_code = run_tests(
        test_path=args.path,
        verbose=not args.no_verbose,
        coverage=args.coverage,
        skip_slow=args.fast,
    )

    if exit_code == 0:
        print("\nAll tests passed!")
    else:
        print(f"\nTests failed with exit code {exit_code}")

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
