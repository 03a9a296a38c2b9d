#!/usr/bin/env python3
"""Launch the CarSearch FastAPI dev server, optionally running the tests first."""
from __future__ import annotations

import argparse
import subprocess
import sys
from pathlib import Path
from subprocess import TimeoutExpired

ROOT_DIR = Path(__file__).resolve().parents[1]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the CarSearch API in development mode")
    parser.add_argument("--port", type=int, default=8000, help="Port to expose the API on (default: 8000)")
    parser.add_argument("--host", default="127.0.0.1", help="uvicorn listen address (default: 127.0.0.1)")
    parser.add_argument("--skip-tests", action="store_true", help="Do not run pytest before starting")
    return parser.parse_args()


def run_step(description: str, command: list[str]) -> None:
    print(f"-> {description}: {' '.join(command)}")
    subprocess.run(command, cwd=str(ROOT_DIR), check=True)


def main() -> int:
    args = parse_args()

    if not args.skip_tests:
        run_step("Running tests", [sys.executable, "-m", "pytest", "carsearch/tests"])

    command = [
        sys.executable,
        "-m",
        "uvicorn",
        "carsearch.app:app",
        "--reload",
        "--host",
        args.host,
        "--port",
        str(args.port),
    ]
    print(f"-> Starting the API: {' '.join(command)}")

    process = subprocess.Popen(command, cwd=str(ROOT_DIR))
    try:
        return process.wait()
    except KeyboardInterrupt:
        print("\nStopping the API...")
        process.terminate()
        try:
            return process.wait(timeout=10)
        except TimeoutExpired:
            process.kill()
            return process.wait()


if __name__ == "__main__":
    raise SystemExit(main())
