#!/usr/bin/env python3
"""E2E verification: onboard, save, show and list through the installed CLI."""
import json
import subprocess
import sys
from pathlib import Path


def run(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(["cronclaw", *args], capture_output=True, text=True)


def main():
    e2e_dir = Path(__file__).resolve().parent / ".e2e_tmp"
    e2e_dir.mkdir(exist_ok=True)
    cfg_path = e2e_dir / "config.json"

    # 1. Onboard
    r = run("onboard", "-c", str(cfg_path), "--overwrite")
    if r.returncode != 0:
        print("onboard failed:", r.stderr or r.stdout)
        return 1

    # 2. Build
    r = run("build", "--at", "09:00", "--weekdays", "1,2,3,4,5")
    if r.returncode != 0 or r.stdout.strip() != "0 9 * * 1-5":
        print("build failed:", r.stderr or r.stdout)
        return 1

    # 3. Save and read back
    r = run("save", "e2e", "--every-x", "15:minute", "--hours", "9,10,11", "-c", str(cfg_path))
    if r.returncode != 0:
        print("save failed:", r.stderr or r.stdout)
        return 1
    data = json.loads(cfg_path.read_text(encoding="utf-8"))
    if "e2e" not in data.get("schedules", {}):
        print("save did not persist schedule")
        return 1

    r = run("show", "e2e", "-c", str(cfg_path), "-p", "-n", "2")
    if r.returncode != 0 or "*/15 9-11 * * *" not in r.stdout:
        print("show failed:", r.stderr or r.stdout)
        return 1

    # 4. Invalid input must fail
    r = run("build", "--every", "decade")
    if r.returncode != 1:
        print("invalid unit was accepted")
        return 1

    print("E2E OK")
    return 0


if __name__ == "__main__":
    sys.exit(main())
