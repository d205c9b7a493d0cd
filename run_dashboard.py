#!/usr/bin/env python3
"""Direct launcher for the Finance Tracker.

This script launches Streamlit with the finance_tracker directory as the app root,
enabling automatic page discovery from the pages/ subdirectory.

Usage:
    python run_dashboard.py [--data-dir PATH] [streamlit options...]
"""

import argparse
import os
import subprocess
import sys
from pathlib import Path

project_root = Path(__file__).parent.resolve()
app_dir = project_root / "finance_tracker"


def build_env(data_dir=None):
    """Environment for the Streamlit process; the data dir must be absolute after chdir."""
    env = dict(os.environ)
    if data_dir:
        env["FINTRACK_DATA_DIR"] = str(Path(data_dir).expanduser().resolve())
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(project_root), env.get("PYTHONPATH")]))
    return env


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Launch the Finance Tracker dashboard")
    parser.add_argument("--data-dir", help="Directory holding transactions.json and goals.json")
    args, streamlit_args = parser.parse_known_args(argv)

    result = subprocess.run(
        [sys.executable, "-m", "streamlit", "run", "Home.py", *streamlit_args],
        cwd=app_dir,
        env=build_env(args.data_dir),
    )
    return result.returncode


if __name__ == "__main__":
    raise SystemExit(main())
