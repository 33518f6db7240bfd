"""Simple launcher for the travel guide.

This script asks whether you want the Gradio chat window or the HTTP
API, then starts the corresponding server.
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

from travel_guide.config import get_config


def main() -> None:
    project_root = Path(__file__).resolve().parent

    print("=== India Travel Guide launcher ===")
    print("1) Chat window (apps/app.py)")
    print("2) HTTP API     (travel_guide.api)")
    choice = input("Choice (1/2, ui/api): ").strip().lower()

    if choice in {"2", "api", "a"}:
        api = get_config().api
        cmd = [
            sys.executable,
            "-m",
            "uvicorn",
            "travel_guide.api.app:create_app",
            "--factory",
            "--host",
            api.host,
            "--port",
            str(api.port),
        ]
        label = "HTTP API"
    else:
        if choice not in {"1", "ui", "u"}:
            print("Unrecognized choice, starting the chat window.")
        script_path = project_root / "apps" / "app.py"
        if not script_path.exists():
            print("Cannot find apps/app.py next to this launcher.")
            sys.exit(1)
        cmd = [sys.executable, str(script_path)]
        label = "chat window"

    print(f"Starting {label} with: {' '.join(cmd)}")
    subprocess.run(cmd, check=False, cwd=project_root)


if __name__ == "__main__":
    main()
