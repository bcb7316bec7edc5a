"""Lift Guide launcher. Starts the API dev server, or plays in the terminal."""

import argparse
import asyncio
import logging
import os
import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent
load_dotenv(ROOT / ".env")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = os.getenv("PORT", "13015")

PLAY_HELP = "Type keypad tokens (+ - ↑ ↓ digits), then 'go', 'label', 'clear' or 'quit'."


async def play(mission_state: str | None, settings_path: Path | None) -> None:
    from lift_guide import LiftSession, LogRenderer, load_settings

    lift = LiftSession(LogRenderer(), settings=load_settings(settings_path))
    lift.start(mission_state)
    print(PLAY_HELP)

    while True:
        line = (await asyncio.to_thread(input, "> ")).strip()
        if line == "quit":
            break
        if line == "go":
            await lift.go()
        elif line == "label":
            lift.submit_label()
        elif line == "clear":
            lift.clear_input()
        elif line:
            lift.press(line)
            print(f"command: {lift.buffer.text}")


def main():
    parser = argparse.ArgumentParser(description="Lift Guide launcher")
    parser.add_argument("--play", action="store_true",
                        help="Play in the terminal instead of starting the API server")
    parser.add_argument("--mission-state", default=None,
                        help="Resume the guide at this mission state (e.g. MOVING_TO_SPACE)")
    parser.add_argument("--settings", type=Path, default=None,
                        help="JSON settings file (default: $LIFT_CONFIG or built-in defaults)")
    args = parser.parse_args()

    if args.play:
        logging.basicConfig(level=logging.INFO, format="%(message)s")
        try:
            asyncio.run(play(args.mission_state, args.settings))
        except (KeyboardInterrupt, EOFError):
            print("\nBye!")
        return

    env = os.environ.copy()
    if args.settings:
        env["LIFT_CONFIG"] = str(args.settings.resolve())

    print(f"Starting Lift Guide API on http://localhost:{PORT} ...")
    if args.mission_state:
        print(f"Start a session with POST /api/session?missionState={args.mission_state}")
    proc = subprocess.Popen(
        [sys.executable, "-m", "uvicorn", "lift_guide.app:app", "--reload", "--host", HOST, "--port", PORT],
        cwd=ROOT, env=env,
    )
    try:
        proc.wait()
    except KeyboardInterrupt:
        print("\nShutting down...")
        proc.terminate()
        proc.wait()


if __name__ == "__main__":
    main()
