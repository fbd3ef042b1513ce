"""Shared fixtures and sample levels."""

import os
import shlex
import subprocess
import sys
from pathlib import Path

import pytest


SRC_DIR = Path(__file__).resolve().parent.parent / "src"

SIMPLE_LEVEL = "version 4\n#\nBlock 0 0 0 3 3 0.5 0.5 1 1 0 0 0 0 0 0 0\n"

NESTED_LEVEL = (
    "version 4\n"
    "attempt_order push,enter,eat,possess\n"
    "shed\n"
    "draw_style tui\n"
    "custom_level_music 3\n"
    "some_future_key 1 2 3\n"
    "#\n"
    "Block -1 -1 0 7 7 0.6 0.8 1 1 0 0 0 0 0 0 0\n"
    "\tWall 0 0 0 0 0\n"
    "\tBlock 1 1 1 3 3 0.1 0.8 1 1 0 1 1 0 0 0 0\n"
    "\t\tFloor 1 1 PlayerButton\n"
    "\t\tRef 2 2 0 1 0 0 0 0 -1 0 0 0 0 0 0\n"
    "\tFloor 5 5 Info hello_there\n"
    "\tFloor 6 6 Portal hub\n"
    "Block -1 -1 2 5 5 0.3 0.25 0.75 1 1 0 0 0 0 0 0\n"
)


def run(cmd: str, cwd: Path) -> subprocess.CompletedProcess:
    """Run a paralevel CLI command (without the program name) in a directory."""
    env = {k: v for k, v in os.environ.items() if k != "PARALEVEL_CONFIG"}
    env["PYTHONIOENCODING"] = "utf-8"
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC_DIR), env.get("PYTHONPATH")]))
    return subprocess.run(
        [sys.executable, "-m", "paralevel", *shlex.split(cmd)],
        cwd=cwd,
        capture_output=True,
        text=True,
        encoding="utf-8",
        env=env,
    )


@pytest.fixture
def level_file(tmp_path: Path) -> Path:
    path = tmp_path / "level.txt"
    path.write_text(NESTED_LEVEL, encoding="utf-8")
    return path
