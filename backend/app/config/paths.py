"""
Path configuration

Base directories used by the application.
"""

from pathlib import Path

APP_DIR = Path(__file__).parent.parent
BACKEND_DIR = APP_DIR.parent
DEFAULT_RUNS_DIR = BACKEND_DIR / "generated_runs"

__all__ = [
    "APP_DIR",
    "BACKEND_DIR",
    "DEFAULT_RUNS_DIR",
]
