"""
Runtime environment guards.
"""

import os
from pathlib import Path
from typing import Dict

from ..config import Settings


def assert_directory_writable(path: Path, *, create: bool = True) -> None:
    if create:
        path.mkdir(parents=True, exist_ok=True)
    if not path.exists() or not path.is_dir():
        raise RuntimeError(f"Required directory is missing: {path}")

    probe = path / f".write_probe_{os.getpid()}.tmp"
    try:
        with open(probe, "w", encoding="utf-8") as f:
            f.write("ok")
        probe.unlink(missing_ok=True)
    except OSError as exc:
        raise RuntimeError(f"Directory is not writable: {path}") from exc


def run_startup_checks(settings: Settings) -> Dict[str, object]:
    """Collect startup diagnostics; only a missing text credential is an error."""
    errors = []
    warnings = []

    if not settings.openai_api_key:
        errors.append("OPENAI_API_KEY is missing - required for script generation")

    if not any([
        settings.gemini_api_key,
        settings.google_application_credentials,
        settings.kieai_api_key,
        settings.falai_api_key,
    ]):
        warnings.append("No video generation API keys found (Gemini/Vertex/Kie.ai/FalAI) - video generation disabled")

    runs_dir_writable = None
    if settings.persist_runs:
        try:
            assert_directory_writable(settings.runs_dir)
            runs_dir_writable = True
        except RuntimeError as exc:
            runs_dir_writable = False
            warnings.append(str(exc))

    return {
        "errors": errors,
        "warnings": warnings,
        "runs_dir": str(settings.runs_dir),
        "runs_dir_writable": runs_dir_writable,
    }
