"""
Run repository - write-once persistence for generated runs.

Each Run is stored in its own directory, named by a timestamp-derived id:

    <runs_dir>/<run_id>/
        script.txt
        config.json
        segments.json
        metadata.json

Runs are never updated or deleted through this interface. A second save
under an existing id is an error, not an overwrite.

Classes:
    RunRepository: Abstract interface for run data access
    FileRunRepository: Directory-per-run implementation
"""

import json
import shutil
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, UTC
from pathlib import Path
from typing import Any, Dict, List, Optional

from app.core.exceptions import PersistenceError
from app.core.logging import get_logger
from app.core.security import validate_path_within_directory, validate_run_id
from app.models.runs import StoredRun

logger = get_logger(__name__, component="run_repository")

SCRIPT_FILE = "script.txt"
CONFIG_FILE = "config.json"
SEGMENTS_FILE = "segments.json"
METADATA_FILE = "metadata.json"


def new_run_id(now: Optional[datetime] = None) -> str:
    """
    Create a collision-resistant run id.

    Microsecond UTC timestamp plus 8 random hex characters, e.g.
    20261018T101530123456Z-1a2b3c4d. Ids sort chronologically as strings.
    """
    now = now or datetime.now(UTC)
    return f"{now.strftime('%Y%m%dT%H%M%S%fZ')}-{uuid.uuid4().hex[:8]}"


class RunRepository(ABC):
    """Abstract repository for persisted runs."""

    @abstractmethod
    def save(
        self,
        run_id: str,
        script: str,
        config: Dict[str, Any],
        segments: List[Dict[str, Any]],
        metadata: Dict[str, Any],
    ) -> None:
        """
        Persist a completed run.

        Raises:
            PersistenceError: If the run already exists or cannot be written
        """

    @abstractmethod
    def get(self, run_id: str) -> Optional[StoredRun]:
        """Return the stored run, or None if the id is unknown or invalid."""

    @abstractmethod
    def list_ids(self) -> List[str]:
        """All stored run ids, newest first."""


class FileRunRepository(RunRepository):
    """Stores each run as a directory of JSON files under runs_dir."""

    def __init__(self, runs_dir: Path):
        self.runs_dir = Path(runs_dir)

    def _run_dir(self, run_id: str) -> Path:
        return self.runs_dir / run_id

    def save(
        self,
        run_id: str,
        script: str,
        config: Dict[str, Any],
        segments: List[Dict[str, Any]],
        metadata: Dict[str, Any],
    ) -> None:
        if not validate_run_id(run_id):
            raise PersistenceError(f"Invalid run id: {run_id}")

        run_dir = self._run_dir(run_id)
        if run_dir.exists():
            raise PersistenceError(f"Run {run_id} already exists")

        # Staged under a hidden name; the rename publishes a complete run
        staging_dir = self.runs_dir / f".{run_id}.tmp"
        try:
            self.runs_dir.mkdir(parents=True, exist_ok=True)
            staging_dir.mkdir(exist_ok=False)
        except OSError as exc:
            raise PersistenceError(f"Could not create run directory for {run_id}: {exc}") from exc

        try:
            (staging_dir / SCRIPT_FILE).write_text(script, encoding="utf-8")
            self._write_json(staging_dir / CONFIG_FILE, config)
            self._write_json(staging_dir / SEGMENTS_FILE, segments)
            self._write_json(staging_dir / METADATA_FILE, metadata)
            staging_dir.rename(run_dir)
        except (OSError, TypeError, ValueError) as exc:
            shutil.rmtree(staging_dir, ignore_errors=True)
            raise PersistenceError(f"Could not write run {run_id}: {exc}") from exc

        logger.info(
            "Run persisted",
            extra={"run_dir": str(run_dir), "segment_count": len(segments)},
        )

    def get(self, run_id: str) -> Optional[StoredRun]:
        if not validate_run_id(run_id):
            return None
        run_dir = self._run_dir(run_id)
        if not validate_path_within_directory(run_dir, self.runs_dir) or not run_dir.is_dir():
            return None

        try:
            return StoredRun(
                run_id=run_id,
                script=(run_dir / SCRIPT_FILE).read_text(encoding="utf-8"),
                config=self._read_json(run_dir / CONFIG_FILE),
                segments=self._read_json(run_dir / SEGMENTS_FILE),
                metadata=self._read_json(run_dir / METADATA_FILE),
            )
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"Could not read run {run_id}: {exc}") from exc

    def list_ids(self) -> List[str]:
        if not self.runs_dir.is_dir():
            return []
        ids = [
            entry.name
            for entry in self.runs_dir.iterdir()
            if entry.is_dir() and validate_run_id(entry.name)
        ]
        return sorted(ids, reverse=True)

    @staticmethod
    def _write_json(path: Path, data: Any) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    @staticmethod
    def _read_json(path: Path) -> Any:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
