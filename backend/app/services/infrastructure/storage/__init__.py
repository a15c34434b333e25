"""Storage layer - run persistence and download bundles."""

from .run_repository import RunRepository, FileRunRepository, new_run_id
from .archive import build_segments_archive

__all__ = [
    "RunRepository",
    "FileRunRepository",
    "new_run_id",
    "build_segments_archive",
]
