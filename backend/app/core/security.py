"""
Security utilities for persisted-run access

Run identifiers come back from clients on read endpoints, so they are checked
against the generated format and resolved paths must stay under the runs root.
"""

import re
from pathlib import Path

from .logging import get_logger

logger = get_logger(__name__, component="security")

# 20261018T101530123456Z-1a2b3c4d
RUN_ID_PATTERN = re.compile(r"^\d{8}T\d{12}Z-[a-f0-9]{8}$")


def validate_run_id(run_id: str) -> bool:
    """
    Validate run ID format to prevent path traversal

    Example:
        >>> validate_run_id("20261018T101530123456Z-1a2b3c4d")
        True
        >>> validate_run_id("../../etc/passwd")
        False
    """
    is_valid = bool(RUN_ID_PATTERN.match(run_id or ""))
    if not is_valid:
        logger.warning("Invalid run ID format", extra={"run_id_value": run_id})
    return is_valid


def validate_path_within_directory(path: Path, allowed_directory: Path) -> bool:
    """Return True when the resolved path stays inside allowed_directory."""
    try:
        resolved = path.resolve()
        root = allowed_directory.resolve()
    except (OSError, RuntimeError) as e:
        logger.warning("Path resolution failed", extra={"path": str(path), "error": str(e)})
        return False

    inside = resolved == root or root in resolved.parents
    if not inside:
        logger.warning("Path escapes allowed directory", extra={
            "path": str(resolved),
            "allowed_directory": str(root),
        })
    return inside
