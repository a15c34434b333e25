"""Zip bundle of segment JSON files for the download endpoint"""

import io
import json
import zipfile
from typing import Any, Dict, List

from app.core.exceptions import ValidationError

from ..video.base import segment_number_of


def build_segments_archive(segments: List[Dict[str, Any]]) -> bytes:
    """
    One pretty-printed file per segment, ordered by segment number:
    segment_01.json, segment_02.json, ...

    Raises:
        ValidationError: If no segments are given
    """
    if not segments:
        raise ValidationError("No segments provided")
    if not all(isinstance(segment, dict) for segment in segments):
        raise ValidationError("Every segment must be a JSON object")

    # position breaks ties so dicts are never compared
    ordered = sorted(
        (segment_number_of(segment, position), position, segment)
        for position, segment in enumerate(segments, start=1)
    )

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for index, (_number, _position, segment) in enumerate(ordered, start=1):
            archive.writestr(
                f"segment_{index:02d}.json",
                json.dumps(segment, indent=2, ensure_ascii=False),
            )
    return buffer.getvalue()
