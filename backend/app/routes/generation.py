"""
Segment generation routes

- POST /api/generate: whole script in one call
- POST /api/generate-continuation: one segment per call, chained by token
- POST /api/download: zip archive of segment JSON files
"""

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from ..config import ARCHIVE_FILENAME, FORMAT_CONTINUATION
from ..context import AppContext, get_context
from ..core import PersistenceError, ValidationError, get_logger
from ..models import (
    ContinuationRequest,
    ContinuationResponse,
    DownloadRequest,
    GenerateRequest,
    GenerateResponse,
    GenerationConfig,
)
from ..services.infrastructure.storage import build_segments_archive

router = APIRouter(prefix="/api", tags=["generation"])
logger = get_logger(__name__, component="generation_routes")


@router.post("/generate", response_model=GenerateResponse)
async def generate_segments(request: GenerateRequest, context: AppContext = Depends(get_context)):
    """Split the script and generate every segment before answering"""
    result = await context.segment_pipeline().run(request.script, request.config)
    metadata = result.metadata

    persist = context.settings.persist_runs if request.persist is None else request.persist
    if persist:
        stored_metadata = metadata.model_copy(update={"persisted": True})
        try:
            context.runs.save(
                run_id=metadata.run_id,
                script=result.run.script,
                config=request.config.model_dump(mode="json"),
                segments=[segment.model_dump(mode="json") for segment in result.segments],
                metadata=stored_metadata.model_dump(mode="json"),
            )
            metadata = stored_metadata
        except PersistenceError as exc:
            # The caller still gets the segments; only the on-disk copy is missing
            logger.error(
                f"Failed to persist run: {exc.message}",
                extra={"run_id_value": metadata.run_id},
                exc_info=True,
            )

    return GenerateResponse(segments=result.segments, metadata=metadata)


@router.post("/generate-continuation", response_model=ContinuationResponse)
async def generate_continuation(request: ContinuationRequest, context: AppContext = Depends(get_context)):
    """First call: script (+config). Later calls: continuation_token only."""
    session = context.continuation_session()
    if request.continuation_token:
        return await session.advance(request.continuation_token)
    if request.script is None:
        raise ValidationError("Either script or continuation_token is required")

    config = request.config or GenerationConfig(format=FORMAT_CONTINUATION)
    return await session.start(request.script, config)


@router.post("/download")
async def download_segments(request: DownloadRequest):
    """Bundle the supplied segments, one JSON file each"""
    archive = build_segments_archive(request.segments)
    logger.info("Segments archive built", extra={"segment_count": len(request.segments), "bytes": len(archive)})
    return Response(
        content=archive,
        media_type="application/zip",
        headers={"Content-Disposition": f'attachment; filename="{ARCHIVE_FILENAME}"'},
    )
