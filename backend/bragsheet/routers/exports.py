"""
Brag sheet export API endpoints.

1. GET  /brag-sheet/styles — The style selector's options
2. POST /brag-sheet/export?style=... — Generate and download the PDF

Export is a single synchronous action from the student's point of view:
the client disables its export button while the request is in flight,
and the server enforces the same rule. A second export for the same
student_id while one is running gets 409 instead of a parallel run.
Requests without a student_id are not guarded: names are not unique.

PDFs are generated on demand and never stored.
"""

from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from bragsheet.schemas.portfolio import DocumentStyle, ExportRequest, StyleOption
from bragsheet.services.content_model import build_content_model
from bragsheet.services.document_assembler import (
    DocumentAssembler,
    DocumentGenerationError,
)
from bragsheet.services.styles import STYLE_CONFIGS

router = APIRouter(prefix="/api/v1/brag-sheet", tags=["brag-sheet"])

# Students with an export currently running
_exports_in_flight: set[str] = set()


def get_assembler() -> DocumentAssembler:
    """Dependency, so tests can override it with a mock-resolver assembler."""
    return DocumentAssembler()


@router.get("/styles", response_model=list[StyleOption])
async def list_styles():
    """List the export styles, in selector order."""
    return [
        StyleOption(value=config.style, label=config.label, description=config.description)
        for config in STYLE_CONFIGS.values()
    ]


@router.post("/export")
async def export_brag_sheet(
    request: ExportRequest,
    style: DocumentStyle = Query(DocumentStyle.PLAIN),
    assembler: DocumentAssembler = Depends(get_assembler),
):
    """Generate the brag sheet PDF in the selected style.

    Returns the PDF as an attachment named after the student, with the
    page count in the X-Page-Count header.
    """
    key = _export_key(request)
    if key is not None and key in _exports_in_flight:
        raise HTTPException(
            status_code=409,
            detail="An export is already in progress. Wait for it to finish.",
        )

    if key is not None:
        _exports_in_flight.add(key)
    try:
        model = build_content_model(
            request.profile,
            request.entries,
            request.academics,
            request.insights,
        )
        document = await assembler.generate(model, style)
    except DocumentGenerationError:
        raise HTTPException(
            status_code=500,
            detail="Error generating PDF. Please try again.",
        )
    finally:
        if key is not None:
            _exports_in_flight.discard(key)

    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={
            "Content-Disposition": _content_disposition(document.filename),
            "X-Page-Count": str(document.page_count),
        },
    )


def _export_key(request: ExportRequest) -> Optional[str]:
    if request.student_id:
        return f"id:{request.student_id}"
    return None


def _content_disposition(filename: str) -> str:
    """Attachment header that survives non-ASCII student names."""
    ascii_name = filename.encode("ascii", "ignore").decode().replace('"', "") or "Brag_Sheet.pdf"
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"
