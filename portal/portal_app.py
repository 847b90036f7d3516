import logging
import os
from typing import List

from fastapi import Depends, FastAPI, File, HTTPException, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, Response
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.middleware.sessions import SessionMiddleware

from engagement.config import (
    ALLOW_LOCALHOST_CORS,
    DOCX_FILENAME,
    EXPORT_RATE_LIMIT,
    PDF_FILENAME,
    RATE_LIMIT_ENABLED,
    REPORT_TITLE,
    SESSION_SECRET,
)
from engagement.errors import PhotoReadError, SummaryValidationError
from engagement.models import Severity
from engagement.photos import PhotoRef
from engagement.risk_templates import RISK_TEMPLATES
from engagement.state import SummarySession
from portal.docx_generator import generate_summary_docx
from portal.pdf_generator import generate_summary_pdf
from portal.session_store import summary_sessions

logger = logging.getLogger(__name__)

app = FastAPI(title="Engagement Confirmation Summary", version="1.0.0")

app.add_middleware(SessionMiddleware, secret_key=SESSION_SECRET)

_cors_origins = []
if ALLOW_LOCALHOST_CORS:
    _cors_origins.append("http://localhost:3000")
    logger.warning("CORS: localhost enabled (development mode)")

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "OPTIONS"],
    allow_headers=["*"],
)

# Generation and exports are the expensive routes; everything else is a field edit
limiter = Limiter(key_func=get_remote_address, enabled=RATE_LIMIT_ENABLED)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

_portal_dir = os.path.dirname(os.path.abspath(__file__))
templates = Jinja2Templates(directory=os.path.join(_portal_dir, "templates"))


class FieldUpdate(BaseModel):
    value: str = ""


def get_summary_session(request: Request) -> SummarySession:
    """Summary state for the caller's browser session (created on first use)."""
    session_id, summary = summary_sessions.get_or_create(request.session.get("summary_id"))
    request.session["summary_id"] = session_id
    return summary


def _recommendation_or_404(summary: SummarySession, index: int):
    try:
        return summary.recommendations[index]
    except IndexError:
        raise HTTPException(status_code=404, detail=f"Recommendation {index} not found")


async def _uploads_to_photos(files: List[UploadFile]) -> List[PhotoRef]:
    # Read now: the upload's temp file is gone once the request ends
    photos = []
    for upload in files:
        if not upload.filename:
            continue
        data = await upload.read()
        photos.append(PhotoRef.from_bytes(upload.filename, data, upload.content_type))
    return photos


# ============================================================================
# Form page
# ============================================================================

@app.get("/", response_class=HTMLResponse)
async def summary_form(request: Request):
    response = templates.TemplateResponse(request, "summary_form.html", {
        "title": REPORT_TITLE,
        "risk_templates": {area.value: text for area, text in RISK_TEMPLATES.items()},
        "severities": [(s.value, s.display_label) for s in Severity],
    })
    response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
    return response


@app.get("/health")
async def health():
    return {"status": "ok", "service": "engagement-summary"}


# ============================================================================
# Summary state API
# ============================================================================

@app.get("/api/summary/options")
async def summary_options():
    return {
        "risk_areas": [{"label": area.value, "template": text} for area, text in RISK_TEMPLATES.items()],
        "severities": [{"value": s.value, "label": s.display_label} for s in Severity],
    }


@app.get("/api/summary")
async def get_summary(summary: SummarySession = Depends(get_summary_session)):
    return summary.to_dict()


@app.put("/api/summary/fields/{name}")
async def update_field(
    name: str,
    update: FieldUpdate,
    summary: SummarySession = Depends(get_summary_session),
):
    try:
        summary.set_field(name, update.value)
    except KeyError:
        raise HTTPException(status_code=400, detail=f"Unknown form field: {name}")
    return {"success": True, "form": summary.form.to_dict()}


@app.post("/api/summary/recommendations")
async def add_recommendation(summary: SummarySession = Depends(get_summary_session)):
    index = summary.append_recommendation()
    return {"success": True, "index": index, "recommendation": summary.recommendations[index].to_dict()}


@app.put("/api/summary/recommendations/{index}/photos")
async def update_recommendation_photos(
    index: int,
    files: List[UploadFile] = File(default=[]),
    summary: SummarySession = Depends(get_summary_session),
):
    _recommendation_or_404(summary, index)
    photos = await _uploads_to_photos(files)
    rec = summary.set_recommendation_photos(index, photos)
    logger.info(f"Recommendation #{index + 1}: {len(photos)} photo(s) attached")
    return {"success": True, "index": index, "recommendation": rec.to_dict()}


@app.put("/api/summary/recommendations/{index}/{name}")
async def update_recommendation_field(
    index: int,
    name: str,
    update: FieldUpdate,
    summary: SummarySession = Depends(get_summary_session),
):
    _recommendation_or_404(summary, index)
    try:
        rec = summary.set_recommendation_field(index, name, update.value)
    except KeyError:
        raise HTTPException(status_code=400, detail=f"Unknown recommendation field: {name}")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"success": True, "index": index, "recommendation": rec.to_dict()}


@app.put("/api/summary/photos")
async def update_general_photos(
    files: List[UploadFile] = File(default=[]),
    summary: SummarySession = Depends(get_summary_session),
):
    photos = await _uploads_to_photos(files)
    summary.set_general_photos(photos)
    logger.info(f"General photos: {len(photos)} attached")
    return {"success": True, "photos": [p.name for p in summary.photos]}


# ============================================================================
# Generation and export
# ============================================================================

@app.post("/api/summary/generate")
@limiter.limit(EXPORT_RATE_LIMIT)
async def generate_summary(request: Request, summary: SummarySession = Depends(get_summary_session)):
    try:
        report = summary.generate()
    except SummaryValidationError as e:
        logger.warning(f"Summary generation blocked, missing fields: {', '.join(e.missing)}")
        return JSONResponse({"success": False, "error": str(e), "missing": e.missing}, status_code=400)
    return {"success": True, "report": report}


def _attachment(content: bytes, media_type: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def _no_report_response() -> JSONResponse:
    return JSONResponse(
        {"success": False, "error": "Generate the summary before exporting it"},
        status_code=409,
    )


@app.get("/api/summary/export/pdf")
@limiter.limit(EXPORT_RATE_LIMIT)
async def export_pdf(request: Request, summary: SummarySession = Depends(get_summary_session)):
    if not summary.report:
        return _no_report_response()
    try:
        pdf = await generate_summary_pdf(summary.report, summary.report_photos, summary.report_recommendations)
    except PhotoReadError as e:
        logger.error(f"PDF export failed: {e}")
        return JSONResponse({"success": False, "error": str(e)}, status_code=422)
    except Exception as e:
        logger.error(f"PDF export failed: {e}", exc_info=True)
        return JSONResponse({"success": False, "error": str(e)}, status_code=500)
    return _attachment(pdf, "application/pdf", PDF_FILENAME)


@app.get("/api/summary/export/docx")
@limiter.limit(EXPORT_RATE_LIMIT)
async def export_docx(request: Request, summary: SummarySession = Depends(get_summary_session)):
    if not summary.report:
        return _no_report_response()
    try:
        docx = await generate_summary_docx(summary.report, summary.report_photos, summary.report_recommendations)
    except PhotoReadError as e:
        logger.error(f"DOCX export failed: {e}")
        return JSONResponse({"success": False, "error": str(e)}, status_code=422)
    except Exception as e:
        logger.error(f"DOCX export failed: {e}", exc_info=True)
        return JSONResponse({"success": False, "error": str(e)}, status_code=500)
    return _attachment(
        docx,
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        DOCX_FILENAME,
    )
