"""
PDF export for the Engagement Confirmation Summary.
Produces:
  - the summary text in a fixed-width font, wrapped and paginated
  - one page per attached photo (general photos first, then each
    recommendation's photos in order), captioned with the file name
"""
import io
import logging
import textwrap
from typing import Iterable, List, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import (
    HRFlowable,
    Image,
    PageBreak,
    Paragraph,
    Preformatted,
    SimpleDocTemplate,
    Spacer,
)

from engagement.config import (
    PDF_LINES_PER_PAGE,
    PDF_PHOTO_HEIGHT_IN,
    PDF_PHOTO_WIDTH_IN,
    PDF_WRAP_COLUMNS,
    REPORT_TITLE,
)
from engagement.models import Recommendation
from engagement.photos import PhotoPage, PhotoRef, collect_photo_pages

logger = logging.getLogger(__name__)

# ── Brand colors ──────────────────────────────────────────────────────────────
BRAND_DARK = colors.HexColor("#1f1f1f")
RULE_GRAY = colors.HexColor("#999999")

# ── Style helpers ─────────────────────────────────────────────────────────────
_base = getSampleStyleSheet()

STYLE_REPORT = ParagraphStyle(
    "ECSReport",
    parent=_base["Code"],
    fontName="Courier",
    fontSize=9,
    leading=11,
    leftIndent=0,
    textColor=colors.black,
)
STYLE_CAPTION = ParagraphStyle(
    "ECSCaption",
    parent=_base["Normal"],
    fontName="Helvetica-Bold",
    fontSize=12,
    textColor=BRAND_DARK,
    spaceAfter=6,
)


# ── Text layout ───────────────────────────────────────────────────────────────

def wrap_report_lines(text: str, columns: int = PDF_WRAP_COLUMNS) -> List[str]:
    """
    Split the report into lines no wider than `columns`.
    Blank lines are kept; leading indentation of a line is preserved.
    """
    wrapped: List[str] = []
    for line in text.rstrip("\n").split("\n"):
        pieces = textwrap.wrap(line, width=columns, break_on_hyphens=False)
        wrapped.extend(pieces or [""])
    return wrapped


def paginate_report(
    text: str,
    columns: int = PDF_WRAP_COLUMNS,
    lines_per_page: int = PDF_LINES_PER_PAGE,
) -> List[List[str]]:
    """Wrapped report lines grouped into pages of at most `lines_per_page`."""
    lines = wrap_report_lines(text, columns)
    return [lines[i:i + lines_per_page] for i in range(0, len(lines), lines_per_page)]


# ── Builder utilities ─────────────────────────────────────────────────────────

def _add(story, *items):
    for item in items:
        if item is not None:
            story.append(item)


def _photo_page(page: PhotoPage):
    """Caption + image drawn at the fixed export size."""
    return [
        Paragraph(escape(page.caption), STYLE_CAPTION),
        HRFlowable(width="100%", thickness=0.5, color=RULE_GRAY),
        Spacer(1, 10),
        Image(
            io.BytesIO(page.data),
            width=PDF_PHOTO_WIDTH_IN * inch,
            height=PDF_PHOTO_HEIGHT_IN * inch,
        ),
    ]


def build_summary_story(report_text: str, photo_pages: Sequence[PhotoPage]) -> list:
    """
    Flowables for the whole document: one Preformatted block per text page,
    then a page break and a captioned image for each photo, in the given order.
    """
    story = []
    for i, lines in enumerate(paginate_report(report_text)):
        if i:
            _add(story, PageBreak())
        _add(story, Preformatted("\n".join(lines), STYLE_REPORT))

    for page in photo_pages:
        _add(story, PageBreak(), *_photo_page(page))
    return story


# ── Public generators ─────────────────────────────────────────────────────────

def build_summary_pdf(report_text: str, photo_pages: Sequence[PhotoPage] = ()) -> bytes:
    """Render already-resolved photos and the report text to PDF bytes."""
    if not report_text or not report_text.strip():
        raise ValueError("Cannot export an empty summary")

    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=letter,
        leftMargin=0.75 * inch, rightMargin=0.75 * inch,
        topMargin=0.75 * inch, bottomMargin=0.75 * inch,
        title=REPORT_TITLE,
    )
    doc.build(build_summary_story(report_text, photo_pages))
    pdf = buf.getvalue()
    logger.info(f"Built summary PDF: {len(pdf)} bytes, {len(photo_pages)} photo page(s)")
    return pdf


async def generate_summary_pdf(
    report_text: str,
    general_photos: Iterable[PhotoRef],
    recommendations: Iterable[Recommendation],
) -> bytes:
    """
    Generate the summary PDF. Photos are read one at a time, general photos
    first; a PhotoReadError from any of them aborts the export.
    """
    if not report_text or not report_text.strip():
        raise ValueError("Cannot export an empty summary")
    photo_pages = await collect_photo_pages(general_photos, recommendations)
    return build_summary_pdf(report_text, photo_pages)
