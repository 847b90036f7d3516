"""
Word export for the Engagement Confirmation Summary.
Each line of the report becomes one paragraph, in order. Photos are only
embedded when requested (DOCX_EMBED_PHOTOS); the PDF export always has them.
"""
import io
import logging
import re
from typing import Iterable, Optional, Sequence

from docx import Document
from docx.enum.text import WD_BREAK
from docx.shared import Inches, Pt

from engagement.config import DOCX_EMBED_PHOTOS, PDF_PHOTO_WIDTH_IN, REPORT_TITLE
from engagement.models import Recommendation
from engagement.photos import PhotoPage, PhotoRef, collect_photo_pages

logger = logging.getLogger(__name__)

REPORT_FONT = "Courier New"
REPORT_FONT_SIZE = Pt(9)

# Characters outside the XML 1.0 range (e.g. the \x0b Word uses for manual line breaks)
_XML_INVALID = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def _report_paragraph(doc, line: str):
    p = doc.add_paragraph()
    p.paragraph_format.space_after = Pt(0)
    run = p.add_run(line)
    run.font.name = REPORT_FONT
    run.font.size = REPORT_FONT_SIZE
    return p


def _photo_section(doc, page: PhotoPage) -> None:
    doc.add_paragraph().add_run().add_break(WD_BREAK.PAGE)
    caption = doc.add_paragraph(_XML_INVALID.sub(" ", page.caption))
    caption.runs[0].bold = True
    caption.runs[0].font.size = Pt(12)
    doc.add_picture(io.BytesIO(page.data), width=Inches(PDF_PHOTO_WIDTH_IN))


def build_summary_docx(report_text: str, photo_pages: Sequence[PhotoPage] = ()) -> bytes:
    if not report_text or not report_text.strip():
        raise ValueError("Cannot export an empty summary")

    doc = Document()
    doc.core_properties.title = REPORT_TITLE
    text = _XML_INVALID.sub(" ", report_text)
    for line in text.rstrip("\n").split("\n"):
        _report_paragraph(doc, line)

    for page in photo_pages:
        _photo_section(doc, page)

    buf = io.BytesIO()
    doc.save(buf)
    data = buf.getvalue()
    logger.info(f"Built summary DOCX: {len(data)} bytes, {len(photo_pages)} embedded photo(s)")
    return data


async def generate_summary_docx(
    report_text: str,
    general_photos: Iterable[PhotoRef] = (),
    recommendations: Iterable[Recommendation] = (),
    embed_photos: Optional[bool] = None,
) -> bytes:
    """
    Generate the summary DOCX. With embed_photos (default from config) the
    photos follow the text in the same order as the PDF export.
    """
    if not report_text or not report_text.strip():
        raise ValueError("Cannot export an empty summary")
    if embed_photos is None:
        embed_photos = DOCX_EMBED_PHOTOS
    photo_pages = await collect_photo_pages(general_photos, recommendations) if embed_photos else []
    return build_summary_docx(report_text, photo_pages)
