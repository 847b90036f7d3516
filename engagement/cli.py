"""
Render an engagement summary from a JSON description of the visit.

Example input:
    {
      "project": "Acme Plant", "location": "Bldg 4", "date": "2024-01-10",
      "consultant": "J. Doe", "contact": "M. Smith",
      "objective": "...", "takeaways": "...", "planning": "...", "conclusion": "...",
      "photos": ["site1.jpg"],
      "recommendations": [
        {"party": "GC", "severity": "High", "area": "Electrical", "photos": ["panel.jpg"]}
      ]
    }

Photo paths are resolved relative to the JSON file.
"""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from engagement.config import LOG_LEVEL
from engagement.errors import PhotoReadError, SummaryValidationError
from engagement.models import FORM_FIELD_NAMES
from engagement.photos import PhotoRef
from engagement.state import SummarySession

logger = logging.getLogger(__name__)

# area goes first so an explicit recommendation text replaces the template
_RECOMMENDATION_ORDER = ("area", "party", "severity", "area_description", "recommendation")


def _text(value) -> str:
    return "" if value is None else str(value)


def load_session(data: Dict[str, Any], base_dir: Optional[Path] = None) -> SummarySession:
    """Replay a JSON description through the same operations the form uses."""
    base_dir = base_dir or Path.cwd()
    summary = SummarySession()

    for name in FORM_FIELD_NAMES:
        if name in data:
            summary.set_field(name, _text(data[name]))

    summary.set_general_photos([PhotoRef.from_path(base_dir / p) for p in data.get("photos", [])])

    for index, rec in enumerate(data.get("recommendations", [])):
        if index >= len(summary.recommendations):
            summary.append_recommendation()
        for name in _RECOMMENDATION_ORDER:
            if name in rec:
                summary.set_recommendation_field(index, name, _text(rec[name]))
        if rec.get("photos"):
            summary.set_recommendation_photos(index, [PhotoRef.from_path(base_dir / p) for p in rec["photos"]])

    return summary


async def export_files(summary: SummarySession, pdf_path: Optional[Path], docx_path: Optional[Path]) -> None:
    # Imported here so text-only runs don't load reportlab / python-docx
    if pdf_path:
        from portal.pdf_generator import generate_summary_pdf

        pdf = await generate_summary_pdf(summary.report, summary.report_photos, summary.report_recommendations)
        pdf_path.write_bytes(pdf)
        logger.info(f"Wrote {pdf_path}")
    if docx_path:
        from portal.docx_generator import generate_summary_docx

        docx = await generate_summary_docx(summary.report, summary.report_photos, summary.report_recommendations)
        docx_path.write_bytes(docx)
        logger.info(f"Wrote {docx_path}")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Generate an Engagement Confirmation Summary")
    parser.add_argument("input", type=Path, help="JSON file describing the visit")
    parser.add_argument("--pdf", type=Path, help="Write the PDF export to this path")
    parser.add_argument("--docx", type=Path, help="Write the Word export to this path")
    parser.add_argument("--quiet", action="store_true", help="Don't print the summary text")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))

    try:
        data = json.loads(args.input.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        print(f"❌ Could not read {args.input}: {e}", file=sys.stderr)
        return 1

    try:
        summary = load_session(data, base_dir=args.input.parent)
        report = summary.generate()
    except SummaryValidationError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    except (KeyError, ValueError, TypeError, AttributeError) as e:
        print(f"❌ Invalid input: {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        print(report, end="")

    try:
        asyncio.run(export_files(summary, args.pdf, args.docx))
    except PhotoReadError as e:
        print(f"❌ Export failed: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
