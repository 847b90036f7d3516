"""
Report assembly for the Engagement Confirmation Summary.

assemble() maps the form, the general photo list and the recommendations to
the fixed text layout shown on screen and fed to the PDF/Word exporters. It is
pure: no I/O, inputs are never mutated, equal inputs give identical text.
"""
from typing import List, Sequence

from engagement.errors import SummaryValidationError
from engagement.models import FIELD_LABELS, REQUIRED_FIELDS, FormFields, Recommendation, RiskArea
from engagement.photos import PhotoRef

BORDER = "+--------------------------------------------------------------+"
TITLE_LINE = "|             ENGAGEMENT CONFIRMATION SUMMARY                 |"
RULE = "-" * 62

CONTACT_PLACEHOLDER = "[Onsite Contact]"
NOT_APPLICABLE = "N/A"
NO_GENERAL_PHOTOS = "  None provided"
NO_RECOMMENDATION_PHOTOS = "  None submitted"

TABLE_HEADER = (
    "| Responsible Party | Severity | Area of Risk | Recommendation |",
    "|-------------------|----------|--------------|----------------|",
)

NARRATIVE_SECTIONS = (
    ("VISIT OBJECTIVE:", "objective"),
    ("HIGH-LEVEL TAKEAWAYS:", "takeaways"),
    ("PLANNING AHEAD:", "planning"),
    ("CONCLUSION:", "conclusion"),
)

DISCLAIMER = (
    "The information contained in this report is based on verbal responses, visual observations, "
    "and available documentation at the time of the visit. This report is provided solely for "
    "informational and advisory purposes to support risk awareness and operational improvement. "
    "It does not constitute legal advice, regulatory enforcement, or a compliance determination on "
    "behalf of any governmental agency. Peril Mavens is an independent consulting firm and does not "
    "represent OSHA or any regulatory authority. All recommendations are provided in good faith and "
    "based on professional judgment, but final decisions regarding implementation remain the "
    "responsibility of the client."
)

VALIDATION_MESSAGE = (
    "Please fill in all required fields: Project, Location, Date of Visit, Consultant, and Onsite Contact."
)


# ── Precondition ──────────────────────────────────────────────────────────────

def missing_required_fields(form: FormFields) -> List[str]:
    """Names of required header fields that are empty after trimming."""
    return [name for name in REQUIRED_FIELDS if not getattr(form, name).strip()]


def ensure_required_fields(form: FormFields) -> None:
    missing = missing_required_fields(form)
    if missing:
        labels = ", ".join(FIELD_LABELS[name] for name in missing)
        raise SummaryValidationError(missing, f"{VALIDATION_MESSAGE} Missing: {labels}.")


# ── Section builders ──────────────────────────────────────────────────────────

def photo_lines(photos: Sequence[PhotoRef], empty_line: str) -> List[str]:
    if not photos:
        return [empty_line]
    return [f"  - {photo.name}" for photo in photos]


def area_cell(rec: Recommendation) -> str:
    if rec.area is RiskArea.OTHER and rec.area_description:
        return f"Other - {rec.area_description}"
    return rec.area.value if rec.area else NOT_APPLICABLE


def table_row(rec: Recommendation) -> str:
    cells = [
        rec.party or NOT_APPLICABLE,
        rec.severity.value if rec.severity else NOT_APPLICABLE,
        area_cell(rec),
        rec.recommendation or NOT_APPLICABLE,
    ]
    return f"| {' | '.join(cells)} |"


def _recommendation_photo_blocks(recommendations: Sequence[Recommendation]) -> List[str]:
    lines: List[str] = []
    for index, rec in enumerate(recommendations, start=1):
        if index > 1:
            lines.append("")
        lines.append(f"Recommendation #{index} Photos:")
        lines.extend(photo_lines(rec.photos, NO_RECOMMENDATION_PHOTOS))
    return lines


# ── Public ────────────────────────────────────────────────────────────────────

def assemble(
    form: FormFields,
    general_photos: Sequence[PhotoRef],
    recommendations: Sequence[Recommendation],
) -> str:
    """Build the summary text. Callers check required fields first."""
    lines: List[str] = [
        BORDER,
        TITLE_LINE,
        BORDER,
        "",
        f"Project: {form.project}",
        f"Location: {form.location}",
        f"Date of Visit: {form.date}",
        f"Consultant: {form.consultant}",
        f"Onsite Contact: {form.contact}",
        "",
        RULE,
        f"Dear {form.contact or CONTACT_PLACEHOLDER},",
        "",
    ]

    for caption, field_name in NARRATIVE_SECTIONS:
        lines += [RULE, caption, getattr(form, field_name), ""]

    lines += [RULE, "PHOTOS SUBMITTED:"]
    lines += photo_lines(general_photos, NO_GENERAL_PHOTOS)
    lines.append("")

    lines += [RULE, "RECOMMENDATIONS:", ""]
    lines += TABLE_HEADER
    lines += [table_row(rec) for rec in recommendations]
    lines.append("")

    lines += [RULE, "ATTACHED PHOTOS FOR RECOMMENDATIONS:", ""]
    lines += _recommendation_photo_blocks(recommendations)
    lines.append("")

    lines += [RULE, "DISCLAIMER:", "", DISCLAIMER, "", BORDER]
    return "\n".join(lines) + "\n"
