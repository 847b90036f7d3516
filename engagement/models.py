"""
Data models for the Engagement Confirmation Summary
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from engagement.photos import PhotoRef


class Severity(str, Enum):
    """Urgency rating for a recommendation"""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    IDLH = "IDLH"

    @property
    def display_label(self) -> str:
        if self is Severity.IDLH:
            return "IDLH (Immediately Dangerous to Life and Health)"
        return self.value


class RiskArea(str, Enum):
    """Type of workplace hazard a recommendation addresses (display order)"""
    FALL_FROM_HEIGHTS = "Fall from heights"
    FALL_AT_SAME_LEVEL = "Fall at same level"
    MATERIAL_HANDLING = "Material Handling"
    HOUSEKEEPING = "Housekeeping"
    ELECTRICAL = "Electrical"
    STRUCK_BY = "Struck-by"
    CAUGHT_IN_BETWEEN = "Caught-in-between"
    PINCH_POINT = "Pinch-point"
    PUBLIC_PROTECTION = "Public Protection"
    OTHER = "Other"


FORM_FIELD_NAMES = (
    "project",
    "location",
    "date",
    "consultant",
    "contact",
    "objective",
    "takeaways",
    "planning",
    "conclusion",
)

# Must be non-empty (after strip) before a summary can be generated
REQUIRED_FIELDS = ("project", "location", "date", "consultant", "contact")

FIELD_LABELS = {
    "project": "Project",
    "location": "Location",
    "date": "Date of Visit",
    "consultant": "Consultant",
    "contact": "Onsite Contact",
    "objective": "Visit Objective",
    "takeaways": "High-Level Takeaways",
    "planning": "Planning Ahead",
    "conclusion": "Conclusion",
}

RECOMMENDATION_FIELD_NAMES = (
    "party",
    "severity",
    "area",
    "area_description",
    "recommendation",
)


@dataclass(frozen=True)
class FormFields:
    """Scalar fields of the consultation form"""
    project: str = ""
    location: str = ""
    date: str = ""
    consultant: str = ""
    contact: str = ""
    objective: str = ""
    takeaways: str = ""
    planning: str = ""
    conclusion: str = ""

    def to_dict(self) -> dict:
        return {name: getattr(self, name) for name in FORM_FIELD_NAMES}


@dataclass(frozen=True)
class Recommendation:
    """One row of the recommendations table plus its photos"""
    party: str = ""
    severity: Optional[Severity] = None
    area: Optional[RiskArea] = None
    area_description: str = ""  # only rendered when area is Other
    recommendation: str = ""
    photos: Tuple[PhotoRef, ...] = ()

    @property
    def is_other_area(self) -> bool:
        return self.area is RiskArea.OTHER

    def to_dict(self) -> dict:
        return {
            "party": self.party,
            "severity": self.severity.value if self.severity else "",
            "area": self.area.value if self.area else "",
            "area_description": self.area_description,
            "recommendation": self.recommendation,
            "photos": [photo.name for photo in self.photos],
        }


def parse_severity(value) -> Optional[Severity]:
    """Coerce a label (or "" for unset) to a Severity."""
    if value is None or value == "":
        return None
    if isinstance(value, Severity):
        return value
    try:
        return Severity(value)
    except ValueError:
        raise ValueError(f"Unknown severity: {value!r}") from None


def parse_risk_area(value) -> Optional[RiskArea]:
    """Coerce a label (or "" for unset) to a RiskArea."""
    if value is None or value == "":
        return None
    if isinstance(value, RiskArea):
        return value
    try:
        return RiskArea(value)
    except ValueError:
        raise ValueError(f"Unknown risk area: {value!r}") from None
