"""
Engagement Confirmation Summary

Collects a workplace safety consultation (header fields, narrative sections,
risk recommendations and photos) and renders it as a fixed-format text report
for on-screen display and PDF / Word export.
"""

from .assembler import assemble, ensure_required_fields, missing_required_fields
from .errors import PhotoReadError, SummaryError, SummaryValidationError
from .models import FormFields, Recommendation, RiskArea, Severity
from .photos import PhotoPage, PhotoRef, collect_photo_pages
from .risk_templates import RISK_TEMPLATES, lookup
from .state import RecommendationList, SummarySession, apply_area_change

__all__ = [
    "FormFields",
    "Recommendation",
    "RiskArea",
    "Severity",
    "PhotoRef",
    "PhotoPage",
    "collect_photo_pages",
    "RISK_TEMPLATES",
    "lookup",
    "RecommendationList",
    "SummarySession",
    "apply_area_change",
    "assemble",
    "ensure_required_fields",
    "missing_required_fields",
    "SummaryError",
    "SummaryValidationError",
    "PhotoReadError",
]
