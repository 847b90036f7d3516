"""
Per-session state for the summary form: scalar fields, general photos and the
append-only recommendation list, plus the update operations the form drives.
"""
import logging
from dataclasses import replace
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from engagement.assembler import assemble, ensure_required_fields
from engagement.models import (
    FORM_FIELD_NAMES,
    RECOMMENDATION_FIELD_NAMES,
    FormFields,
    Recommendation,
    RiskArea,
    parse_risk_area,
    parse_severity,
)
from engagement.photos import PhotoRef
from engagement.risk_templates import lookup

logger = logging.getLogger(__name__)


def _ensure_text(name: str, value) -> None:
    if not isinstance(value, str):
        raise ValueError(f"{name} must be text, got {type(value).__name__}")


def apply_area_change(rec: Recommendation, area) -> Recommendation:
    """
    Return rec with a new risk area and the narrative that goes with it.

    Choosing Other clears the narrative and keeps the free-text description;
    any other choice (including unset) loads that area's template text and
    clears the description.
    """
    new_area = parse_risk_area(area)
    if new_area is RiskArea.OTHER:
        return replace(rec, area=new_area, recommendation="")
    return replace(rec, area=new_area, recommendation=lookup(new_area), area_description="")


class RecommendationList:
    """Ordered, append-only list of recommendations; never empty."""

    def __init__(self, items: Optional[Iterable[Recommendation]] = None):
        self._items: List[Recommendation] = list(items or [])
        if not self._items:
            self._items.append(Recommendation())

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Recommendation]:
        return iter(self._items)

    def __getitem__(self, index: int) -> Recommendation:
        return self._items[self._check_index(index)]

    def _check_index(self, index: int) -> int:
        if not 0 <= index < len(self._items):
            raise IndexError(f"Recommendation index {index} out of range (have {len(self._items)})")
        return index

    def append(self, rec: Optional[Recommendation] = None) -> int:
        self._items.append(rec or Recommendation())
        return len(self._items) - 1

    def replace(self, index: int, rec: Recommendation) -> None:
        self._items[self._check_index(index)] = rec

    def snapshot(self) -> Tuple[Recommendation, ...]:
        return tuple(self._items)


class SummarySession:
    """Everything one user has entered, plus the last generated report."""

    def __init__(self):
        self.form = FormFields()
        self.photos: Tuple[PhotoRef, ...] = ()
        self.recommendations = RecommendationList()
        self.report: Optional[str] = None
        # Photo collections as they were when the report was generated
        self.report_photos: Tuple[PhotoRef, ...] = ()
        self.report_recommendations: Tuple[Recommendation, ...] = ()

    # ── Form fields ──────────────────────────────────────────────────────────

    def set_field(self, name: str, value: str) -> None:
        if name not in FORM_FIELD_NAMES:
            raise KeyError(f"Unknown form field: {name}")
        _ensure_text(name, value)
        self.form = replace(self.form, **{name: value})

    # ── Recommendations ──────────────────────────────────────────────────────

    def append_recommendation(self) -> int:
        return self.recommendations.append()

    def set_recommendation_field(self, index: int, name: str, value) -> Recommendation:
        if name not in RECOMMENDATION_FIELD_NAMES:
            raise KeyError(f"Unknown recommendation field: {name}")
        rec = self.recommendations[index]
        if name == "area":
            updated = apply_area_change(rec, value)
        elif name == "severity":
            updated = replace(rec, severity=parse_severity(value))
        else:
            _ensure_text(name, value)
            updated = replace(rec, **{name: value})
        self.recommendations.replace(index, updated)
        return updated

    # ── Photos ───────────────────────────────────────────────────────────────

    def set_general_photos(self, photos: Sequence[PhotoRef]) -> None:
        photos = tuple(photos)
        self._ensure_unowned(photos, keep=self.photos)
        self.photos = photos

    def set_recommendation_photos(self, index: int, photos: Sequence[PhotoRef]) -> Recommendation:
        rec = self.recommendations[index]
        photos = tuple(photos)
        self._ensure_unowned(photos, keep=rec.photos)
        updated = replace(rec, photos=photos)
        self.recommendations.replace(index, updated)
        return updated

    def _ensure_unowned(self, photos: Tuple[PhotoRef, ...], keep: Tuple[PhotoRef, ...]) -> None:
        # A photo may only move within the slot that already holds it
        held = {id(p) for p in self.photos}
        for rec in self.recommendations:
            held.update(id(p) for p in rec.photos)
        held.difference_update(id(p) for p in keep)
        for photo in photos:
            if id(photo) in held:
                raise ValueError(f"Photo '{photo.name}' is already attached elsewhere in this summary")

    # ── Generation ───────────────────────────────────────────────────────────

    def generate(self) -> str:
        """Check required fields, then assemble and keep the report."""
        ensure_required_fields(self.form)
        recommendations = self.recommendations.snapshot()
        self.report = assemble(self.form, self.photos, recommendations)
        self.report_photos = self.photos
        self.report_recommendations = recommendations
        logger.info(
            f"Generated summary for '{self.form.project}': "
            f"{len(recommendations)} recommendation(s), {self.photo_count} photo(s)"
        )
        return self.report

    @property
    def photo_count(self) -> int:
        return len(self.photos) + sum(len(rec.photos) for rec in self.recommendations)

    def to_dict(self) -> dict:
        return {
            "form": self.form.to_dict(),
            "photos": [photo.name for photo in self.photos],
            "recommendations": [rec.to_dict() for rec in self.recommendations],
            "report": self.report,
        }
