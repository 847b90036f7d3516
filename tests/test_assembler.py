"""
Unit tests for engagement/assembler.py

Covers:
- Full layout for the default single-recommendation case
- Determinism and input immutability
- Table cell rules (N/A, Other - description)
- Photo sections (general and per recommendation)
- Narrative sections keep empty text empty
- Required-field precondition helpers
"""

import pytest

from engagement.assembler import (
    DISCLAIMER,
    assemble,
    ensure_required_fields,
    missing_required_fields,
    table_row,
)
from engagement.errors import SummaryValidationError
from engagement.models import FormFields, Recommendation, RiskArea, Severity

RULE = "-" * 62

ACME = FormFields(
    project="Acme Plant",
    location="Bldg 4",
    date="2024-01-10",
    consultant="J. Doe",
    contact="M. Smith",
)

EXPECTED_ACME_REPORT = "\n".join([
    "+--------------------------------------------------------------+",
    "|             ENGAGEMENT CONFIRMATION SUMMARY                 |",
    "+--------------------------------------------------------------+",
    "",
    "Project: Acme Plant",
    "Location: Bldg 4",
    "Date of Visit: 2024-01-10",
    "Consultant: J. Doe",
    "Onsite Contact: M. Smith",
    "",
    RULE,
    "Dear M. Smith,",
    "",
    RULE,
    "VISIT OBJECTIVE:",
    "",
    "",
    RULE,
    "HIGH-LEVEL TAKEAWAYS:",
    "",
    "",
    RULE,
    "PLANNING AHEAD:",
    "",
    "",
    RULE,
    "CONCLUSION:",
    "",
    "",
    RULE,
    "PHOTOS SUBMITTED:",
    "  None provided",
    "",
    RULE,
    "RECOMMENDATIONS:",
    "",
    "| Responsible Party | Severity | Area of Risk | Recommendation |",
    "|-------------------|----------|--------------|----------------|",
    "| N/A | N/A | N/A | N/A |",
    "",
    RULE,
    "ATTACHED PHOTOS FOR RECOMMENDATIONS:",
    "",
    "Recommendation #1 Photos:",
    "  None submitted",
    "",
    RULE,
    "DISCLAIMER:",
    "",
    DISCLAIMER,
    "",
    "+--------------------------------------------------------------+",
]) + "\n"


# ============================================================
# Full layout
# ============================================================

class TestAcmeScenario:
    def test_full_report(self):
        assert assemble(ACME, [], [Recommendation()]) == EXPECTED_ACME_REPORT

    def test_header_values_verbatim(self):
        report = assemble(ACME, [], [Recommendation()])
        for line in (
            "Project: Acme Plant",
            "Location: Bldg 4",
            "Date of Visit: 2024-01-10",
            "Consultant: J. Doe",
            "Onsite Contact: M. Smith",
        ):
            assert line in report.splitlines()

    def test_disclaimer_verbatim(self):
        report = assemble(ACME, [], [Recommendation()])
        assert "Peril Mavens is an independent consulting firm and does not represent OSHA" in report
        assert report.count(DISCLAIMER) == 1


class TestDeterminism:
    def test_same_inputs_same_output(self, make_photo):
        photos = [make_photo("site1.jpg")]
        recs = [Recommendation(party="GC", severity=Severity.HIGH, area=RiskArea.ELECTRICAL,
                               recommendation="Label panels", photos=(make_photo("panel.jpg"),))]
        assert assemble(ACME, photos, recs) == assemble(ACME, photos, recs)

    def test_inputs_not_mutated(self, make_photo):
        photos = [make_photo("site1.jpg")]
        recs = [Recommendation(party="GC")]
        assemble(ACME, photos, recs)
        assert [p.name for p in photos] == ["site1.jpg"]
        assert recs == [Recommendation(party="GC")]


# ============================================================
# Salutation and narrative sections
# ============================================================

class TestSalutationAndNarrative:
    def test_contact_placeholder_when_empty(self):
        form = FormFields(project="P", location="L", date="D", consultant="C")
        report = assemble(form, [], [Recommendation()])
        assert "Dear [Onsite Contact]," in report
        assert "Onsite Contact: " in report.splitlines()

    def test_empty_narrative_is_not_na(self):
        lines = assemble(ACME, [], [Recommendation()]).splitlines()
        i = lines.index("VISIT OBJECTIVE:")
        assert lines[i + 1] == ""
        assert "N/A" not in lines[i + 1]

    def test_narrative_text_verbatim(self):
        form = FormFields(**{**ACME.to_dict(), "takeaways": "Line one\nLine two", "conclusion": "Done."})
        lines = assemble(form, [], [Recommendation()]).splitlines()
        i = lines.index("HIGH-LEVEL TAKEAWAYS:")
        assert lines[i + 1:i + 3] == ["Line one", "Line two"]
        assert lines[lines.index("CONCLUSION:") + 1] == "Done."


# ============================================================
# Recommendations table
# ============================================================

class TestTableRow:
    def test_all_empty_row(self):
        assert table_row(Recommendation()) == "| N/A | N/A | N/A | N/A |"

    def test_filled_row(self):
        rec = Recommendation(party="GC", severity=Severity.IDLH, area=RiskArea.STRUCK_BY, recommendation="Barricade")
        assert table_row(rec) == "| GC | IDLH | Struck-by | Barricade |"

    def test_other_with_description(self):
        rec = Recommendation(area=RiskArea.OTHER, area_description="Wet floor near entrance")
        assert table_row(rec) == "| N/A | N/A | Other - Wet floor near entrance | N/A |"

    def test_other_without_description(self):
        assert table_row(Recommendation(area=RiskArea.OTHER)) == "| N/A | N/A | Other | N/A |"

    def test_description_ignored_for_named_area(self):
        rec = Recommendation(area=RiskArea.HOUSEKEEPING, area_description="stale")
        assert table_row(rec) == "| N/A | N/A | Housekeeping | N/A |"

    def test_rows_in_list_order(self):
        recs = [Recommendation(party="First"), Recommendation(party="Second"), Recommendation(party="Third")]
        lines = assemble(ACME, [], recs).splitlines()
        i = lines.index("|-------------------|----------|--------------|----------------|")
        rows = lines[i + 1:i + 4]
        assert lines[i + 4] == ""
        assert [row.split(" | ")[0] for row in rows] == ["| First", "| Second", "| Third"]


# ============================================================
# Photo sections
# ============================================================

class TestPhotoSections:
    def test_general_photos_listed_in_order(self, make_photo):
        report = assemble(ACME, [make_photo("site1.jpg"), make_photo("site2.jpg")], [Recommendation()])
        lines = report.splitlines()
        i = lines.index("PHOTOS SUBMITTED:")
        assert lines[i + 1:i + 3] == ["  - site1.jpg", "  - site2.jpg"]
        assert "  None provided" not in lines

    def test_recommendation_photo_blocks(self, make_photo):
        recs = [
            Recommendation(photos=(make_photo("a.jpg"), make_photo("b.jpg"))),
            Recommendation(),
        ]
        lines = assemble(ACME, [], recs).splitlines()
        i = lines.index("Recommendation #1 Photos:")
        assert lines[i:i + 6] == [
            "Recommendation #1 Photos:",
            "  - a.jpg",
            "  - b.jpg",
            "",
            "Recommendation #2 Photos:",
            "  None submitted",
        ]


# ============================================================
# Precondition helpers
# ============================================================

class TestRequiredFields:
    def test_all_present(self):
        assert missing_required_fields(ACME) == []
        ensure_required_fields(ACME)

    def test_whitespace_counts_as_missing(self):
        form = FormFields(**{**ACME.to_dict(), "date": "   "})
        assert missing_required_fields(form) == ["date"]

    def test_narrative_fields_not_required(self):
        assert missing_required_fields(FormFields(**ACME.to_dict())) == []

    def test_error_lists_missing_fields(self):
        with pytest.raises(SummaryValidationError) as exc:
            ensure_required_fields(FormFields(project="Acme Plant"))
        assert exc.value.missing == ["location", "date", "consultant", "contact"]
        assert "Onsite Contact" in str(exc.value)
