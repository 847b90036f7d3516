"""
Tests for the engagement-summary command (engagement/cli.py)

Covers:
- Loading a visit description into a SummarySession
- Exit codes for missing fields, bad JSON and unreadable photos
- Writing the PDF / Word exports
"""

import json

import pytest

from conftest import ACME_FIELDS, make_png
from engagement.cli import load_session, main
from engagement.models import RiskArea, Severity
from engagement.risk_templates import lookup


def _write_visit(tmp_path, **extra):
    data = dict(ACME_FIELDS, **extra)
    path = tmp_path / "visit.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestLoadSession:
    def test_fields_and_recommendations(self, tmp_path):
        data = dict(ACME_FIELDS, recommendations=[
            {"party": "GC", "severity": "High", "area": "Electrical"},
            {"party": "Owner", "area": "Other", "area_description": "Confined space",
             "recommendation": "Permit required"},
        ])
        summary = load_session(data, base_dir=tmp_path)

        assert summary.form.project == "Acme Plant"
        first, second = list(summary.recommendations)
        assert first.severity is Severity.HIGH
        assert first.recommendation == lookup("Electrical")
        assert second.area is RiskArea.OTHER
        assert second.area_description == "Confined space"
        assert second.recommendation == "Permit required"

    def test_photo_paths_relative_to_base_dir(self, tmp_path):
        summary = load_session(dict(ACME_FIELDS, photos=["site1.png"]), base_dir=tmp_path)
        assert [p.name for p in summary.photos] == ["site1.png"]

    def test_extra_recommendations_appended(self, tmp_path):
        summary = load_session({"recommendations": [{"party": "A"}, {"party": "B"}, {"party": "C"}]}, tmp_path)
        assert [r.party for r in summary.recommendations] == ["A", "B", "C"]


class TestMain:
    def test_prints_report(self, tmp_path, capsys):
        assert main([str(_write_visit(tmp_path))]) == 0
        out = capsys.readouterr().out
        assert "Project: Acme Plant" in out
        assert out.endswith("+\n")

    def test_missing_required_fields(self, tmp_path, capsys):
        path = tmp_path / "visit.json"
        path.write_text(json.dumps({"project": "Acme Plant"}), encoding="utf-8")
        assert main([str(path)]) == 1
        assert "Missing: Location" in capsys.readouterr().err

    def test_invalid_json(self, tmp_path, capsys):
        path = tmp_path / "visit.json"
        path.write_text("{not json", encoding="utf-8")
        assert main([str(path)]) == 1
        assert "Could not read" in capsys.readouterr().err

    def test_numeric_values_rendered_as_text(self, tmp_path, capsys):
        path = _write_visit(tmp_path, recommendations=[{"party": 3, "recommendation": 42}])
        assert main([str(path)]) == 0
        assert "| 3 | N/A | N/A | 42 |" in capsys.readouterr().out

    def test_malformed_recommendation(self, tmp_path, capsys):
        path = _write_visit(tmp_path, recommendations=["GC"])
        assert main([str(path), "--quiet"]) == 1
        assert "Invalid input" in capsys.readouterr().err

    def test_invalid_severity(self, tmp_path, capsys):
        path = _write_visit(tmp_path, recommendations=[{"severity": "Extreme"}])
        assert main([str(path)]) == 1
        assert "Invalid input" in capsys.readouterr().err

    def test_writes_exports(self, tmp_path):
        (tmp_path / "site1.png").write_bytes(make_png())
        (tmp_path / "panel.png").write_bytes(make_png())
        path = _write_visit(
            tmp_path,
            photos=["site1.png"],
            recommendations=[{"party": "GC", "area": "Electrical", "photos": ["panel.png"]}],
        )
        pdf, docx = tmp_path / "out.pdf", tmp_path / "out.docx"

        assert main([str(path), "--pdf", str(pdf), "--docx", str(docx), "--quiet"]) == 0
        assert pdf.read_bytes().startswith(b"%PDF")
        assert docx.read_bytes()[:2] == b"PK"

    def test_missing_photo_fails_export(self, tmp_path, capsys):
        path = _write_visit(tmp_path, photos=["gone.png"])
        assert main([str(path), "--pdf", str(tmp_path / "out.pdf"), "--quiet"]) == 1
        assert "gone.png" in capsys.readouterr().err
        assert not (tmp_path / "out.pdf").exists()
