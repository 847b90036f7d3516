"""
Shared pytest fixtures for the Engagement Confirmation Summary test suite.

Provides generated image bytes, photo references, a summary session with the
required header fields filled in, and a clean in-memory session store.
"""

import io
import os
import sys

import pytest
from PIL import Image

# Ensure project root is on sys.path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Read at import time by engagement.config
os.environ.setdefault("SUMMARY_RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("SESSION_SECRET_KEY", "test-session-secret")
os.environ.setdefault("DOCX_EMBED_PHOTOS", "false")

from engagement.photos import PhotoRef  # noqa: E402
from engagement.state import SummarySession  # noqa: E402


ACME_FIELDS = {
    "project": "Acme Plant",
    "location": "Bldg 4",
    "date": "2024-01-10",
    "consultant": "J. Doe",
    "contact": "M. Smith",
}


def make_png(color=(200, 30, 30), size=(8, 8)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return buf.getvalue()


# ============================================================
# Photo fixtures
# ============================================================

@pytest.fixture
def png_bytes():
    return make_png()


@pytest.fixture
def make_photo():
    """Factory: make_photo("site1.jpg") -> PhotoRef with valid PNG content."""
    def _make(name: str, data: bytes = None) -> PhotoRef:
        return PhotoRef.from_bytes(name, data if data is not None else make_png(), "image/png")
    return _make


# ============================================================
# Session fixtures
# ============================================================

@pytest.fixture
def acme_fields():
    return dict(ACME_FIELDS)


@pytest.fixture
def acme_session():
    """SummarySession with the five required header fields filled in."""
    summary = SummarySession()
    for name, value in ACME_FIELDS.items():
        summary.set_field(name, value)
    return summary


@pytest.fixture
def session_store():
    from portal.session_store import summary_sessions

    summary_sessions.clear()
    yield summary_sessions
    summary_sessions.clear()
