"""
Settings for the summary portal and exporters, read from the environment
(a local .env file is loaded first).
"""
import logging
import os
import secrets

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


# Fixed artifact names
REPORT_TITLE = "Engagement Confirmation Summary"
PDF_FILENAME = "Engagement_Confirmation_Summary.pdf"
DOCX_FILENAME = "Engagement_Confirmation_Summary.docx"

# PDF layout
PDF_WRAP_COLUMNS = int(os.getenv("PDF_WRAP_COLUMNS", "90"))
PDF_LINES_PER_PAGE = int(os.getenv("PDF_LINES_PER_PAGE", "56"))
PDF_PHOTO_WIDTH_IN = float(os.getenv("PDF_PHOTO_WIDTH_IN", "6.5"))
PDF_PHOTO_HEIGHT_IN = float(os.getenv("PDF_PHOTO_HEIGHT_IN", "5.0"))

# Word export embeds photos only when asked to (the PDF always does)
DOCX_EMBED_PHOTOS = _env_bool("DOCX_EMBED_PHOTOS", "false")

# Web portal
SESSION_SECRET = os.getenv("SESSION_SECRET_KEY")
if not SESSION_SECRET:
    SESSION_SECRET = secrets.token_urlsafe(32)
    logger.warning("SESSION_SECRET_KEY not set - using random value (sessions won't persist across restarts)")

SESSION_TTL_MINUTES = int(os.getenv("SUMMARY_SESSION_TTL_MINUTES", "120"))
RATE_LIMIT_ENABLED = _env_bool("SUMMARY_RATE_LIMIT_ENABLED", "true")
EXPORT_RATE_LIMIT = os.getenv("SUMMARY_EXPORT_RATE_LIMIT", "20/minute")
ALLOW_LOCALHOST_CORS = _env_bool("ALLOW_LOCALHOST_CORS", "false")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
