"""
Runtime settings for the SEO audit backend.

Values can be defined in a .env file in the backend root:

SEO_AUDIT_DB_PATH=/var/lib/seo-audit/seo_audit.db
SEO_FETCH_TIMEOUT_SECONDS=15
SEO_USER_AGENT=Mozilla/5.0 (compatible; SEOAuditBot/1.0)
SEO_CORS_ORIGINS=https://dashboard.example.com
LOG_LEVEL=INFO

The app loads environment variables automatically using python-dotenv.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(dotenv_path=Path(__file__).resolve().parent / ".env")

DB_PATH = Path(os.getenv("SEO_AUDIT_DB_PATH", str(Path(__file__).parent / "seo_audit.db")))
FETCH_TIMEOUT_SECONDS = float(os.getenv("SEO_FETCH_TIMEOUT_SECONDS", "15"))
USER_AGENT = os.getenv("SEO_USER_AGENT", "").strip() or "Mozilla/5.0 (compatible; SEOAuditBot/1.0)"
CORS_ORIGINS = [
    origin.strip() for origin in os.getenv("SEO_CORS_ORIGINS", "*").split(",") if origin.strip()
] or ["*"]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Install the root handler once; later calls only adjust the level."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT)
    root.setLevel(getattr(logging, level, logging.INFO))
