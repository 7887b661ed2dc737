import os
from pathlib import Path
from dotenv import load_dotenv

# Override=True so changes in .env take effect on process reload.
#
# Tests point DATABASE_URL at a temporary SQLite file; set DISABLE_DOTENV=1 so a
# developer's .env can't override it.
if os.getenv("DISABLE_DOTENV") != "1":
    load_dotenv(override=True)


def _env_bool(name: str, default: str = "0") -> bool:
    v = (os.getenv(name, default) or default).strip().lower()
    return v in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


_raw_database_url = (os.getenv("DATABASE_URL") or "").strip()
# Default to a local SQLite DB for dev so the backend can start out-of-the-box.
_default_sqlite_path = (Path(__file__).resolve().parent.parent / "dev.db").as_posix()
DATABASE_URL = _raw_database_url or f"sqlite:///{_default_sqlite_path}"
# Hosted Postgres providers usually need "require"; leave empty for local servers.
DATABASE_SSLMODE = (os.getenv("DATABASE_SSLMODE") or "").strip() or None

HOST = os.getenv("HOST", "0.0.0.0")
PORT = _env_int("PORT", 3000)
LOG_LEVEL = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()

# -------------------- Email --------------------
# Resend (hosted API) wins when its key is present, then SMTP, then no-op.
RESEND_API_KEY = (os.getenv("RESEND_API_KEY") or "").strip() or None
RESEND_FROM_EMAIL = (os.getenv("RESEND_FROM_EMAIL") or "onboarding@resend.dev").strip()

EMAIL_USER = (os.getenv("EMAIL_USER") or "").strip() or None
EMAIL_PASS = (os.getenv("EMAIL_PASS") or "").strip() or None
# Only consulted when the sender domain isn't a known provider (gmail / outlook).
SMTP_HOST = (os.getenv("SMTP_HOST") or "").strip() or None
SMTP_PORT = _env_int("SMTP_PORT", 587)
SMTP_SECURE = _env_bool("SMTP_SECURE", "0")
EMAIL_TIMEOUT_S = float(os.getenv("EMAIL_TIMEOUT_S", "15") or "15")

# Comma-separated extra CORS origins, on top of the local dev frontends.
FRONTEND_ORIGINS = os.getenv("FRONTEND_ORIGINS", "")
