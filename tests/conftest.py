import os
import sys
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient


# Ensure `import backend...` works regardless of where pytest is run from.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Must be set before backend.entrevistas.config is imported.
os.environ["DISABLE_DOTENV"] = "1"
# Tests never talk to a real mail provider even if the developer's shell has keys set.
for _var in ("RESEND_API_KEY", "EMAIL_USER", "EMAIL_PASS"):
    os.environ[_var] = ""

from backend.entrevistas.services.emailer import EmailError, Mailer  # noqa: E402


class RecordingMailer(Mailer):
    """Captures outgoing emails instead of sending them."""

    kind = "recording"
    enabled = True

    def __init__(self, *, fail: bool = False):
        self.sent: list[dict] = []
        self.fail = fail

    def send(self, to: str, subject: str, html: str) -> None:
        if self.fail:
            raise EmailError("mail server unavailable")
        self.sent.append({"to": to, "subject": subject, "html": html})


@pytest.fixture()
def database_url(tmp_path: Path) -> str:
    return f"sqlite+pysqlite:///{(tmp_path / 'test.sqlite3').as_posix()}"


@pytest.fixture()
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture()
def context(database_url: str, mailer: RecordingMailer):
    """
    Bootstrapped temporary SQLite DB plus a recording mailer.
    """
    from backend.entrevistas.bootstrap import run_migrations
    from backend.entrevistas.context import AppContext

    run_migrations(database_url)
    ctx = AppContext.create(database_url, mailer)
    try:
        yield ctx
    finally:
        ctx.close()


@pytest.fixture()
def app(context) -> FastAPI:
    from backend.entrevistas.main import create_app

    return create_app(context)


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def db_session(context):
    """
    Direct SQLAlchemy session bound to the same temporary SQLite DB used by the test app.
    """
    db = context.session_factory()
    try:
        yield db
    finally:
        db.close()
