from dataclasses import dataclass

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from . import config
from .database import create_db_engine, create_session_factory
from .services.emailer import Mailer, select_mailer


@dataclass
class AppContext:
    """Process-lifetime services shared by every request."""

    engine: Engine
    session_factory: sessionmaker
    mailer: Mailer

    @classmethod
    def create(cls, database_url: str, mailer: Mailer, *, sslmode: str | None = None) -> "AppContext":
        engine = create_db_engine(database_url, sslmode=sslmode)
        return cls(engine=engine, session_factory=create_session_factory(engine), mailer=mailer)

    def close(self) -> None:
        self.engine.dispose()


def build_context() -> AppContext:
    mailer = select_mailer(
        resend_api_key=config.RESEND_API_KEY,
        resend_from_email=config.RESEND_FROM_EMAIL,
        email_user=config.EMAIL_USER,
        email_pass=config.EMAIL_PASS,
        smtp_host=config.SMTP_HOST,
        smtp_port=config.SMTP_PORT,
        smtp_secure=config.SMTP_SECURE,
        timeout_s=config.EMAIL_TIMEOUT_S,
    )
    return AppContext.create(config.DATABASE_URL, mailer, sslmode=config.DATABASE_SSLMODE)


def get_context(request: Request) -> AppContext:
    ctx = getattr(request.app.state, "context", None)
    if ctx is None:
        raise RuntimeError("Application context not initialised")
    return ctx


def get_mailer(request: Request) -> Mailer:
    return get_context(request).mailer
