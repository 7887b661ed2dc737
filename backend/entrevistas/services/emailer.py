import logging
import smtplib
import ssl
from dataclasses import dataclass
from email.message import EmailMessage

import httpx

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"
DEFAULT_TIMEOUT_S = 15.0


class EmailError(RuntimeError):
    pass


class Mailer:
    """Anything that can deliver an HTML email. Picked once at startup."""

    kind = "none"
    enabled = False

    def send(self, to: str, subject: str, html: str) -> None:
        raise NotImplementedError


class NullMailer(Mailer):
    def send(self, to: str, subject: str, html: str) -> None:
        logger.info("Email service not configured; skipping email to %s", to)


class ResendMailer(Mailer):
    kind = "resend"
    enabled = True

    def __init__(
        self,
        *,
        api_key: str,
        from_email: str,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        client: httpx.Client | None = None,
    ):
        self.api_key = api_key
        self.from_email = from_email
        self.timeout_s = timeout_s
        self._client = client

    def send(self, to: str, subject: str, html: str) -> None:
        payload = {"from": self.from_email, "to": [to], "subject": subject, "html": html}
        headers = {"Authorization": f"Bearer {self.api_key}"}
        if self._client is not None:
            r = self._client.post(RESEND_API_URL, json=payload, headers=headers)
        else:
            with httpx.Client(timeout=self.timeout_s) as client:
                r = client.post(RESEND_API_URL, json=payload, headers=headers)
        if r.status_code >= 400:
            raise EmailError(f"Resend rejected email ({r.status_code}): {r.text[:500]}")


@dataclass(frozen=True)
class SMTPSettings:
    host: str
    port: int
    # True: implicit TLS (SMTP_SSL). False: plain connect + STARTTLS.
    secure: bool


def smtp_settings_for(
    user: str,
    *,
    host: str | None = None,
    port: int | None = None,
    secure: bool = False,
) -> SMTPSettings:
    """Infer connection settings from the sender's domain."""
    domain = user.split("@", 1)[1].lower() if "@" in user else ""
    if "gmail" in domain:
        return SMTPSettings(host="smtp.gmail.com", port=465, secure=True)
    if any(p in domain for p in ("outlook", "hotmail", "live")):
        return SMTPSettings(host="smtp.office365.com", port=587, secure=False)
    if host:
        return SMTPSettings(host=host, port=port or 587, secure=secure)
    return SMTPSettings(host=f"smtp.{domain}", port=587, secure=False)


class SMTPMailer(Mailer):
    kind = "smtp"
    enabled = True

    def __init__(
        self,
        *,
        user: str,
        password: str,
        settings: SMTPSettings,
        timeout_s: float = DEFAULT_TIMEOUT_S,
    ):
        self.user = user
        self.password = password
        self.settings = settings
        self.timeout_s = timeout_s

    def _connect(self) -> smtplib.SMTP:
        s = self.settings
        context = ssl.create_default_context()
        if s.secure:
            smtp = smtplib.SMTP_SSL(s.host, s.port, timeout=self.timeout_s, context=context)
        else:
            smtp = smtplib.SMTP(s.host, s.port, timeout=self.timeout_s)
        try:
            if not s.secure:
                smtp.ehlo()
                smtp.starttls(context=context)
            smtp.ehlo()
            smtp.login(self.user, self.password)
        except Exception:
            smtp.close()
            raise
        return smtp

    def verify(self) -> None:
        with self._connect() as smtp:
            smtp.noop()

    def send(self, to: str, subject: str, html: str) -> None:
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = self.user
        msg["To"] = to
        msg.set_content("Este correo requiere un cliente compatible con HTML.")
        msg.add_alternative(html, subtype="html")

        with self._connect() as smtp:
            smtp.send_message(msg)


def select_mailer(
    *,
    resend_api_key: str | None = None,
    resend_from_email: str = "onboarding@resend.dev",
    email_user: str | None = None,
    email_pass: str | None = None,
    smtp_host: str | None = None,
    smtp_port: int | None = None,
    smtp_secure: bool = False,
    timeout_s: float = DEFAULT_TIMEOUT_S,
) -> Mailer:
    """
    Choose the email provider once, by which credentials are present:
    Resend first, then SMTP (verified up front), then a no-op.
    """
    if resend_api_key:
        logger.info("Email service configured: Resend")
        return ResendMailer(api_key=resend_api_key, from_email=resend_from_email, timeout_s=timeout_s)

    if email_user and email_pass:
        settings = smtp_settings_for(email_user, host=smtp_host, port=smtp_port, secure=smtp_secure)
        mailer = SMTPMailer(user=email_user, password=email_pass, settings=settings, timeout_s=timeout_s)
        try:
            mailer.verify()
        except Exception as e:
            logger.error(
                "SMTP verification failed (host=%s port=%s user=%s): %s. Emails will NOT be sent.",
                settings.host,
                settings.port,
                email_user,
                e,
            )
            return NullMailer()
        logger.info("Email service configured: SMTP %s:%s", settings.host, settings.port)
        return mailer

    logger.warning(
        "Email service NOT configured; emails will not be sent. "
        "Set RESEND_API_KEY, or EMAIL_USER and EMAIL_PASS."
    )
    return NullMailer()


def dispatch_email(mailer: Mailer, to: str, subject: str, html: str) -> None:
    """Background-task entry point: deliver once, log the outcome, never raise."""
    try:
        mailer.send(to, subject, html)
    except Exception as e:
        logger.error("Failed to send email to %s via %s: %s: %s", to, mailer.kind, type(e).__name__, e)
        return
    if mailer.enabled:
        logger.info("Email sent to %s (via %s)", to, mailer.kind)
