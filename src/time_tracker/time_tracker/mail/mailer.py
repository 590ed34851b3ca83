from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Protocol, Sequence

from ..core.constants import DEFAULT_SMTP_TIMEOUT_SECONDS, SYSTEM_NAME
from ..core.exceptions import MailDeliveryError

logger = logging.getLogger(__name__)


class Mailer(Protocol):
    def send(self, to: Sequence[str], subject: str, html_body: str, text_body: str) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class MailSettings:
    host: str = ""
    port: int = 587
    user: str = ""
    password: str = ""
    use_tls: bool = True
    sender: str = ""
    timeout: int = DEFAULT_SMTP_TIMEOUT_SECONDS

    @classmethod
    def from_dict(cls, mail_config: dict) -> "MailSettings":
        return cls(
            host=str(mail_config.get("host") or "").strip(),
            port=int(mail_config.get("port") or 587),
            user=str(mail_config.get("user") or "").strip(),
            password=str(mail_config.get("password") or ""),
            use_tls=bool(mail_config.get("use_tls", True)),
            sender=str(mail_config.get("sender") or "").strip(),
            timeout=int(mail_config.get("timeout") or DEFAULT_SMTP_TIMEOUT_SECONDS),
        )

    @property
    def from_address(self) -> str:
        return self.sender or self.user or "time-tracker@localhost"


class SMTPMailer(Mailer):
    """Sends multipart (text + HTML) mail through one SMTP connection per message."""

    def __init__(self, settings: MailSettings):
        self._settings = settings

    @property
    def is_configured(self) -> bool:
        return bool(self._settings.host)

    def build_message(self, to: Sequence[str], subject: str, html_body: str, text_body: str) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f'"{SYSTEM_NAME}" <{self._settings.from_address}>'
        msg["To"] = ", ".join(to)
        msg.attach(MIMEText(text_body, "plain", "utf-8"))
        msg.attach(MIMEText(html_body, "html", "utf-8"))
        return msg

    def send(self, to: Sequence[str], subject: str, html_body: str, text_body: str) -> None:
        if not to:
            raise MailDeliveryError("No recipients given")
        if not self.is_configured:
            raise MailDeliveryError("SMTP is not configured (set SMTP_HOST)")

        s = self._settings
        msg = self.build_message(to, subject, html_body, text_body)
        try:
            with smtplib.SMTP(s.host, s.port, timeout=s.timeout) as smtp:
                if s.use_tls:
                    smtp.starttls()
                if s.user and s.password:
                    smtp.login(s.user, s.password)
                smtp.sendmail(s.from_address, list(to), msg.as_string())
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Sending %r to %s failed: %s", subject, ", ".join(to), e)
            raise MailDeliveryError("Failed to send report email") from e

        logger.info("Sent %r to %s", subject, ", ".join(to))
