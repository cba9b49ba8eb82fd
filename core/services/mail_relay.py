# =============================================================================
# core/services/mail_relay.py - Outbound Mail Relay Client
# =============================================================================
# Sends plain-text messages (optionally with one file attachment) through an
# authenticated SMTP relay over implicit TLS, using aiosmtplib.
#
# One attempt per message: no retry, no queue. Every send opens and closes
# its own connection.
# =============================================================================

import logging
import mimetypes
from email.message import EmailMessage

import aiosmtplib

from app.config import Settings
from app.exceptions import RelayError, StorageError
from core.models.submission import OutboundMessage

logger = logging.getLogger(__name__)


def header_safe(value: str) -> str:
    """Fold line breaks into spaces so the value can be used as a header."""
    return " ".join(value.splitlines())


class MailRelayClient:
    """
    Wrapper around an implicit-TLS SMTP relay.

    The client is read-only after construction and shared by all requests.
    """

    def __init__(
        self,
        host: str,
        port: int,
        username: str | None = None,
        password: str | None = None,
        timeout: float = 60.0,
        allow_insecure_tls: bool = False,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.timeout = timeout
        self.allow_insecure_tls = allow_insecure_tls

        if allow_insecure_tls:
            logger.warning(
                f"TLS certificate verification is DISABLED for relay {host}:{port}"
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> "MailRelayClient":
        return cls(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.SMTP_USER,
            password=settings.SMTP_PASS,
            timeout=settings.SMTP_TIMEOUT,
            allow_insecure_tls=settings.SMTP_TLS_INSECURE,
        )

    # -------------------------------------------------------------------------
    # Message Building
    # -------------------------------------------------------------------------

    def build_email(self, message: OutboundMessage) -> EmailMessage:
        """
        Turn an OutboundMessage into a MIME email.

        The subject may carry submitter text; line breaks in it are folded
        into spaces. The body is used as given.

        Raises:
            StorageError: If the attachment cannot be read from disk
        """
        email = EmailMessage()
        email["From"] = message.from_address
        email["To"] = message.to_address
        email["Subject"] = header_safe(message.subject)
        email.set_content(message.body_text)

        if message.attachment is not None:
            path = message.attachment.path
            try:
                data = path.read_bytes()
            except OSError as e:
                raise StorageError(str(path), str(e))

            content_type, _ = mimetypes.guess_type(message.attachment.filename)
            maintype, subtype = (content_type or "application/octet-stream").split("/", 1)
            email.add_attachment(
                data,
                maintype=maintype,
                subtype=subtype,
                filename=header_safe(message.attachment.filename),
            )

        return email

    # -------------------------------------------------------------------------
    # Sending
    # -------------------------------------------------------------------------

    def _connection(self) -> aiosmtplib.SMTP:
        return aiosmtplib.SMTP(
            hostname=self.host,
            port=self.port,
            timeout=self.timeout,
            use_tls=True,
            validate_certs=not self.allow_insecure_tls,
        )

    async def send(self, message: OutboundMessage) -> None:
        """
        Build and deliver one message.

        Raises:
            RelayError: If connecting, authenticating or submitting fails
            StorageError: If the attachment cannot be read
        """
        email = self.build_email(message)
        smtp = self._connection()

        try:
            logger.info(f"Connecting to SMTP relay {self.host}:{self.port}")
            await smtp.connect()
            if self.username and self.password:
                await smtp.login(self.username, self.password)
            await smtp.send_message(email)
            await smtp.quit()
        except (aiosmtplib.SMTPException, OSError) as e:
            smtp.close()
            logger.error(f"Relay send failed ({message.subject!r}): {e}")
            raise RelayError(str(e)) from e

        logger.info(f"Relayed {message.subject!r} to {message.to_address}")
