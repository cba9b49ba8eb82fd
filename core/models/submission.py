# =============================================================================
# core/models/submission.py - Submission and Message Schemas
# =============================================================================
# These models carry one form submission from the request to the relay:
# - StagedAttachment: An uploaded file written to the scratch directory
# - ApplicationSubmission: Job-application form fields + staged resume
# - ContactSubmission: Contact form fields
# - OutboundMessage: What the Mail Relay Client actually sends
#
# All models are frozen: a submission is built once per request, turned into
# one message, and discarded.
# =============================================================================

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

APPLICATION_SENDER_NAME = "Job Application"
CONTACT_SENDER_NAME = "Website Contact"

CONTACT_REQUIRED_FIELDS = ("name", "email", "phone", "message")


class StagedAttachment(BaseModel):
    """
    A file written to the scratch directory for the duration of one request.

    Example:
        {
            "staged_path": "uploads/1718000000000-resume.pdf",
            "original_filename": "resume.pdf"
        }
    """

    model_config = ConfigDict(frozen=True)

    staged_path: Path = Field(
        ...,
        description="Where the file was written"
    )

    # Name the client sent (directory parts removed), used in the email
    original_filename: str = Field(
        ...,
        description="Filename as uploaded"
    )


class MessageAttachment(BaseModel):
    """A file attached to an outbound message, read from a local path."""

    model_config = ConfigDict(frozen=True)

    filename: str
    path: Path


class OutboundMessage(BaseModel):
    """
    A plain-text email ready for the relay.

    The relay reads `attachment.path` but never deletes it; the file is owned
    by whoever staged it.
    """

    model_config = ConfigDict(frozen=True)

    from_address: str
    to_address: str
    subject: str
    body_text: str
    attachment: MessageAttachment | None = None


class ApplicationSubmission(BaseModel):
    """
    A job application: free-text fields plus a staged resume.

    Text fields are not validated; only the attachment is required, and the
    model cannot be built without one.
    """

    model_config = ConfigDict(frozen=True)

    name: str = ""
    email: str = ""
    phone: str = ""
    position: str = ""
    message: str = ""
    attachment: StagedAttachment

    def to_message(self, sender: str, recipient: str) -> OutboundMessage:
        """Build the email for this application (name used verbatim)."""
        body = (
            f"Full Name: {self.name}\n"
            f"Email: {self.email}\n"
            f"Phone: {self.phone}\n"
            f"Position: {self.position}\n"
            f"Message: {self.message}"
        )
        return OutboundMessage(
            from_address=f'"{APPLICATION_SENDER_NAME}" <{sender}>',
            to_address=recipient,
            subject=f"New Job Application from {self.name}",
            body_text=body,
            attachment=MessageAttachment(
                filename=self.attachment.original_filename,
                path=self.attachment.staged_path,
            ),
        )


class ContactSubmission(BaseModel):
    """A contact-form message. All four fields are required to be non-empty."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    email: str = ""
    phone: str = ""
    message: str = ""

    def missing_fields(self) -> list[str]:
        """Names of required fields that are empty. No format checks."""
        return [field for field in CONTACT_REQUIRED_FIELDS if not getattr(self, field)]

    def to_message(self, sender: str, recipient: str) -> OutboundMessage:
        body = (
            f"Name: {self.name}\n"
            f"Email: {self.email}\n"
            f"Phone: {self.phone}\n"
            f"Message: {self.message}"
        )
        return OutboundMessage(
            from_address=f'"{CONTACT_SENDER_NAME}" <{sender}>',
            to_address=recipient,
            subject=f"New Contact Form Submission from {self.name}",
            body_text=body,
        )
