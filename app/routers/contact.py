# =============================================================================
# app/routers/contact.py - Contact Form Endpoint
# =============================================================================
# Relays a contact-form message (name, email, phone, message) to the recipient.
# Accepts JSON, URL-encoded or multipart bodies.
# =============================================================================

import logging

from fastapi import APIRouter

from app.dependencies import FormFields, MailRelayDep, SettingsDep
from app.exceptions import FormRelayException, SubmissionFailedError, SubmissionValidationError
from core.models.submission import ContactSubmission

logger = logging.getLogger(__name__)

router = APIRouter()

SUCCESS_MESSAGE = "Message sent successfully!"
MISSING_FIELDS_MESSAGE = "All fields are required."
FAILURE_MESSAGE = "Error sending your message."


@router.post("/contact")
async def submit_contact(
    fields: FormFields,
    settings: SettingsDep,
    relay: MailRelayDep,
):
    """
    Submit a contact-form message.

    All four fields must be non-empty; their format is not checked.
    """
    submission = ContactSubmission(
        name=fields.get("name", ""),
        email=fields.get("email", ""),
        phone=fields.get("phone", ""),
        message=fields.get("message", ""),
    )

    missing = submission.missing_fields()
    if missing:
        raise SubmissionValidationError(MISSING_FIELDS_MESSAGE, missing=missing)

    try:
        await relay.send(
            submission.to_message(settings.sender_address, settings.receiver_email)
        )
    except FormRelayException as e:
        logger.error(f"Contact form error: {e}")
        raise SubmissionFailedError(FAILURE_MESSAGE, str(e)) from e
    except Exception as e:
        logger.exception(f"Contact form error: {e}")
        raise SubmissionFailedError(FAILURE_MESSAGE, str(e)) from e

    return {"success": True, "message": SUCCESS_MESSAGE}
