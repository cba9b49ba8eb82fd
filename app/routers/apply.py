# =============================================================================
# app/routers/apply.py - Job Application Endpoint
# =============================================================================
# Relays a job application (text fields + resume file) to the recipient.
#
# Flow: Received -> Validated -> Relayed -> Cleaned
#                              \-> Relayed(failed) -> Reported
#       Received -> Rejected (no resume)
# =============================================================================

import logging

from fastapi import APIRouter

from app.dependencies import FormFields, MailRelayDep, SettingsDep, StagedResume, StagerDep
from app.exceptions import FormRelayException, SubmissionFailedError, SubmissionValidationError
from core.models.submission import ApplicationSubmission

logger = logging.getLogger(__name__)

router = APIRouter()

SUCCESS_MESSAGE = "Application submitted successfully!"
MISSING_RESUME_MESSAGE = "Resume file is required."
FAILURE_MESSAGE = "Error submitting application."


@router.post("/apply")
async def submit_application(
    fields: FormFields,
    attachment: StagedResume,
    settings: SettingsDep,
    relay: MailRelayDep,
    stager: StagerDep,
):
    """
    Submit a job application.

    Expects multipart form data with name, email, phone, position, message
    and a `resume` file. Only the file is required.

    The staged resume is deleted once the email is accepted by the relay.
    When the relay fails it is kept, unless DISCARD_ON_RELAY_FAILURE is set.
    """
    if attachment is None:
        raise SubmissionValidationError(MISSING_RESUME_MESSAGE, missing=["resume"])

    submission = ApplicationSubmission(
        name=fields.get("name", ""),
        email=fields.get("email", ""),
        phone=fields.get("phone", ""),
        position=fields.get("position", ""),
        message=fields.get("message", ""),
        attachment=attachment,
    )

    try:
        await relay.send(
            submission.to_message(settings.sender_address, settings.receiver_email)
        )
    except FormRelayException as e:
        logger.error(f"Career form error: {e}")
        _discard_after_failure(stager, settings, attachment.staged_path)
        raise SubmissionFailedError(FAILURE_MESSAGE, str(e)) from e
    except Exception as e:
        logger.exception(f"Career form error: {e}")
        _discard_after_failure(stager, settings, attachment.staged_path)
        raise SubmissionFailedError(FAILURE_MESSAGE, str(e)) from e

    try:
        stager.discard(attachment.staged_path)
    except FormRelayException as e:
        # Already accepted by the relay, so the submission still succeeded
        logger.error(f"Could not discard {attachment.staged_path} after send: {e}")

    return {"success": True, "message": SUCCESS_MESSAGE}


def _discard_after_failure(stager, settings, staged_path) -> None:
    if not settings.DISCARD_ON_RELAY_FAILURE:
        logger.warning(f"Keeping staged file after failed send: {staged_path}")
        return
    try:
        stager.discard(staged_path)
    except FormRelayException as e:
        logger.error(f"Could not discard {staged_path} after failed send: {e}")
