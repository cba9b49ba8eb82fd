# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources and body parsing.
# These are injected into route handlers using Depends().
#
# The settings, relay client and stager live on app.state (set up by
# create_app), so tests can build an app with their own instances or use
# app.dependency_overrides.
# =============================================================================

import json
from typing import Annotated, Any, AsyncIterator

from fastapi import Depends, Request
from starlette.datastructures import UploadFile

from app.config import Settings
from app.exceptions import MalformedBodyError
from core.models.submission import StagedAttachment
from core.services.attachment_stager import AttachmentStager
from core.services.mail_relay import MailRelayClient

# Multipart field carrying the job-application attachment
RESUME_FIELD = "resume"


# =============================================================================
# Shared Resources
# =============================================================================

def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_mail_relay(request: Request) -> MailRelayClient:
    """Get the relay client shared by all requests."""
    return request.app.state.mail_relay


def get_attachment_stager(request: Request) -> AttachmentStager:
    return request.app.state.attachment_stager


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
MailRelayDep = Annotated[MailRelayClient, Depends(get_mail_relay)]
StagerDep = Annotated[AttachmentStager, Depends(get_attachment_stager)]


# =============================================================================
# Body Parsing
# =============================================================================

def _as_text(value: Any) -> str:
    # JSON null, false and 0 count as not filled in, like an empty string
    if value is None or (isinstance(value, (int, float)) and not value):
        return ""
    return value if isinstance(value, str) else str(value)


async def read_form_fields(request: Request) -> dict[str, str]:
    """
    Parse the request body into text fields.

    Accepts JSON objects, URL-encoded forms and multipart forms. File parts
    are skipped here (see stage_resume). Missing or non-object bodies read
    as no fields at all.

    Raises:
        MalformedBodyError: If the body cannot be decoded
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedBodyError(content_type, str(e))
        if not isinstance(body, dict):
            return {}
        return {key: _as_text(value) for key, value in body.items()}

    if content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
        try:
            form = await request.form()
        except Exception as e:
            # python-multipart raises its own parser errors, starlette wraps some
            raise MalformedBodyError(content_type, str(e))
        return {
            key: _as_text(value)
            for key, value in form.multi_items()
            if not isinstance(value, UploadFile)
        }

    return {}


async def stage_resume(
    request: Request,
    stager: StagerDep,
    fields: Annotated[dict[str, str], Depends(read_form_fields)],  # parses the body first
) -> AsyncIterator[StagedAttachment | None]:
    """
    Stage the "resume" file part while the body is parsed.

    Yields None when the request has no such part, or the part is empty
    (a browser form submitted without choosing a file). The parsed form,
    and with it every spooled upload, is closed once the request is done.
    """
    if not request.headers.get("content-type", "").startswith("multipart/form-data"):
        yield None
        return

    # read_form_fields already parsed the form; Request caches it
    form = await request.form()
    try:
        upload = form.get(RESUME_FIELD)
        if not isinstance(upload, UploadFile) or not upload.filename:
            yield None
        else:
            yield await stager.stage(upload)
    finally:
        await form.close()


FormFields = Annotated[dict[str, str], Depends(read_form_fields)]
StagedResume = Annotated[StagedAttachment | None, Depends(stage_resume)]
