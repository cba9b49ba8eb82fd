# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains the per-request schemas:
# - submission.py: Form submissions, staged attachments, outbound messages
#
# Nothing here is persisted; every model lives for one request.
# =============================================================================

from .submission import (
    ApplicationSubmission,
    ContactSubmission,
    MessageAttachment,
    OutboundMessage,
    StagedAttachment,
)

__all__ = [
    "ApplicationSubmission",
    "ContactSubmission",
    "MessageAttachment",
    "OutboundMessage",
    "StagedAttachment",
]
