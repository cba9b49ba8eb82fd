# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .attachment_stager import AttachmentStager
from .mail_relay import MailRelayClient

__all__ = [
    "AttachmentStager",
    "MailRelayClient",
]
