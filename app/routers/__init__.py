# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - apply.py: Job application form (multipart, with resume file)
# - contact.py: Contact form (JSON, URL-encoded or multipart)
# - health.py: Health check endpoints
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import apply
from . import contact
from . import health

__all__ = [
    "apply",
    "contact",
    "health",
]
