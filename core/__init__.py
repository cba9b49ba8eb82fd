# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the relay's business logic:
# - models/: Pydantic schemas for submissions and outbound messages
# - services/: Attachment staging and the SMTP relay client
#
# Routers in app/ parse requests and hand plain models to these services.
# =============================================================================
