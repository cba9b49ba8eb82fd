# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the form relay:
# - test_contact.py / test_apply.py: Endpoint tests through TestClient
# - test_routing.py: Origin allowlist, CORS and health checks
# - test_attachment_stager.py: Scratch-directory staging and cleanup
# - test_mail_relay.py: SMTP relay client (aiosmtplib mocked)
# - test_config.py: Settings and startup
# - test_models.py / test_utils.py: Models and helpers
#
# Run tests with: pytest
# =============================================================================
