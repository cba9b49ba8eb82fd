# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up relay environment variables before any imports
# - Builds an app per test with its own scratch directory and a fake relay
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# get_settings() is cached, so the environment must be in place first

os.environ.setdefault("SMTP_HOST", "smtp.test.local")
os.environ.setdefault("SMTP_USER", "forms@example.com")
os.environ.setdefault("SMTP_PASS", "test-password")
os.environ.setdefault("RECEIVER_EMAIL", "hr@example.com")
os.environ.setdefault("ENVIRONMENT", "development")

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.dependencies import get_mail_relay
from app.exceptions import RelayError
from app.main import create_app


# =============================================================================
# Fake Relay
# =============================================================================

class FakeMailRelay:
    """
    Stands in for MailRelayClient.

    Records every message, and what the attachment looked like on disk at
    the moment of sending.
    """

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent = []
        self.attachment_bytes = []

    async def send(self, message):
        self.sent.append(message)
        if message.attachment is not None:
            self.attachment_bytes.append(message.attachment.path.read_bytes())
        if self.fail:
            raise RelayError("535 authentication failed")


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def upload_dir(tmp_path):
    """Scratch directory for one test."""
    return tmp_path / "uploads"


@pytest.fixture
def settings_factory(upload_dir):
    """Build Settings that ignore any .env file, with per-test overrides."""
    def _make(**overrides):
        values = {
            "SMTP_HOST": "smtp.test.local",
            "SMTP_USER": "forms@example.com",
            "SMTP_PASS": "test-password",
            "RECEIVER_EMAIL": "hr@example.com",
            "UPLOAD_DIR": str(upload_dir),
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)
    return _make


@pytest.fixture
def settings(settings_factory):
    return settings_factory()


@pytest.fixture
def fake_relay():
    return FakeMailRelay()


@pytest.fixture
def failing_relay():
    return FakeMailRelay(fail=True)


@pytest.fixture
def make_client():
    """
    Create a TestClient for the given settings and relay.

    With no relay the app keeps its real MailRelayClient.
    """
    clients = []

    def _make(settings, relay=None):
        app = create_app(settings)
        if relay is not None:
            app.dependency_overrides[get_mail_relay] = lambda: relay
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client, settings, fake_relay):
    return make_client(settings, fake_relay)


@pytest.fixture
def failing_client(make_client, settings, failing_relay):
    return make_client(settings, failing_relay)


@pytest.fixture
def contact_payload():
    """A complete contact form submission."""
    return {
        "name": "A",
        "email": "a@b.com",
        "phone": "1",
        "message": "hi",
    }


@pytest.fixture
def application_fields():
    """Text fields of a job application."""
    return {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "phone": "+1 555 0100",
        "position": "Site Engineer",
        "message": "Please find my resume attached.",
    }


@pytest.fixture
def resume_file():
    """A multipart file tuple for the resume field."""
    return ("cv.pdf", b"%PDF-1.4 fake resume", "application/pdf")


@pytest.fixture
def smtp_server():
    """Patch aiosmtplib.SMTP and return the connection mock."""
    with patch("core.services.mail_relay.aiosmtplib.SMTP") as smtp_cls:
        server = AsyncMock()
        server.close = MagicMock()
        smtp_cls.return_value = server
        yield server


@pytest.fixture
def smtp_client(make_client, settings, smtp_server):
    """TestClient whose real relay client talks to the mocked SMTP server."""
    return make_client(settings)
