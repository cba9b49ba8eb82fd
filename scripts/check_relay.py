#!/usr/bin/env python3
# =============================================================================
# scripts/check_relay.py - Relay Smoke Test
# =============================================================================
# Sends one plain-text message through the configured relay, using the same
# settings and client as the server.
#
# Usage:
#   python scripts/check_relay.py
#   python scripts/check_relay.py --to someone@example.com
#
# Prerequisites:
#   - SMTP_* and RECEIVER_EMAIL set (environment or .env file)
# =============================================================================

import argparse
import asyncio
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.config import get_settings
from app.exceptions import FormRelayException
from core.models.submission import OutboundMessage
from core.services.mail_relay import MailRelayClient


def main() -> int:
    parser = argparse.ArgumentParser(description="Send a test message through the SMTP relay")
    parser.add_argument("--to", help="Recipient (defaults to RECEIVER_EMAIL)")
    args = parser.parse_args()

    settings = get_settings()
    relay = MailRelayClient.from_settings(settings)
    recipient = args.to or settings.receiver_email

    print("=" * 60)
    print(f"Relay:     {settings.SMTP_HOST}:{settings.SMTP_PORT}")
    print(f"Sender:    {settings.sender_address}")
    print(f"Recipient: {recipient}")
    print(f"TLS verify: {'OFF' if settings.SMTP_TLS_INSECURE else 'on'}")
    print("=" * 60)

    message = OutboundMessage(
        from_address=f'"Form Relay" <{settings.sender_address}>',
        to_address=recipient,
        subject="Form relay - SMTP smoke test",
        body_text="If you received this, the relay is working.",
    )

    try:
        asyncio.run(relay.send(message))
    except FormRelayException as e:
        print(f"FAILED: {e}")
        return 1

    print("Sent OK")
    return 0


if __name__ == "__main__":
    sys.exit(main())
