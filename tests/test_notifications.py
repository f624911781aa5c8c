"""Email sender tests."""
import pytest
from unittest.mock import AsyncMock, patch

from api.services.notifications import (
    SendGridSender,
    SmtpSender,
    WELCOME_SUBJECT,
    build_sender,
    render_welcome_email,
)
from shared.config import Settings
from shared.exceptions import NotificationError


class TestTemplates:
    """Tests for email rendering."""

    def test_welcome_email_links_to_sign_in(self):
        body = render_welcome_email("سارة", "https://almonhna.sa/")

        assert "مرحباً سارة!" in body
        assert 'href="https://almonhna.sa/auth"' in body
        assert 'dir="rtl"' in body

    def test_welcome_email_escapes_name(self):
        body = render_welcome_email("<script>x</script>", "https://almonhna.sa")

        assert "<script>" not in body
        assert "&lt;script&gt;" in body


class TestSenders:
    """Tests for provider adapters."""

    @pytest.mark.asyncio
    async def test_sendgrid_without_key_raises(self):
        sender = SendGridSender(Settings(sendgrid_api_key=""))

        with pytest.raises(NotificationError):
            await sender.send("sara@example.com", "subject", "<p>hi</p>")

    @pytest.mark.asyncio
    async def test_welcome_requires_email_and_name(self):
        sender = SendGridSender(Settings(sendgrid_api_key="key"))
        sender.send = AsyncMock()

        with pytest.raises(NotificationError):
            await sender.send_welcome("", "سارة")
        sender.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_welcome_uses_configured_site_url(self):
        sender = SendGridSender(Settings(sendgrid_api_key="key", site_url="https://site.example"))
        sender.send = AsyncMock()

        await sender.send_welcome("sara@example.com", "سارة")

        to_email, subject, html_content = sender.send.call_args[0]
        assert to_email == "sara@example.com"
        assert subject == WELCOME_SUBJECT
        assert "https://site.example/auth" in html_content

    @pytest.mark.asyncio
    async def test_smtp_failure_is_wrapped(self):
        sender = SmtpSender(Settings(smtp_username="user", smtp_password="pass"))

        with patch.object(SmtpSender, "_send_sync", side_effect=OSError("connection refused")):
            with pytest.raises(NotificationError):
                await sender.send("sara@example.com", "subject", "<p>hi</p>")

    def test_build_sender_picks_provider(self):
        assert isinstance(build_sender(Settings(email_provider="smtp")), SmtpSender)
        assert isinstance(build_sender(Settings(email_provider="SendGrid")), SendGridSender)

    def test_build_sender_unknown_provider(self):
        with pytest.raises(ValueError):
            build_sender(Settings(email_provider="carrier-pigeon"))
