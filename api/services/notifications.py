"""Email notification senders."""
import asyncio
import html
import logging
import smtplib
from abc import ABC, abstractmethod
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

import aiohttp

from shared.config import Settings, settings
from shared.exceptions import NotificationError

logger = logging.getLogger(__name__)


WELCOME_SUBJECT = "🎉 مرحباً بك في المنحنى - تم قبول طلبك!"
PASSWORD_RESET_SUBJECT = "إعادة تعيين كلمة المرور - المنحنى"


def _email_layout(body: str) -> str:
    return f"""<!DOCTYPE html>
<html dir="rtl" lang="ar">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>المنحنى</title>
</head>
<body style="margin: 0; padding: 0; font-family: -apple-system, 'Segoe UI', Roboto, sans-serif; background-color: #f6f9fc;">
  <table width="100%" cellpadding="0" cellspacing="0" style="background-color: #f6f9fc; padding: 40px 0;">
    <tr>
      <td align="center">
        <table width="600" cellpadding="0" cellspacing="0" style="background-color: #ffffff; border-radius: 8px; padding: 40px 20px; max-width: 600px;">
{body}
          <tr>
            <td style="padding: 32px 0 0;">
              <p style="color: #666; font-size: 14px; line-height: 24px; margin: 0; text-align: right;">
                مع أطيب التحيات،<br>
                فريق المنحنى
              </p>
            </td>
          </tr>
        </table>
      </td>
    </tr>
  </table>
</body>
</html>
"""


def render_welcome_email(name: str, site_url: str) -> str:
    """Fixed welcome notice sent when a writer is approved."""
    name = html.escape(name)
    login_url = html.escape(f"{site_url.rstrip('/')}/auth", quote=True)
    return _email_layout(f"""
          <tr>
            <td align="center" style="padding: 40px 0;">
              <h1 style="color: #1a1a1a; font-size: 32px; font-weight: bold; margin: 0;">مرحباً {name}!</h1>
            </td>
          </tr>
          <tr>
            <td style="padding: 16px 0;">
              <p style="color: #444; font-size: 16px; line-height: 26px; margin: 0; text-align: right;">
                نحن سعداء بالإعلان عن قبول طلبك للانضمام إلى فريق الكتّاب في منصة المنحنى.
              </p>
            </td>
          </tr>
          <tr>
            <td align="center" style="padding: 32px 0;">
              <p style="color: #16a34a; font-size: 20px; font-weight: bold; margin: 0;">تم قبول طلبك بنجاح ✨</p>
            </td>
          </tr>
          <tr>
            <td style="padding: 16px 0;">
              <p style="color: #444; font-size: 16px; line-height: 26px; margin: 0; text-align: right;">
                يمكنك الآن تسجيل الدخول إلى حسابك والبدء في كتابة مقالاتك ونشر أخبارك على المنصة.
              </p>
            </td>
          </tr>
          <tr>
            <td align="center" style="padding: 32px 0;">
              <a href="{login_url}" style="display: inline-block; background-color: #16a34a; color: #fff; font-size: 16px; font-weight: bold; text-decoration: none; border-radius: 6px; padding: 14px 32px;">
                تسجيل الدخول الآن
              </a>
            </td>
          </tr>
          <tr>
            <td style="padding: 16px 0;">
              <p style="color: #444; font-size: 16px; line-height: 26px; margin: 0; text-align: right;">
                إذا كان لديك أي استفسارات، لا تتردد في التواصل معنا.
              </p>
            </td>
          </tr>""")


def render_password_reset_email(name: str, reset_url: str) -> str:
    """Password reset link email."""
    name = html.escape(name)
    reset_url = html.escape(reset_url, quote=True)
    return _email_layout(f"""
          <tr>
            <td style="padding: 16px 0;">
              <p style="color: #444; font-size: 16px; line-height: 26px; margin: 0; text-align: right;">
                مرحباً {name}، وصلنا طلب لإعادة تعيين كلمة المرور الخاصة بحسابك.
              </p>
            </td>
          </tr>
          <tr>
            <td align="center" style="padding: 32px 0;">
              <a href="{reset_url}" style="display: inline-block; background-color: #16a34a; color: #fff; font-size: 16px; font-weight: bold; text-decoration: none; border-radius: 6px; padding: 14px 32px;">
                إعادة تعيين كلمة المرور
              </a>
            </td>
          </tr>
          <tr>
            <td style="padding: 16px 0;">
              <p style="color: #444; font-size: 16px; line-height: 26px; margin: 0; text-align: right;">
                إذا لم تطلب ذلك يمكنك تجاهل هذه الرسالة.
              </p>
            </td>
          </tr>""")


class NotificationSender(ABC):
    """Sends transactional email through one configured provider."""

    def __init__(self, config: Settings = settings):
        self.config = config

    @abstractmethod
    async def send(self, to_email: str, subject: str, html_content: str) -> None:
        """Deliver one HTML email. Raises NotificationError on failure."""

    async def send_welcome(self, email: str, name: str, site_url: Optional[str] = None) -> None:
        if not email or not name:
            raise NotificationError("البريد الإلكتروني والاسم مطلوبان")
        site_url = site_url or self.config.site_url
        logger.info(f"Sending welcome email to: {email}")
        await self.send(email, WELCOME_SUBJECT, render_welcome_email(name, site_url))

    async def send_password_reset(self, email: str, name: str, reset_url: str) -> None:
        logger.info(f"Sending password reset email to: {email}")
        await self.send(email, PASSWORD_RESET_SUBJECT, render_password_reset_email(name, reset_url))


class SendGridSender(NotificationSender):
    """HTTP API provider."""

    async def send(self, to_email: str, subject: str, html_content: str) -> None:
        if not self.config.sendgrid_api_key:
            logger.error("SENDGRID_API_KEY is not configured")
            raise NotificationError("مفتاح خدمة البريد غير مضبوط")

        payload = {
            "personalizations": [
                {"to": [{"email": to_email}], "subject": subject}
            ],
            "from": {
                "email": self.config.mail_from_addr,
                "name": self.config.mail_from_name,
            },
            "content": [{"type": "text/html", "value": html_content}],
        }
        headers = {
            "Authorization": f"Bearer {self.config.sendgrid_api_key}",
            "Content-Type": "application/json",
        }
        timeout = aiohttp.ClientTimeout(total=self.config.email_timeout)

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(
                    self.config.sendgrid_api_url,
                    json=payload,
                    headers=headers
                ) as response:
                    logger.info(f"SendGrid response status: {response.status}")
                    if response.status >= 400:
                        error_text = await response.text()
                        logger.error(f"SendGrid error: {error_text}")
                        raise NotificationError(
                            f"SendGrid error: {response.status} - {error_text}"
                        )
        except aiohttp.ClientError as e:
            logger.error(f"SendGrid request failed: {e}")
            raise NotificationError(str(e)) from e


class SmtpSender(NotificationSender):
    """SMTP provider; the blocking client runs in a worker thread."""

    async def send(self, to_email: str, subject: str, html_content: str) -> None:
        if not self.config.smtp_username or not self.config.smtp_password:
            logger.error("SMTP_USERNAME or SMTP_PASSWORD not set")
            raise NotificationError("بيانات خادم البريد غير مضبوطة")

        try:
            await asyncio.to_thread(self._send_sync, to_email, subject, html_content)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"SMTP delivery to {to_email} failed: {e}")
            raise NotificationError(str(e)) from e

    def _send_sync(self, to_email: str, subject: str, html_content: str) -> None:
        from_addr = self.config.mail_from_addr or self.config.smtp_username

        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f"{self.config.mail_from_name} <{from_addr}>"
        msg["To"] = to_email
        msg.attach(MIMEText(html_content, "html", "utf-8"))

        host = self.config.smtp_host
        port = self.config.smtp_port
        timeout = self.config.email_timeout

        if self.config.smtp_use_ssl:
            with smtplib.SMTP_SSL(host, port, timeout=timeout) as server:
                server.login(self.config.smtp_username, self.config.smtp_password)
                server.sendmail(from_addr, to_email, msg.as_string())
        else:
            with smtplib.SMTP(host, port, timeout=timeout) as server:
                if self.config.smtp_use_tls:
                    server.starttls()
                server.login(self.config.smtp_username, self.config.smtp_password)
                server.sendmail(from_addr, to_email, msg.as_string())


PROVIDERS = {
    "sendgrid": SendGridSender,
    "smtp": SmtpSender,
}


def build_sender(config: Settings = settings) -> NotificationSender:
    """Pick the notification adapter named by EMAIL_PROVIDER."""
    provider = config.email_provider.lower()
    if provider not in PROVIDERS:
        raise ValueError(f"Unknown email provider: {config.email_provider}")
    return PROVIDERS[provider](config)
