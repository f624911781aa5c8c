"""Shared utility functions."""
import re
import secrets
import uuid
from datetime import datetime, timezone
from typing import Optional


def generate_account_id() -> str:
    """Generate a unique account ID."""
    return f"acc_{uuid.uuid4().hex[:12]}"


def generate_profile_id() -> str:
    """Generate a unique profile ID."""
    return f"prof_{uuid.uuid4().hex[:12]}"


def generate_role_id() -> str:
    """Generate a unique role assignment ID."""
    return f"role_{uuid.uuid4().hex[:12]}"


def generate_content_id(prefix: str) -> str:
    """Generate a unique content ID (``art`` or ``news`` prefix)."""
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def generate_product_id() -> str:
    """Generate a unique product ID."""
    return f"prod_{uuid.uuid4().hex[:12]}"


def generate_token() -> str:
    """Generate an opaque URL-safe token for sessions and reset links."""
    return secrets.token_urlsafe(32)


def generate_password(length: int = 12) -> str:
    """Generate a random password for accounts created without one."""
    return secrets.token_urlsafe(length)[:length]


def get_utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


def format_datetime(dt: Optional[datetime]) -> Optional[str]:
    """Format datetime to ISO format string."""
    if dt is None:
        return None
    return dt.isoformat()


def normalize_email(email: str) -> str:
    """Normalize an email address for storage and lookup."""
    return email.strip().lower()


_STYLE_DOUBLE = re.compile(r'style="([^"]*)"', re.IGNORECASE)
_STYLE_SINGLE = re.compile(r"style='([^']*)'", re.IGNORECASE)
_FONT_FACE_DOUBLE = re.compile(r'(<font\b[^>]*)\sface="[^"]*"', re.IGNORECASE)
_FONT_FACE_SINGLE = re.compile(r"(<font\b[^>]*)\sface='[^']*'", re.IGNORECASE)


def _strip_font_family(style_value: str) -> str:
    rules = style_value.split(";")
    return ";".join(
        rule for rule in rules
        if not rule.strip().lower().startswith("font-family")
    )


def clean_content_font(html: Optional[str]) -> Optional[str]:
    """
    Remove font-family declarations from rich-text HTML.

    Inline ``style`` attributes lose their ``font-family`` rules and legacy
    ``<font face="...">`` attributes are dropped, so the site font always
    applies.
    """
    if not html:
        return html

    result = _STYLE_DOUBLE.sub(
        lambda m: f'style="{_strip_font_family(m.group(1))}"', html
    )
    result = _STYLE_SINGLE.sub(
        lambda m: f"style='{_strip_font_family(m.group(1))}'", result
    )
    result = _FONT_FACE_DOUBLE.sub(r"\1", result)
    result = _FONT_FACE_SINGLE.sub(r"\1", result)
    return result
