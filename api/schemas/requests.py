"""Request schemas for API endpoints."""
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from api.models import RoleEnum


NAME_MESSAGE = "الاسم يجب أن يحتوي على 3 أحرف على الأقل"
PASSWORD_MIN_LENGTH = 6

# Messages for errors raised by pydantic itself, keyed by field name
FIELD_MESSAGES = {
    "email": "البريد الإلكتروني غير صحيح",
    "password": "كلمة المرور يجب أن تحتوي على 6 أحرف على الأقل",
}


def _check_url(value: Optional[str], message: str) -> Optional[str]:
    if value and not value.startswith(('http://', 'https://')):
        raise ValueError(message)
    return value or None


def _check_name(value: Optional[str]) -> str:
    value = (value or "").strip()
    if len(value) < 3:
        raise ValueError(NAME_MESSAGE)
    return value


class WriterRegistrationRequest(BaseModel):
    """Writer sign-up form."""
    name: str = Field(..., description="Display name")
    email: EmailStr = Field(..., description="Login email")
    phone: str = Field(..., description="Contact phone number")
    bio: str = Field(default="", description="Short bio (150 characters max)")
    linkedin: Optional[str] = Field(default=None, description="LinkedIn profile URL")
    password: Optional[str] = Field(
        default=None,
        min_length=PASSWORD_MIN_LENGTH,
        description="Generated when omitted"
    )

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _check_name(v)

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 10:
            raise ValueError('رقم الهاتف غير صحيح')
        return v

    @field_validator('bio')
    @classmethod
    def validate_bio(cls, v: str) -> str:
        if len(v) > 150:
            raise ValueError('النبذة يجب ألا تتجاوز 150 حرف')
        return v

    @field_validator('linkedin')
    @classmethod
    def validate_linkedin(cls, v: Optional[str]) -> Optional[str]:
        return _check_url(v, 'رابط لينكد إن غير صحيح')


class SignInRequest(BaseModel):
    """Email and password sign-in."""
    email: EmailStr
    password: str


class PasswordResetRequest(BaseModel):
    """Ask for a password reset link."""
    email: EmailStr
    redirect_to: Optional[str] = Field(default=None, description="Page the reset link opens")


class PasswordResetConfirmRequest(BaseModel):
    """Set a new password with a reset token."""
    token: str
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)


class ContentInput(BaseModel):
    """
    Article or news payload submitted by a writer.

    Any ``status`` sent by the client is ignored; required fields are
    checked by the moderation service so the user sees a localized message.
    """
    title: str = ""
    excerpt: str = ""
    cover_image_url: str = ""
    content: str = ""
    product_id: Optional[str] = None


class RejectRequest(BaseModel):
    """Rejection with a mandatory reason."""
    reason: str = ""


class ProfileUpdateRequest(BaseModel):
    """Writer's own profile edit."""
    name: Optional[str] = None
    phone: Optional[str] = None
    bio: Optional[str] = None
    photo_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    twitter_url: Optional[str] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> str:
        # Runs only when the client sends the field; null is refused
        return _check_name(v)

    @field_validator('bio')
    @classmethod
    def validate_bio(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and len(v) > 150:
            raise ValueError('النبذة يجب ألا تتجاوز 150 حرف')
        return v

    @field_validator('linkedin_url')
    @classmethod
    def validate_linkedin(cls, v: Optional[str]) -> Optional[str]:
        return _check_url(v, 'رابط لينكد إن غير صحيح')

    @field_validator('twitter_url')
    @classmethod
    def validate_twitter(cls, v: Optional[str]) -> Optional[str]:
        return _check_url(v, 'رابط تويتر غير صحيح')


class ProductInput(BaseModel):
    """Product create/edit payload."""
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    image_url: Optional[str] = None
    display_order: int = 0


class RoleChangeRequest(BaseModel):
    """Grant or revoke a role."""
    role: RoleEnum
