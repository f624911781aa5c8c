"""
Domain exceptions shared by services and routes.

Every exception carries an error code, an HTTP status and a localized
(Arabic) message that is shown to the user as-is.
"""
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Standardized error codes for API responses."""
    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTHENTICATION_REQUIRED = "AUTHENTICATION_REQUIRED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    NOT_FOUND = "NOT_FOUND"
    DUPLICATE = "DUPLICATE"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    NOTIFICATION_ERROR = "NOTIFICATION_ERROR"
    STORAGE_ERROR = "STORAGE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class PlatformError(Exception):
    """Base class for errors surfaced to the user."""

    code = ErrorCode.INTERNAL_ERROR
    status_code = 500
    title = "خطأ"
    default_message = "حدث خطأ ما"

    def __init__(self, message: Optional[str] = None, **extra: Any):
        self.message = message or self.default_message
        self.extra = extra
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body = {
            "error": self.title,
            "detail": self.message,
            "code": self.code.value,
        }
        body.update(self.extra)
        return body


class ValidationError(PlatformError):
    code = ErrorCode.VALIDATION_ERROR
    status_code = 400
    default_message = "يرجى ملء جميع الحقول المطلوبة"


class AuthenticationRequired(PlatformError):
    code = ErrorCode.AUTHENTICATION_REQUIRED
    status_code = 401
    title = "غير مصرح"
    default_message = "يجب تسجيل الدخول أولاً"


class InvalidCredentials(PlatformError):
    code = ErrorCode.INVALID_CREDENTIALS
    status_code = 401
    default_message = "البريد الإلكتروني أو كلمة المرور غير صحيحة"


class PermissionDenied(PlatformError):
    code = ErrorCode.PERMISSION_DENIED
    status_code = 403
    title = "غير مصرح"
    default_message = "ليس لديك صلاحيات الوصول لهذه الصفحة"


class NotFound(PlatformError):
    code = ErrorCode.NOT_FOUND
    status_code = 404
    default_message = "العنصر غير موجود"


class DuplicateError(PlatformError):
    code = ErrorCode.DUPLICATE
    status_code = 409
    default_message = "العنصر موجود مسبقاً"


class InvalidTransition(PlatformError):
    code = ErrorCode.INVALID_TRANSITION
    status_code = 409
    default_message = "لا يمكن تغيير الحالة من الحالة الحالية"


class NotificationError(PlatformError):
    code = ErrorCode.NOTIFICATION_ERROR
    status_code = 502
    default_message = "تعذر إرسال البريد الإلكتروني"


class StorageError(PlatformError):
    code = ErrorCode.STORAGE_ERROR
    status_code = 500
    default_message = "حدث خطأ أثناء رفع الصورة"


def is_duplicate_key_error(exc: Exception) -> bool:
    """Check whether a store exception is a unique-index violation."""
    return "duplicate key" in str(exc).lower()
