# Schemas module
from .requests import (
    WriterRegistrationRequest,
    SignInRequest,
    PasswordResetRequest,
    PasswordResetConfirmRequest,
    ContentInput,
    RejectRequest,
    ProfileUpdateRequest,
    ProductInput,
    RoleChangeRequest
)
from .responses import (
    MessageResponse,
    ContentResponse,
    ContentActionResponse,
    ProfileResponse,
    PublicWriterResponse,
    WriterDetailResponse,
    WriterActionResponse,
    UserWithRolesResponse,
    ProductResponse,
    ProductDetailResponse,
    TickerItem,
    SessionResponse,
    SignUpResponse,
    NavigationLink,
    GuardResponse,
    AdminStatsResponse,
    WriterStatsResponse,
    UploadResponse,
    SetupResponse,
    ErrorResponse
)

__all__ = [
    "WriterRegistrationRequest",
    "SignInRequest",
    "PasswordResetRequest",
    "PasswordResetConfirmRequest",
    "ContentInput",
    "RejectRequest",
    "ProfileUpdateRequest",
    "ProductInput",
    "RoleChangeRequest",
    "MessageResponse",
    "ContentResponse",
    "ContentActionResponse",
    "ProfileResponse",
    "PublicWriterResponse",
    "WriterDetailResponse",
    "WriterActionResponse",
    "UserWithRolesResponse",
    "ProductResponse",
    "ProductDetailResponse",
    "TickerItem",
    "SessionResponse",
    "SignUpResponse",
    "NavigationLink",
    "GuardResponse",
    "AdminStatsResponse",
    "WriterStatsResponse",
    "UploadResponse",
    "SetupResponse",
    "ErrorResponse"
]
