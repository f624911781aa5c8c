"""Response schemas for API endpoints."""
from typing import Any, Dict, List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

from api.models import ContentModel, ProfileModel, ProductModel


class MessageResponse(BaseModel):
    """Plain localized confirmation message."""
    message: str = Field(..., description="Localized message for the user")


class AuthorSummary(BaseModel):
    """Author fields embedded in content listings."""
    id: str
    name: str
    photo_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    twitter_url: Optional[str] = None

    @classmethod
    def from_document(cls, profile: Dict[str, Any]) -> "AuthorSummary":
        return cls(
            id=profile["_id"],
            name=profile["name"],
            photo_url=profile.get("photo_url"),
            linkedin_url=profile.get("linkedin_url"),
            twitter_url=profile.get("twitter_url"),
        )


class ContentResponse(BaseModel):
    """Schema for a single article or news item."""
    id: str = Field(..., description="Content identifier")
    title: str
    excerpt: str
    content: str
    cover_image_url: str
    author_id: str
    product_id: Optional[str] = None
    views: int
    status: str
    rejection_reason: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    author: Optional[AuthorSummary] = None

    @classmethod
    def from_document(
        cls,
        document: Dict[str, Any],
        author: Optional[Dict[str, Any]] = None
    ) -> "ContentResponse":
        item = ContentModel.model_validate(document)
        return cls(
            id=item.id,
            title=item.title,
            excerpt=item.excerpt,
            content=item.content,
            cover_image_url=item.cover_image_url,
            author_id=item.author_id,
            product_id=item.product_id,
            views=item.views,
            status=item.status.value,
            rejection_reason=item.rejection_reason,
            created_at=item.created_at,
            updated_at=item.updated_at,
            author=AuthorSummary.from_document(author) if author else None,
        )


class ContentActionResponse(BaseModel):
    """Result of a content mutation."""
    message: str
    item: ContentResponse


class ProfileResponse(BaseModel):
    """Schema for a writer profile."""
    id: str
    user_id: str
    name: str
    email: str
    phone: Optional[str] = None
    bio: Optional[str] = None
    photo_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    twitter_url: Optional[str] = None
    status: str
    created_at: datetime

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "ProfileResponse":
        profile = ProfileModel.model_validate(document)
        return cls(
            id=profile.id,
            user_id=profile.user_id,
            name=profile.name,
            email=profile.email,
            phone=profile.phone,
            bio=profile.bio,
            photo_url=profile.photo_url,
            linkedin_url=profile.linkedin_url,
            twitter_url=profile.twitter_url,
            status=profile.status.value,
            created_at=profile.created_at,
        )


class PublicWriterResponse(BaseModel):
    """Public view of a writer; contact details are left out."""
    id: str
    name: str
    bio: Optional[str] = None
    photo_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    twitter_url: Optional[str] = None

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "PublicWriterResponse":
        return cls(
            id=document["_id"],
            name=document["name"],
            bio=document.get("bio"),
            photo_url=document.get("photo_url"),
            linkedin_url=document.get("linkedin_url"),
            twitter_url=document.get("twitter_url"),
        )


class WriterDetailResponse(BaseModel):
    """Public writer page with approved work."""
    writer: PublicWriterResponse
    articles: List[ContentResponse] = Field(default_factory=list)
    news: List[ContentResponse] = Field(default_factory=list)


class WriterActionResponse(BaseModel):
    """Result of a writer moderation action."""
    message: str
    profile_id: str
    status: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)


class UserWithRolesResponse(BaseModel):
    """Profile row with the roles held by its account."""
    profile: ProfileResponse
    roles: List[str] = Field(default_factory=list)


class ProductResponse(BaseModel):
    """Schema for a catalog product."""
    id: str
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    display_order: int

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "ProductResponse":
        product = ProductModel.model_validate(document)
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            image_url=product.image_url,
            display_order=product.display_order,
        )


class ProductDetailResponse(BaseModel):
    """Product page with approved articles about it."""
    product: ProductResponse
    articles: List[ContentResponse] = Field(default_factory=list)


class TickerItem(BaseModel):
    """Headline shown in the latest-content ticker."""
    kind: str
    id: str
    title: str
    created_at: datetime
    linkedin_url: Optional[str] = None
    twitter_url: Optional[str] = None


class SessionResponse(BaseModel):
    """Active session and the identity behind it."""
    token: str
    account_id: str
    email: str
    roles: List[str] = Field(default_factory=list)
    profile: Optional[ProfileResponse] = None


class SignUpResponse(BaseModel):
    """Writer registration result."""
    message: str
    account_id: str
    profile_id: str


class NavigationLink(BaseModel):
    """Dashboard entry available to the current account."""
    path: str
    label: str


class GuardResponse(BaseModel):
    """Route guard decision for a dashboard subtree."""
    status: str
    redirect_to: Optional[str] = None
    message: Optional[str] = None


class AdminStatsResponse(BaseModel):
    """Counts shown on the admin dashboard."""
    articles: int
    news: int
    writers: int
    pending_articles: int
    pending_news: int
    pending_writers: int


class WriterStatsResponse(BaseModel):
    """Per-status counts of a writer's own content."""
    articles: Dict[str, int]
    news: Dict[str, int]


class UploadResponse(BaseModel):
    """Stored image location."""
    message: str
    url: str
    path: str


class SetupResponse(BaseModel):
    """Default admin bootstrap result."""
    message: str
    created: bool


class ErrorResponse(BaseModel):
    """Schema for error responses."""
    error: str = Field(..., description="Error title")
    detail: Optional[str] = Field(None, description="Localized error message")
    code: Optional[str] = Field(None, description="Machine readable error code")
    redirect_to: Optional[str] = Field(None, description="Where the client should go")
