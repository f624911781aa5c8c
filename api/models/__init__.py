# Models module
from .content import ContentModel, ModerationStatusEnum
from .profile import ProfileModel, RoleEnum
from .product import ProductModel

__all__ = [
    "ContentModel",
    "ModerationStatusEnum",
    "ProfileModel",
    "RoleEnum",
    "ProductModel",
]
