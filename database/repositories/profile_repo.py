"""Profile repository for the public writer identity records."""
from typing import Optional, List, Dict, Any
from motor.motor_asyncio import AsyncIOMotorDatabase
from shared.utils import generate_profile_id, get_utc_now, normalize_email


class ProfileStatus:
    """Profile approval status constants."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    ALL = (PENDING, APPROVED, REJECTED)


EDITABLE_PROFILE_FIELDS = (
    "name", "phone", "bio", "photo_url", "linkedin_url", "twitter_url"
)


class ProfileRepository:
    """Repository for Profile CRUD operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db.profiles

    async def create_profile(
        self,
        user_id: str,
        name: str,
        email: str,
        phone: Optional[str] = None,
        bio: Optional[str] = None,
        linkedin_url: Optional[str] = None,
        status: str = ProfileStatus.PENDING
    ) -> Dict[str, Any]:
        """Create the profile attached to a new account."""
        now = get_utc_now()
        profile = {
            "_id": generate_profile_id(),
            "user_id": user_id,
            "name": name,
            "email": normalize_email(email),
            "phone": phone,
            "bio": bio,
            "photo_url": None,
            "linkedin_url": linkedin_url or None,
            "twitter_url": None,
            "status": status,
            "created_at": now,
            "updated_at": now,
        }
        await self.collection.insert_one(profile)
        return profile

    async def get_profile(self, profile_id: str) -> Optional[Dict[str, Any]]:
        """Get a profile by ID."""
        return await self.collection.find_one({"_id": profile_id})

    async def get_by_user_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Get the profile owned by an account."""
        return await self.collection.find_one({"user_id": user_id})

    async def get_approved(self, profile_id: str) -> Optional[Dict[str, Any]]:
        """Get a profile only if it is publicly visible."""
        return await self.collection.find_one(
            {"_id": profile_id, "status": ProfileStatus.APPROVED}
        )

    async def list_profiles(self, status: Optional[str] = None) -> List[Dict[str, Any]]:
        """List profiles for moderation, newest first."""
        query = {"status": status} if status else {}
        cursor = self.collection.find(query).sort("created_at", -1)
        return await cursor.to_list(length=None)

    async def list_approved(self) -> List[Dict[str, Any]]:
        """List publicly visible profiles ordered by name."""
        cursor = self.collection.find(
            {"status": ProfileStatus.APPROVED}
        ).sort("name", 1)
        return await cursor.to_list(length=None)

    async def update_status(self, profile_id: str, status: str) -> bool:
        """Set the approval status of a profile."""
        result = await self.collection.update_one(
            {"_id": profile_id},
            {"$set": {"status": status, "updated_at": get_utc_now()}}
        )
        return result.matched_count > 0

    async def update_by_user_id(self, user_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Update the editable fields of an account's own profile."""
        update = {k: v for k, v in fields.items() if k in EDITABLE_PROFILE_FIELDS}
        update["updated_at"] = get_utc_now()
        return await self.collection.find_one_and_update(
            {"user_id": user_id},
            {"$set": update},
            return_document=True
        )

    async def delete_profile(self, profile_id: str) -> bool:
        """Delete a profile row."""
        result = await self.collection.delete_one({"_id": profile_id})
        return result.deleted_count > 0

    async def restore(self, profile: Dict[str, Any]) -> None:
        """Re-insert a previously deleted profile."""
        await self.collection.insert_one(profile)

    async def count(self, status: Optional[str] = None) -> int:
        """Count profiles with an optional status filter."""
        query = {"status": status} if status else {}
        return await self.collection.count_documents(query)

    async def get_profiles_by_ids(self, profile_ids: List[str]) -> Dict[str, Dict[str, Any]]:
        """Get multiple profiles by ID. Returns dict mapping ID to profile."""
        cursor = self.collection.find({"_id": {"$in": profile_ids}})
        profiles = await cursor.to_list(length=len(profile_ids))
        return {profile["_id"]: profile for profile in profiles}
