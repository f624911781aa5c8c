"""Account repository holding login credentials."""
from typing import Optional, Dict, Any
from motor.motor_asyncio import AsyncIOMotorDatabase
from shared.utils import generate_account_id, get_utc_now, normalize_email


class AccountRepository:
    """Repository for Account CRUD operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db.accounts

    async def create_account(self, email: str, password_hash: str, name: str) -> Dict[str, Any]:
        """Create a new account. Raises on duplicate email."""
        account = {
            "_id": generate_account_id(),
            "email": normalize_email(email),
            "password_hash": password_hash,
            "name": name,
            "created_at": get_utc_now(),
        }
        await self.collection.insert_one(account)
        return account

    async def get_account(self, account_id: str) -> Optional[Dict[str, Any]]:
        """Get an account by ID."""
        return await self.collection.find_one({"_id": account_id})

    async def get_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        """Get an account by email."""
        return await self.collection.find_one({"email": normalize_email(email)})

    async def update_password(self, account_id: str, password_hash: str) -> bool:
        """Replace an account's password hash."""
        result = await self.collection.update_one(
            {"_id": account_id},
            {"$set": {"password_hash": password_hash}}
        )
        return result.matched_count > 0

    async def delete_account(self, account_id: str) -> bool:
        """Delete an account."""
        result = await self.collection.delete_one({"_id": account_id})
        return result.deleted_count > 0

    async def restore(self, account: Dict[str, Any]) -> None:
        """Re-insert a previously deleted account."""
        await self.collection.insert_one(account)
