"""Role assignment repository for the user_roles collection."""
from typing import List, Dict, Any
from motor.motor_asyncio import AsyncIOMotorDatabase
from shared.utils import generate_role_id, get_utc_now


class Role:
    """Role name constants."""
    ADMIN = "admin"
    WRITER = "writer"

    ALL = (ADMIN, WRITER)


class RoleRepository:
    """Repository for Role Assignment operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db.user_roles

    async def add_role(self, user_id: str, role: str) -> Dict[str, Any]:
        """
        Grant a role to an account.

        Raises the store's duplicate key error when the account already
        holds the role; callers decide whether that is fatal.
        """
        assignment = {
            "_id": generate_role_id(),
            "user_id": user_id,
            "role": role,
            "created_at": get_utc_now(),
        }
        await self.collection.insert_one(assignment)
        return assignment

    async def has_role(self, user_id: str, role: str) -> bool:
        """Check whether an account holds a role."""
        count = await self.collection.count_documents({"user_id": user_id, "role": role})
        return count > 0

    async def get_roles(self, user_id: str) -> List[str]:
        """Get every role held by an account."""
        cursor = self.collection.find({"user_id": user_id})
        assignments = await cursor.to_list(length=None)
        return sorted({a["role"] for a in assignments})

    async def get_roles_for_users(self, user_ids: List[str]) -> Dict[str, List[str]]:
        """Get roles for many accounts. Returns dict mapping user_id to roles."""
        cursor = self.collection.find({"user_id": {"$in": user_ids}})
        assignments = await cursor.to_list(length=None)
        roles: Dict[str, List[str]] = {user_id: [] for user_id in user_ids}
        for assignment in assignments:
            roles.setdefault(assignment["user_id"], []).append(assignment["role"])
        return {user_id: sorted(set(r)) for user_id, r in roles.items()}

    async def remove_role(self, user_id: str, role: str) -> bool:
        """Revoke a role from an account."""
        result = await self.collection.delete_one({"user_id": user_id, "role": role})
        return result.deleted_count > 0

    async def find_by_user(self, user_id: str) -> List[Dict[str, Any]]:
        """Get raw role assignment rows for an account."""
        cursor = self.collection.find({"user_id": user_id})
        return await cursor.to_list(length=None)

    async def delete_by_user(self, user_id: str) -> int:
        """Delete every role assignment of an account."""
        result = await self.collection.delete_many({"user_id": user_id})
        return result.deleted_count

    async def restore(self, assignments: List[Dict[str, Any]]) -> None:
        """Re-insert previously deleted role assignments."""
        if assignments:
            await self.collection.insert_many(assignments)
