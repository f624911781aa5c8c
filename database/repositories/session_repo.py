"""Redis-backed store for login sessions and password reset tokens."""
import json
from typing import Optional, Dict, Any
import redis.asyncio as redis
from shared.config import settings
from shared.utils import generate_token, get_utc_now, format_datetime


class SessionRepository:
    """Opaque-token sessions with a TTL, indexed per account."""

    session_prefix = "session"
    account_prefix = "account_sessions"
    reset_prefix = "password_reset"

    def __init__(self, redis_client: redis.Redis):
        self.redis = redis_client
        self.session_ttl = settings.session_ttl
        self.reset_ttl = settings.password_reset_ttl

    def _session_key(self, token: str) -> str:
        return f"{self.session_prefix}:{token}"

    def _account_key(self, account_id: str) -> str:
        return f"{self.account_prefix}:{account_id}"

    async def create_session(self, account_id: str, email: str) -> Dict[str, Any]:
        """Create a session and return it, token included."""
        token = generate_token()
        session = {
            "token": token,
            "account_id": account_id,
            "email": email,
            "created_at": format_datetime(get_utc_now()),
        }
        await self.redis.set(self._session_key(token), json.dumps(session), ex=self.session_ttl)
        await self.redis.sadd(self._account_key(account_id), token)
        await self.redis.expire(self._account_key(account_id), self.session_ttl)
        return session

    async def get_session(self, token: str) -> Optional[Dict[str, Any]]:
        """Get a live session by token."""
        raw = await self.redis.get(self._session_key(token))
        if not raw:
            return None
        return json.loads(raw)

    async def delete_session(self, token: str) -> bool:
        """Sign a single session out."""
        session = await self.get_session(token)
        removed = await self.redis.delete(self._session_key(token))
        if session:
            await self.redis.srem(self._account_key(session["account_id"]), token)
        return removed > 0

    async def delete_sessions_for_account(self, account_id: str) -> int:
        """Sign every session of an account out."""
        tokens = await self.redis.smembers(self._account_key(account_id))
        removed = 0
        for token in tokens:
            removed += await self.redis.delete(self._session_key(token))
        await self.redis.delete(self._account_key(account_id))
        return removed

    async def create_reset_token(self, account_id: str) -> str:
        """Create a single-use password reset token."""
        token = generate_token()
        await self.redis.set(f"{self.reset_prefix}:{token}", account_id, ex=self.reset_ttl)
        return token

    async def consume_reset_token(self, token: str) -> Optional[str]:
        """Return the account of a reset token and invalidate it."""
        key = f"{self.reset_prefix}:{token}"
        account_id = await self.redis.get(key)
        if account_id:
            await self.redis.delete(key)
        return account_id
