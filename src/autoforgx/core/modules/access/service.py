import secrets
from uuid import UUID

from autoforgx.core.core import Service
from autoforgx.core.modules.token.models import AuthToken
from autoforgx.core.modules.user.models import User
from autoforgx.errors import AccessDeniedError, AuthenticationError, NotFoundError


class AccessService(Service):
    def ensure_authenticated(self, auth_token: AuthToken | None) -> UUID:
        """Ensure the token is valid and return its user id (no I/O)."""
        return self.core.services.token.verify_user_id(auth_token)

    async def ensure_authenticated_user(self, auth_token: AuthToken | None) -> User:
        """Ensure the token is valid and the user it names still exists."""
        user_id = self.ensure_authenticated(auth_token)
        try:
            return await self.core.services.user.get_user(user_id)
        except NotFoundError:
            raise AuthenticationError from None

    def ensure_admin_key(self, admin_key: str | None) -> None:
        """Ensure admin_key matches the configured admin API key."""
        expected = self.core.config.admin_api_key
        if expected is None:
            raise AccessDeniedError("Admin operations are disabled")
        if admin_key is None or not secrets.compare_digest(admin_key.encode(), expected.get_secret_value().encode()):
            raise AccessDeniedError("Invalid admin key")
