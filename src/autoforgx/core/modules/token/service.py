from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt

from autoforgx.core.core import Service
from autoforgx.core.modules.token.models import AuthToken, TokenClaims
from autoforgx.errors import AuthenticationError
from autoforgx.utils import now


class TokenService(Service):
    """Issues and verifies stateless signed bearer tokens.

    Tokens are HS256 JWTs carrying ``sub`` (user id), ``iat`` and ``exp``.
    Nothing is persisted: verification checks signature and expiry only,
    so it does no I/O and is safe to call from any number of requests.
    """

    def issue_token(self, user_id: UUID, issued_at: datetime | None = None) -> AuthToken:
        """Sign a token for user_id expiring token_ttl_seconds after issued_at."""
        config = self.core.config
        iat = issued_at or now()
        payload = {
            "sub": str(user_id),
            "iat": iat,
            "exp": iat + timedelta(seconds=config.token_ttl_seconds),
        }
        return AuthToken(jwt.encode(payload, config.jwt_secret.get_secret_value(), algorithm=config.jwt_algorithm))

    def verify_token(self, auth_token: AuthToken | None) -> TokenClaims:
        """Return the verified claims or raise AuthenticationError.

        The error is the same for every cause so callers cannot probe why a token failed.
        """
        if not auth_token:
            raise AuthenticationError

        config = self.core.config
        try:
            payload = jwt.decode(
                auth_token,
                config.jwt_secret.get_secret_value(),
                algorithms=[config.jwt_algorithm],
                options={"require": ["exp", "iat", "sub"]},
            )
            return TokenClaims(
                user_id=UUID(payload["sub"]),
                issued_at=datetime.fromtimestamp(payload["iat"], UTC),
                expires_at=datetime.fromtimestamp(payload["exp"], UTC),
            )
        except (jwt.PyJWTError, ValueError, TypeError):
            raise AuthenticationError from None

    def verify_user_id(self, auth_token: AuthToken | None) -> UUID:
        return self.verify_token(auth_token).user_id
