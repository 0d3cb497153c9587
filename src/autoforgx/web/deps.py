from typing import Annotated, cast

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from autoforgx.app import App
from autoforgx.core.modules.token.models import AuthToken
from autoforgx.errors import AuthenticationError

bearer_scheme = HTTPBearer(auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_auth_token(
    app: Annotated[App, Depends(get_app)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
) -> AuthToken:
    """Get and validate auth token from the Authorization Bearer header."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError

    auth_token = AuthToken(credentials.credentials)
    app.verify_token(auth_token)
    return auth_token


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
AuthTokenDep = Annotated[AuthToken, Depends(get_auth_token)]
