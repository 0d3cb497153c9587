"""Bearer token models."""

from datetime import datetime
from typing import NewType
from uuid import UUID

from pydantic import BaseModel

AuthToken = NewType("AuthToken", str)


class TokenClaims(BaseModel):
    """Verified claims of a bearer token."""

    user_id: UUID
    issued_at: datetime
    expires_at: datetime
