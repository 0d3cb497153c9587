from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any, Self
from uuid import UUID, uuid4

import structlog
from pydantic import BaseModel, ConfigDict, Field
from pymongo.asynchronous.cursor import AsyncCursor
from pymongo.errors import PyMongoError

from autoforgx.errors import StorageUnavailableError

logger = structlog.get_logger(__name__)


class MongoModel(BaseModel):
    id: UUID = Field(alias="_id", serialization_alias="id", default_factory=uuid4)

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        json_schema_serialization_defaults_required=True,
    )

    def to_mongo(self) -> dict[str, Any]:
        """Convert the model to a dictionary for MongoDB storage with _id field."""
        data = self.model_dump()
        if "id" in data:
            data["_id"] = data.pop("id")  # Rename id → _id for MongoDB
        return data

    @classmethod
    async def list_cursor(cls, cursor: AsyncCursor[dict[str, Any]]) -> list[Self]:
        """Iterate over an AsyncCursor and return a list of model instances."""
        return [cls.model_validate(item) async for item in cursor]


@asynccontextmanager
async def storage_errors(operation: str) -> AsyncGenerator[None, None]:
    """Translate driver failures into StorageUnavailableError.

    Errors the caller expects (e.g. DuplicateKeyError) must be caught inside the block.
    """
    try:
        yield
    except PyMongoError as e:
        logger.exception("storage_error", operation=operation, error_type=type(e).__name__)
        raise StorageUnavailableError from e
