"""
Document-mapping layer over an async MongoDB collection.

Maps pydantic models to documents and back, translating the ``_id``
ObjectId to a string ``id`` field. Repositories built on the mapped
database handle use this instead of touching raw documents.
"""

from typing import Any, Dict, Generic, List, Mapping, Optional, Type, TypeVar

import structlog
from bson import ObjectId
from pydantic import BaseModel
from pymongo import ReturnDocument
from pymongo.asynchronous.collection import AsyncCollection

logger = structlog.get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def to_object_id(document_id: str) -> Optional[ObjectId]:
    """Parse an id string, returning None when it is not a valid ObjectId."""
    if not ObjectId.is_valid(document_id):
        return None
    return ObjectId(document_id)


class DocumentCollection(Generic[ModelT]):
    """Typed access to one collection."""

    def __init__(self, collection: AsyncCollection, model: Type[ModelT]):
        """
        Args:
            collection: Collection on the mapped database handle
            model: Pydantic model with an optional ``id`` field
        """
        self.collection = collection
        self.model = model

    def to_document(self, instance: ModelT) -> Dict[str, Any]:
        return instance.model_dump(exclude={"id"})

    def from_document(self, document: Mapping[str, Any]) -> ModelT:
        data = dict(document)
        data["id"] = str(data.pop("_id"))
        return self.model.model_validate(data)

    async def insert(self, instance: ModelT) -> ModelT:
        """Insert a model and return it with its new id."""
        result = await self.collection.insert_one(self.to_document(instance))
        return instance.model_copy(update={"id": str(result.inserted_id)})

    async def find(
        self,
        filter: Optional[Dict[str, Any]] = None,
        limit: int = 0,
        skip: int = 0,
        sort: Optional[List[tuple]] = None,
    ) -> List[ModelT]:
        cursor = self.collection.find(filter or {}, skip=skip, limit=limit, sort=sort)
        documents = await cursor.to_list(length=None)
        return [self.from_document(document) for document in documents]

    async def find_one(self, filter: Dict[str, Any]) -> Optional[ModelT]:
        document = await self.collection.find_one(filter)
        if document is None:
            return None
        return self.from_document(document)

    async def get(self, document_id: str) -> Optional[ModelT]:
        object_id = to_object_id(document_id)
        if object_id is None:
            return None
        return await self.find_one({"_id": object_id})

    async def update(self, document_id: str, changes: Dict[str, Any]) -> Optional[ModelT]:
        """Apply ``$set`` changes and return the updated model, or None if missing."""
        object_id = to_object_id(document_id)
        if object_id is None:
            return None
        document = await self.collection.find_one_and_update(
            {"_id": object_id},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        if document is None:
            return None
        return self.from_document(document)

    async def delete(self, document_id: str) -> bool:
        object_id = to_object_id(document_id)
        if object_id is None:
            return False
        result = await self.collection.delete_one({"_id": object_id})
        return result.deleted_count == 1

    async def count(self, filter: Optional[Dict[str, Any]] = None) -> int:
        return await self.collection.count_documents(filter or {})
