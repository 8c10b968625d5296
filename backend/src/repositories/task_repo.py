"""
Task repository.

Works on the raw database handle with plain documents; callers pass and
receive dictionaries whose keys match the task JSON (``userId``,
``createdAt``...). ``_id`` is exposed as a string ``id``.
"""

from typing import Any, Dict, List, Optional

import structlog
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

from backend.src.models.common import utc_now
from backend.src.repositories.base import to_object_id

logger = structlog.get_logger(__name__)


def _serialize(document: Dict[str, Any]) -> Dict[str, Any]:
    data = dict(document)
    data["id"] = str(data.pop("_id"))
    return data


class TaskRepository:
    """Repository for task database operations."""

    collection_name = "tasks"

    def __init__(self, database: AsyncDatabase):
        """
        Initialize task repository.

        Args:
            database: Raw database handle
        """
        self.collection = database[self.collection_name]

    async def create_task(self, task: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a task document.

        Args:
            task: Task fields; must include ``userId``

        Returns:
            Stored task including ``id`` and ``createdAt``
        """
        document = {**task, "createdAt": utc_now()}
        try:
            result = await self.collection.insert_one(document)
        except Exception as e:
            logger.error("task_create_failed", error=str(e), user_id=task.get("userId"))
            raise

        document["_id"] = result.inserted_id
        logger.info("task_created", task_id=str(result.inserted_id), user_id=task.get("userId"))
        return _serialize(document)

    async def list_tasks(
        self,
        user_id: Optional[str] = None,
        status: Optional[str] = None,
        limit: int = 100,
        offset: int = 0
    ) -> List[Dict[str, Any]]:
        query: Dict[str, Any] = {}
        if user_id is not None:
            query["userId"] = user_id
        if status is not None:
            query["status"] = status

        cursor = self.collection.find(query, skip=offset, limit=limit, sort=[("createdAt", -1)])
        return [_serialize(document) for document in await cursor.to_list(length=None)]

    async def get_task(self, task_id: str) -> Optional[Dict[str, Any]]:
        object_id = to_object_id(task_id)
        if object_id is None:
            return None
        document = await self.collection.find_one({"_id": object_id})
        return _serialize(document) if document else None

    async def update_task(self, task_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        object_id = to_object_id(task_id)
        if object_id is None:
            return None
        document = await self.collection.find_one_and_update(
            {"_id": object_id},
            {"$set": {**changes, "updatedAt": utc_now()}},
            return_document=ReturnDocument.AFTER,
        )
        if document is None:
            logger.debug("task_not_found", task_id=task_id)
            return None

        logger.info("task_updated", task_id=task_id, fields=sorted(changes))
        return _serialize(document)

    async def delete_task(self, task_id: str) -> bool:
        object_id = to_object_id(task_id)
        if object_id is None:
            return False
        result = await self.collection.delete_one({"_id": object_id})
        deleted = result.deleted_count == 1
        if deleted:
            logger.info("task_deleted", task_id=task_id)
        return deleted

    async def count_tasks(self) -> int:
        return await self.collection.count_documents({})

    async def count_by_status(self) -> Dict[str, int]:
        """Number of tasks per status value."""
        cursor = await self.collection.aggregate([
            {"$group": {"_id": "$status", "count": {"$sum": 1}}},
            {"$sort": {"_id": 1}},
        ])
        rows = await cursor.to_list(length=None)
        return {str(row["_id"]): row["count"] for row in rows}
