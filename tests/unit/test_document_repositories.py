"""
Unit tests for the repositories against mocked driver collections.

Tests cover:
- _id <-> id translation in the document-mapping layer
- Proximity query shape ($geoWithin / $centerSphere in radians)
- Task documents keep camelCase keys and get timestamps
- Email uniqueness checks for users
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from backend.src.errors import ConflictError
from backend.src.models.agent import AgentDocument
from backend.src.models.common import GeoPoint
from backend.src.repositories.agent_repo import EARTH_RADIUS_KM, AgentRepository
from backend.src.repositories.base import to_object_id
from backend.src.repositories.task_repo import TaskRepository
from backend.src.repositories.user_repo import UserRepository


def make_cursor(documents):
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=documents)
    return cursor


def make_collection(documents=None):
    collection = MagicMock()
    collection.insert_one = AsyncMock(return_value=SimpleNamespace(inserted_id=ObjectId()))
    collection.find = MagicMock(return_value=make_cursor(documents or []))
    collection.find_one = AsyncMock(return_value=None)
    collection.find_one_and_update = AsyncMock(return_value=None)
    collection.delete_one = AsyncMock(return_value=SimpleNamespace(deleted_count=1))
    collection.count_documents = AsyncMock(return_value=0)
    collection.aggregate = AsyncMock(return_value=make_cursor([]))
    return collection


def make_database(collection):
    database = MagicMock()
    database.__getitem__.return_value = collection
    return database


class TestObjectIds:

    def test_valid_id(self):
        object_id = ObjectId()
        assert to_object_id(str(object_id)) == object_id

    @pytest.mark.parametrize("value", ["", "123", "not-an-object-id", "zzzzzzzzzzzzzzzzzzzzzzzz"])
    def test_invalid_id(self, value):
        assert to_object_id(value) is None


class TestAgentRepository:

    @pytest.mark.asyncio
    async def test_create_returns_string_id(self):
        collection = make_collection()
        repo = AgentRepository(make_database(collection))

        created = await repo.create_agent(AgentDocument(name="Ama", phone="0201234567"))

        assert created.id == str(collection.insert_one.return_value.inserted_id)
        stored = collection.insert_one.await_args.args[0]
        assert "id" not in stored
        assert stored["name"] == "Ama"
        assert stored["verified"] is False

    @pytest.mark.asyncio
    async def test_find_nearby_query_shape(self):
        object_id = ObjectId()
        collection = make_collection([{
            "_id": object_id,
            "name": "Ama",
            "phone": "0201234567",
            "verified": True,
            "location": {"type": "Point", "coordinates": [-0.187, 5.6037]},
        }])
        repo = AgentRepository(make_database(collection))

        agents = await repo.find_nearby(5.6, -0.19, 10.0)

        query = collection.find.call_args.args[0]
        center, radius = query["location"]["$geoWithin"]["$centerSphere"]
        assert center == [-0.19, 5.6]
        assert radius == pytest.approx(10.0 / EARTH_RADIUS_KM)
        assert collection.find.call_args.kwargs["sort"] is None
        assert [agent.id for agent in agents] == [str(object_id)]
        assert agents[0].location == GeoPoint(coordinates=[-0.187, 5.6037])

    @pytest.mark.asyncio
    async def test_duplicate_key_on_insert_conflicts(self):
        collection = make_collection()
        collection.insert_one.side_effect = DuplicateKeyError("E11000 duplicate key error index: agents_phone_unique")
        repo = AgentRepository(make_database(collection))

        with pytest.raises(ConflictError):
            await repo.create_agent(AgentDocument(name="Ama", phone="0201234567"))

    @pytest.mark.asyncio
    async def test_list_newest_first(self):
        collection = make_collection()
        repo = AgentRepository(make_database(collection))

        assert await repo.list_agents() == []
        assert collection.find.call_args.kwargs["sort"] == [("created_at", -1)]

    @pytest.mark.asyncio
    async def test_count_verified(self):
        collection = make_collection()
        collection.count_documents.return_value = 4
        repo = AgentRepository(make_database(collection))

        assert await repo.count_agents(verified=True) == 4
        collection.count_documents.assert_awaited_once_with({"verified": True})


class TestTaskRepository:

    @pytest.mark.asyncio
    async def test_create_keeps_owner_and_adds_created_at(self):
        collection = make_collection()
        repo = TaskRepository(make_database(collection))

        task = await repo.create_task({"userId": "a@b.com", "title": "buy milk", "status": "pending"})

        stored = collection.insert_one.await_args.args[0]
        assert stored["userId"] == "a@b.com"
        assert "createdAt" in stored
        assert task["id"] == str(collection.insert_one.return_value.inserted_id)
        assert "_id" not in task

    @pytest.mark.asyncio
    async def test_list_filters(self):
        collection = make_collection()
        repo = TaskRepository(make_database(collection))

        await repo.list_tasks(user_id="a@b.com", status="pending", limit=5, offset=10)

        collection.find.assert_called_once_with(
            {"userId": "a@b.com", "status": "pending"},
            skip=10,
            limit=5,
            sort=[("createdAt", -1)],
        )

    @pytest.mark.asyncio
    async def test_invalid_id_is_not_found(self):
        collection = make_collection()
        repo = TaskRepository(make_database(collection))

        assert await repo.get_task("nope") is None
        assert await repo.update_task("nope", {"title": "x"}) is None
        assert await repo.delete_task("nope") is False
        collection.find_one.assert_not_awaited()
        collection.delete_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_sets_updated_at(self):
        object_id = ObjectId()
        collection = make_collection()
        collection.find_one_and_update.return_value = {
            "_id": object_id, "userId": "u", "title": "new", "status": "pending"
        }
        repo = TaskRepository(make_database(collection))

        task = await repo.update_task(str(object_id), {"title": "new"})

        update = collection.find_one_and_update.await_args.args[1]
        assert update["$set"]["title"] == "new"
        assert "updatedAt" in update["$set"]
        assert task["id"] == str(object_id)

    @pytest.mark.asyncio
    async def test_count_by_status(self):
        collection = make_collection()
        collection.aggregate.return_value = make_cursor([
            {"_id": "completed", "count": 2},
            {"_id": "pending", "count": 3},
        ])
        repo = TaskRepository(make_database(collection))

        assert await repo.count_by_status() == {"completed": 2, "pending": 3}
        pipeline = collection.aggregate.await_args.args[0]
        assert pipeline[0] == {"$group": {"_id": "$status", "count": {"$sum": 1}}}


class TestUserRepository:

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self):
        collection = make_collection()
        collection.find_one.return_value = {
            "_id": ObjectId(), "name": "Kofi", "email": "kofi@example.com", "password_hash": "x"
        }
        repo = UserRepository(make_database(collection))

        with pytest.raises(ConflictError):
            await repo.create_user("Kofi", "kofi@example.com", "hash")
        collection.insert_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_user(self):
        collection = make_collection()
        repo = UserRepository(make_database(collection))

        user = await repo.create_user("Kofi", "kofi@example.com", "hash", phone="0241112223")

        assert user.id == str(collection.insert_one.return_value.inserted_id)
        assert collection.insert_one.await_args.args[0]["password_hash"] == "hash"

    @pytest.mark.asyncio
    async def test_update_to_own_email_is_allowed(self):
        object_id = ObjectId()
        document = {"_id": object_id, "name": "Kofi", "email": "kofi@example.com", "password_hash": "x"}
        collection = make_collection()
        collection.find_one.return_value = document
        collection.find_one_and_update.return_value = {**document, "name": "K"}
        repo = UserRepository(make_database(collection))

        user = await repo.update_user(str(object_id), {"email": "kofi@example.com", "name": "K"})

        assert user.name == "K"
        assert "updated_at" in collection.find_one_and_update.await_args.args[1]["$set"]

    @pytest.mark.asyncio
    async def test_concurrent_insert_losing_the_race_conflicts(self):
        collection = make_collection()
        collection.insert_one.side_effect = DuplicateKeyError("E11000 duplicate key error index: users_email_unique")
        repo = UserRepository(make_database(collection))

        with pytest.raises(ConflictError) as exc_info:
            await repo.create_user("Kofi", "kofi@example.com", "hash")

        assert exc_info.value.status_code == 409

    @pytest.mark.asyncio
    async def test_email_change_losing_the_race_conflicts(self):
        collection = make_collection()
        collection.find_one_and_update.side_effect = DuplicateKeyError("E11000 duplicate key error")
        repo = UserRepository(make_database(collection))

        with pytest.raises(ConflictError):
            await repo.update_user(str(ObjectId()), {"email": "taken@example.com"})
