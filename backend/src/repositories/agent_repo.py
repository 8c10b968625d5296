"""
Agent repository.

Agent documents live in the ``agents`` collection of the mapped handle.
Proximity search is delegated to MongoDB: the filter is passed through as a
``$geoWithin``/``$centerSphere`` query, which needs no index and performs no
distance ordering.
"""

from typing import List, Optional

import structlog
from pymongo import ASCENDING, IndexModel
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from backend.src.errors import ConflictError
from backend.src.models.agent import AgentDocument
from backend.src.repositories.base import DocumentCollection

logger = structlog.get_logger(__name__)

EARTH_RADIUS_KM = 6378.1


class AgentRepository:
    """Repository for agent database operations."""

    collection_name = "agents"

    # email is optional for operator-created agents, so only string values must be unique
    indexes = [
        IndexModel([("phone", ASCENDING)], unique=True, name="agents_phone_unique"),
        IndexModel(
            [("email", ASCENDING)],
            unique=True,
            name="agents_email_unique",
            partialFilterExpression={"email": {"$type": "string"}},
        ),
    ]

    def __init__(self, database: AsyncDatabase):
        self.agents = DocumentCollection(database[self.collection_name], AgentDocument)

    async def create_agent(self, agent: AgentDocument) -> AgentDocument:
        try:
            created = await self.agents.insert(agent)
            logger.info("agent_created", agent_id=created.id, phone=created.phone)
            return created
        except DuplicateKeyError as e:
            logger.warning("agent_already_registered", phone=agent.phone, error=str(e))
            raise ConflictError("An agent with this email or phone number is already registered.") from e
        except Exception as e:
            logger.error("agent_create_failed", error=str(e), phone=agent.phone)
            raise

    async def get_agent_by_email(self, email: str) -> Optional[AgentDocument]:
        return await self.agents.find_one({"email": email})

    async def get_agent_by_phone(self, phone: str) -> Optional[AgentDocument]:
        return await self.agents.find_one({"phone": phone})

    async def list_agents(self) -> List[AgentDocument]:
        return await self.agents.find(sort=[("created_at", -1)])

    async def find_nearby(
        self,
        latitude: float,
        longitude: float,
        radius_km: float
    ) -> List[AgentDocument]:
        """
        Find agents whose location lies within ``radius_km`` of a point.

        Args:
            latitude: Search centre latitude
            longitude: Search centre longitude
            radius_km: Search radius in kilometres

        Returns:
            Matching agents in storage order
        """
        query = {
            "location": {
                "$geoWithin": {
                    "$centerSphere": [[longitude, latitude], radius_km / EARTH_RADIUS_KM]
                }
            }
        }
        agents = await self.agents.find(query)
        logger.debug(
            "agents_nearby_found",
            latitude=latitude,
            longitude=longitude,
            radius_km=radius_km,
            count=len(agents)
        )
        return agents

    async def count_agents(self, verified: Optional[bool] = None) -> int:
        if verified is None:
            return await self.agents.count()
        return await self.agents.count({"verified": verified})
