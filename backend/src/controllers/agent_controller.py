"""Agent operations: create, register, list and proximity search."""

from typing import List, Optional

import structlog

from backend.src.config import Settings
from backend.src.errors import ConflictError
from backend.src.models.agent import AgentCreate, AgentDocument, AgentRegister, AgentResponse
from backend.src.repositories.agent_repo import AgentRepository
from backend.src.services.auth_service import AuthService
from backend.src.views.agent_card import render_agent_cards

logger = structlog.get_logger(__name__)


async def create_agent(payload: AgentCreate, agent_repo: AgentRepository) -> AgentResponse:
    agent = await agent_repo.create_agent(
        AgentDocument(
            name=payload.name,
            phone=payload.phone,
            email=payload.email,
            verified=payload.verified,
            location=payload.to_point(),
        )
    )
    return AgentResponse.from_document(agent)


async def register_agent(
    payload: AgentRegister,
    agent_repo: AgentRepository,
    auth_service: AuthService,
) -> AgentResponse:
    """
    Register an agent account.

    Raises:
        ConflictError: If the email or phone is already registered
        ErrandError: If the password is too short
    """
    if await agent_repo.get_agent_by_email(payload.email) is not None:
        logger.warning("agent_already_registered", email=payload.email)
        raise ConflictError("An agent with this email is already registered.")
    if await agent_repo.get_agent_by_phone(payload.phone) is not None:
        logger.warning("agent_already_registered", phone=payload.phone)
        raise ConflictError("An agent with this phone number is already registered.")

    auth_service.check_password_policy(payload.password)

    agent = await agent_repo.create_agent(
        AgentDocument(
            name=payload.name,
            phone=payload.phone,
            email=payload.email,
            verified=False,
            location=payload.to_point(),
            password_hash=auth_service.hash_password(payload.password),
        )
    )
    return AgentResponse.from_document(agent)


async def get_all_agents(agent_repo: AgentRepository) -> List[AgentResponse]:
    agents = await agent_repo.list_agents()
    return [AgentResponse.from_document(agent) for agent in agents]


async def find_nearby_agents(
    latitude: float,
    longitude: float,
    radius_km: Optional[float],
    agent_repo: AgentRepository,
    settings: Settings,
) -> List[AgentResponse]:
    """Agents within ``radius_km`` (default and cap come from settings)."""
    if radius_km is None:
        radius_km = settings.agent_search_default_radius_km
    radius_km = min(radius_km, settings.agent_search_max_radius_km)

    agents = await agent_repo.find_nearby(latitude, longitude, radius_km)
    return [AgentResponse.from_document(agent) for agent in agents]


async def render_cards(agent_repo: AgentRepository) -> str:
    agents = await agent_repo.list_agents()
    return render_agent_cards(agents)
