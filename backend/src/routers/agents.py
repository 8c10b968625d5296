"""
Agent routes (mounted at ``/api/agents``).

| Method | Path       | Failure message                                      |
|--------|------------|------------------------------------------------------|
| POST   | /create    | Something went wrong while creating the agent.       |
| POST   | /register  | Something went wrong while registering the agent.    |
| GET    | (root)     | Failed to retrieve agents.                           |
| GET    | /find      | Failed to find nearby agents.                        |
| GET    | /cards     | Failed to render agent cards.                        |
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import HTMLResponse

from backend.src.config import Settings
from backend.src.controllers import agent_controller
from backend.src.dependencies import get_agent_repository, get_app_settings, get_auth_service
from backend.src.models.agent import AgentCreate, AgentRegister, AgentResponse
from backend.src.models.common import ErrorResponse
from backend.src.repositories.agent_repo import AgentRepository
from backend.src.routers.guard import route_guard
from backend.src.services.auth_service import AuthService

router = APIRouter(
    prefix="/api/agents",
    tags=["Agents"],
    responses={500: {"model": ErrorResponse, "description": "Unexpected failure"}}
)


@router.post(
    "/create",
    response_model=AgentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Agent",
    responses={409: {"model": ErrorResponse, "description": "Phone or email already registered"}}
)
@route_guard("Something went wrong while creating the agent.")
async def create_agent(
    payload: AgentCreate,
    agent_repo: AgentRepository = Depends(get_agent_repository)
) -> AgentResponse:
    return await agent_controller.create_agent(payload, agent_repo)


@router.post(
    "/register",
    response_model=AgentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register Agent",
    responses={409: {"model": ErrorResponse, "description": "Agent already registered"}}
)
@route_guard("Something went wrong while registering the agent.")
async def register_agent(
    payload: AgentRegister,
    agent_repo: AgentRepository = Depends(get_agent_repository),
    auth_service: AuthService = Depends(get_auth_service)
) -> AgentResponse:
    return await agent_controller.register_agent(payload, agent_repo, auth_service)


@router.get("", response_model=List[AgentResponse], summary="List Agents")
@route_guard("Failed to retrieve agents.")
async def get_all_agents(
    agent_repo: AgentRepository = Depends(get_agent_repository)
) -> List[AgentResponse]:
    return await agent_controller.get_all_agents(agent_repo)


@router.get("/find", response_model=List[AgentResponse], summary="Find Nearby Agents")
@route_guard("Failed to find nearby agents.")
async def find_nearby_agents(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    radius: Optional[float] = Query(None, gt=0, description="Search radius in km"),
    agent_repo: AgentRepository = Depends(get_agent_repository),
    settings: Settings = Depends(get_app_settings)
) -> List[AgentResponse]:
    return await agent_controller.find_nearby_agents(
        latitude, longitude, radius, agent_repo, settings
    )


@router.get("/cards", response_class=HTMLResponse, summary="Agent Cards")
@route_guard("Failed to render agent cards.")
async def get_agent_cards(
    agent_repo: AgentRepository = Depends(get_agent_repository)
) -> str:
    return await agent_controller.render_cards(agent_repo)
