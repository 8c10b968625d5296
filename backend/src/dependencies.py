"""
FastAPI dependency injection for settings, persistence and services.

The connector is created once per application and stored on
``app.state.connector`` at startup; repositories are built per request on
the handle their resource uses:
- mapped handle: agents, users (register, login, analytics)
- raw handle: tasks
"""

from fastapi import Depends, Query, Request

from backend.src.config import Settings
from backend.src.database import MongoConnector
from backend.src.repositories.agent_repo import AgentRepository
from backend.src.repositories.task_repo import TaskRepository
from backend.src.repositories.user_repo import UserRepository
from backend.src.services.auth_service import AuthService


# ============================================================================
# APPLICATION-SCOPED STATE
# ============================================================================


def get_app_settings(request: Request) -> Settings:
    """Settings the application was built with."""
    return request.app.state.settings


def get_connector(request: Request) -> MongoConnector:
    """
    Connector established during startup.

    Example:
        @router.get("/ready")
        async def ready(connector: MongoConnector = Depends(get_connector)):
            return connector.status()
    """
    return request.app.state.connector


# ============================================================================
# REPOSITORY DEPENDENCIES
# ============================================================================


def get_agent_repository(connector: MongoConnector = Depends(get_connector)) -> AgentRepository:
    return AgentRepository(connector.mapped_db)


def get_user_repository(connector: MongoConnector = Depends(get_connector)) -> UserRepository:
    return UserRepository(connector.mapped_db)


def get_task_repository(connector: MongoConnector = Depends(get_connector)) -> TaskRepository:
    return TaskRepository(connector.raw_db)


# ============================================================================
# SERVICE DEPENDENCIES
# ============================================================================


def get_auth_service(settings: Settings = Depends(get_app_settings)) -> AuthService:
    return AuthService(settings)


# ============================================================================
# PAGINATION DEPENDENCIES
# ============================================================================


class PaginationParams:
    """Pagination parameters for list endpoints."""

    def __init__(
        self,
        limit: int = Query(100, ge=1, le=1000, description="Maximum number of items"),
        offset: int = Query(0, ge=0, description="Number of items to skip"),
    ):
        self.limit = limit
        self.offset = offset
